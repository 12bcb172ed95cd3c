"""Exceptions raised by packagist_schema."""


class PackagistSchemaError(ValueError):
    """Base class for errors raised while decoding registry metadata."""
    pass


class MalformedReleaseError(PackagistSchemaError):
    """Raised when a release record has no usable string ``version``."""
    pass
