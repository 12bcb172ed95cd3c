"""packagist_schema: decoding and normalization of Composer registry metadata."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("packagist-schema")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from packagist_schema.api import (
    decode_minified,
    normalize,
    parse_single_document,
    parse_multiple_documents,
    parse_registry,
)
from packagist_schema.codes import RejectionCode
from packagist_schema.errors import MalformedReleaseError, PackagistSchemaError
from packagist_schema.kernel.release import ComposerRelease, ReleaseSource
from packagist_schema.kernel.releases import Release, ReleaseResult
from packagist_schema.kernel.registry_meta import RegistryMeta

__all__ = [
    "__version__",
    "decode_minified",
    "normalize",
    "parse_single_document",
    "parse_multiple_documents",
    "parse_registry",
    "ComposerRelease",
    "ReleaseSource",
    "Release",
    "ReleaseResult",
    "RegistryMeta",
    "RejectionCode",
    "MalformedReleaseError",
    "PackagistSchemaError",
]
