"""Pydantic model for one Composer release with fail-soft field validation."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from packagist_schema.errors import MalformedReleaseError

DEFAULT_PACKAGE_TYPE = "library"

# Known fields whose malformed values are dropped rather than kept as null
_OMIT_WHEN_INVALID = frozenset({
    "version_normalized",
    "name",
    "type",
    "license",
    "time",
    "require",
})


class ReleaseSource(BaseModel):
    """VCS source of a release; only ``url`` is required."""
    url: StrictStr

    model_config = ConfigDict(extra="allow")  # type, reference, mirrors, ...


class ComposerRelease(BaseModel):
    """A single normalized release of a Composer package.

    Only ``version`` is mandatory. Every other known field degrades to
    None when its raw value has the wrong shape, so one garbled field
    never discards the whole version. Unknown keys (scripts, dist,
    autoload, ...) pass through untouched.
    """
    version: StrictStr
    version_normalized: Optional[StrictStr] = None
    name: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    license: Optional[List[StrictStr]] = None
    homepage: Optional[StrictStr] = None
    source: Optional[ReleaseSource] = None
    time: Optional[StrictStr] = None
    require: Optional[Dict[str, StrictStr]] = None

    model_config = ConfigDict(extra="allow")

    @field_validator(
        "version_normalized",
        "name",
        "type",
        "license",
        "homepage",
        "source",
        "time",
        "require",
        mode="wrap",
    )
    @classmethod
    def none_on_invalid(cls, value: Any, handler) -> Any:
        """Replace a wrong-shaped optional value with None."""
        try:
            return handler(value)
        except ValidationError:
            return None

    @property
    def package_type(self) -> str:
        """Composer package type, defaulting to 'library' when unset."""
        return self.type or DEFAULT_PACKAGE_TYPE

    @property
    def source_url(self) -> Optional[str]:
        """URL of the release source, or None."""
        return self.source.url if self.source is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Wire-shaped dict holding only the keys the raw record supplied.

        Invalid ``homepage``/``source`` values stay present as None;
        other invalid known fields are omitted.
        """
        declared = type(self).model_fields
        result: Dict[str, Any] = {}
        for key, value in self.model_dump().items():
            if key in declared and key not in self.model_fields_set:
                continue
            if value is None and key in _OMIT_WHEN_INVALID:
                continue
            result[key] = value
        return result


def normalize_release(record: Any) -> ComposerRelease:
    """
    Validate one decoded record into a ComposerRelease.

    Args:
        record: Decoded record (dict) for one version

    Returns:
        Normalized ComposerRelease

    Raises:
        MalformedReleaseError: If record is not an object or its version
                               is missing or not a string
    """
    if not isinstance(record, dict):
        raise MalformedReleaseError(
            f"Release record must be an object, got {type(record).__name__}"
        )
    try:
        return ComposerRelease.model_validate(record)
    except ValidationError as e:
        raise MalformedReleaseError(f"Release missing version: {e}") from e
