"""Root metadata document of a Composer registry (packages.json).

Every field falls back to its default independently; parsing never raises.
"""

from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

# Wire mappings (file key -> hash spec) whose keys feed the camelCase file lists
_FILE_LIST_SOURCES = (
    ("includes", "includesFiles"),
    ("provider-includes", "files"),
)


class RegistryMeta(BaseModel):
    """Normalized registry root document."""
    files: List[StrictStr] = Field(default_factory=list)
    includes_files: List[StrictStr] = Field(default_factory=list, alias="includesFiles")
    packages: Dict[str, Any] = Field(default_factory=dict)
    provider_packages: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("providerPackages", "providers"),
        serialization_alias="providerPackages",
    )
    providers_lazy_url: Optional[StrictStr] = Field(
        default=None,
        validation_alias=AliasChoices("providersLazyUrl", "providers-lazy-url"),
        serialization_alias="providersLazyUrl",
    )
    providers_url: Optional[StrictStr] = Field(
        default=None,
        validation_alias=AliasChoices("providersUrl", "providers-url"),
        serialization_alias="providersUrl",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def coerce_root(cls, value: Any) -> Dict[str, Any]:
        """Treat non-objects as empty and lift wire file mappings into lists."""
        if not isinstance(value, dict):
            return {}
        data = dict(value)
        for wire_key, list_key in _FILE_LIST_SOURCES:
            if list_key not in data and isinstance(data.get(wire_key), dict):
                data[list_key] = list(data[wire_key].keys())
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def default_on_invalid(cls, value: Any, handler, info: ValidationInfo) -> Any:
        """Replace a wrong-shaped value with the field's default."""
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape with camelCase keys."""
        return self.model_dump(by_alias=True)


def parse_registry_meta(value: Any) -> RegistryMeta:
    """Parse a registry root document; never raises."""
    return RegistryMeta.model_validate(value)
