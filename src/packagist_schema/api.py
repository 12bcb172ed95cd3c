"""Public API for packagist_schema.

High-level functions over the kernel. Callers should use these instead
of importing kernel modules directly.
"""

from typing import Any, Iterable, List, Optional

from packagist_schema.kernel.minified import expand_minified
from packagist_schema.kernel.release import ComposerRelease, normalize_release
from packagist_schema.kernel.releases import (
    ReleaseResult,
    extract_dep_releases,
    parse_packages_response,
    parse_packages_responses,
    parse_releases,
)
from packagist_schema.kernel.registry_meta import RegistryMeta, parse_registry_meta


def decode_minified(raw: Any) -> List[dict]:
    """Expand a minified release array into full per-version records."""
    return expand_minified(raw)


def normalize(record: Any) -> ComposerRelease:
    """Normalize one decoded record; raises MalformedReleaseError without a version."""
    return normalize_release(record)


def parse_single_document(package_name: str, document: Any) -> List[ComposerRelease]:
    """Releases of package_name in one document, or [] if the shape is wrong."""
    return parse_packages_response(package_name, document)


def parse_multiple_documents(package_name: str, documents: Iterable[Any]) -> Optional[ReleaseResult]:
    """Aggregate releases of package_name across documents, or None if any is malformed."""
    return parse_packages_responses(package_name, documents)


def parse_registry(value: Any) -> RegistryMeta:
    """Parse a registry root document with per-field defaults."""
    return parse_registry_meta(value)


__all__ = [
    "decode_minified",
    "normalize",
    "parse_single_document",
    "parse_multiple_documents",
    "parse_registry",
    "parse_releases",
    "extract_dep_releases",
    "ComposerRelease",
    "ReleaseResult",
    "RegistryMeta",
]
