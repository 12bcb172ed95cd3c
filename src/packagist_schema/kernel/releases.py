"""Aggregation of registry documents into a single release list.

Two error policies live side by side here:
- parse_packages_response() is fail-soft: any malformed shape yields []
- parse_packages_responses() is fail-closed: one malformed document
  invalidates the whole aggregation and yields None, since a partial
  release list would silently drop versions
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from packagist_schema.codes import RejectionCode
from packagist_schema.errors import MalformedReleaseError
from .minified import expand_minified
from .release import ComposerRelease, normalize_release

logger = logging.getLogger(__name__)


class Release(BaseModel):
    """One version entry of a ReleaseResult."""
    version: str  # Version with a single leading "v" stripped
    git_ref: str = Field(alias="gitRef")  # Raw version string, used as the VCS ref
    release_timestamp: Optional[str] = Field(default=None, alias="releaseTimestamp")
    constraints: Optional[Dict[str, List[str]]] = None  # dependency -> [constraint]

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape; absent optional keys are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ReleaseResult(BaseModel):
    """Package-level metadata plus the ordered list of releases."""
    homepage: Optional[str] = None
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
    releases: List[Release] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape; homepage and sourceUrl are always present."""
        return {
            "homepage": self.homepage,
            "sourceUrl": self.source_url,
            "releases": [release.to_dict() for release in self.releases],
        }


class PackagesDocument(BaseModel):
    """Strict shape of one packages document used for aggregation."""
    packages: Dict[StrictStr, List[Any]]

    model_config = ConfigDict(extra="allow", strict=True)


def parse_releases(raw: Any) -> List[ComposerRelease]:
    """
    Decode and normalize one package's releases, dropping bad records.

    A list is treated as a minified array. A mapping is the classic
    layout keyed by version, whose entries are complete and are
    normalized without delta expansion. Anything else yields [].
    """
    if isinstance(raw, list):
        records: List[Any] = expand_minified(raw)
    elif isinstance(raw, dict):
        records = list(raw.values())
    else:
        return []

    releases: List[ComposerRelease] = []
    for record in records:
        try:
            releases.append(normalize_release(record))
        except MalformedReleaseError as e:
            logger.debug("Dropping release record: %s", e)
    return releases


def parse_packages_response(package_name: str, document: Any) -> List[ComposerRelease]:
    """
    Extract one package's releases from a single document (fail-soft).

    Args:
        package_name: Composer package name, e.g. "foo/bar"
        document: Parsed JSON document, expected {"packages": {...}}

    Returns:
        Normalized releases in array order, or [] for any malformed shape
    """
    if not isinstance(document, dict):
        return []
    packages = document.get("packages")
    if not isinstance(packages, dict):
        return []
    return parse_releases(packages.get(package_name))


def check_packages_document(document: Any) -> Optional[RejectionCode]:
    """Return why document fails the strict shape check, or None if it passes."""
    if not isinstance(document, dict):
        return RejectionCode.NOT_AN_OBJECT
    try:
        PackagesDocument.model_validate(document)
    except ValidationError as e:
        for error in e.errors():
            if tuple(error["loc"]) == ("packages",):
                return RejectionCode.PACKAGES_NOT_AN_OBJECT
        return RejectionCode.RELEASES_NOT_AN_ARRAY
    return None


def _strip_v_prefix(version: str) -> str:
    """Strip a single leading 'v' from a version string."""
    return version[1:] if version.startswith("v") else version


def _to_release(composer_release: ComposerRelease) -> Release:
    """Map one ComposerRelease to a Release entry."""
    constraints = None
    if composer_release.require is not None:
        constraints = {
            dep_name: [constraint]
            for dep_name, constraint in composer_release.require.items()
        }
    return Release(
        version=_strip_v_prefix(composer_release.version),
        git_ref=composer_release.version,
        release_timestamp=composer_release.time,
        constraints=constraints,
    )


def extract_release_result(*release_lists: Sequence[ComposerRelease]) -> Optional[ReleaseResult]:
    """
    Fold release lists into a ReleaseResult.

    Lists are concatenated in argument order. Homepage and source URL are
    package-level and come from the first release only; later releases
    never override them.

    Returns:
        ReleaseResult, or None if there are no releases at all
    """
    composer_releases = [release for releases in release_lists for release in releases]
    if not composer_releases:
        return None

    first = composer_releases[0]
    return ReleaseResult(
        homepage=first.homepage,
        source_url=first.source_url,
        releases=[_to_release(release) for release in composer_releases],
    )


def extract_dep_releases(raw: Any) -> Optional[ReleaseResult]:
    """Build a ReleaseResult from one package's raw release array."""
    return extract_release_result(parse_releases(raw))


def parse_packages_responses(package_name: str, documents: Iterable[Any]) -> Optional[ReleaseResult]:
    """
    Aggregate one package's releases across documents (fail-closed).

    Every document must be an object whose "packages" maps names to
    arrays. A single document failing that check aborts the call.

    Args:
        package_name: Composer package name, e.g. "foo/bar"
        documents: Parsed JSON documents, e.g. paginated registry responses

    Returns:
        ReleaseResult, or None if any document is malformed or no
        releases were found
    """
    documents = list(documents)
    for index, document in enumerate(documents):
        code = check_packages_document(document)
        if code is not None:
            logger.warning(
                "Rejecting packages document %d for %s: %s",
                index, package_name, code.value,
            )
            return None

    release_lists = [
        parse_releases(document["packages"].get(package_name, []))
        for document in documents
    ]
    return extract_release_result(*release_lists)
