"""Tests for single-document (fail-soft) release extraction."""

import pytest
from packagist_schema.kernel.releases import parse_packages_response, parse_releases


def _dicts(releases):
    return [release.to_dict() for release in releases]


@pytest.mark.parametrize("document", [
    None,
    {},
    "foobar",
    {"packages": "123"},
    {"packages": []},
    {"packages": {}},
    {"packages": {"baz/qux": [{"version": "1.0.0"}]}},
    {"packages": {"foo/bar": "nonsense"}},
])
def test_malformed_or_unrelated_document_yields_empty(document):
    """Wrong shapes and documents for other packages degrade to []."""
    assert parse_packages_response("foo/bar", document) == []


def test_picks_requested_package():
    """Only the requested package's releases are returned."""
    releases = parse_packages_response("foo/bar", {
        "packages": {
            "foo/bar": [{"version": "1.2.3"}],
            "baz/qux": [{"version": "4.5.6"}],
        },
    })
    assert _dicts(releases) == [{"version": "1.2.3"}]


def test_expands_minified_fields():
    """require is inherited down the array until replaced or unset."""
    releases = parse_packages_response("foo/bar", {
        "packages": {
            "foo/bar": [
                {"version": "3.3.3", "require": {"php": "^8.0"}},
                {"version": "2.2.2"},
                {"version": "1.1.1"},
                {"version": "0.0.4", "require": {"php": "^7.0"}},
                {"version": "0.0.3"},
                {"version": "0.0.2", "require": "__unset"},
                {"version": "0.0.1"},
            ],
        },
    })
    assert _dicts(releases) == [
        {"version": "3.3.3", "require": {"php": "^8.0"}},
        {"version": "2.2.2", "require": {"php": "^8.0"}},
        {"version": "1.1.1", "require": {"php": "^8.0"}},
        {"version": "0.0.4", "require": {"php": "^7.0"}},
        {"version": "0.0.3", "require": {"php": "^7.0"}},
        {"version": "0.0.2"},
        {"version": "0.0.1"},
    ]


def test_minifier_example_end_to_end():
    """Decoded then normalized, the third release keeps name, type and license."""
    releases = parse_packages_response("foo/bar", {
        "packages": {
            "foo/bar": [
                {
                    "name": "foo/bar",
                    "version": "2.0.0",
                    "version_normalized": "2.0.0.0",
                    "type": "library",
                    "scripts": {"foo": "bar"},
                    "license": ["MIT"],
                },
                {
                    "version": "1.2.0",
                    "version_normalized": "1.2.0.0",
                    "license": ["GPL"],
                    "homepage": "https://example.org",
                    "scripts": "__unset",
                },
                {"version": "1.0.0", "version_normalized": "1.0.0.0", "homepage": "__unset"},
            ],
        },
    })
    assert len(releases) == 3
    third = releases[2]
    assert third.name == "foo/bar"
    assert third.type == "library"
    assert third.license == ["GPL"]
    assert "homepage" not in third.to_dict()
    assert "scripts" not in third.to_dict()
    assert releases[0].to_dict()["scripts"] == {"foo": "bar"}


class TestParseReleases:
    """Fail-soft parsing of one package's release array."""

    @pytest.mark.parametrize("raw", [None, "", {}, [], [None], [1, 2, 3], ["foobar"]])
    def test_empty_results(self, raw):
        assert parse_releases(raw) == []

    def test_plain_list(self):
        releases = parse_releases([{"version": "1.2.3"}, {"version": "dev-main"}])
        assert _dicts(releases) == [{"version": "1.2.3"}, {"version": "dev-main"}]

    def test_drops_records_without_version(self):
        """A leading entry without version is dropped; later ones survive."""
        releases = parse_releases([
            {"homepage": "https://example.org"},
            {"version": "1.0.0"},
        ])
        assert _dicts(releases) == [{"version": "1.0.0", "homepage": "https://example.org"}]

    def test_drops_record_with_non_string_version(self):
        releases = parse_releases([{"version": 2}, {"version": "1.0.0"}])
        assert _dicts(releases) == [{"version": "1.0.0"}]

    def test_mapping_layout_is_not_delta_decoded(self):
        """Classic version-keyed mappings are taken entry by entry."""
        releases = parse_releases({
            "2.0.0": {"version": "2.0.0", "homepage": "https://example.org"},
            "1.0.0": {"version": "1.0.0"},
            "broken": "nonsense",
        })
        assert _dicts(releases) == [
            {"version": "2.0.0", "homepage": "https://example.org"},
            {"version": "1.0.0"},
        ]
