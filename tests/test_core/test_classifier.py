from __future__ import annotations

import pytest

from depbump.core.classifier import (
    classify_spec,
    get_github_url_tag,
    is_github_url,
    is_npm_alias,
    is_source_url,
    parse_npm_alias,
    upgrade_github_url,
    upgrade_npm_alias,
)
from depbump.models.spec import SpecKind


@pytest.mark.unit
class TestNpmAlias:
    """Tests for npm alias detection and rewriting."""

    def test_detects_alias(self) -> None:
        """Test npm: prefixed specs are aliases."""
        assert is_npm_alias("npm:lodash@^4.0.0") is True
        assert is_npm_alias("npm:@scope/pkg@1.0.0") is True

    def test_plain_range_is_not_alias(self) -> None:
        """Test ordinary ranges and empty values are not aliases."""
        assert is_npm_alias("^4.0.0") is False
        assert is_npm_alias("") is False
        assert is_npm_alias(None) is False

    def test_parse_scoped_alias(self) -> None:
        """Test scoped package names keep their leading @."""
        assert parse_npm_alias("npm:@scope/pkg@^1.0.0") == ("@scope/pkg", "^1.0.0")

    def test_parse_alias_without_range(self) -> None:
        """Test an alias with no range yields None for the range."""
        assert parse_npm_alias("npm:pkg") == ("pkg", None)

    def test_parse_non_alias_returns_none(self) -> None:
        """Test non-alias input is rejected."""
        assert parse_npm_alias("^1.0.0") is None

    def test_upgrade_alias_keeps_name(self) -> None:
        """Test only the range part of an alias changes."""
        assert upgrade_npm_alias("npm:foo@^1.0.0", "^2.0.0") == "npm:foo@^2.0.0"
        assert (
            upgrade_npm_alias("npm:@scope/foo@~1.0.0", "~1.5.0")
            == "npm:@scope/foo@~1.5.0"
        )


@pytest.mark.unit
class TestSourceUrl:
    """Tests for git and hosted source locators."""

    @pytest.mark.parametrize(
        "spec",
        [
            "github:user/repo#v1.0.0",
            "gitlab:group/project",
            "git+https://github.com/user/repo.git#semver:^1.0.0",
            "https://example.com/repo.git#1.0.0",
            "git@github.com:user/repo.git#v2.0.0",
            "user/repo#1.0.0",
        ],
    )
    def test_detects_source_urls(self, spec: str) -> None:
        """Test the common locator shapes are recognised."""
        assert is_source_url(spec) is True

    @pytest.mark.parametrize("spec", ["^1.0.0", "1.x", "latest", "npm:foo@1.0.0", ""])
    def test_rejects_non_urls(self, spec: str) -> None:
        """Test ranges, dist-tags and aliases are not source URLs."""
        assert is_source_url(spec) is False

    def test_tag_with_v_prefix(self) -> None:
        """Test a v-prefixed tag yields the bare version."""
        assert get_github_url_tag("github:user/repo#v1.2.0") == "1.2.0"

    def test_tag_with_semver_prefix(self) -> None:
        """Test a semver: fragment yields its range."""
        assert (
            get_github_url_tag("git+https://github.com/user/repo.git#semver:^1.0.0")
            == "^1.0.0"
        )

    def test_branch_fragment_has_no_tag(self) -> None:
        """Test a branch name is not a semver tag."""
        assert get_github_url_tag("github:user/repo#main") is None
        assert is_github_url("github:user/repo#main") is False

    def test_url_without_fragment_has_no_tag(self) -> None:
        """Test a bare URL has no tag."""
        assert get_github_url_tag("github:user/repo") is None


@pytest.mark.unit
class TestClassifySpec:
    """Tests for classify_spec."""

    def test_plain_range(self) -> None:
        """Test plain ranges compare on themselves."""
        parsed = classify_spec("^1.2.3")

        assert parsed.kind is SpecKind.PLAIN
        assert parsed.comparable == "^1.2.3"
        assert parsed.is_plain is True

    def test_dist_tag_is_plain(self) -> None:
        """Test a dist-tag is plain; eligibility rejects it later."""
        parsed = classify_spec("next")

        assert parsed.kind is SpecKind.PLAIN
        assert parsed.comparable == "next"

    def test_alias(self) -> None:
        """Test an alias compares on its range."""
        parsed = classify_spec("npm:lodash@^4.0.0")

        assert parsed.kind is SpecKind.ALIAS
        assert parsed.comparable == "^4.0.0"
        assert parsed.alias_name == "lodash"

    def test_alias_without_range(self) -> None:
        """Test an alias without a range has nothing to compare."""
        parsed = classify_spec("npm:lodash")

        assert parsed.kind is SpecKind.ALIAS
        assert parsed.comparable is None

    def test_url_with_tag(self) -> None:
        """Test a tagged URL keeps everything before the range as prefix."""
        parsed = classify_spec("github:user/repo#v1.0.0")

        assert parsed.kind is SpecKind.SOURCE_URL
        assert parsed.comparable == "1.0.0"
        assert parsed.url_prefix == "github:user/repo#"
        assert parsed.tag_prefix == "v"

    def test_url_with_branch(self) -> None:
        """Test a branch URL is classified but has no comparable range."""
        parsed = classify_spec("github:user/repo#develop")

        assert parsed.kind is SpecKind.SOURCE_URL
        assert parsed.comparable is None

    def test_encoded_fragment(self) -> None:
        """Test a percent-encoded fragment is decoded for comparison."""
        parsed = classify_spec("git+https://host/repo.git#semver:%5E1.0.0")

        assert parsed.comparable == "^1.0.0"
        assert parsed.tag_prefix == "semver:"
        assert parsed.tag_encoded is True

    def test_empty_spec(self) -> None:
        """Test classification never raises on empty input."""
        parsed = classify_spec(None)

        assert parsed.kind is SpecKind.PLAIN
        assert parsed.comparable == ""


@pytest.mark.unit
class TestUpgradeGithubUrl:
    """Tests for rewriting the tag of a source URL."""

    def test_replaces_v_tag(self) -> None:
        """Test the v prefix survives the upgrade."""
        parsed = classify_spec("github:user/repo#v1.0.0")
        assert upgrade_github_url(parsed, "1.2.0") == "github:user/repo#v1.2.0"

    def test_replaces_semver_tag(self) -> None:
        """Test a semver: range is replaced in place."""
        parsed = classify_spec("git+https://github.com/user/repo.git#semver:^1.0.0")
        assert (
            upgrade_github_url(parsed, "^2.0.0")
            == "git+https://github.com/user/repo.git#semver:^2.0.0"
        )

    def test_reencodes_encoded_tag(self) -> None:
        """Test an encoded fragment is written back encoded."""
        parsed = classify_spec("git+https://host/repo.git#semver:%5E1.0.0")
        assert (
            upgrade_github_url(parsed, "^2.0.0")
            == "git+https://host/repo.git#semver:%5E2.0.0"
        )

    def test_encoded_colon_is_kept(self) -> None:
        """Test an escaped semver: prefix is written back unchanged."""
        parsed = classify_spec("github:user/repo#semver%3A%5E1.0.0")

        assert parsed.comparable == "^1.0.0"
        assert parsed.raw_tag_prefix == "semver%3A"
        assert upgrade_github_url(parsed, "^1.2.0") == "github:user/repo#semver%3A%5E1.2.0"

    def test_encoded_tilde_is_kept(self) -> None:
        """Test an escaped tilde stays escaped after the upgrade."""
        parsed = classify_spec("github:user/repo#semver:%7E1.0.0")
        assert upgrade_github_url(parsed, "~1.2.0") == "github:user/repo#semver:%7E1.2.0"

    def test_escape_spelling_is_kept(self) -> None:
        """Test lowercase escapes are not normalised."""
        parsed = classify_spec("github:user/repo#semver:%5e1.0.0")
        assert upgrade_github_url(parsed, "^2.0.0") == "github:user/repo#semver:%5e2.0.0"

    def test_unencoded_tag_is_not_escaped(self) -> None:
        """Test a plain fragment gains no escapes."""
        parsed = classify_spec("github:user/repo#semver:~1.0.0")
        assert upgrade_github_url(parsed, "~1.2.0") == "github:user/repo#semver:~1.2.0"
