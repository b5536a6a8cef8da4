from __future__ import annotations

import pytest

from depbump.core.patcher import (
    ManifestPatcher,
    PatchResult,
    resolve_dep_sections,
    upgrade_package_data,
)

MANIFEST = """{
  "name": "app",
  "version": "1.0.0",
  "dependencies": {
    "lodash": "^4.17.0",
    "react": "~17.0.2"
  },
  "devDependencies": {
    "lodash": "^4.17.0",
    "jest": "~29.0.0"
  },
  "packageManager": "pnpm@8.6.0"
}
"""


@pytest.mark.unit
class TestResolveDepSections:
    """Tests for resolve_dep_sections."""

    def test_default_sections(self) -> None:
        """Test the default selection."""
        assert resolve_dep_sections() == [
            "dependencies",
            "devDependencies",
            "optionalDependencies",
            "packageManager",
        ]

    def test_aliases(self) -> None:
        """Test short aliases map to section names."""
        assert resolve_dep_sections("prod,dev,peer,optional") == [
            "dependencies",
            "devDependencies",
            "peerDependencies",
            "optionalDependencies",
        ]

    def test_list_input(self) -> None:
        """Test list input is accepted."""
        assert resolve_dep_sections(["dev"]) == ["devDependencies"]

    def test_unknown_names_pass_through(self) -> None:
        """Test unknown section names are kept as given."""
        assert resolve_dep_sections("bundleDependencies") == ["bundleDependencies"]

    def test_whitespace_and_duplicates(self) -> None:
        """Test whitespace is trimmed and duplicates removed."""
        assert resolve_dep_sections(" prod , dependencies,") == ["dependencies"]


@pytest.mark.unit
class TestManifestPatcher:
    """Tests for ManifestPatcher.apply."""

    def test_rewrites_only_requested_sections(self) -> None:
        """Test a prod upgrade leaves devDependencies alone."""
        result = ManifestPatcher("prod").apply(
            MANIFEST, {"lodash": "^4.17.0"}, {"lodash": "^4.17.21"}
        )

        assert '"dependencies": {\n    "lodash": "^4.17.21"' in result.text
        assert '"devDependencies": {\n    "lodash": "^4.17.0"' in result.text
        assert len(result.edits) == 1

    def test_rewrites_every_requested_section(self) -> None:
        """Test a name in several requested sections is rewritten in each."""
        result = ManifestPatcher("prod,dev").apply(
            MANIFEST, {"lodash": "^4.17.0"}, {"lodash": "^4.17.21"}
        )

        assert result.text.count('"lodash": "^4.17.21"') == 2

    def test_preserves_everything_else(self) -> None:
        """Test only the version bytes change."""
        result = ManifestPatcher("prod").apply(
            MANIFEST, {"react": "~17.0.2"}, {"react": "~18.2.0"}
        )

        assert result.text == MANIFEST.replace('"~17.0.2"', '"~18.2.0"')

    def test_preserves_crlf(self) -> None:
        """Test CRLF line endings survive patching."""
        text = '{\r\n  "dependencies": {\r\n    "a": "^1.0.0"\r\n  }\r\n}\r\n'
        patched = upgrade_package_data(text, {"a": "^1.0.0"}, {"a": "^2.0.0"})

        assert patched == text.replace("^1.0.0", "^2.0.0")

    def test_package_manager(self) -> None:
        """Test the packageManager version is replaced."""
        result = ManifestPatcher().apply(MANIFEST, {"pnpm": "8.6.0"}, {"pnpm": "9.1.0"})

        assert '"packageManager": "pnpm@9.1.0"' in result.text

    def test_package_manager_not_requested(self) -> None:
        """Test packageManager is left alone unless requested."""
        result = ManifestPatcher("prod").apply(
            MANIFEST, {"pnpm": "8.6.0"}, {"pnpm": "9.1.0"}
        )

        assert result.text == MANIFEST
        assert result.skipped == ["pnpm"]
        assert result.changed is False

    def test_overrides_follow_dependencies(self) -> None:
        """Test overrides are patched together with their dependency."""
        text = (
            '{\n'
            '  "dependencies": {"foo": "1.0.0"},\n'
            '  "overrides": {\n'
            '    "foo": {\n'
            '      ".": "1.0.0",\n'
            '      "bar": "1.0.0"\n'
            '    }\n'
            '  }\n'
            '}\n'
        )
        patched = upgrade_package_data(text, {"foo": "1.0.0"}, {"foo": "2.0.0"}, dep="prod")

        assert '"dependencies": {"foo": "2.0.0"}' in patched
        assert '".": "2.0.0"' in patched
        assert '"bar": "1.0.0"' in patched

    def test_flat_override(self) -> None:
        """Test a flat override entry is patched."""
        text = '{"dependencies": {"foo": "^1.0.0"}, "overrides": {"foo": "^1.0.0"}}'
        patched = upgrade_package_data(text, {"foo": "^1.0.0"}, {"foo": "^2.0.0"}, dep="prod")

        assert patched.count('"foo": "^2.0.0"') == 2

    def test_only_matching_current_value_is_replaced(self) -> None:
        """Test a declaration with a different value is untouched."""
        text = '{"dependencies": {"a": "^1.0.0"}, "devDependencies": {"a": "^1.5.0"}}'
        patched = upgrade_package_data(
            text, {"a": "^1.0.0"}, {"a": "^2.0.0"}, dep="prod,dev"
        )

        assert patched == '{"dependencies": {"a": "^2.0.0"}, "devDependencies": {"a": "^1.5.0"}}'

    def test_name_is_matched_exactly(self) -> None:
        """Test a package name is not matched as a substring or regex."""
        text = '{"dependencies": {"a.b": "1.0.0", "axb": "1.0.0", "@scope/a.b": "1.0.0"}}'
        patched = upgrade_package_data(text, {"a.b": "1.0.0"}, {"a.b": "2.0.0"}, dep="prod")

        assert patched == (
            '{"dependencies": {"a.b": "2.0.0", "axb": "1.0.0", "@scope/a.b": "1.0.0"}}'
        )

    def test_braces_in_strings_do_not_end_section(self) -> None:
        """Test braces inside string values are ignored."""
        text = '{"dependencies": {"weird": "}{", "a": "1.0.0"}, "other": {"a": "1.0.0"}}'
        patched = upgrade_package_data(text, {"a": "1.0.0"}, {"a": "2.0.0"}, dep="prod")

        assert patched == '{"dependencies": {"weird": "}{", "a": "2.0.0"}, "other": {"a": "1.0.0"}}'

    def test_missing_package_is_skipped(self) -> None:
        """Test packages without a matching declaration are reported."""
        result = ManifestPatcher("prod").apply(
            MANIFEST, {"ghost": "1.0.0"}, {"ghost": "2.0.0"}
        )

        assert isinstance(result, PatchResult)
        assert result.text == MANIFEST
        assert result.skipped == ["ghost"]

    def test_package_without_current_is_skipped(self) -> None:
        """Test an upgrade with no current spec is not applied."""
        result = ManifestPatcher("prod").apply(MANIFEST, {}, {"lodash": "^5.0.0"})

        assert result.text == MANIFEST
        assert result.skipped == ["lodash"]

    def test_missing_sections(self) -> None:
        """Test a manifest without the requested sections is unchanged."""
        text = '{"name": "empty"}\n'
        assert upgrade_package_data(text, {"a": "1.0.0"}, {"a": "2.0.0"}) == text

    def test_section_spans(self) -> None:
        """Test section spans cover the object bodies."""
        text = '{"dependencies": {"a": "1"}, "devDependencies": {}}'
        spans = ManifestPatcher("prod,dev").section_spans(text)

        assert [text[start:end] for start, end in spans] == ['{"a": "1"}', "{}"]
