from __future__ import annotations

from pathlib import Path

import pytest

from depbump.core.manifest import Manifest, ManifestParser
from depbump.exceptions import FileOperationError, ParseError

MANIFEST = """{
  "name": "app",
  "dependencies": {"lodash": "^4.17.0", "react": "~17.0.2"},
  "devDependencies": {"jest": "~29.0.0", "lodash": "^4.0.0"},
  "peerDependencies": {"react-dom": "^17.0.0"},
  "optionalDependencies": {"fsevents": "^2.3.0"},
  "overrides": {"foo": {".": "1.0.0", "bar": "1.0.0"}, "baz": "2.0.0"},
  "packageManager": "pnpm@8.6.0"
}
"""


@pytest.mark.unit
class TestManifestParser:
    """Tests for ManifestParser."""

    def test_parse_string(self) -> None:
        """Test text and data are both kept."""
        manifest = ManifestParser().parse_string(MANIFEST)

        assert manifest.text == MANIFEST
        assert manifest.name == "app"
        assert manifest.path is None

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test reading from disk keeps the raw text."""
        path = tmp_path / "package.json"
        path.write_bytes(MANIFEST.replace("\n", "\r\n").encode("utf-8"))

        manifest = ManifestParser().parse_file(path)

        assert manifest.text == MANIFEST.replace("\n", "\r\n")
        assert manifest.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing manifest raises FileOperationError."""
        with pytest.raises(FileOperationError):
            ManifestParser().parse_file(tmp_path / "package.json")

    def test_invalid_json(self) -> None:
        """Test invalid JSON raises ParseError with a line number."""
        with pytest.raises(ParseError) as exc_info:
            ManifestParser().parse_string('{\n  "name": \n}', source_file_path="package.json")

        assert exc_info.value.line_number == 3
        assert exc_info.value.file_path == "package.json"

    def test_non_object(self) -> None:
        """Test a JSON array is rejected."""
        with pytest.raises(ParseError):
            ManifestParser().parse_string("[]")


@pytest.mark.unit
class TestManifestDependencies:
    """Tests for Manifest.dependencies."""

    @pytest.fixture
    def manifest(self) -> Manifest:
        return ManifestParser().parse_string(MANIFEST)

    def test_default_sections(self, manifest: Manifest) -> None:
        """Test the default selection includes packageManager."""
        assert manifest.dependencies() == {
            "lodash": "^4.17.0",
            "react": "~17.0.2",
            "jest": "~29.0.0",
            "fsevents": "^2.3.0",
            "pnpm": "8.6.0",
        }

    def test_first_declaration_wins(self, manifest: Manifest) -> None:
        """Test an earlier section wins for duplicate names."""
        assert manifest.dependencies("prod,dev")["lodash"] == "^4.17.0"
        assert manifest.dependencies("dev,prod")["lodash"] == "^4.0.0"

    def test_peer(self, manifest: Manifest) -> None:
        """Test a single alias selects a single section."""
        assert manifest.dependencies("peer") == {"react-dom": "^17.0.0"}

    def test_overrides(self, manifest: Manifest) -> None:
        """Test override objects contribute their "." value."""
        assert manifest.dependencies("overrides") == {"foo": "1.0.0", "baz": "2.0.0"}

    def test_scoped_package_manager(self) -> None:
        """Test a scoped packageManager name is parsed."""
        manifest = ManifestParser().parse_string(
            '{"packageManager": "@scope/pm@1.2.3"}'
        )
        assert manifest.dependencies("packageManager") == {"@scope/pm": "1.2.3"}

    def test_malformed_package_manager(self) -> None:
        """Test a packageManager value without a version is ignored."""
        manifest = ManifestParser().parse_string('{"packageManager": "pnpm"}')
        assert manifest.dependencies("packageManager") == {}

    def test_non_string_values_ignored(self) -> None:
        """Test non-string specs are skipped."""
        manifest = ManifestParser().parse_string(
            '{"dependencies": {"a": 1, "b": "^1.0.0"}, "devDependencies": []}'
        )
        assert manifest.dependencies("prod,dev") == {"b": "^1.0.0"}
