from __future__ import annotations

import pytest

from depbump.core.wildcard import (
    DEFAULT_WILDCARD,
    detect_wildcard_style,
    infer_wildcard_style,
)
from depbump.models.spec import WildcardStyle


@pytest.mark.unit
class TestDetectWildcardStyle:
    """Tests for detect_wildcard_style."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("^1.2.3", WildcardStyle.CARET),
            ("~1.2.3", WildcardStyle.TILDE),
            ("1.x", WildcardStyle.PARTIAL),
            ("1.2.X", WildcardStyle.PARTIAL),
            ("1.*", WildcardStyle.PARTIAL),
            ("npm:foo@~2.0.0", WildcardStyle.TILDE),
        ],
    )
    def test_detects_style(self, spec: str, expected: WildcardStyle) -> None:
        """Test each operator family is recognised, through wrappers too."""
        assert detect_wildcard_style(spec) is expected

    @pytest.mark.parametrize("spec", ["1.2.3", "", None, "github:user/repo#main"])
    def test_exact_or_empty_has_no_style(self, spec) -> None:
        """Test exact pins and empty specs carry no style."""
        assert detect_wildcard_style(spec) is None


@pytest.mark.unit
class TestInferWildcardStyle:
    """Tests for infer_wildcard_style."""

    def test_first_non_exact_wins(self) -> None:
        """Test exact pins are skipped and the first style is used."""
        deps = {"a": "1.0.0", "b": "~2.0.0", "c": "^3.0.0"}
        assert infer_wildcard_style(deps) is WildcardStyle.TILDE

    def test_order_matters(self) -> None:
        """Test inference follows mapping order."""
        deps = {"c": "^3.0.0", "b": "~2.0.0"}
        assert infer_wildcard_style(deps) is WildcardStyle.CARET

    def test_empty_defaults_to_caret(self) -> None:
        """Test the default style is caret."""
        assert infer_wildcard_style({}) is DEFAULT_WILDCARD
        assert DEFAULT_WILDCARD is WildcardStyle.CARET

    def test_all_exact_defaults_to_caret(self) -> None:
        """Test a manifest of exact pins falls back to caret."""
        assert infer_wildcard_style({"a": "1.0.0", "b": "2.0.0"}) is WildcardStyle.CARET
