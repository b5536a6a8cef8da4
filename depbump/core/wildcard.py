"""Wildcard style inference.

Picks the notation new constraints should use when a dependency's own
spec gives no hint, by looking at how the rest of the manifest is
written.
"""

from __future__ import annotations

from typing import Mapping, Optional

from depbump.models.spec import WildcardStyle
from depbump.core.classifier import classify_spec

DEFAULT_WILDCARD = WildcardStyle.CARET

# Checked in this order within a single spec
_STYLE_MARKERS = (
    (WildcardStyle.CARET, ("^",)),
    (WildcardStyle.TILDE, ("~",)),
    (WildcardStyle.PARTIAL, (".x", ".X", ".*")),
)


def detect_wildcard_style(spec: Optional[str]) -> Optional[WildcardStyle]:
    """Return the non-exact operator family used by ``spec``, if any.

    Examples:
        >>> detect_wildcard_style("~1.2.0")
        <WildcardStyle.TILDE: '~'>
        >>> detect_wildcard_style("1.2.0") is None
        True
    """
    range_ = classify_spec(spec).comparable if spec else None
    if not range_:
        return None
    for style, markers in _STYLE_MARKERS:
        if any(marker in range_ for marker in markers):
            return style
    return None


def infer_wildcard_style(dependencies: Mapping[str, Optional[str]]) -> WildcardStyle:
    """Return the style of the first non-exact spec, in mapping order.

    The result depends on iteration order, so callers must pass the
    dependencies in manifest order.

    Examples:
        >>> infer_wildcard_style({"a": "1.0.0", "b": "~2.0.0", "c": "^3.0.0"})
        <WildcardStyle.TILDE: '~'>
        >>> infer_wildcard_style({})
        <WildcardStyle.CARET: '^'>
    """
    for spec in dependencies.values():
        style = detect_wildcard_style(spec)
        if style is not None:
            return style
    return DEFAULT_WILDCARD
