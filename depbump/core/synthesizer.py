"""
Builds the replacement spec for an eligible dependency.

The new spec follows the notation of the one it replaces: same operator
family, same precision, same wildcard positions. Only when the declared
spec has no comparator to imitate (a dist-tag such as ``next``) does the
set-wide inferred :class:`WildcardStyle` decide the shape. The upgrader
filters such specs out before synthesis, so only direct callers see it.
"""

from __future__ import annotations

from typing import Optional

from depbump.models.spec import ParsedSpec, SpecKind, WildcardStyle
from depbump.core.wildcard import DEFAULT_WILDCARD
from depbump.core.classifier import upgrade_github_url, upgrade_npm_alias
from depbump.utils.logger import get_logger
from depbump.utils.version_utils import (
    BASE_PARTS,
    SemverToken,
    is_wild_part,
    is_wildcard,
    parse_range,
    parse_version,
)

logger = get_logger("core.synthesizer")

# The rewritten bound must admit the new version
_OPERATOR_REWRITES = {
    "<": "<=",
    "<=": "<=",
    ">": ">=",
}


def _latest_token(latest: str) -> Optional[SemverToken]:
    if parse_version(latest) is None:
        return None
    tokens = parse_range(latest)
    return tokens[0] if tokens else None


def _merge_parts(declared: SemverToken, latest: SemverToken) -> Optional[str]:
    """Render ``latest`` at the precision and wildcard layout of ``declared``."""
    parts = []
    for part in BASE_PARTS:
        written = getattr(declared, part)
        if written is None:
            break
        if is_wild_part(written):
            parts.append(written)
            continue
        value = getattr(latest, part)
        if value is None:
            break
        parts.append(value)

    if not parts:
        return None

    version = ".".join(parts)
    # Prerelease and build only make sense on a full version
    if len(parts) == len(BASE_PARTS) and not any(is_wild_part(p) for p in parts):
        if latest.release:
            version += f"-{latest.release}"
        if latest.build:
            version += f"+{latest.build}"
    return version


def upgrade_dependency_declaration(
    declaration: str,
    latest_version: str,
    *,
    wildcard: WildcardStyle = DEFAULT_WILDCARD,
    remove_range: bool = False,
) -> str:
    """Rewrite ``declaration`` so that it admits ``latest_version``.

    Args:
        declaration: Declared comparable range, e.g. ``^1.2.0`` or ``1.x``.
        latest_version: Concrete version to upgrade to.
        wildcard: Style used when ``declaration`` has no comparator.
        remove_range: Return the bare latest version.

    Returns:
        The new comparable range. Unparseable input degrades to
        ``latest_version`` itself.

    Examples:
        >>> upgrade_dependency_declaration("^1.0.0", "2.0.0")
        '^2.0.0'
        >>> upgrade_dependency_declaration("1.x", "2.3.4")
        '2.x'
        >>> upgrade_dependency_declaration("~1.2", "1.4.0")
        '~1.4'
        >>> upgrade_dependency_declaration("^1.0.0", "2.0.0", remove_range=True)
        '2.0.0'
    """
    if remove_range:
        return latest_version

    if is_wildcard(declaration):
        return declaration

    latest = _latest_token(latest_version)
    if latest is None:
        logger.debug("Cannot synthesize from latest %r", latest_version)
        return latest_version

    tokens = parse_range(declaration)
    if not tokens:
        return wildcard.render(latest.version)

    declared = tokens[0]
    try:
        version = _merge_parts(declared, latest)
    except (TypeError, ValueError) as exc:
        logger.debug("Synthesis failed for %r -> %r: %s", declaration, latest_version, exc)
        return latest_version

    if version is None:
        return latest_version

    operator = _OPERATOR_REWRITES.get(declared.operator, declared.operator)
    return f"{operator}{version}"


def rewrap_spec(parsed: ParsedSpec, upgraded: str) -> str:
    """Put a synthesized range back into the wrapper it came from.

    Examples:
        >>> from depbump.core.classifier import classify_spec
        >>> rewrap_spec(classify_spec("npm:foo@^1.0.0"), "^2.0.0")
        'npm:foo@^2.0.0'
        >>> rewrap_spec(classify_spec("github:u/r#v1.0.0"), "1.2.0")
        'github:u/r#v1.2.0'
    """
    if parsed.kind is SpecKind.ALIAS:
        return upgrade_npm_alias(parsed.raw, upgraded)
    if parsed.kind is SpecKind.SOURCE_URL:
        return upgrade_github_url(parsed, upgraded)
    return upgraded
