"""Version spec classifier.

Sorts a declared spec into one of three shapes and pulls out the semver
range the rest of the pipeline compares against:

- **plain** ranges (``^1.2.3``, ``1.x``, ``>=2 <3``) are their own
  comparable range;
- **npm aliases** (``npm:real-name@^1.0.0``) compare on the part after
  the last ``@``;
- **source URLs** (``github:user/repo#v1.2.0``,
  ``git+https://host/repo.git#semver:^1.0.0``, ``user/repo#1.0.0``)
  compare on the fragment after ``#`` when it parses as a range. A branch
  name leaves the comparable range empty and the package is simply not
  upgradeable.

Classification never raises; anything unrecognised is plain.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple
from urllib.parse import unquote

from depbump.models.spec import ParsedSpec, SpecKind
from depbump.utils.version_utils import is_valid_range, is_wildcard
from depbump.constants import NPM_ALIAS_PREFIX, SEMVER_TAG_PREFIX

_NPM_ALIAS_RE = re.compile(rf"^{re.escape(NPM_ALIAS_PREFIX)}((?:@[^/@]+/)?[^@]+)(?:@(.*))?$")

# Hosted shortcuts, full URLs (optionally git+), scp-style and user/repo
_SOURCE_URL_RE = re.compile(
    r"^(?:"
    r"(?:github|gitlab|bitbucket|gist):[^#\s]+"
    r"|(?:git\+)?(?:https?|ssh|git|file)://[^#\s]+"
    r"|git@[^:#\s]+:[^#\s]+"
    r"|[\w.-]+(?:/[\w.-]+)+"
    r")(?:#.*)?$"
)

_V_PREFIX_RE = re.compile(r"^[vV](?=\d)")
_ESCAPE_RE = re.compile(r"%[0-9A-Fa-f]{2}")


# ---------------------------------------------------------------------------
# npm aliases
# ---------------------------------------------------------------------------


def is_npm_alias(spec: Optional[str]) -> bool:
    """Return True for ``npm:<name>[@<range>]`` specs."""
    return bool(spec) and _NPM_ALIAS_RE.match(spec) is not None  # type: ignore[arg-type]


def parse_npm_alias(spec: str) -> Optional[Tuple[str, Optional[str]]]:
    """Split an npm alias into ``(real_name, range)``.

    Examples:
        >>> parse_npm_alias("npm:@scope/pkg@^1.0.0")
        ('@scope/pkg', '^1.0.0')
        >>> parse_npm_alias("npm:pkg")
        ('pkg', None)
    """
    match = _NPM_ALIAS_RE.match(spec)
    if match is None:
        return None
    return match.group(1), match.group(2)


def upgrade_npm_alias(spec: str, upgraded: str) -> str:
    """Replace the range of an npm alias, keeping the real package name."""
    parsed = parse_npm_alias(spec)
    if parsed is None:
        return upgraded
    return f"{NPM_ALIAS_PREFIX}{parsed[0]}@{upgraded}"


# ---------------------------------------------------------------------------
# Source URLs
# ---------------------------------------------------------------------------


def _split_fragment(spec: str) -> Tuple[str, Optional[str]]:
    base, sep, fragment = spec.partition("#")
    return base, (fragment if sep else None)


def _split_tag(fragment: str) -> Tuple[str, str]:
    """Split a decoded fragment into ``(prefix, range)``.

    ``semver:^1.0.0`` -> ``("semver:", "^1.0.0")``,
    ``v1.2.0`` -> ``("v", "1.2.0")``.
    """
    prefix = ""
    if fragment.startswith(SEMVER_TAG_PREFIX):
        prefix = SEMVER_TAG_PREFIX
        fragment = fragment[len(SEMVER_TAG_PREFIX):]
    v_match = _V_PREFIX_RE.match(fragment)
    if v_match:
        prefix += v_match.group(0)
        fragment = fragment[v_match.end():]
    return prefix, fragment


def _raw_offset(fragment: str, decoded_length: int) -> int:
    """Index in the raw ``fragment`` where its first ``decoded_length``
    decoded characters end."""
    index = 0
    while decoded_length > 0 and index < len(fragment):
        index += 3 if _ESCAPE_RE.match(fragment, index) else 1
        decoded_length -= 1
    return index


def _reencode(upgraded: str, raw_tag: str) -> str:
    """Escape the characters of ``upgraded`` that ``raw_tag`` had escaped,
    spelled exactly as they were."""
    escapes = {unquote(m.group(0)): m.group(0) for m in _ESCAPE_RE.finditer(raw_tag)}
    return "".join(escapes.get(char, char) for char in upgraded)


def is_source_url(spec: Optional[str]) -> bool:
    """Return True for specs shaped like a git/hosted source locator."""
    if not spec or is_npm_alias(spec):
        return False
    base, _ = _split_fragment(spec)
    # A valid range is always plain
    if is_valid_range(base):
        return False
    return _SOURCE_URL_RE.match(spec) is not None


def get_github_url_tag(spec: str) -> Optional[str]:
    """Return the semver range in a source URL's fragment, if any.

    Examples:
        >>> get_github_url_tag("github:user/repo#v1.2.0")
        '1.2.0'
        >>> get_github_url_tag("github:user/repo#main") is None
        True
    """
    if not is_source_url(spec):
        return None
    _, fragment = _split_fragment(spec)
    if not fragment:
        return None
    _, tag = _split_tag(unquote(fragment))
    if not tag or is_wildcard(tag) or not is_valid_range(tag):
        return None
    return tag


def is_github_url(spec: Optional[str]) -> bool:
    """Return True for source URLs whose fragment carries a semver range."""
    return bool(spec) and get_github_url_tag(spec) is not None  # type: ignore[arg-type]


def upgrade_github_url(parsed: ParsedSpec, upgraded: str) -> str:
    """Swap the range token in a source URL's fragment, leaving the rest.

    A percent-encoded fragment keeps its tag prefix byte for byte and the
    new range reuses the escapes of the old one.

    Examples:
        >>> upgrade_github_url(classify_spec("github:u/r#semver%3A%5E1.0.0"), "^1.2.0")
        'github:u/r#semver%3A%5E1.2.0'
    """
    if parsed.url_prefix is None:
        return upgraded
    if not parsed.tag_encoded:
        return f"{parsed.url_prefix}{parsed.tag_prefix}{upgraded}"
    return f"{parsed.url_prefix}{parsed.raw_tag_prefix}{_reencode(upgraded, parsed.raw_tag)}"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_spec(spec: Optional[str]) -> ParsedSpec:
    """Classify a version spec and extract its comparable range.

    Examples:
        >>> classify_spec("npm:lodash@^4.0.0").comparable
        '^4.0.0'
        >>> classify_spec("github:user/repo#v1.0.0").url_prefix
        'github:user/repo#'
        >>> classify_spec("^1.2.3").kind
        <SpecKind.PLAIN: 'plain'>
    """
    raw = spec or ""

    if is_npm_alias(raw):
        parsed_alias = parse_npm_alias(raw)
        name, range_ = parsed_alias if parsed_alias else (None, None)
        return ParsedSpec(
            raw=raw,
            kind=SpecKind.ALIAS,
            comparable=range_ or None,
            alias_name=name,
        )

    if is_source_url(raw):
        base, fragment = _split_fragment(raw)
        if fragment is None:
            return ParsedSpec(raw=raw, kind=SpecKind.SOURCE_URL, url_prefix=raw)

        decoded = unquote(fragment)
        prefix, tag = _split_tag(decoded)
        comparable = (
            tag if tag and not is_wildcard(tag) and is_valid_range(tag) else None
        )
        split_at = _raw_offset(fragment, len(prefix))
        return ParsedSpec(
            raw=raw,
            kind=SpecKind.SOURCE_URL,
            comparable=comparable,
            url_prefix=f"{base}#",
            tag_prefix=prefix,
            tag_encoded=decoded != fragment,
            raw_tag_prefix=fragment[:split_at],
            raw_tag=fragment[split_at:],
        )

    return ParsedSpec(raw=raw, kind=SpecKind.PLAIN, comparable=raw)
