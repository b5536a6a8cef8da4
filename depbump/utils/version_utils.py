"""
Version algebra helpers for depbump.

npm-style range semantics (``^``, ``~``, x-ranges, hyphen ranges, ``||``)
are delegated to :mod:`semantic_version`. On top of that this module
provides a lightweight tokenizer that splits a range expression into its
comparators so that callers can inspect and rebuild the *notation* of a
range, which ``semantic_version`` does not expose.

None of the helpers raise for malformed input: unparseable text yields
``None``, ``False`` or an empty token list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

import semantic_version

from depbump.constants import WILDCARD_CHARS

# ---------------------------------------------------------------------------
# Comparator tokenizer
# ---------------------------------------------------------------------------

_PART = r"\d+|[xX*]"
_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

SEMVER_TOKEN_RE = re.compile(
    rf"(?P<operator>\^|~>?|[<>]=?|=)?"
    rf"[vV]?"
    rf"(?P<major>{_PART})"
    rf"(?:\.(?P<minor>{_PART}))?"
    rf"(?:\.(?P<patch>{_PART}))?"
    rf"(?:-(?P<release>{_IDENT}))?"
    rf"(?:\+(?P<build>{_IDENT}))?"
)

_WILDCARD_RE = re.compile(r"^[~^]?\s*(?:[xX*])(?:\.(?:[xX*])){0,2}$")
_OPERATOR_SPACE_RE = re.compile(r"([<>=~^]+)\s+")
_HYPHEN_OR_SPACE_RE = re.compile(r"\s+-\s+|\s+")
_V_PREFIX_RE = re.compile(r"(^|[\s<>=~^|])[vV](?=\d)")

BASE_PARTS = ("major", "minor", "patch")


@dataclass(frozen=True)
class SemverToken:
    """A single comparator of a range expression, e.g. ``^1.2.x``.

    Attributes:
        operator: Range operator (``^``, ``~``, ``>=``, ...), or ``""``.
        major: Major part as written (digits or a wildcard character).
        minor: Minor part as written, ``None`` if omitted.
        patch: Patch part as written, ``None`` if omitted.
        release: Prerelease identifiers without the leading ``-``.
        build: Build metadata without the leading ``+``.
    """

    operator: str = ""
    major: Optional[str] = None
    minor: Optional[str] = None
    patch: Optional[str] = None
    release: Optional[str] = None
    build: Optional[str] = None

    @property
    def precision(self) -> int:
        """Number of base parts (major/minor/patch) written."""
        return sum(1 for part in BASE_PARTS if getattr(self, part) is not None)

    @property
    def wildcard(self) -> Optional[str]:
        """The first wildcard character used in a base part, if any."""
        for part in BASE_PARTS:
            value = getattr(self, part)
            if is_wild_part(value):
                return value
        return None

    @property
    def version(self) -> str:
        """Render the version portion without the operator."""
        text = ".".join(
            getattr(self, part)
            for part in BASE_PARTS
            if getattr(self, part) is not None
        )
        if self.release:
            text += f"-{self.release}"
        if self.build:
            text += f"+{self.build}"
        return text

    def to_version(self) -> Optional[semantic_version.Version]:
        """Return the lowest concrete version the token names.

        Omitted or wildcard parts count as ``0``.
        """
        parts = []
        for part in BASE_PARTS:
            value = getattr(self, part)
            parts.append("0" if value is None or is_wild_part(value) else value)
        return _build_version(parts, self.release, self.build)

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


def is_wild_part(value: Optional[str]) -> bool:
    """Return True if a version part is a wildcard character."""
    return value is not None and value in WILDCARD_CHARS


def parse_range(text: Optional[str]) -> List[SemverToken]:
    """Split a range expression into comparator tokens.

    ``||`` and hyphen separators are dropped. Pieces that are not
    semver-shaped (dist-tags, branch names) are skipped, so
    ``parse_range("master")`` is ``[]``.

    Examples:
        >>> [str(t) for t in parse_range(">=1.2.0 <2")]
        ['>=1.2.0', '<2']
        >>> parse_range("^1.x")[0].wildcard
        'x'
    """
    if not text:
        return []

    tokens: List[SemverToken] = []
    for alternative in text.split("||"):
        alternative = _OPERATOR_SPACE_RE.sub(r"\1", alternative.strip())
        if not alternative:
            continue
        for piece in _HYPHEN_OR_SPACE_RE.split(alternative):
            match = SEMVER_TOKEN_RE.fullmatch(piece)
            if match is None:
                continue
            tokens.append(
                SemverToken(
                    operator=match.group("operator") or "",
                    major=match.group("major"),
                    minor=match.group("minor"),
                    patch=match.group("patch"),
                    release=match.group("release"),
                    build=match.group("build"),
                )
            )
    return tokens


# ---------------------------------------------------------------------------
# Concrete versions and ranges
# ---------------------------------------------------------------------------


def _build_version(
    parts: List[str],
    release: Optional[str],
    build: Optional[str],
) -> Optional[semantic_version.Version]:
    text = ".".join(str(int(part)) for part in parts)
    if release:
        text += f"-{release}"
    if build:
        text += f"+{build}"
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def parse_version(text: Optional[str]) -> Optional[semantic_version.Version]:
    """Parse a concrete version, tolerating a ``v``/``=`` prefix and
    omitted minor/patch parts (``"2"`` is read as ``2.0.0``).

    Returns ``None`` for ranges, wildcards and anything unparseable.
    """
    if not text:
        return None

    match = SEMVER_TOKEN_RE.fullmatch(text.strip())
    if match is None or match.group("operator") not in (None, "="):
        return None

    parts = [match.group(part) for part in BASE_PARTS]
    if any(is_wild_part(part) for part in parts):
        return None

    return _build_version(
        [part or "0" for part in parts],
        match.group("release"),
        match.group("build"),
    )


def _to_npm_spec(text: str) -> Optional[semantic_version.NpmSpec]:
    normalized = _V_PREFIX_RE.sub(r"\1", text.strip()).replace("~>", "~")
    try:
        return semantic_version.NpmSpec(normalized or "*")
    except ValueError:
        return None


def is_valid_range(text: Optional[str]) -> bool:
    """Return True if ``text`` is a valid npm range expression."""
    if text is None:
        return False
    return _to_npm_spec(text) is not None


def satisfies(version: Optional[str], range_text: Optional[str]) -> bool:
    """Return True if the concrete ``version`` is inside ``range_text``.

    Prerelease versions only match ranges that name a prerelease on the
    same ``major.minor.patch``, following npm.
    """
    parsed = parse_version(version)
    if parsed is None or range_text is None:
        return False
    spec = _to_npm_spec(range_text)
    if spec is None:
        return False
    return spec.match(parsed)


def is_wildcard(text: Optional[str]) -> bool:
    """Return True for ranges that accept any version (``*``, ``x``, ``""``)."""
    if text is None:
        return False
    stripped = text.strip()
    return not stripped or bool(_WILDCARD_RE.match(stripped))


def is_pre(text: Optional[str]) -> bool:
    """Return True if any comparator of ``text`` names a prerelease."""
    return any(token.release for token in parse_range(text))


# ---------------------------------------------------------------------------
# Update classification
# ---------------------------------------------------------------------------


def get_update_type(
    current_version: Optional[str],
    target_version: Optional[str],
) -> str:
    """Determine the semantic update type between two version specs.

    Ranges are compared by their lowest named version, so ``^1.2.0`` and
    ``1.2.0`` are equivalent here.

    Returns:
        One of ``"new"``, ``"same"``, ``"downgrade"``, ``"major"``,
        ``"minor"``, ``"patch"``, ``"update"`` or ``"unknown"``.

    Examples:
        >>> get_update_type("^1.0.0", "^2.0.0")
        'major'
        >>> get_update_type(None, "1.0.0")
        'new'
    """
    if current_version is None and target_version is None:
        return "unknown"

    if current_version is None:
        return "new"

    if target_version is None:
        return "unknown"

    try:
        current = _floor_version(current_version)
        target = _floor_version(target_version)
    except ValueError:
        return "unknown"

    if target == current:
        return "same"

    if target < current:
        return "downgrade"

    return _classify_upgrade(current, target)


def _floor_version(value: str) -> semantic_version.Version:
    """Return the lowest version named by a spec, or raise ``ValueError``."""
    tokens = parse_range(value)
    version = tokens[0].to_version() if tokens else None
    if version is None:
        raise ValueError(f"Not a version: {value!r}")
    return version


def _classify_upgrade(
    current: semantic_version.Version,
    target: semantic_version.Version,
) -> str:
    if current.major != target.major:
        return "major"

    if current.minor != target.minor:
        return "minor"

    if current.patch != target.patch:
        return "patch"

    # Prerelease -> release or metadata-only changes
    return "update"
