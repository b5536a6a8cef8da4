"""
Manifest text patching.

Applies an upgrade map to the raw text of a ``package.json`` without
re-serializing it: every byte outside the replaced version strings
(whitespace, key order, line endings, trailing newline) survives.

Only the requested dependency sections are searched, plus ``overrides``
so that a pinned override never disagrees with the dependency it
overrides. The ``packageManager`` field is handled separately because it
is a single ``"<name>@<version>"`` string rather than a map.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Pattern, Sequence, Tuple, Union

from depbump.constants import (
    DEFAULT_DEP,
    DEP_ALIASES,
    OVERRIDES_SECTION,
    PACKAGE_MANAGER_FIELD,
)
from depbump.utils.logger import get_logger

logger = get_logger("core.patcher")

Span = Tuple[int, int]

_PACKAGE_MANAGER_RE = re.compile(
    rf'"{PACKAGE_MANAGER_FIELD}"\s*:\s*"((?:@[^"@/]+/)?[^"@]+)@([^"]*)"'
)


def resolve_dep_sections(dep: Union[str, Sequence[str], None] = None) -> List[str]:
    """Expand a section selector into manifest section names.

    Short aliases (``prod``, ``dev``, ``peer``, ``optional``) map to their
    section; any other name is kept as given.

    Examples:
        >>> resolve_dep_sections("prod,dev")
        ['dependencies', 'devDependencies']
        >>> resolve_dep_sections(["peer", "packageManager"])
        ['peerDependencies', 'packageManager']
    """
    if dep is None:
        names: Sequence[str] = DEFAULT_DEP
    elif isinstance(dep, str):
        names = [name.strip() for name in dep.split(",")]
    else:
        names = dep

    sections: List[str] = []
    for name in names:
        if not name:
            continue
        section = DEP_ALIASES.get(name, name)
        if section not in sections:
            sections.append(section)
    return sections


@dataclass(frozen=True)
class TextEdit:
    """Replacement of ``text[start:end]`` by ``replacement``."""

    start: int
    end: int
    replacement: str
    package_name: str


@dataclass
class PatchResult:
    """Outcome of :meth:`ManifestPatcher.apply`.

    Attributes:
        text: The patched manifest text.
        edits: Edits applied, in document order.
        skipped: Upgraded packages whose current spec was not found in
            any searched section.
    """

    text: str
    edits: List[TextEdit] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.edits)


def _find_object_end(text: str, open_brace: int) -> Optional[int]:
    """Return the index just past the ``}`` matching ``text[open_brace]``.

    Braces inside JSON strings are ignored.
    """
    depth = 0
    in_string = False
    escaped = False
    for index in range(open_brace, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


class ManifestPatcher:
    """Rewrites dependency versions in manifest text.

    Args:
        dep: Section selector, as accepted by :func:`resolve_dep_sections`.

    Example::

        >>> patcher = ManifestPatcher("prod")
        >>> result = patcher.apply(
        ...     '{"dependencies": {"lodash": "^4.17.0"}}',
        ...     {"lodash": "^4.17.0"},
        ...     {"lodash": "^4.17.21"},
        ... )
        >>> result.text
        '{"dependencies": {"lodash": "^4.17.21"}}'
    """

    def __init__(self, dep: Union[str, Sequence[str], None] = None) -> None:
        sections = resolve_dep_sections(dep)
        if OVERRIDES_SECTION not in sections:
            sections.append(OVERRIDES_SECTION)
        self.sections: List[str] = sections

        object_sections = [s for s in sections if s != PACKAGE_MANAGER_FIELD]
        self._header_re: Optional[Pattern[str]] = (
            re.compile(
                r'"(' + "|".join(re.escape(s) for s in object_sections) + r')"\s*:\s*\{'
            )
            if object_sections
            else None
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def section_spans(self, text: str) -> List[Span]:
        """Return ``(start, end)`` of every searched section's object body.

        A section nested inside an already found one is covered by the
        outer span and not reported again.
        """
        if self._header_re is None:
            return []

        spans: List[Span] = []
        for match in self._header_re.finditer(text):
            open_brace = match.end() - 1
            if any(start <= open_brace < end for start, end in spans):
                continue
            end = _find_object_end(text, open_brace)
            if end is None:
                logger.debug("Unterminated %r section at offset %d", match.group(1), open_brace)
                continue
            spans.append((open_brace, end))
        return spans

    def apply(
        self,
        text: str,
        current: Mapping[str, Optional[str]],
        upgraded: Mapping[str, str],
    ) -> PatchResult:
        """Replace the current spec of every upgraded package in ``text``.

        Args:
            text: Manifest text.
            current: Declared specs, as read from the manifest.
            upgraded: New specs, as produced by the upgrader.

        Returns:
            A :class:`PatchResult`. ``text`` is returned unchanged when
            nothing matched.
        """
        patterns: Dict[str, Pattern[str]] = {}
        edits: List[TextEdit] = []
        spans = self.section_spans(text)

        for start, end in spans:
            for name, new_spec in upgraded.items():
                old_spec = current.get(name)
                if not old_spec:
                    continue
                pattern = patterns.get(name)
                if pattern is None:
                    pattern = self._dependency_pattern(name, old_spec)
                    patterns[name] = pattern
                for match in pattern.finditer(text, start, end):
                    edits.append(
                        TextEdit(match.start(1), match.end(1), new_spec, name)
                    )

        if PACKAGE_MANAGER_FIELD in self.sections:
            edit = self._package_manager_edit(text, upgraded, spans)
            if edit is not None:
                edits.append(edit)

        edits = self._drop_overlaps(edits)
        patched = text
        for edit in reversed(edits):
            patched = patched[: edit.start] + edit.replacement + patched[edit.end :]

        found = {edit.package_name for edit in edits}
        skipped = [name for name in upgraded if name not in found]
        for name in skipped:
            logger.debug("No declaration of %s found to patch", name)

        return PatchResult(text=patched, edits=edits, skipped=skipped)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _dependency_pattern(name: str, spec: str) -> Pattern[str]:
        # Matches "name": "spec" and the override form "name": { ".": "spec"
        return re.compile(
            rf'"{re.escape(name)}"\s*:\s*(?:\{{\s*"\."\s*:\s*)?"({re.escape(spec)})"'
        )

    @staticmethod
    def _package_manager_edit(
        text: str,
        upgraded: Mapping[str, str],
        spans: List[Span],
    ) -> Optional[TextEdit]:
        for match in _PACKAGE_MANAGER_RE.finditer(text):
            if any(start <= match.start() < end for start, end in spans):
                continue
            name = match.group(1)
            if name not in upgraded:
                return None
            return TextEdit(match.start(2), match.end(2), upgraded[name], name)
        return None

    @staticmethod
    def _drop_overlaps(edits: List[TextEdit]) -> List[TextEdit]:
        ordered: List[TextEdit] = []
        for edit in sorted(edits, key=lambda e: (e.start, e.end)):
            if ordered and edit.start < ordered[-1].end:
                continue
            ordered.append(edit)
        return ordered


def upgrade_package_data(
    text: str,
    current: Mapping[str, Optional[str]],
    upgraded: Mapping[str, str],
    dep: Union[str, Sequence[str], None] = None,
) -> str:
    """Return ``text`` with every upgraded dependency rewritten.

    Example::

        >>> upgrade_package_data(
        ...     '{"devDependencies": {"jest": "~29.0.0"}}',
        ...     {"jest": "~29.0.0"},
        ...     {"jest": "~29.7.0"},
        ...     dep="dev",
        ... )
        '{"devDependencies": {"jest": "~29.7.0"}}'
    """
    return ManifestPatcher(dep).apply(text, current, upgraded).text
