"""Package include/exclude filters.

A filter pattern may be:

- a string of names separated by commas or whitespace, each an exact
  name, a glob (``@types/*``) or a ``/regex/``;
- a list of such strings;
- a compiled regular expression;
- a callable ``fn(name, parsed_range) -> bool``.
"""

from __future__ import annotations

import re
from fnmatch import fnmatchcase
from typing import Any, Callable, List, Optional, Pattern, Sequence, Union

from depbump.exceptions import OptionsError
from depbump.utils.version_utils import SemverToken, parse_range

FilterFunction = Callable[[str, List[SemverToken]], bool]
FilterOption = Union[str, Sequence[str], Pattern[str], FilterFunction]

_SPLIT_RE = re.compile(r"[\s,]+")


class FilterPattern:
    """A compiled filter pattern.

    Example:
        >>> FilterPattern("react*, lodash").matches("react-dom")
        True
    """

    def __init__(self, pattern: FilterOption) -> None:
        self._predicates: List[Callable[[str, List[SemverToken]], bool]] = []

        if callable(pattern) and not isinstance(pattern, re.Pattern):
            self._predicates.append(pattern)
        elif isinstance(pattern, re.Pattern):
            regex = pattern
            self._predicates.append(lambda name, _: regex.search(name) is not None)
        elif isinstance(pattern, str):
            self._add_terms(_SPLIT_RE.split(pattern))
        elif isinstance(pattern, (list, tuple)):
            for item in pattern:
                if not isinstance(item, str):
                    raise OptionsError(
                        "filter list items must be strings",
                        option="filter",
                        value=item,
                    )
                self._add_terms(_SPLIT_RE.split(item))
        else:
            raise OptionsError(
                "filter must be a string, list, regex or callable",
                option="filter",
                value=pattern,
            )

    def _add_terms(self, terms: Sequence[str]) -> None:
        for term in terms:
            if not term:
                continue
            if len(term) > 2 and term.startswith("/") and term.endswith("/"):
                try:
                    regex = re.compile(term[1:-1])
                except re.error as exc:
                    raise OptionsError(
                        f"Invalid filter regex {term}: {exc}",
                        option="filter",
                        value=term,
                    ) from exc
                self._predicates.append(
                    lambda name, _, regex=regex: regex.search(name) is not None
                )
            else:
                self._predicates.append(
                    lambda name, _, glob=term: fnmatchcase(name, glob)
                )

    def matches(self, name: str, spec: Optional[str] = None) -> bool:
        """Return True if any term of the pattern matches ``name``."""
        parsed = parse_range(spec)
        return any(predicate(name, parsed) for predicate in self._predicates)


class PackageFilter:
    """Combines an include pattern and an exclude pattern.

    A package passes when it matches ``include`` (or no include pattern is
    set) and does not match ``reject``.
    """

    def __init__(
        self,
        include: Optional[Any] = None,
        reject: Optional[Any] = None,
    ) -> None:
        self.include = FilterPattern(include) if include else None
        self.reject = FilterPattern(reject) if reject else None

    @property
    def active(self) -> bool:
        return self.include is not None or self.reject is not None

    def accepts(self, name: str, spec: Optional[str] = None) -> bool:
        if self.include is not None and not self.include.matches(name, spec):
            return False
        if self.reject is not None and self.reject.matches(name, spec):
            return False
        return True

    def apply(self, dependencies: dict) -> dict:
        """Return the entries of ``dependencies`` that pass the filter."""
        if not self.active:
            return dict(dependencies)
        return {
            name: spec
            for name, spec in dependencies.items()
            if self.accepts(name, spec)
        }
