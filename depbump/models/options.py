"""
Upgrade options for depbump.

``target`` may be given as a string or as a callable; both are normalised
into a :class:`TargetPolicy` so the pipeline resolves one policy literal
per package without caring how it was supplied. Options are validated
here, at the boundary, so the pipeline itself never has to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

from depbump.exceptions import OptionsError
from depbump.models.spec import WildcardStyle
from depbump.constants import DEFAULT_TARGET, DEFAULT_REMOVE_RANGE
from depbump.utils.version_utils import SemverToken

TargetFunction = Callable[[str, List[SemverToken]], str]
DepOption = Union[str, Sequence[str]]


class TargetPolicy:
    """Resolves the policy literal (``"latest"``, ``"@next"``, ...) for a package."""

    def resolve(self, name: str, parsed_range: List[SemverToken]) -> str:
        raise NotImplementedError

    @staticmethod
    def from_option(value: Any) -> "TargetPolicy":
        """Build a policy from a raw ``target`` option value.

        Raises:
            OptionsError: ``value`` is neither a string nor a callable.
        """
        if value is None:
            return LiteralTarget(DEFAULT_TARGET)
        if isinstance(value, TargetPolicy):
            return value
        if isinstance(value, str):
            return LiteralTarget(value or DEFAULT_TARGET)
        if callable(value):
            return ComputedTarget(value)
        raise OptionsError(
            "target must be a string or a callable",
            option="target",
            value=value,
        )


@dataclass(frozen=True)
class LiteralTarget(TargetPolicy):
    """The same policy literal for every package."""

    value: str = DEFAULT_TARGET

    def resolve(self, name: str, parsed_range: List[SemverToken]) -> str:
        return self.value


@dataclass(frozen=True)
class ComputedTarget(TargetPolicy):
    """A policy literal computed per package by ``fn(name, parsed_range)``."""

    fn: TargetFunction

    def resolve(self, name: str, parsed_range: List[SemverToken]) -> str:
        result = self.fn(name, parsed_range)
        if not isinstance(result, str):
            raise OptionsError(
                f"target function returned {type(result).__name__} for {name}",
                option="target",
                value=result,
            )
        return result


@dataclass
class UpgradeOptions:
    """Options controlling which packages are upgraded and how.

    Attributes:
        target: Policy literal, callable, or :class:`TargetPolicy`.
        remove_range: Replace ranges with the bare latest version.
        dep: Section selector: a comma separated string or a list.
        wildcard: Explicit :class:`WildcardStyle`; inferred when ``None``.
    """

    target: Any = DEFAULT_TARGET
    remove_range: bool = DEFAULT_REMOVE_RANGE
    dep: Optional[DepOption] = None
    wildcard: Optional[WildcardStyle] = None

    def __post_init__(self) -> None:
        self.target = TargetPolicy.from_option(self.target)

        if not isinstance(self.remove_range, bool):
            raise OptionsError(
                "remove_range must be a boolean",
                option="remove_range",
                value=self.remove_range,
            )

        if self.dep is not None and not isinstance(self.dep, str):
            if not isinstance(self.dep, (list, tuple)) or not all(
                isinstance(item, str) for item in self.dep
            ):
                raise OptionsError(
                    "dep must be a string or a list of strings",
                    option="dep",
                    value=self.dep,
                )

        if self.wildcard is not None and not isinstance(self.wildcard, WildcardStyle):
            try:
                self.wildcard = WildcardStyle(self.wildcard)
            except ValueError as exc:
                raise OptionsError(
                    "wildcard must be one of ^, ~, .x or an empty string",
                    option="wildcard",
                    value=self.wildcard,
                ) from exc
