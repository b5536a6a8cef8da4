"""
Unified data model exports for depbump.

Example:
    >>> from depbump.models import ParsedSpec, UpgradeOptions
"""

from __future__ import annotations

from depbump.models.spec import (
    DependencySection,
    ParsedSpec,
    SpecKind,
    UpgradeDecision,
    WildcardStyle,
)
from depbump.models.options import (
    ComputedTarget,
    LiteralTarget,
    TargetFunction,
    TargetPolicy,
    UpgradeOptions,
)

__all__ = [
    "ComputedTarget",
    "DependencySection",
    "LiteralTarget",
    "ParsedSpec",
    "SpecKind",
    "TargetFunction",
    "TargetPolicy",
    "UpgradeDecision",
    "UpgradeOptions",
    "WildcardStyle",
]
