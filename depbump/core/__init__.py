"""
Core functionality exports for depbump.

This module provides convenient access to the core subsystems of depbump.
Importing from here keeps user-facing imports clean and stable:

    from depbump.core import DependencySetUpgrader, ManifestPatcher
"""

from __future__ import annotations

from depbump.core.classifier import (
    classify_spec,
    is_github_url,
    is_npm_alias,
    is_source_url,
)
from depbump.core.wildcard import detect_wildcard_style, infer_wildcard_style
from depbump.core.eligibility import allows_downgrade, is_upgradeable
from depbump.core.synthesizer import rewrap_spec, upgrade_dependency_declaration
from depbump.core.upgrader import DependencySetUpgrader, upgrade_dependencies
from depbump.core.patcher import (
    ManifestPatcher,
    PatchResult,
    TextEdit,
    resolve_dep_sections,
    upgrade_package_data,
)
from depbump.core.manifest import Manifest, ManifestParser
from depbump.core.registry import StaticRegistry
from depbump.core.filters import FilterPattern, PackageFilter

__all__ = [
    "classify_spec",
    "is_github_url",
    "is_npm_alias",
    "is_source_url",
    "detect_wildcard_style",
    "infer_wildcard_style",
    "allows_downgrade",
    "is_upgradeable",
    "rewrap_spec",
    "upgrade_dependency_declaration",
    "DependencySetUpgrader",
    "upgrade_dependencies",
    "ManifestPatcher",
    "PatchResult",
    "TextEdit",
    "resolve_dep_sections",
    "upgrade_package_data",
    "Manifest",
    "ManifestParser",
    "StaticRegistry",
    "FilterPattern",
    "PackageFilter",
]
