"""
depbump: dependency manifest upgrader for package.json files

depbump decides, for every dependency declared in a ``package.json``,
whether a newer known version should replace the declared constraint and
rewrites the manifest text in place without disturbing anything else.

Features include:
    • Notation-preserving range upgrades (``^``, ``~``, ``1.x``, exact pins)
    • npm aliases (``npm:real-name@^1.0.0``) and git URL tags (``#v1.2.0``)
    • Prerelease downgrade gating for explicit channel targets (``@next``)
    • Byte-for-byte preservation of manifest formatting
    • Static registries from local JSON files or URLs
"""

from __future__ import annotations

from depbump.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "depbump Contributors"
__license__ = "Apache-2.0"
__description__ = "Notation-preserving dependency upgrades for package.json manifests."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

from depbump.core import (  # noqa: E402
    DependencySetUpgrader,
    ManifestPatcher,
    classify_spec,
    upgrade_dependencies,
    upgrade_package_data,
)
from depbump.models import UpgradeOptions  # noqa: E402

__all__ = [
    "__version__",
    "DependencySetUpgrader",
    "ManifestPatcher",
    "UpgradeOptions",
    "classify_spec",
    "upgrade_dependencies",
    "upgrade_package_data",
]
