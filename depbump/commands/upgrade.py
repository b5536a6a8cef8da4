"""Upgrade command implementation for depbump.

Rewrites the dependency specs of a ``package.json`` in place. Only the
version strings change: indentation, key order, line endings and the
trailing newline are preserved byte for byte.

Typical usage::

    # Upgrade everything the registry knows about
    $ depbump upgrade --registry registry.json

    # Preview changes without applying
    $ depbump upgrade -r registry.json --dry-run

    # Create backup and skip confirmation
    $ depbump upgrade -r registry.json --backup -y
"""

from __future__ import annotations

import sys
import click
import asyncio
from pathlib import Path
from typing import Optional, Tuple

from depbump.core import ManifestPatcher
from depbump.exceptions import DepBumpError
from depbump.context import pass_context, DepBumpContext
from depbump.commands.common import (
    UpgradePlan,
    UpgradeRequest,
    display_decisions,
    plan_upgrades,
    upgrade_options,
)
from depbump.utils import (
    confirm,
    get_logger,
    print_error,
    print_success,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.upgrade")


@click.command()
@upgrade_options
@click.option(
    "--dry-run",
    is_flag=True,
    help="Preview changes without applying them.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@click.option(
    "--backup",
    is_flag=True,
    help="Create backup file before upgrading.",
)
@pass_context
def upgrade(
    ctx: DepBumpContext,
    file: Path,
    registry: Optional[str],
    target: Optional[str],
    dep: Optional[str],
    remove_range: Optional[bool],
    filter_: Tuple[str, ...],
    reject: Tuple[str, ...],
    dry_run: bool,
    yes: bool,
    backup: bool,
) -> None:
    """Upgrade dependency specs in a package.json file.

    Exits:
        0 if upgrades were applied or none were needed, 1 if an error
        occurred.
    """
    request = UpgradeRequest(
        file=file,
        registry=registry,
        target=target,
        dep=dep,
        remove_range=remove_range,
        filter=filter_,
        reject=reject,
    )

    try:
        plan = asyncio.run(plan_upgrades(ctx, request))
        _apply(plan, file, dry_run=dry_run, skip_confirm=yes, backup=backup)
    except DepBumpError as e:
        print_error(f"{e}")
        sys.exit(1)

    sys.exit(0)


def _apply(
    plan: UpgradePlan,
    file: Path,
    *,
    dry_run: bool,
    skip_confirm: bool,
    backup: bool,
) -> None:
    upgraded = plan.upgraded
    if not upgraded:
        print_success("All dependencies match the latest versions")
        return

    title = "Upgrade Plan (Dry Run)" if dry_run else "Upgrade Plan"
    display_decisions(plan.decisions, title=title)

    if dry_run:
        print_warning("Dry run mode - no changes applied")
        return

    if not skip_confirm:
        count = len(upgraded)
        plural = "dependency" if count == 1 else "dependencies"
        if not confirm(f"Upgrade {count} {plural}?", default=True):
            logger.info("Upgrade cancelled by user")
            return

    result = ManifestPatcher(plan.options.dep).apply(
        plan.manifest.text, plan.current, upgraded
    )
    for name in result.skipped:
        logger.warning("Could not locate the declaration of %s", name)

    if not result.changed:
        print_warning("No declarations were rewritten")
        return

    backup_path = safe_write_file(file, result.text, create_backup=backup)
    if backup_path is not None:
        logger.info("Created backup: %s", backup_path)

    for edit in result.edits:
        logger.debug("  %s -> %s", edit.package_name, edit.replacement)

    count = len({edit.package_name for edit in result.edits})
    print_success(f"Upgraded {count} dependency spec(s) in {file.name}")
