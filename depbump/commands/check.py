"""Check command implementation for depbump.

Reports which dependencies of a ``package.json`` would be upgraded, and
to what, without modifying the file.

Typical usage::

    # Table of upgrades for the default sections
    $ depbump check --registry registry.json

    # Only devDependencies, following the @next channel
    $ depbump check -r registry.json --dep dev --target @next

    # Machine-readable output
    $ depbump check -r registry.json --format json > upgrades.json
"""

from __future__ import annotations

import sys
import click
import asyncio
from pathlib import Path
from typing import Optional, Tuple

from depbump.exceptions import DepBumpError
from depbump.context import pass_context, DepBumpContext
from depbump.commands.common import (
    UpgradePlan,
    UpgradeRequest,
    display_decisions,
    plan_upgrades,
    upgrade_options,
)
from depbump.utils import get_logger, print_error, print_json, print_success

logger = get_logger("commands.check")


@click.command()
@upgrade_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def check(
    ctx: DepBumpContext,
    file: Path,
    registry: Optional[str],
    target: Optional[str],
    dep: Optional[str],
    remove_range: Optional[bool],
    filter_: Tuple[str, ...],
    reject: Tuple[str, ...],
    output_format: str,
) -> None:
    """Show dependencies that have upgrades available.

    Exits:
        0 if every dependency is up to date, 1 if upgrades are available
        or an error occurred.
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
    except DepBumpError as e:
        print_error(f"{e}")
        sys.exit(1)

    _report(plan, output_format.lower())
    sys.exit(1 if plan.upgraded else 0)


def _report(plan: UpgradePlan, output_format: str) -> None:
    if output_format == "json":
        print_json(plan.upgraded)
        return

    if not plan.upgraded:
        print_success("All dependencies match the latest versions")
        return

    display_decisions(plan.decisions, title="Available Upgrades")
    logger.info("%d upgrade(s) available", len(plan.upgraded))
