"""Options and orchestration shared by ``check`` and ``upgrade``.

Both commands run the same pipeline and only differ in what they do with
the result:

1. **ManifestParser**: reads ``package.json`` and the requested sections.
2. **StaticRegistry**: supplies the latest version of every package.
3. **PackageFilter**: applies ``--filter`` / ``--reject``.
4. **DependencySetUpgrader**: decides and synthesizes new specs.

Command line values override the configuration file; the configuration
file overrides built-in defaults.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from depbump.constants import DEFAULT_MANIFEST
from depbump.context import DepBumpContext
from depbump.core import (
    DependencySetUpgrader,
    Manifest,
    ManifestParser,
    PackageFilter,
    StaticRegistry,
)
from depbump.models import UpgradeDecision, UpgradeOptions
from depbump.utils import get_logger, colorize_update_type, print_table

logger = get_logger("commands.common")


def upgrade_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the manifest, registry and selection options to a command."""
    decorators = [
        click.argument(
            "file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=DEFAULT_MANIFEST,
        ),
        click.option(
            "--registry",
            "-r",
            help="Static registry: a JSON file or URL mapping names to versions.",
        ),
        click.option(
            "--target",
            "-t",
            help="Target policy, e.g. latest or @next.",
        ),
        click.option(
            "--dep",
            "-d",
            help="Sections to upgrade: prod, dev, peer, optional, packageManager.",
        ),
        click.option(
            "--remove-range/--keep-range",
            default=None,
            help="Replace ranges with the bare latest version.",
        ),
        click.option(
            "--filter",
            "-f",
            "filter_",
            multiple=True,
            help="Only upgrade matching packages (names, globs, /regex/).",
        ),
        click.option(
            "--reject",
            "-x",
            multiple=True,
            help="Never upgrade matching packages (names, globs, /regex/).",
        ),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


@dataclass
class UpgradeRequest:
    """Command line selections, before merging with configuration."""

    file: Path
    registry: Optional[str] = None
    target: Optional[str] = None
    dep: Optional[str] = None
    remove_range: Optional[bool] = None
    filter: Tuple[str, ...] = ()
    reject: Tuple[str, ...] = ()


@dataclass
class UpgradePlan:
    """Result of running the pipeline over one manifest."""

    manifest: Manifest
    options: UpgradeOptions
    current: Dict[str, str] = field(default_factory=dict)
    decisions: List[UpgradeDecision] = field(default_factory=list)

    @property
    def upgraded(self) -> Dict[str, str]:
        return {
            d.package_name: d.new_spec
            for d in self.decisions
            if d.eligible and d.new_spec is not None
        }


def resolve_options(ctx: DepBumpContext, request: UpgradeRequest) -> UpgradeOptions:
    config = ctx.config
    return UpgradeOptions(
        target=request.target or config.target,
        remove_range=(
            request.remove_range
            if request.remove_range is not None
            else config.remove_range
        ),
        dep=request.dep or config.dep,
    )


def resolve_registry(ctx: DepBumpContext, request: UpgradeRequest) -> str:
    source = request.registry or ctx.config.registry
    if not source:
        raise click.UsageError(
            "No registry given. Pass --registry or set 'registry' in the configuration file."
        )
    return source


async def plan_upgrades(ctx: DepBumpContext, request: UpgradeRequest) -> UpgradePlan:
    """Run the upgrade pipeline without touching the manifest on disk.

    Raises:
        FileOperationError: The manifest cannot be read.
        ParseError: The manifest is not valid JSON.
        RegistryError: The static registry cannot be loaded.
    """
    options = resolve_options(ctx, request)
    registry = StaticRegistry(resolve_registry(ctx, request))

    manifest = ManifestParser().parse_file(request.file)
    current = manifest.dependencies(options.dep)
    logger.info("Found %d dependency declaration(s) in %s", len(current), request.file)

    package_filter = PackageFilter(
        include=list(request.filter) or ctx.config.filter or None,
        reject=list(request.reject) or ctx.config.reject or None,
    )
    selected = package_filter.apply(current)

    latest = await registry.latest_versions(selected)
    logger.debug("Registry knows %d of %d package(s)", len(latest), len(selected))

    decisions = DependencySetUpgrader(options).plan(selected, latest)
    return UpgradePlan(
        manifest=manifest,
        options=options,
        current=current,
        decisions=decisions,
    )


def display_decisions(decisions: List[UpgradeDecision], *, title: str) -> None:
    """Render eligible decisions as a Rich table."""
    data = []
    for decision in decisions:
        if not decision.eligible:
            continue
        data.append(
            {
                "Package": decision.package_name,
                "Current": decision.current,
                "New": f"[bold green]{decision.new_spec}[/bold green]",
                "Change": colorize_update_type(decision.update_type),
            }
        )

    column_styles = {
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Current": {"justify": "center", "style": "dim"},
        "New": {"justify": "center"},
        "Change": {"justify": "center"},
    }

    print_table(data, title=title, column_styles=column_styles)
