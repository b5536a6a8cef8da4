"""``help-target`` command: explains the ``--target`` policy values."""

from __future__ import annotations

import click

from depbump.context import pass_context, DepBumpContext
from depbump.utils import get_raw_console

_TARGET_HELP = """\
[bold]--target[/bold] chooses which version each dependency is upgraded to.

  latest    newest version published under the registry's latest tag
  @<tag>    an explicit dist-tag such as @next or @beta; prerelease
            specs may then move to an older version on that channel

When depbump is used as a library, target may be a function of the
package name and the parsed comparators of its current spec:
"""

_TARGET_EXAMPLE = """\
{keyDef} target(name, parsed_range):
    {keyIf} name {keyIn} ("react", "react-dom"):
        {keyReturn} "@next"
    {keyIf} parsed_range {keyAnd} parsed_range[0].major {keyEq} "0":
        {keyReturn} "@beta"
    {keyReturn} "latest"

upgrade_dependencies(current, latest, UpgradeOptions(target{keyAssign}target))
"""


@click.command("help-target")
@pass_context
def help_target(ctx: DepBumpContext) -> None:
    """Explain the values accepted by --target."""
    console = get_raw_console()
    console.print(_TARGET_HELP, highlight=False)
    console.print(ctx.keywords.format(_TARGET_EXAMPLE), highlight=False)
