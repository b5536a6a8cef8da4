"""
depbump command line.

The ``cli`` group reads the global flags, loads ``depbump.toml`` and hands
a :class:`~depbump.context.DepBumpContext` to the ``check``, ``upgrade``
and ``help-target`` subcommands. :func:`main` maps outcomes to exit codes.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depbump.config import load_config
from depbump.__version__ import __version__
from depbump.context import DepBumpContext
from depbump.exceptions import ConfigError, DepBumpError
from depbump.utils.logger import get_logger, level_from_verbosity, setup_logging
from depbump.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="DEPBUMP_CONFIG",
    help="depbump.toml to read instead of the one found from the working directory.",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log more detail; -v for progress, -vv for debug output.",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="DEPBUMP_COLOR",
    help="Colorize terminal output.",
)
@click.version_option(
    version=__version__,
    prog_name="depbump",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depbump: notation-preserving upgrades for package.json files.

    \b
    Commands:
      check          list the specs that have a newer version
      upgrade        write the new specs into package.json
      help-target    describe what --target accepts

    \b
    Examples:
      depbump check -r registry.json
      depbump upgrade -r registry.json --dep prod,dev
      depbump -v upgrade -r https://example.com/registry.json -y
    """
    level = level_from_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Log level %s", logging.getLevelName(level))

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(EXIT_ERROR) from exc

    state = DepBumpContext()
    state.config_path = config or settings.source_path
    state.config = settings
    state.verbose = verbose
    state.color = color
    ctx.obj = state

    _apply_color(color)

    logger.debug("depbump v%s, config %s", __version__, state.config_path)
    if settings.source_path:
        logger.debug("Settings: %s", settings.to_log_dict())


def _apply_color(enabled: bool) -> None:
    # rich and click both honour NO_COLOR
    if enabled:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()


try:
    from depbump.commands import check, help_target, upgrade
except ImportError as exc:
    sys.stderr.write(f"FATAL: depbump commands failed to import: {exc}\n")
    sys.exit(EXIT_ERROR)

for _command in (check, upgrade, help_target):
    cli.add_command(_command)


def main() -> int:
    """Run the CLI and return its exit code.

    ``0`` on success, ``1`` for depbump or unexpected errors, click's own
    code (``2``) for usage errors and ``130`` when interrupted.
    """
    try:
        cli(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("\nInterrupted, nothing more was done")
        return EXIT_INTERRUPTED
    except DepBumpError as exc:
        print_error(str(exc))
        logger.debug("Details: %s", exc.details or "<none>", exc_info=True)
        return EXIT_ERROR
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("depbump crashed")
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
