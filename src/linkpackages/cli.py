# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from linkpackages import __version__
from linkpackages.config import DEFAULT_LINK_TOOL, LINK_TOOL_ENV, LinkConfig
from linkpackages.runner import link_packages
from linkpackages.ui.console import Console, set_console


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="link-packages")
@click.option(
    "--packages-root",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to packages (defaults to the current directory)",
)
@click.option("--single-package", default=None, help="Only link local dependencies into this package")
@click.option("--verbose/--no-verbose", default=False, show_default=True, help="Show link tool output")
@click.option(
    "--link-tool",
    default=None,
    help=f"Link tool executable (defaults to ${LINK_TOOL_ENV} or '{DEFAULT_LINK_TOOL}')",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the planned commands without running them")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(packages_root, single_package, verbose, link_tool, dry_run, debug):
    """Link local packages that depend on each other.

    Every directory under the packages root holding a package.json is a
    candidate. Dependencies that are also local packages get unlinked,
    re-registered with the link tool and then linked into their dependees.
    """
    console = Console(debug=debug)
    set_console(console)

    config = LinkConfig.from_env(
        packages_root=packages_root,
        single_package=single_package,
        verbose=verbose,
        link_tool=link_tool,
        dry_run=dry_run,
    )
    console.print_debug(f"Config: {config}")

    try:
        result = link_packages(config, console)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_bail(e)
        sys.exit(1)

    if config.dry_run:
        console.print_plan(result.plan)
    else:
        console.print_link_results(result.links)


if __name__ == "__main__":
    cli()
