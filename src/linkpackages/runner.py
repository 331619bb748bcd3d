# runner.py
from __future__ import annotations

import subprocess
from typing import Optional

from .config import LinkConfig
from .executor import Spawn, run_plan
from .graph import find_local_dependencies
from .model import LinkResult
from .planner import plan_links
from .scanner import find_local_modules
from .ui.console import Console, get_console


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def link_packages(
    config: LinkConfig,
    console: Optional[Console] = None,
    *,
    spawn: Spawn = subprocess.run,
) -> LinkResult:
    """
    Scan `config.packages_root`, plan the link commands and run them.

    Progress (warnings, batch labels) is printed as it happens; the final
    report is left to the caller, built from the returned LinkResult.

    Raises:
      DiscoveryError / ManifestError before anything runs.
      CommandFailure if a job in the dependee batch fails.
    """
    console = console or get_console()

    scan = find_local_modules(config.packages_root, config.single_package)
    warnings = list(scan.warnings)
    if config.single_package and config.single_package not in scan.modules:
        warnings.append(
            f"No local module named '{config.single_package}' found in {config.packages_root}; nothing to link"
        )
    for warning in warnings:
        console.print_warning(warning)

    links = find_local_dependencies(scan.modules)
    console.print_debug(
        f"Found {len(scan.modules)} module(s) in {config.packages_root}, "
        f"{len(links)} with local dependencies"
    )

    plan = plan_links(links, config.link_tool)
    result = LinkResult(links=links, warnings=warnings, plan=plan)
    if config.dry_run:
        return result

    result.outcomes = run_plan(plan, verbose=config.verbose, console=console, spawn=spawn)
    return result
