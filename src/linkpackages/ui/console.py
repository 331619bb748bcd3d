"""Console output formatting utilities for link-packages."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from ..errors import CommandFailure
    from ..model import DependencyLink, LinkPlan


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_stage(self, label: str) -> None:
        """Print the progress line shown right before a batch starts."""
        print(label, flush=True)

    def print_warning(self, message: str) -> None:
        """Print a non-fatal warning, one line per line of the message."""
        for i, line in enumerate(message.splitlines()):
            prefix = "WARNING: " if i == 0 else ""
            print(f"{prefix}{line}", file=sys.stderr)

    def print_tolerated_failure(self, failure: CommandFailure) -> None:
        """Print a job failure that did not stop the run (verbose mode only)."""
        print(f"Ignoring failure: {failure}", file=sys.stderr)

    def print_link_results(self, links: Iterable[DependencyLink]) -> None:
        """
        Print what was linked.

        Skippable links are left out: nothing was attached into them, even if
        their dependencies were unlinked and re-registered.
        """
        print("Links created")
        for link in links:
            if link.is_skippable:
                continue
            print(f"* {link.name} ({link.path})")
            for dep in link.dependencies:
                print(f"  - {dep.name} ({dep.path})")
        print("Done!")

    def print_plan(self, plan: LinkPlan) -> None:
        """Print every planned command without running anything."""
        for batch in plan.batches:
            print(f"{batch.label} ({batch.policy.value})")
            if not batch.commands:
                print("  (nothing to do)")
            for command in batch.commands:
                print(f"  {command}  [cwd: {command.cwd}]")
        print(f"{plan.command_count} command(s) planned, none run (dry run)")

    def print_bail(self, exc: BaseException) -> None:
        """Print a fatal error and the bailing notice."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(str(exc), file=sys.stderr)
        print("Error linking local packages! Bailing!", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
