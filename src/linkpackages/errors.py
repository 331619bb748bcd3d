# errors.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .model import Command


class LinkPackagesError(Exception):
    """Base class for every fatal link-packages error."""


@dataclass
class DiscoveryError(LinkPackagesError):
    """The packages root could not be scanned."""
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


@dataclass
class ManifestError(DiscoveryError):
    """A package.json exists but cannot be read or has the wrong shape."""


@dataclass
class CommandFailure(LinkPackagesError):
    """
    A link-tool invocation that did not exit cleanly.

    `output` holds the tail of the captured stdout/stderr; it is empty when
    the job streamed its output (verbose mode).
    """
    command: Command
    exit_code: int
    output: str = ""
    hint: str | None = None

    def __str__(self) -> str:
        lines = [f"'{self.command}' failed in {self.command.cwd} (exit={self.exit_code})"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        if self.output:
            lines.append(self.output.rstrip())
        return "\n".join(lines)
