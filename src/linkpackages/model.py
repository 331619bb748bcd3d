# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .errors import CommandFailure


@dataclass(frozen=True)
class Module:
    """A local package found directly under the packages root."""
    name: str
    path: Path
    manifest_path: Path
    # runtime dependency names first, then dev dependency names
    dependency_names: Tuple[str, ...] = ()
    is_skippable: bool = False


@dataclass(frozen=True)
class DependencyRef:
    name: str
    path: Path


@dataclass(frozen=True)
class DependencyLink:
    """
    A module plus the local modules it depends on.

    Only built when there is at least one local dependency. `is_skippable`
    applies to the whole record, never to individual dependencies.
    """
    name: str
    path: Path
    dependencies: Tuple[DependencyRef, ...]
    is_skippable: bool = False


@dataclass(frozen=True)
class Command:
    """One link-tool invocation: `<tool> <verb> <args...>` run inside `cwd`."""
    tool: str
    verb: str
    cwd: Path
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.tool, self.verb, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    command: Command
    exit_code: int = 0


class BatchPolicy(str, Enum):
    """What a batch does when one of its jobs fails."""
    TOLERANT = "tolerant"  # record the failure, keep going
    STRICT = "strict"      # fail the whole run


@dataclass(frozen=True)
class Batch:
    name: str
    label: str
    policy: BatchPolicy
    commands: Tuple[Command, ...] = ()

    def __len__(self) -> int:
        return len(self.commands)


@dataclass(frozen=True)
class LinkPlan:
    """The three batches of a link run, in execution order."""
    unlink: Batch
    link_dependencies: Batch
    link_dependees: Batch

    @property
    def batches(self) -> List[Batch]:
        return [self.unlink, self.link_dependencies, self.link_dependees]

    @property
    def command_count(self) -> int:
        return sum(len(b) for b in self.batches)


@dataclass
class BatchOutcome:
    batch: str
    succeeded: List[CommandResult] = field(default_factory=list)
    # tolerated failures only; a strict failure is raised instead
    failures: List[CommandFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class LinkResult:
    """
    Everything a run produced, for the caller to render.

    `outcomes` is empty on a dry run.
    """
    links: List[DependencyLink]
    warnings: List[str] = field(default_factory=list)
    outcomes: Dict[str, BatchOutcome] = field(default_factory=dict)
    plan: Optional[LinkPlan] = None

    @property
    def applied_links(self) -> List[DependencyLink]:
        return [link for link in self.links if not link.is_skippable]
