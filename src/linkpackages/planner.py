# planner.py
from __future__ import annotations

from typing import Iterable, List

from .config import DEFAULT_LINK_TOOL
from .model import Batch, BatchPolicy, Command, DependencyLink, LinkPlan

UNLINK_LABEL = "Unlinking dependencies..."
LINK_DEPENDENCIES_LABEL = "Linking dependencies..."
LINK_DEPENDEES_LABEL = "Linking dependees..."


# ---------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------
# Each builder is a pure function of the link list. A skippable link is
# dropped as a whole, dependencies and all.

def _active(links: Iterable[DependencyLink]) -> Iterable[DependencyLink]:
    return (link for link in links if not link.is_skippable)


def build_unlink_commands(links: Iterable[DependencyLink], tool: str = DEFAULT_LINK_TOOL) -> List[Command]:
    """`<tool> unlink --force` inside every dependency, dropping any stale link."""
    return [
        Command(tool=tool, verb="unlink", args=("--force",), cwd=dep.path)
        for link in _active(links)
        for dep in link.dependencies
    ]


def build_link_commands(links: Iterable[DependencyLink], tool: str = DEFAULT_LINK_TOOL) -> List[Command]:
    """`<tool> link` inside every dependency, registering it as linkable."""
    return [
        Command(tool=tool, verb="link", cwd=dep.path)
        for link in _active(links)
        for dep in link.dependencies
    ]


def build_dependee_commands(links: Iterable[DependencyLink], tool: str = DEFAULT_LINK_TOOL) -> List[Command]:
    """`<tool> link <dependency>` inside every dependent module."""
    return [
        Command(tool=tool, verb="link", args=(dep.name,), cwd=link.path)
        for link in _active(links)
        for dep in link.dependencies
    ]


# ---------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------

def plan_links(links: List[DependencyLink], tool: str = DEFAULT_LINK_TOOL) -> LinkPlan:
    """
    Turn dependency links into the three batches of a run.

    Unlinking and registering dependencies tolerate failures (there may be
    nothing to unlink, or the package may already be registered). Attaching
    dependencies into their dependees is what actually changes linkage, so
    that batch is strict.
    """
    return LinkPlan(
        unlink=Batch(
            name="unlink",
            label=UNLINK_LABEL,
            policy=BatchPolicy.TOLERANT,
            commands=tuple(build_unlink_commands(links, tool)),
        ),
        link_dependencies=Batch(
            name="link-dependencies",
            label=LINK_DEPENDENCIES_LABEL,
            policy=BatchPolicy.TOLERANT,
            commands=tuple(build_link_commands(links, tool)),
        ),
        link_dependees=Batch(
            name="link-dependees",
            label=LINK_DEPENDEES_LABEL,
            policy=BatchPolicy.STRICT,
            commands=tuple(build_dependee_commands(links, tool)),
        ),
    )
