# graph.py
from __future__ import annotations

from typing import Dict, List

from .model import DependencyLink, DependencyRef, Module


def local_dependencies_of(module: Module, modules_by_name: Dict[str, Module]) -> List[DependencyRef]:
    """The module's declared dependencies that are also local modules, in declaration order."""
    refs: List[DependencyRef] = []
    for dep_name in module.dependency_names:
        dep = modules_by_name.get(dep_name)
        if dep is not None:
            refs.append(DependencyRef(name=dep.name, path=dep.path))
    return refs


def find_local_dependencies(modules_by_name: Dict[str, Module]) -> List[DependencyLink]:
    """
    Build one DependencyLink per module that depends on another local module.

    Modules without local dependencies are left out entirely. Order follows
    `modules_by_name`. Cycles are fine: nothing here or downstream walks
    the graph recursively.
    """
    links: List[DependencyLink] = []
    for module in modules_by_name.values():
        refs = local_dependencies_of(module, modules_by_name)
        if not refs:
            continue
        links.append(
            DependencyLink(
                name=module.name,
                path=module.path,
                dependencies=tuple(refs),
                is_skippable=module.is_skippable,
            )
        )
    return links
