"""Tests for building local dependency links."""

from pathlib import Path

from linkpackages.graph import find_local_dependencies, local_dependencies_of
from linkpackages.model import DependencyRef, Module
from linkpackages.scanner import find_local_modules


def _module(name, deps=(), skippable=False):
    return Module(
        name=name,
        path=Path("/ws") / name,
        manifest_path=Path("/ws") / name / "package.json",
        dependency_names=tuple(deps),
        is_skippable=skippable,
    )


def _by_name(*modules):
    return {m.name: m for m in modules}


class TestFindLocalDependencies:
    """Tests for intersecting declared dependencies with local modules."""

    def test_only_modules_with_local_dependencies_get_links(self, abc_workspace):
        modules = find_local_modules(abc_workspace).modules

        links = find_local_dependencies(modules)

        assert [link.name for link in links] == ["a"]
        assert links[0].path == abc_workspace / "a"
        assert links[0].dependencies == (DependencyRef(name="b", path=abc_workspace / "b"),)

    def test_empty_module_map(self):
        assert find_local_dependencies({}) == []

    def test_no_shared_names_means_no_links(self):
        modules = _by_name(_module("a", ["react"]), _module("b", ["lodash"]))
        assert find_local_dependencies(modules) == []

    def test_dependencies_keep_declaration_order(self):
        modules = _by_name(
            _module("app", ["zeta", "left-pad", "alpha"]),
            _module("alpha"),
            _module("zeta"),
        )

        links = find_local_dependencies(modules)

        assert [d.name for d in links[0].dependencies] == ["zeta", "alpha"]

    def test_links_follow_module_map_order(self):
        modules = _by_name(
            _module("c", ["a"]),
            _module("a", ["b"]),
            _module("b"),
        )

        assert [link.name for link in find_local_dependencies(modules)] == ["c", "a"]

    def test_cycles_are_allowed(self):
        modules = _by_name(_module("a", ["b"]), _module("b", ["a"]))

        links = find_local_dependencies(modules)

        assert [(link.name, link.dependencies[0].name) for link in links] == [("a", "b"), ("b", "a")]

    def test_skippable_flag_is_carried_on_the_link(self):
        modules = _by_name(_module("a", ["b"], skippable=True), _module("b"))

        links = find_local_dependencies(modules)

        assert links[0].is_skippable is True

    def test_dependency_resolves_to_the_dependency_path(self):
        modules = _by_name(_module("a", ["b"]), _module("b"))

        refs = local_dependencies_of(modules["a"], modules)

        assert refs == [DependencyRef(name="b", path=Path("/ws/b"))]
