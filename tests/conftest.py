"""Shared fixtures: on-disk package workspaces and a fake link tool."""

import json
import subprocess
import threading
import time
from pathlib import Path

import pytest


def write_package(root, dirname, name=None, dependencies=None, dev_dependencies=None, **extra):
    """Create `<root>/<dirname>/package.json` and return the package directory."""
    pkg_dir = Path(root) / dirname
    pkg_dir.mkdir(parents=True, exist_ok=True)
    manifest = dict(extra)
    if name is not None:
        manifest["name"] = name
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    if dev_dependencies is not None:
        manifest["devDependencies"] = dev_dependencies
    (pkg_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    return pkg_dir


class FakeSpawn:
    """
    Stands in for subprocess.run.

    Records a ("start", argv, cwd) and an ("end", argv, cwd) event per call.
    `fail` decides which calls exit non-zero; `delay` decides how long a
    call takes.
    """

    def __init__(self, fail=None, delay=None, returncode=1):
        self.fail = fail or (lambda argv, cwd: False)
        self.delay = delay or (lambda argv, cwd: 0)
        self.returncode = returncode
        self.events = []
        self.calls = []
        self._lock = threading.Lock()

    def _record(self, event):
        with self._lock:
            self.events.append(event)

    def __call__(self, argv, cwd=None, text=None, capture_output=False):
        argv = list(argv)
        cwd = Path(cwd)
        with self._lock:
            self.calls.append({"argv": argv, "cwd": cwd, "capture_output": capture_output})
        self._record(("start", tuple(argv), cwd))
        pause = self.delay(argv, cwd)
        if pause:
            time.sleep(pause)
        code = self.returncode if self.fail(argv, cwd) else 0
        self._record(("end", tuple(argv), cwd))
        out = "tool stdout\n" if capture_output else None
        err = "tool stderr\n" if capture_output else None
        return subprocess.CompletedProcess(argv, code, stdout=out, stderr=err)

    def argvs(self):
        return [c["argv"] for c in self.calls]


@pytest.fixture
def workspace(tmp_path):
    """An empty packages root (resolved, so paths compare equal to scanner output)."""
    root = tmp_path.resolve() / "packages"
    root.mkdir()
    return root


@pytest.fixture
def abc_workspace(workspace):
    """
    a -> b, b has no deps, c -> d where d is not local, plus a non-package dir.
    """
    write_package(workspace, "a", name="a", dependencies={"b": "^1.0.0", "lodash": "^4.0.0"})
    write_package(workspace, "b", name="b", dependencies={})
    write_package(workspace, "c", name="c", dependencies={"d": "^2.0.0"})
    (workspace / "docs").mkdir()
    return workspace


@pytest.fixture
def fake_spawn():
    return FakeSpawn()
