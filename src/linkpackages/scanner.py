# scanner.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .errors import DiscoveryError
from .manifest import Manifest, manifest_path, read_manifest
from .model import Module


@dataclass
class ScanResult:
    """Modules keyed by package name, in discovery order, plus any warnings."""
    modules: Dict[str, Module] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


def _iter_candidates(root: Path) -> Iterator[Path]:
    """
    Yield the immediate children of `root`, sorted by name.

    The sort order is what makes "first one wins" on duplicate package
    names deterministic.
    """
    if not root.is_dir():
        raise DiscoveryError(root, "Packages root is not a directory")
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise DiscoveryError(root, f"Could not list packages root ({e.strerror or e})") from e
    yield from entries


def _dependency_names(manifest: Manifest) -> tuple[str, ...]:
    return (
        *(manifest.dependencies or {}).keys(),
        *(manifest.dev_dependencies or {}).keys(),
    )


def find_local_modules(root: str | Path, single_package: Optional[str] = None) -> ScanResult:
    """
    Find every linkable package directly under `root`.

    A child directory is a module when it has a package.json that declares
    a `name` and a `dependencies` field. In focus mode (`single_package`
    set) every other module is marked skippable but still registered, so it
    can be resolved as somebody's dependency.

    Raises:
      DiscoveryError / ManifestError, before anything has been run.
    """
    root = Path(root).resolve()
    result = ScanResult()

    for candidate in _iter_candidates(root):
        manifest = read_manifest(candidate)
        if manifest is None:
            continue
        if not manifest.name:
            continue
        if manifest.dependencies is None:
            continue

        name = manifest.name
        existing = result.modules.get(name)
        if existing is not None:
            result.warnings.append(
                f"Module already found: {name}\n"
                f"  Using module found at: {existing.path}\n"
                f"  Ignoring module found at: {candidate}"
            )
            continue

        result.modules[name] = Module(
            name=name,
            path=candidate,
            manifest_path=manifest_path(candidate),
            dependency_names=_dependency_names(manifest),
            is_skippable=bool(single_package) and single_package != name,
        )

    return result
