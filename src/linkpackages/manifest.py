# manifest.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .errors import ManifestError

MANIFEST_NAME = "package.json"


@dataclass(frozen=True)
class Manifest:
    """The parts of a package.json that linking cares about."""
    name: Optional[str] = None
    # None means the field is absent, {} means declared but empty
    dependencies: Optional[Dict[str, str]] = None
    dev_dependencies: Optional[Dict[str, str]] = None


def manifest_path(module_dir: Path) -> Path:
    return module_dir / MANIFEST_NAME


def _dependency_field(data: dict, key: str, path: Path) -> Optional[Dict[str, str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ManifestError(path, f"'{key}' must be an object, got {type(value).__name__}")
    return {str(k): str(v) for k, v in value.items()}


def read_manifest(module_dir: Path) -> Optional[Manifest]:
    """
    Read `<module_dir>/package.json`.

    Returns:
      None when the directory has no manifest (not every directory is a package).

    Raises:
      ManifestError if the file exists but is unreadable, is not valid JSON,
      or has fields of the wrong type.
    """
    path = manifest_path(module_dir)
    try:
        if not path.is_file():
            return None
    except OSError as e:
        raise ManifestError(path, f"Could not read manifest ({e.strerror or e})") from e

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(path, f"Could not read manifest ({e.strerror or e})") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(path, f"Malformed manifest ({e})") from e

    if not isinstance(data, dict):
        raise ManifestError(path, "Manifest must be a JSON object")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ManifestError(path, f"'name' must be a string, got {type(name).__name__}")

    return Manifest(
        name=name or None,
        dependencies=_dependency_field(data, "dependencies", path),
        dev_dependencies=_dependency_field(data, "devDependencies", path),
    )
