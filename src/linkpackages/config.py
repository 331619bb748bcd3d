# config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_LINK_TOOL = "yarn"
LINK_TOOL_ENV = "LINK_PACKAGES_TOOL"


@dataclass(frozen=True)
class LinkConfig:
    """
    Options for one link run.

    packages_root:
        Directory whose immediate children are scanned for packages.
    single_package:
        Focus mode. When set, commands are only generated for this package;
        every other package is still scanned so it can be linked into it.
    verbose:
        Stream the link tool's own output while it runs.
    link_tool:
        Executable invoked for `unlink --force`, `link` and `link <name>`.
    dry_run:
        Plan the commands but do not run any of them.
    """
    packages_root: Path = field(default_factory=Path.cwd)
    single_package: Optional[str] = None
    verbose: bool = False
    link_tool: str = DEFAULT_LINK_TOOL
    dry_run: bool = False

    @classmethod
    def from_env(cls, **overrides) -> LinkConfig:
        """Build a config, taking the link tool from the environment unless overridden."""
        values = {"link_tool": os.environ.get(LINK_TOOL_ENV, DEFAULT_LINK_TOOL)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "packages_root" in values:
            values["packages_root"] = Path(values["packages_root"])
        # an empty --single-package means "no focus"
        if not values.get("single_package"):
            values["single_package"] = None
        return cls(**values)
