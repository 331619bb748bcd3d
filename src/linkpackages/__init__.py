from .config import LinkConfig
from .graph import find_local_dependencies
from .model import Command, DependencyLink, DependencyRef, LinkPlan, LinkResult, Module
from .planner import plan_links
from .runner import link_packages
from .scanner import find_local_modules

__version__ = "0.3.0"

__all__ = [
    "LinkConfig",
    "find_local_modules",
    "find_local_dependencies",
    "plan_links",
    "link_packages",
    "Command",
    "DependencyLink",
    "DependencyRef",
    "LinkPlan",
    "LinkResult",
    "Module",
    "__version__",
]
