"""Utility modules for the launcher."""

from .project import find_crate_root, get_crate_root, launcher_location

__all__ = [
    "find_crate_root",
    "get_crate_root",
    "launcher_location",
]
