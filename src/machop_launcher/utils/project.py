"""
Crate root discovery.

The launcher builds and runs the crate it ships with, so the root is
searched for upward from the launcher's own location rather than from the
caller's working directory.
"""

import os
from pathlib import Path

# Markers that indicate a crate root, in order of priority
CRATE_ROOT_MARKERS = [
    "Cargo.toml",
]

PROJECT_DIR_ENV = "MACHOP_PROJECT_DIR"


def launcher_location() -> Path:
    """The installed machop_launcher package directory."""
    return Path(__file__).resolve().parent.parent


def find_crate_root(start: Path | None = None) -> Path | None:
    """
    Find the crate root by searching upward for Cargo.toml.

    Args:
        start: Directory to start searching from. Defaults to the launcher's
            own location.

    Returns:
        Path to the crate root, or None if not found.

    Example:
        >>> find_crate_root(Path("/work/machop/src/machop_launcher"))
        PosixPath('/work/machop')
    """
    if start is None:
        start = launcher_location()

    start = start.resolve()

    # Path.parents stops before the start itself, so check it first
    for candidate in (start, *start.parents):
        for marker in CRATE_ROOT_MARKERS:
            if (candidate / marker).is_file():
                return candidate

    return None


def get_crate_root(start: Path | None = None) -> Path:
    """
    Resolve the crate root, honouring the MACHOP_PROJECT_DIR override.

    Search order:
    1. MACHOP_PROJECT_DIR environment variable (explicit override)
    2. Upward search from `start` (the launcher's location by default)

    Raises:
        FileNotFoundError: If the override is not a directory or no
            Cargo.toml is found.
    """
    if override := os.environ.get(PROJECT_DIR_ENV):
        path = Path(override).expanduser().resolve()
        if not path.is_dir():
            raise FileNotFoundError(f"{PROJECT_DIR_ENV} points to a missing directory: {override}")
        return path

    root = find_crate_root(start)
    if root is None:
        searched = (start or launcher_location()).resolve()
        raise FileNotFoundError(
            f"Could not find Cargo.toml in {searched} or any parent directory. "
            f"Set {PROJECT_DIR_ENV} to the machop crate root."
        )
    return root
