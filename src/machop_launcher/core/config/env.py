"""Environment file layering.

Operators keep per-machine launcher settings (a different debugger, a
louder RUST_LOG, a release profile) in .env files instead of exporting
them in every shell.

Precedence:
  os.environ (pre-existing) > <crate>/.env > ~/.config/machop-launcher/.env

A value exported in the shell is never replaced, so
`DEBUG=1 machop-link ...` always wins over a file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def _dotenv_items(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        values = dotenv_values(path)
    except (UnicodeDecodeError, OSError) as e:
        logger.warning("Failed to read env file at %s: %s", path, e)
        return {}
    return {str(k): str(v) for k, v in values.items() if k and v is not None}


def default_user_env_paths() -> list[Path]:
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return [xdg_home / "machop-launcher" / ".env"]


def load_layered_env(
    project_dir: Path,
    *,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> set[str]:
    """Merge user and project .env files into os.environ.

    Args:
        project_dir: crate root holding the project .env
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        Names of the variables that were set from files.
    """
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env"]

    from_files: set[str] = set()

    for path in user_env_paths:
        for key, value in _dotenv_items(Path(path)).items():
            if key not in os.environ:
                os.environ[key] = value
                from_files.add(key)

    # Project files may replace user-file values but never the shell's.
    for path in project_env_paths:
        for key, value in _dotenv_items(Path(path)).items():
            if key not in os.environ or key in from_files:
                os.environ[key] = value
                from_files.add(key)

    if from_files:
        logger.debug("Loaded from .env files: %s", ", ".join(sorted(from_files)))
    return from_files
