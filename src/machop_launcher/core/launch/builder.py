"""
Build step for the launch pipeline.

Rebuilds the linker before every run so a stale binary is never executed.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from machop_launcher.core.launch.models import BuildOutcome

logger = logging.getLogger(__name__)

# Shell conventions for a build tool that could not be started
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """
    Temporarily change the working directory.

    The caller's directory is restored on every exit path, including
    exceptions raised inside the block.

    Example:
        >>> with working_directory(Path("/work/machop")):
        ...     subprocess.run(["cargo", "build"])
    """
    original = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(original)


def run_build(project_dir: Path, command: Sequence[str]) -> BuildOutcome:
    """
    Run the build command from the crate root.

    stdout and stderr are inherited; the command is expected to be quiet
    on success (`cargo build --quiet`) while still showing compiler errors.

    Args:
        project_dir: Crate root to build
        command: Build command line

    Returns:
        BuildOutcome describing the result. A build tool missing from PATH
        is reported as a failed build with status 127; a crate root that
        cannot be entered, or a tool that cannot be started, with 126.
    """
    cmd = list(command)
    logger.debug("Building %s with: %s", project_dir, " ".join(cmd))

    try:
        with working_directory(project_dir):
            try:
                result = subprocess.run(cmd, check=False)
            except FileNotFoundError:
                logger.error("Build tool not found: %s", cmd[0])
                return BuildOutcome.from_returncode(COMMAND_NOT_FOUND, cmd)
            except OSError as e:
                logger.error("Could not run build tool %s: %s", cmd[0], e)
                return BuildOutcome.from_returncode(COMMAND_NOT_EXECUTABLE, cmd)
    except OSError as e:
        # chdir into or back out of the crate root failed
        logger.error("Could not change directory for the build: %s", e)
        return BuildOutcome.from_returncode(COMMAND_NOT_EXECUTABLE, cmd)

    outcome = BuildOutcome.from_returncode(result.returncode, cmd)
    if outcome.success:
        logger.debug("Build succeeded")
    else:
        logger.debug("Build failed with status %d", outcome.returncode)
    return outcome


__all__ = [
    "COMMAND_NOT_EXECUTABLE",
    "COMMAND_NOT_FOUND",
    "run_build",
    "working_directory",
]
