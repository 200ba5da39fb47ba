"""
Data models for the launch pipeline.

Defines typed values passed between the builder, mode selector, tracer
and launcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ExecutionMode(str, Enum):
    """How the target binary is executed."""

    DIRECT = "direct"  # Exec the linker binary itself
    DEBUG_ATTACH = "debug_attach"  # Exec the debugger with the linker as its inferior


@dataclass(frozen=True)
class BuildOutcome:
    """
    Result of running the build capability.

    Attributes:
        success: Whether the build command exited with status 0
        returncode: Exit status of the build command
        command: The command line that was run
    """

    success: bool
    returncode: int
    command: list[str] = field(default_factory=list)

    @classmethod
    def from_returncode(cls, returncode: int, command: list[str]) -> BuildOutcome:
        return cls(success=returncode == 0, returncode=returncode, command=list(command))


@dataclass(frozen=True)
class LaunchCommand:
    """
    A fully resolved command about to replace the launcher process.

    The tracer prints exactly this and the launcher execs exactly this, so
    what an operator copies from the trace is what actually ran.

    Attributes:
        mode: Execution mode the command was built for
        executable: Path of the program to exec
        argv: Full argument vector, argv[0] included
        env_overrides: Variables set on top of the inherited environment
        args_offset: Index in argv where the caller's arguments start
    """

    mode: ExecutionMode
    executable: str
    argv: list[str]
    env_overrides: dict[str, str] = field(default_factory=dict)
    args_offset: int = 1

    @property
    def forwarded_args(self) -> list[str]:
        """Caller arguments as the target binary receives them."""
        return self.argv[self.args_offset:]


__all__ = [
    "BuildOutcome",
    "ExecutionMode",
    "LaunchCommand",
]
