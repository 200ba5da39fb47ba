"""
Invocation tracing.

Echoes the exact command line about to run, in the same shape as a shell's
`set -x`, so an operator can paste it to reproduce a linker invocation
without the launcher.
"""

from __future__ import annotations

import shlex
import sys
from typing import TextIO

from machop_launcher.core.launch.models import LaunchCommand

TRACE_PREFIX = "+ "


def format_trace(command: LaunchCommand) -> str:
    """
    Render a command as a copy-pasteable shell line.

    Examples:
        >>> format_trace(LaunchCommand(
        ...     mode=ExecutionMode.DIRECT,
        ...     executable="/w/target/debug/machop",
        ...     argv=["/w/target/debug/machop", "-o", "a out"],
        ...     env_overrides={"RUST_LOG": "warn,machop=debug"},
        ... ))
        "+ RUST_LOG=warn,machop=debug /w/target/debug/machop -o 'a out'"
    """
    assignments = [f"{name}={shlex.quote(value)}" for name, value in command.env_overrides.items()]
    return TRACE_PREFIX + " ".join([*assignments, shlex.join(command.argv)])


class InvocationTracer:
    """
    Writes traced commands to a diagnostic stream.

    Once enabled it stays enabled for the rest of the process; the
    launcher turns it on only after the build has finished.
    """

    def __init__(self, enabled: bool = False, stream: TextIO | None = None) -> None:
        self._enabled = enabled
        self._stream = stream

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def trace(self, command: LaunchCommand) -> None:
        if not self._enabled:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(format_trace(command) + "\n")
        stream.flush()


__all__ = [
    "InvocationTracer",
    "TRACE_PREFIX",
    "format_trace",
]
