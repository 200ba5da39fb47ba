"""
Linker launcher for the launch pipeline.

Handles binary and debugger resolution, log configuration, command
assembly, and exec-based launch.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NoReturn

from machop_launcher.core.config.models import LauncherConfig
from machop_launcher.core.launch.models import BuildOutcome, ExecutionMode, LaunchCommand


class LauncherError(Exception):
    """Base exception for launcher errors."""


class BuildFailedError(LauncherError):
    """The build capability reported failure; the binary must not run."""

    def __init__(self, outcome: BuildOutcome) -> None:
        self.outcome = outcome
        super().__init__(
            f"Build command '{' '.join(outcome.command)}' failed with status {outcome.returncode}"
        )


class DebuggerNotFoundError(LauncherError):
    """Debugger binary not found in PATH."""

    def __init__(self, debugger: str) -> None:
        self.debugger = debugger
        super().__init__(f"Debugger '{debugger}' not found in PATH")


class ProjectRootNotFoundError(LauncherError):
    """The crate root the launcher belongs to could not be located."""


def resolve_target_binary(project_dir: Path, config: LauncherConfig) -> Path:
    """
    Resolve the path of the freshly built linker binary.

    The path is derived from the crate root, never from the caller's
    working directory.

    Examples:
        >>> resolve_target_binary(Path("/w/machop"), LauncherConfig())
        PosixPath('/w/machop/target/debug/machop')
    """
    target_dir = Path(config.target.target_dir)
    if not target_dir.is_absolute():
        target_dir = project_dir / target_dir
    return target_dir / config.build.profile / config.target.name


def resolve_debugger(debugger: Sequence[str]) -> list[str]:
    """
    Resolve the debugger command, looking its program up in PATH.

    Raises:
        DebuggerNotFoundError: If the debugger program is not found
    """
    program, *extra = debugger
    path = shutil.which(program)
    if not path:
        raise DebuggerNotFoundError(program)
    return [path, *extra]


def resolve_log_config(environ: Mapping[str, str], config: LauncherConfig) -> str:
    """
    Determine the log configuration passed to the linker.

    A non-empty override in the environment is returned unchanged; an
    unset or empty one falls back to the default directive.

    Examples:
        >>> resolve_log_config({}, LauncherConfig())
        'warn,machop=debug'
        >>> resolve_log_config({"RUST_LOG": "trace"}, LauncherConfig())
        'trace'
    """
    override = environ.get(config.logging.env_var)
    if override:
        return override
    return config.logging.default_directive(config.target.name)


def build_launch_command(
    mode: ExecutionMode,
    binary: Path,
    args: Sequence[str],
    config: LauncherConfig,
    environ: Mapping[str, str] | None = None,
) -> LaunchCommand:
    """
    Assemble the command that will replace the launcher process.

    Args:
        mode: Selected execution mode
        binary: Path to the built linker
        args: Caller arguments, forwarded verbatim
        config: Launcher configuration
        environ: Environment used for the log override (defaults to os.environ)

    Returns:
        LaunchCommand. In DIRECT mode it runs the binary with the log
        configuration set; in DEBUG_ATTACH mode it runs the debugger with the
        binary and arguments after the separator and sets no log variable.

    Raises:
        DebuggerNotFoundError: In DEBUG_ATTACH mode, if the debugger is missing

    Examples:
        >>> cmd = build_launch_command(
        ...     ExecutionMode.DIRECT, Path("/w/target/debug/machop"), ["--version"], LauncherConfig(), {}
        ... )
        >>> cmd.argv
        ['/w/target/debug/machop', '--version']
        >>> cmd.env_overrides
        {'RUST_LOG': 'warn,machop=debug'}
    """
    if environ is None:
        environ = os.environ

    binary_str = str(binary)
    forwarded = list(args)

    if mode == ExecutionMode.DEBUG_ATTACH:
        debugger = resolve_debugger(config.debug.debugger)
        prefix = [*debugger, binary_str, config.debug.separator]
        return LaunchCommand(
            mode=mode,
            executable=debugger[0],
            argv=[*prefix, *forwarded],
            args_offset=len(prefix),
        )

    return LaunchCommand(
        mode=mode,
        executable=binary_str,
        argv=[binary_str, *forwarded],
        env_overrides={config.logging.env_var: resolve_log_config(environ, config)},
    )


def build_launch_env(
    command: LaunchCommand, environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """
    Build the environment for the launched process.

    Returns:
        Copy of `environ` (os.environ by default) with the command's
        overrides applied
    """
    env = dict(os.environ if environ is None else environ)
    env.update(command.env_overrides)
    return env


def can_replace_process() -> bool:
    """Whether os.execve() replaces the process image on this platform."""
    # Windows emulates exec by spawning a new process and exiting
    return os.name != "nt"


def _exit_status(returncode: int) -> int:
    # Negative return codes mean the child died from a signal
    if returncode < 0:
        return 128 - returncode
    return returncode


def exec_launch(command: LaunchCommand, environ: Mapping[str, str] | None = None) -> NoReturn:
    """
    Launch with exec (replaces current process).

    This function does NOT return. On POSIX the process image is replaced
    via os.execve(), so the launcher's exit status, signals and stdio are
    exactly the target's. Where exec cannot replace the process (Windows)
    the target is spawned, waited on, and its exit status propagated.

    Raises:
        OSError: If exec fails
    """
    env = build_launch_env(command, environ)

    # Anything still buffered would be lost once the image is replaced
    sys.stdout.flush()
    sys.stderr.flush()

    if not can_replace_process():
        try:
            result = subprocess.run(command.argv, env=env, check=False)
        except KeyboardInterrupt:
            sys.exit(130)
        sys.exit(_exit_status(result.returncode))

    os.execve(command.executable, command.argv, env)


__all__ = [
    "BuildFailedError",
    "DebuggerNotFoundError",
    "LauncherError",
    "ProjectRootNotFoundError",
    "build_launch_command",
    "build_launch_env",
    "can_replace_process",
    "exec_launch",
    "resolve_debugger",
    "resolve_log_config",
    "resolve_target_binary",
]
