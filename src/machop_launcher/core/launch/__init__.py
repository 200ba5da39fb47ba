"""
Launch pipeline for the machop linker.

This package holds the pieces composed by the bare `machop-link` command:
rebuilding the linker, choosing between a direct run and a debugger
session, tracing the final command line, and replacing the process.

Modules:
    builder: Quiet cargo build inside a scoped working-directory change
    detector: Execution mode selection (DEBUG=1 attaches rust-lldb)
    launcher: Binary resolution, log configuration, command assembly, exec
    tracer: `set -x` style echo of the command about to run
    models: Data models (BuildOutcome, ExecutionMode, LaunchCommand)

Example Usage:
    >>> from machop_launcher.core.launch import (
    ...     build_launch_command, exec_launch, run_build, select_mode,
    ... )
    >>>
    >>> outcome = run_build(crate_root, ["cargo", "build", "--quiet"])
    >>> if not outcome.success:
    ...     raise SystemExit(1)
    >>> mode = select_mode()
    >>> command = build_launch_command(mode, binary, sys.argv[1:], config)
    >>> exec_launch(command)  # Replaces process, does not return
"""

from machop_launcher.core.launch.builder import run_build, working_directory
from machop_launcher.core.launch.detector import select_mode
from machop_launcher.core.launch.launcher import (
    BuildFailedError,
    DebuggerNotFoundError,
    LauncherError,
    ProjectRootNotFoundError,
    build_launch_command,
    build_launch_env,
    exec_launch,
    resolve_debugger,
    resolve_log_config,
    resolve_target_binary,
)
from machop_launcher.core.launch.models import BuildOutcome, ExecutionMode, LaunchCommand
from machop_launcher.core.launch.tracer import InvocationTracer, format_trace

__all__ = [
    # Builder
    "run_build",
    "working_directory",
    # Detector
    "select_mode",
    # Launcher
    "build_launch_command",
    "build_launch_env",
    "exec_launch",
    "resolve_debugger",
    "resolve_log_config",
    "resolve_target_binary",
    "LauncherError",
    "BuildFailedError",
    "DebuggerNotFoundError",
    "ProjectRootNotFoundError",
    # Tracer
    "InvocationTracer",
    "format_trace",
    # Models
    "BuildOutcome",
    "ExecutionMode",
    "LaunchCommand",
]
