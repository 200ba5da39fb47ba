"""
Standardized error handling and exit codes for the launcher CLI.

This module provides consistent error messaging with actionable guidance.
Only the launcher's own failures go through here; anything the linker or
debugger reports reaches the caller untouched.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Exit codes the launcher itself produces."""

    SUCCESS = 0
    """Operation completed successfully."""

    BUILD_FAILED = 1
    """The build failed; the linker was not run."""

    USER_ERROR = 2
    """Configuration or environment error (actionable by user)."""

    CANNOT_EXECUTE = 126
    """The build succeeded but the binary could not be exec'd."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Debugger 'rust-lldb' not found",
        ...     reason="DEBUG=1 runs the linker under a debugger",
        ...     solution="rustup component add lldb-preview",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}", highlight=False)

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]", highlight=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}", highlight=False)


def print_build_failed_error(command: list[str], returncode: int) -> None:
    """Print error when the linker build fails."""
    print_error(
        f"Build failed (exit status {returncode})",
        reason=f"'{' '.join(command)}' did not succeed, so the linker was not run",
        solution="Fix the build errors above and re-run the same command",
    )


def print_debugger_not_found_error(debugger: str, env_var: str) -> None:
    """Print error when debug attach is requested but the debugger is missing."""
    print_error(
        f"Debugger not found: {debugger}",
        reason=f"{env_var}=1 runs the linker under '{debugger}', which is not in PATH",
        solution=f"Install it, set MACHOP_DEBUGGER, or unset {env_var}",
    )


def print_project_root_error(message: str) -> None:
    """Print error when the crate root cannot be located."""
    print_error(
        "Could not locate the machop crate",
        reason=message,
        solution="export MACHOP_PROJECT_DIR=/path/to/machop",
    )


def print_invalid_config_error(details: str) -> None:
    """Print error when the merged launcher configuration is invalid."""
    print_error(
        "Invalid launcher configuration",
        reason=details,
        solution="Check .machop-launcher.json and MACHOP_* environment variables",
    )
