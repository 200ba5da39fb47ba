"""
Machop launcher CLI - main application entry point.

`machop-link` rebuilds the machop linker and runs it with every argument
passed through verbatim. It has no options of its own:

    machop-link -o a.out main.o      # cargo build --quiet, then machop -o a.out main.o
    DEBUG=1 machop-link main.o       # rust-lldb target/debug/machop -- main.o
    RUST_LOG=trace machop-link ...   # RUST_LOG is passed through unchanged
"""

import logging
import os
import sys

import typer
from pydantic import ValidationError

from machop_launcher.cli.argv import preprocess_argv
from machop_launcher.cli.errors import (
    ExitCode,
    print_build_failed_error,
    print_debugger_not_found_error,
    print_error,
    print_invalid_config_error,
    print_project_root_error,
)
from machop_launcher.core.launch import (
    BuildFailedError,
    DebuggerNotFoundError,
    ProjectRootNotFoundError,
)
from machop_launcher.core.services.launch import LaunchService

LOG_LEVEL_ENV = "MACHOP_LAUNCHER_LOG_LEVEL"

app = typer.Typer(
    name="machop-link",
    help="Rebuild the machop linker, then run it with the given arguments",
    add_completion=False,
    context_settings={"help_option_names": []},
)


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure logging for the launcher's own diagnostics.

    Args:
        level: Level name for the machop_launcher logger; unknown names
            fall back to WARNING
    """
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.getLogger("machop_launcher").setLevel(resolved)


@app.command()
def main(args: list[str] | None = typer.Argument(None)) -> None:
    """Build the linker quietly, then exec it with ARGS."""
    # Early setup so config loading warnings are visible; refined below
    setup_logging(os.environ.get(LOG_LEVEL_ENV, "WARNING"))

    try:
        service = LaunchService.from_environment()
    except ProjectRootNotFoundError as e:
        print_project_root_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except ValidationError as e:
        print_invalid_config_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    setup_logging(service.config.log_level)

    try:
        service.launch(args or [])
    except BuildFailedError as e:
        print_build_failed_error(e.outcome.command, e.outcome.returncode)
        raise typer.Exit(ExitCode.BUILD_FAILED)
    except DebuggerNotFoundError as e:
        print_debugger_not_found_error(e.debugger, service.config.debug.env_var)
        raise typer.Exit(ExitCode.USER_ERROR)
    except KeyboardInterrupt:
        raise typer.Exit(ExitCode.SIGINT)
    except OSError as e:
        print_error(
            f"Failed to execute {service.binary_path}",
            reason=str(e),
            solution="cargo clean && re-run the same command",
        )
        raise typer.Exit(ExitCode.CANNOT_EXECUTE)


def cli_main() -> None:
    """
    Main CLI entry point.

    The argv preprocessor puts every caller argument behind `--` so Typer
    never interprets one as a launcher option.
    """
    sys.argv[1:] = preprocess_argv(sys.argv[1:])
    app()


__all__ = ["app", "cli_main", "setup_logging"]
