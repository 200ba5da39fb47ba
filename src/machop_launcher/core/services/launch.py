"""
Launch service — clean API for rebuilding and running the linker.

Composes the launch package into the linear pipeline behind
`machop-link`: build, gate on success, select the mode, enable tracing,
replace the process.

Usage:
    >>> from machop_launcher.core.services.launch import LaunchService
    >>> service = LaunchService.from_environment()
    >>> service.launch(["-o", "a.out", "main.o"])  # Does not return
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NoReturn

from machop_launcher.core.config.env import load_layered_env
from machop_launcher.core.config.loader import load_config
from machop_launcher.core.config.models import LauncherConfig
from machop_launcher.core.launch import (
    BuildFailedError,
    BuildOutcome,
    ExecutionMode,
    InvocationTracer,
    LaunchCommand,
    ProjectRootNotFoundError,
    build_launch_command,
    exec_launch,
    resolve_target_binary,
    run_build,
    select_mode,
)
from machop_launcher.utils.project import get_crate_root

logger = logging.getLogger(__name__)


class LaunchService:
    """
    Service that rebuilds the linker and hands the process over to it.

    Example:
        >>> service = LaunchService.from_environment()
        >>> service.launch(["--version"])
    """

    def __init__(
        self,
        config: LauncherConfig,
        project_dir: Path,
        tracer: InvocationTracer | None = None,
    ) -> None:
        """
        Initialize service with dependencies.

        Args:
            config: Launcher configuration
            project_dir: Crate root to build and run
            tracer: Tracer for the final command line. Created disabled if
                None; it is switched on after the build when config.trace is set.
        """
        self._config = config
        self._project_dir = project_dir
        self._tracer = tracer if tracer is not None else InvocationTracer()

    @classmethod
    def from_environment(cls, start: Path | None = None) -> LaunchService:
        """
        Create service by locating the crate and loading its configuration.

        Args:
            start: Where to start looking for Cargo.toml (defaults to the
                launcher's own location)

        Raises:
            ProjectRootNotFoundError: If no crate root can be found
            ValidationError: If the merged configuration is invalid
        """
        try:
            project_dir = get_crate_root(start)
        except FileNotFoundError as e:
            raise ProjectRootNotFoundError(str(e)) from e

        load_layered_env(project_dir)
        config = load_config(project_dir)
        logger.debug("Crate root: %s", project_dir)

        return cls(config, project_dir)

    @property
    def config(self) -> LauncherConfig:
        """The resolved launcher configuration."""
        return self._config

    @property
    def project_dir(self) -> Path:
        """The crate root."""
        return self._project_dir

    @property
    def tracer(self) -> InvocationTracer:
        return self._tracer

    @property
    def binary_path(self) -> Path:
        """Where the build places the linker binary."""
        return resolve_target_binary(self._project_dir, self._config)

    def build(self) -> BuildOutcome:
        """
        Rebuild the linker.

        Raises:
            BuildFailedError: If the build reports failure. The binary is
                left as the build left it and must not be run.
        """
        outcome = run_build(self._project_dir, self._config.build.command)
        if not outcome.success:
            raise BuildFailedError(outcome)
        return outcome

    def select_mode(self, environ: Mapping[str, str] | None = None) -> ExecutionMode:
        return select_mode(
            environ,
            variable=self._config.debug.env_var,
            sentinel=self._config.debug.sentinel,
        )

    def prepare(
        self,
        args: Sequence[str],
        environ: Mapping[str, str] | None = None,
    ) -> LaunchCommand:
        """
        Build, select the mode and assemble the command, without exec.

        Args:
            args: Caller arguments, forwarded verbatim
            environ: Environment to read mode and log overrides from

        Raises:
            BuildFailedError: If the build fails
            DebuggerNotFoundError: If debug attach is selected and the
                debugger is missing
        """
        if environ is None:
            environ = os.environ

        self.build()

        mode = self.select_mode(environ)
        logger.debug("Execution mode: %s", mode.value)

        return build_launch_command(mode, self.binary_path, args, self._config, environ)

    def launch(
        self,
        args: Sequence[str],
        environ: Mapping[str, str] | None = None,
    ) -> NoReturn:
        """
        Rebuild the linker and replace this process with it.

        This function does NOT return on success. Tracing is switched on
        only once the build has finished, so build output is never traced.

        Raises:
            BuildFailedError: If the build fails
            DebuggerNotFoundError: If the debugger is missing
            OSError: If exec fails
        """
        command = self.prepare(args, environ)

        if self._config.trace:
            self._tracer.enable()
        self._tracer.trace(command)

        exec_launch(command, environ)


__all__ = ["LaunchService"]
