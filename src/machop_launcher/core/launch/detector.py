"""
Execution mode selection for the launch pipeline.

Decides between running the linker directly and attaching a debugger by
examining a single environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from machop_launcher.core.launch.models import ExecutionMode


def select_mode(
    environ: Mapping[str, str] | None = None,
    *,
    variable: str = "DEBUG",
    sentinel: str = "1",
) -> ExecutionMode:
    """
    Select the execution mode from the environment.

    Args:
        environ: Environment to inspect (defaults to os.environ)
        variable: Name of the mode variable
        sentinel: Exact value that selects debug attach

    Returns:
        ExecutionMode.DEBUG_ATTACH if `variable` equals `sentinel` exactly
        (case-sensitive), ExecutionMode.DIRECT otherwise, including when the
        variable is unset.

    Examples:
        >>> select_mode({"DEBUG": "1"})
        <ExecutionMode.DEBUG_ATTACH: 'debug_attach'>
        >>> select_mode({"DEBUG": "true"})
        <ExecutionMode.DIRECT: 'direct'>
    """
    if environ is None:
        environ = os.environ

    if environ.get(variable) == sentinel:
        return ExecutionMode.DEBUG_ATTACH
    return ExecutionMode.DIRECT


__all__ = ["select_mode"]
