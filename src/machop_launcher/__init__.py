"""
Machop launcher

Rebuilds the machop linker with cargo before every invocation, then runs it
(directly or under a debugger) with the caller's arguments untouched.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from machop_launcher.core.config.models import LauncherConfig
from machop_launcher.core.launch.models import BuildOutcome, ExecutionMode, LaunchCommand

__all__ = ["BuildOutcome", "ExecutionMode", "LaunchCommand", "LauncherConfig", "__version__"]
