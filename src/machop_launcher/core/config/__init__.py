"""
Configuration models and loading.

Pydantic models for launcher configuration with multi-layer merging:
defaults < user < project < env vars.
"""

from .env import load_layered_env
from .loader import (
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    BuildConfig,
    DebugConfig,
    LauncherConfig,
    LoggingConfig,
    TargetConfig,
)

__all__ = [
    # Models
    "BuildConfig",
    "DebugConfig",
    "LauncherConfig",
    "LoggingConfig",
    "TargetConfig",
    # Loader functions
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
