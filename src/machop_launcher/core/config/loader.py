"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
import shlex
from pathlib import Path
from typing import Any

from .models import LauncherConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".machop-launcher.json"


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/machop-launcher/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "machop-launcher" / "config.json"


def get_project_config_path(project_dir: Path) -> Path:
    """Path to the project config file in the crate root."""
    return project_dir / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Nested dicts are merged key by key; any other value in `override`
    replaces the one in `base`.

    Example:
        >>> deep_merge({"build": {"profile": "debug"}}, {"build": {"command": ["make"]}})
        {'build': {'profile': 'debug', 'command': ['make']}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON object from a file.

    Returns:
        Parsed JSON as dict, or None if the file is missing, unreadable or
        not a JSON object
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
    # ValueError covers both malformed JSON and undecodable bytes
    except (ValueError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config at %s: top level is not an object", path)
        return None
    return data


def _set_nested(result: dict[str, Any], section: str, key: str, value: Any) -> None:
    result.setdefault(section, {})
    result[section][key] = value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        MACHOP_BUILD_PROFILE - overrides build.profile
        MACHOP_DEBUGGER - overrides debug.debugger (shell-split)
        MACHOP_LAUNCHER_TRACE - overrides trace ("0"/"false" disables)
        MACHOP_LAUNCHER_LOG_LEVEL - overrides log_level

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if profile := os.environ.get("MACHOP_BUILD_PROFILE"):
        _set_nested(result, "build", "profile", profile)

    if debugger := os.environ.get("MACHOP_DEBUGGER"):
        try:
            parts = shlex.split(debugger)
        except ValueError as e:
            logger.warning("Invalid MACHOP_DEBUGGER value %r (%s), ignoring", debugger, e)
        else:
            if parts:
                _set_nested(result, "debug", "debugger", parts)

    if (trace := os.environ.get("MACHOP_LAUNCHER_TRACE")) is not None:
        result["trace"] = trace.lower() not in ("false", "0", "no", "")

    if level := os.environ.get("MACHOP_LAUNCHER_LOG_LEVEL"):
        result["log_level"] = level

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Reproduces the historical linker.sh behaviour: `cargo build --quiet`,
    target/debug/machop, DEBUG=1 for rust-lldb, RUST_LOG=warn,machop=debug.
    """
    return {
        "build": {"command": ["cargo", "build", "--quiet"], "profile": "debug"},
        "target": {"name": "machop", "target_dir": "target"},
        "debug": {
            "env_var": "DEBUG",
            "sentinel": "1",
            "debugger": ["rust-lldb"],
            "separator": "--",
        },
        "logging": {"env_var": "RUST_LOG", "default_level": "warn", "target_level": "debug"},
        "trace": True,
        "log_level": "WARNING",
    }


def load_config(project_dir: Path) -> LauncherConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (MACHOP_*)
        2. Project config (<crate>/.machop-launcher.json)
        3. User config (~/.config/machop-launcher/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Crate root the launcher builds and runs

    Returns:
        Validated LauncherConfig with project_dir set

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)
    merged["project_dir"] = project_dir

    return LauncherConfig(**merged)
