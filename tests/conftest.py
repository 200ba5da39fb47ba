"""
Pytest configuration and shared fixtures.

Provides a fake crate directory, an isolated environment (no DEBUG,
RUST_LOG or MACHOP_* leaking in from the developer's shell), and default
configuration objects.
"""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from machop_launcher.core.config.models import LauncherConfig

# Variables that change launcher behaviour and must not leak into tests
_LAUNCHER_ENV_VARS = [
    "DEBUG",
    "RUST_LOG",
    "MACHOP_PROJECT_DIR",
    "MACHOP_BUILD_PROFILE",
    "MACHOP_DEBUGGER",
    "MACHOP_LAUNCHER_TRACE",
    "MACHOP_LAUNCHER_LOG_LEVEL",
]


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Clear launcher variables and point XDG_CONFIG_HOME at an empty dir."""
    for name in _LAUNCHER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    # load_layered_env writes straight into os.environ
    saved = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def user_config_dir(tmp_path):
    """Provide the XDG_CONFIG_HOME/machop-launcher directory."""
    config_dir = tmp_path / "xdg" / "machop-launcher"
    config_dir.mkdir(parents=True)
    return config_dir


# ==============================================================================
# Crate Fixtures
# ==============================================================================


@pytest.fixture
def crate_dir(tmp_path):
    """
    Provide a fake machop crate.

    Creates:
    - Cargo.toml
    - target/debug/machop (placeholder, never executed)
    """
    crate = tmp_path / "machop"
    crate.mkdir()
    (crate / "Cargo.toml").write_text('[package]\nname = "machop"\nversion = "0.1.0"\n')
    binary = crate / "target" / "debug" / "machop"
    binary.parent.mkdir(parents=True)
    binary.write_text("")
    return crate


@pytest.fixture
def caller_dir(tmp_path, monkeypatch):
    """A working directory outside the crate, as a caller would have."""
    caller = tmp_path / "caller"
    caller.mkdir()
    monkeypatch.chdir(caller)
    return caller


@pytest.fixture
def config(crate_dir):
    """Default configuration bound to the fake crate."""
    return LauncherConfig(project_dir=crate_dir)


# ==============================================================================
# Process Fixtures
# ==============================================================================


def completed(returncode: int) -> Mock:
    """Stand-in for subprocess.CompletedProcess."""
    result = Mock()
    result.returncode = returncode
    return result


@pytest.fixture
def build_ok():
    return completed(0)


@pytest.fixture
def build_failed():
    return completed(101)


@pytest.fixture
def target_binary(crate_dir: Path) -> Path:
    return crate_dir / "target" / "debug" / "machop"
