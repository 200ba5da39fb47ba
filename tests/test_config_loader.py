"""
Tests for configuration loading and merging.
"""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from machop_launcher.core.config import (
    LauncherConfig,
    get_project_config_path,
    get_user_config_path,
    load_config,
)
from machop_launcher.core.config.loader import (
    apply_env_overrides,
    deep_merge,
    get_default_config,
    load_json_file,
)


class TestDeepMerge:
    def test_nested_dicts_merge(self) -> None:
        base = {"build": {"profile": "debug", "command": ["cargo", "build"]}, "trace": True}
        override = {"build": {"profile": "release"}}
        assert deep_merge(base, override) == {
            "build": {"profile": "release", "command": ["cargo", "build"]},
            "trace": True,
        }

    def test_lists_are_replaced(self) -> None:
        result = deep_merge({"debug": {"debugger": ["rust-lldb"]}}, {"debug": {"debugger": ["gdb"]}})
        assert result == {"debug": {"debugger": ["gdb"]}}

    def test_base_not_mutated(self) -> None:
        base = {"build": {"profile": "debug"}}
        deep_merge(base, {"build": {"profile": "release"}})
        assert base == {"build": {"profile": "debug"}}


class TestLoadJsonFile:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_json_file(tmp_path / "nope.json") is None

    def test_invalid_json_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            assert load_json_file(path) is None
        assert "Failed to parse config" in caplog.text

    def test_non_object_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert load_json_file(path) is None

    def test_undecodable_bytes_warn(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"trace": \xff}')
        with caplog.at_level(logging.WARNING):
            assert load_json_file(path) is None
        assert "Failed to parse config" in caplog.text


class TestPaths:
    def test_user_config_path_uses_xdg(self, tmp_path: Path) -> None:
        assert get_user_config_path() == tmp_path / "xdg" / "machop-launcher" / "config.json"

    def test_project_config_path(self, crate_dir: Path) -> None:
        assert get_project_config_path(crate_dir) == crate_dir / ".machop-launcher.json"


class TestApplyEnvOverrides:
    def test_no_env_no_change(self) -> None:
        defaults = get_default_config()
        assert apply_env_overrides(defaults) == defaults

    def test_build_profile(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MACHOP_BUILD_PROFILE", "release")
        assert apply_env_overrides({})["build"]["profile"] == "release"

    def test_debugger_is_shell_split(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MACHOP_DEBUGGER", "rust-gdb -q --nx")
        result = apply_env_overrides({"debug": {"sentinel": "1"}})
        assert result["debug"] == {"sentinel": "1", "debugger": ["rust-gdb", "-q", "--nx"]}

    def test_unbalanced_debugger_ignored(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("MACHOP_DEBUGGER", "lldb 'oops")
        with caplog.at_level(logging.WARNING):
            assert "debug" not in apply_env_overrides({})
        assert "MACHOP_DEBUGGER" in caplog.text

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("0", False), ("false", False), ("no", False), ("", False), ("1", True), ("yes", True)],
    )
    def test_trace(self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
        monkeypatch.setenv("MACHOP_LAUNCHER_TRACE", value)
        assert apply_env_overrides({})["trace"] is expected

    def test_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MACHOP_LAUNCHER_LOG_LEVEL", "debug")
        assert apply_env_overrides({})["log_level"] == "debug"


class TestLoadConfig:
    def test_defaults(self, crate_dir: Path) -> None:
        config = load_config(crate_dir)

        assert config.project_dir == crate_dir
        assert config.build.command == ["cargo", "build", "--quiet"]
        assert config.build.profile == "debug"
        assert config.target.name == "machop"
        assert config.debug.env_var == "DEBUG"
        assert config.debug.sentinel == "1"
        assert config.debug.debugger == ["rust-lldb"]
        assert config.debug.separator == "--"
        assert config.logging.env_var == "RUST_LOG"
        assert config.logging.default_directive("machop") == "warn,machop=debug"
        assert config.trace is True
        assert config.log_level == "WARNING"

    def test_defaults_match_model_defaults(self) -> None:
        from_dict = LauncherConfig(**get_default_config())
        assert from_dict == LauncherConfig()

    def test_precedence(
        self, crate_dir: Path, user_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (user_config_dir / "config.json").write_text(
            json.dumps(
                {
                    "build": {"profile": "user-profile"},
                    "debug": {"debugger": ["rust-gdb"]},
                    "log_level": "info",
                }
            )
        )
        (crate_dir / ".machop-launcher.json").write_text(
            json.dumps({"build": {"profile": "project-profile"}, "log_level": "error"})
        )
        monkeypatch.setenv("MACHOP_LAUNCHER_LOG_LEVEL", "debug")

        config = load_config(crate_dir)

        assert config.build.profile == "project-profile"  # project > user
        assert config.debug.debugger == ["rust-gdb"]  # user > default
        assert config.log_level == "DEBUG"  # env > project
        assert config.build.command == ["cargo", "build", "--quiet"]  # default kept

    def test_invalid_profile(self, crate_dir: Path) -> None:
        (crate_dir / ".machop-launcher.json").write_text(
            json.dumps({"build": {"profile": "../escape"}})
        )
        with pytest.raises(ValidationError):
            load_config(crate_dir)

    def test_invalid_log_level(self, crate_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MACHOP_LAUNCHER_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            load_config(crate_dir)

    def test_empty_debugger_rejected(self, crate_dir: Path) -> None:
        (crate_dir / ".machop-launcher.json").write_text(json.dumps({"debug": {"debugger": []}}))
        with pytest.raises(ValidationError):
            load_config(crate_dir)

    def test_unknown_keys_ignored(self, crate_dir: Path) -> None:
        (crate_dir / ".machop-launcher.json").write_text(json.dumps({"future_option": 1}))
        assert load_config(crate_dir).trace is True

    def test_project_dir_comes_from_loader(self, crate_dir: Path, tmp_path: Path) -> None:
        (crate_dir / ".machop-launcher.json").write_text(
            json.dumps({"project_dir": str(tmp_path / "elsewhere")})
        )
        assert load_config(crate_dir).project_dir == crate_dir
