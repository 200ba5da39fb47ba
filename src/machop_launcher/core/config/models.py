"""
Configuration data models for the launcher.

These models define the structure of .machop-launcher.json and
~/.config/machop-launcher/config.json files, with validation and type
safety via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildConfig(BaseModel):
    """
    How the linker gets rebuilt before each run.

    The command runs from the crate root and must stay quiet on success.
    """
    command: list[str] = Field(
        default_factory=lambda: ["cargo", "build", "--quiet"],
        min_length=1,
        description="Build command run from the crate root"
    )
    profile: str = Field(
        default="debug",
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Cargo profile directory the binary is built into"
    )


class TargetConfig(BaseModel):
    """Where the freshly built linker binary lives."""
    name: str = Field(
        default="machop",
        min_length=1,
        description="Binary name, also its logging namespace"
    )
    target_dir: str = Field(
        default="target",
        description="Cargo target directory, relative to the crate root"
    )


class DebugConfig(BaseModel):
    """
    Debugger attach settings.

    Debug mode is selected only when `env_var` equals `sentinel` exactly.
    """
    env_var: str = Field(default="DEBUG", min_length=1)
    sentinel: str = Field(default="1")
    debugger: list[str] = Field(
        default_factory=lambda: ["rust-lldb"],
        min_length=1,
        description="Debugger command; the binary path is appended"
    )
    separator: str = Field(
        default="--",
        description="Token that ends the debugger's own arguments"
    )


class LoggingConfig(BaseModel):
    """
    Log configuration handed to the linker.

    If `env_var` is already set it is passed through untouched, otherwise
    the default directive is synthesized from the levels below.
    """
    env_var: str = Field(default="RUST_LOG", min_length=1)
    default_level: str = Field(
        default="warn",
        description="Baseline level for every crate"
    )
    target_level: str = Field(
        default="debug",
        description="Elevated level for the linker's own namespace"
    )

    def default_directive(self, namespace: str) -> str:
        """Build the synthesized directive, e.g. ``warn,machop=debug``."""
        return f"{self.default_level},{namespace}={self.target_level}"


class LauncherConfig(BaseModel):
    """
    Top-level launcher configuration.

    Merged from defaults, user config, project config and MACHOP_* env vars.
    """
    model_config = ConfigDict(extra="ignore")

    project_dir: Optional[Path] = Field(
        default=None,
        description="Crate root; always set by the loader from discovery or MACHOP_PROJECT_DIR"
    )
    build: BuildConfig = Field(default_factory=BuildConfig)
    target: TargetConfig = Field(default_factory=TargetConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    trace: bool = Field(
        default=True,
        description="Echo the final command line before exec"
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for the launcher's own diagnostics"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
