"""Application state and configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from relbisect.core.base import BaseConfig, BaseState
from relbisect.core.log import Logger
from relbisect.core.yaml_settings import (
    CONFIG_FILENAME,
    YamlWithIncludesSettingsSource,
)

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class ReleaseConfig(BaseConfig):
    """Where the list of published releases comes from."""

    owner: str = Field(
        default="pulumi", description="GitHub owner of the repository"
    )
    repo: str = Field(
        default="pulumi", description="GitHub repository name"
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )
    per_page: int = Field(
        default=25, gt=0, le=100, description="Releases per page"
    )
    rate_limit_backoff: float = Field(
        default=1.0,
        ge=0,
        description="Seconds to wait before retrying a rate-limited page",
    )
    timeout: float | None = Field(
        default=30.0, description="HTTP request timeout in seconds"
    )
    token: str | None = Field(
        default_factory=lambda: os.environ.get("GITHUB_TOKEN") or None,
        description=(
            "API token for higher rate limits "
            "(defaults to the GITHUB_TOKEN environment variable)"
        ),
    )


class CacheConfig(BaseConfig):
    """Where and how release runtimes are installed."""

    root: Path = Field(
        default_factory=lambda: Path(
            platformdirs.user_cache_dir("relbisect", appauthor=False)
        ),
        description="Cache directory for installers and installed releases",
    )
    installer_url: str = Field(
        default="https://get.pulumi.com",
        description="URL of the installer script",
    )
    installer_name: str = Field(
        default="install-pulumi.sh",
        description="File name the installer script is cached under",
    )
    install_args: str = Field(
        default="--version {version}",
        description="Installer arguments; {version} is substituted",
    )
    bin_subdir: str = Field(
        default=".pulumi/bin",
        description=(
            "Directory, relative to the per-version HOME, that holds "
            "the installed executables"
        ),
    )


class CheckConfig(BaseConfig):
    """Check command execution."""

    output_dir: Path | None = Field(
        default=None,
        description="Save each check's output here when set",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger | None = Field(
        default=None,
        description=(
            "Logger sinks; when unset a console logger at log-level "
            "is used"
        ),
    )
    releases: ReleaseConfig = Field(default_factory=ReleaseConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)

    log_level: str = Field(
        default="info",
        alias="log-level",
        description="Log level: trace, debug, info, warn, error, fatal",
    )
    log_root: Path = Field(
        default_factory=lambda: Path(
            platformdirs.user_state_dir("relbisect", appauthor=False)
        ),
        description="Root directory for log files",
    )
    run_name: str = Field(
        default="bisect",
        description="Name of this run, used for log file paths",
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Install the global logger from this configuration."""
        from relbisect.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)

        self.logger = setup_logger(
            log_root=self.log_root,
            run_name=self.run_name,
            level=self.logger.level,
            console=self.logger.console,
            file=self.logger.file,
            otlp=self.logger.otlp,
        )
        return self


# ============================================================
# RUNTIME STATE (mutated during workflow execution)
# ============================================================

class BisectState(BaseState):
    """Bisection workflow runtime state."""

    lower_text: str = Field(default="", description="Lower bound as given")
    upper_text: str = Field(default="", description="Upper bound as given")
    command: str | None = Field(
        default=None, description="Check command; None lists the range only"
    )
    verify: bool = Field(
        default=False, description="Full-scan for non-monotonic verdicts"
    )
    lower: Any = Field(default=None, description="Parsed lower bound")
    upper: Any = Field(default=None, description="Parsed upper bound")
    tags: list[str] = Field(
        default_factory=list, description="Raw release tags as listed"
    )
    candidates: list[Any] = Field(
        default_factory=list, description="Resolved candidate versions"
    )
    probes: list[tuple[str, bool]] = Field(
        default_factory=list,
        description="(version, is bad) for every bisection probe, in order",
    )
    first_bad: Any = Field(default=None, description="First bad version")
    violations: list[Any] = Field(
        default_factory=list,
        description="Versions reported good after a bad one",
    )
    status: str = Field(
        default="pending",
        description="pending, resolved, bisected, complete",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Runtime(BaseModel):
    """All runtime state, grouped by workflow."""

    bisect: BisectState = Field(default_factory=BisectState)


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Complete application state: configuration plus runtime.

    This is the state object carried through the workflow graph.
    Configuration is read from, in priority order: constructor or CLI
    arguments, RELBISECT_* environment variables, .env, YAML files.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_FILENAME,
        env_file=".env",
        env_prefix="RELBISECT_",
        env_nested_delimiter="__",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            file_secret_settings,
        )

    def close(self):
        """Close the configuration (and with it the logger)."""
        self.config.close()


__all__ = [
    "BisectState",
    "CacheConfig",
    "CheckConfig",
    "Config",
    "ReleaseConfig",
    "Runtime",
    "State",
]
