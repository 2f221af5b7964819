"""
Backend configuration.

Settings come from environment variables with sensible local defaults:

    GRAPH_EDITOR_HOST            bind address (127.0.0.1)
    GRAPH_EDITOR_PORT            bind port (8765)
    GRAPH_EDITOR_CANVAS_WIDTH    canvas width used to place parsed nodes (800)
    GRAPH_EDITOR_CANVAS_HEIGHT   canvas height used to place parsed nodes (600)
    GRAPH_EDITOR_CORS_ORIGINS    comma-separated allowed origins
    GRAPH_EDITOR_LOG_LEVEL       logging level name (INFO)
"""
import logging
from contextvars import ContextVar
from typing import Annotated, Mapping, Optional

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    EnvSettingsSource,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from graph_core.layout import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH

ENV_PREFIX = "GRAPH_EDITOR_"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]

# Mapping that replaces os.environ while Settings.from_env builds an instance
_environ_override: ContextVar[Optional[Mapping[str, str]]] = ContextVar(
    "environ_override", default=None
)


class MappingEnvSource(EnvSettingsSource):
    """Environment source that reads a given mapping instead of os.environ."""

    def __init__(self, settings_cls: type[BaseSettings], environ: Mapping[str, str]):
        self.environ = environ
        super().__init__(settings_cls)

    def _load_env_vars(self) -> Mapping[str, Optional[str]]:
        if self.case_sensitive:
            return dict(self.environ)
        return {key.lower(): value for key, value in self.environ.items()}


class Settings(BaseSettings):
    """Runtime settings for the backend."""
    host: str = "127.0.0.1"
    port: int = Field(default=8765, ge=1, le=65535)
    canvas_width: float = Field(default=DEFAULT_CANVAS_WIDTH, gt=0)
    canvas_height: float = Field(default=DEFAULT_CANVAS_HEIGHT, gt=0)
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS)
    )
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        environ = _environ_override.get()
        if environ is not None:
            env_settings = MappingEnvSource(settings_cls, environ)
        return init_settings, env_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from GRAPH_EDITOR_* variables.

        Reads the process environment by default; pass a mapping to read
        from it instead. A given mapping fully replaces os.environ.
        """
        if environ is None:
            return cls()
        token = _environ_override.set(environ)
        try:
            return cls()
        finally:
            _environ_override.reset(token)


def configure_logging(settings: Settings) -> None:
    """Set up root logging for the backend process."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
