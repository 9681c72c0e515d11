"""Run configuration loaded from the process environment.

Each setting is read from the action-prefixed variable (``INPUT_<NAME>``) first
and the bare variable (``<NAME>``) second. Empty values are ignored, so an empty
``INPUT_TAG_FORMAT`` falls through to ``TAG_FORMAT`` and then to the default.

The settings object is built once at startup and handed to every component;
nothing else reads ``os.environ``.
"""

import re

from pydantic import AliasChoices
from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

DEFAULT_VERSION_REGEX = r"^\s*<Version>(.*)</Version>\s*$"
DEFAULT_TAG_FORMAT = "v*"
DEFAULT_NUGET_SOURCE = "https://api.nuget.org"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_LINE_SPLIT = re.compile(r"\r\n|\n|\r")


def _env(name: str) -> AliasChoices:
    return AliasChoices(f"INPUT_{name}", name)


class PublishSettings(BaseSettings):
    """Immutable configuration for a single publish run."""

    model_config = SettingsConfigDict(
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    project_file_path: str = Field(default="", validation_alias=_env("PROJECT_FILE_PATH"))
    version_file: str | None = Field(default=None, validation_alias=_env("VERSION_FILE"))
    version_static: str | None = Field(default=None, validation_alias=_env("VERSION_STATIC"))
    version_regex: str = Field(default=DEFAULT_VERSION_REGEX, validation_alias=_env("VERSION_REGEX"))
    tag_commit: bool = Field(default=True, validation_alias=_env("TAG_COMMIT"))
    tag_format: str = Field(default=DEFAULT_TAG_FORMAT, validation_alias=_env("TAG_FORMAT"))
    nuget_key: str | None = Field(default=None, validation_alias=_env("NUGET_KEY"))
    nuget_source: str = Field(default=DEFAULT_NUGET_SOURCE, validation_alias=_env("NUGET_SOURCE"))
    include_symbols: bool = Field(default=False, validation_alias=_env("INCLUDE_SYMBOLS"))
    no_build: bool = Field(default=False, validation_alias=_env("NO_BUILD"))
    output_file: str | None = Field(default=None, validation_alias="GITHUB_OUTPUT")
    log_level: str = Field(default="INFO", validation_alias=_env("LOG_LEVEL"))

    @field_validator("nuget_source")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def project_files(self) -> list[str]:
        """Configured project file paths, one per non-blank line."""
        return [line.strip() for line in _LINE_SPLIT.split(self.project_file_path) if line.strip()]


def load_settings() -> PublishSettings:
    """Load settings from the environment.

    Raises:
        pydantic.ValidationError: If a value cannot be coerced (e.g. a malformed boolean)
    """
    return PublishSettings()
