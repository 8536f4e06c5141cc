"""Harness configuration models.

This module provides the Pydantic models that hold the fixed identity,
naming, and logging settings used when building fixture repositories.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty routes through stdlib logging).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class HarnessConfig(BaseModel):
    """Settings shared by every fixture operation.

    The author identity is fixed so assertions over commit metadata are
    stable across runs and machines.

    Attributes:
        author_name: Name recorded as author and committer of every commit.
        author_email: Email recorded as author and committer of every commit.
        default_file_name: File written by repository creation and
            ``change_test_file``.
        initial_commit_message: Message of the first commit in a new fixture.
        directory_prefix: Prefix of generated fixture directory names.
        directory_suffix: Suffix of generated fixture directory names.
        initial_branch: Branch HEAD points at in a new fixture.
        file_mode: Permission bits applied to files written by the harness.
        logging: Logging configuration.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    author_name: str = Field(default="test", min_length=1)
    author_email: str = Field(default="test@example.com", min_length=1)
    default_file_name: str = Field(default="test.txt", min_length=1)
    initial_commit_message: str = Field(default="First commit", min_length=1)
    directory_prefix: str = "multi-git-test-"
    directory_suffix: str = ".git"
    initial_branch: str = Field(default="master", min_length=1)
    file_mode: int = Field(default=0o600, ge=0, le=0o777)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: object) -> object:
        # Environment values arrive as strings such as "0o644" or "420"
        if isinstance(value, str):
            return int(value, 0)
        return value
