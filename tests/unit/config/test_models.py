"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from repofixture.config import HarnessConfig, LoggingConfig


class TestHarnessConfig:
    def test_is_frozen(self) -> None:
        config = HarnessConfig()

        with pytest.raises(ValidationError):
            config.author_name = "other"  # pyright: ignore[reportAttributeAccessIssue]

    def test_unknown_keys_are_ignored(self) -> None:
        config = HarnessConfig.model_validate({"unknown": 1})

        assert config == HarnessConfig()

    @pytest.mark.parametrize(
        ("raw", "expected"), [("0o644", 0o644), ("420", 420), ("0x1a4", 0o644)]
    )
    def test_file_mode_parses_strings(self, raw: str, expected: int) -> None:
        assert HarnessConfig.model_validate({"file_mode": raw}).file_mode == expected

    def test_file_mode_rejects_garbage(self) -> None:
        with pytest.raises(ValidationError):
            _ = HarnessConfig.model_validate({"file_mode": "rw-r--r--"})

    def test_empty_author_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _ = HarnessConfig(author_name="")


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()

        assert config.level == "info"
        assert config.format == "text"
        assert config.file == ""
