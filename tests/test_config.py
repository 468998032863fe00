"""Tests for configuration dataclasses and exceptions."""

import argparse

import pytest

from reslock.core.config import LockConfig, LogConfig
from reslock.core.exceptions import ConfigurationError, LockTimeoutError, ResLockError


class TestLockConfig:
    def test_defaults(self):
        config = LockConfig()
        assert config.max_pause == 0.01
        assert config.max_attempts == 10
        assert config.max_hold_seconds == 6.0
        assert config.min_pause == pytest.approx(0.001)
        assert config.timeout_budget == pytest.approx(0.1)

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"max_pause": 0}, "max_pause"),
            ({"max_pause": -1.0}, "max_pause"),
            ({"max_attempts": 0}, "max_attempts"),
            ({"max_hold_seconds": 0}, "max_hold_seconds"),
        ],
    )
    def test_validate_rejects_non_positive(self, kwargs, field):
        with pytest.raises(ConfigurationError) as excinfo:
            LockConfig(**kwargs).validate()
        assert excinfo.value.field == field

    def test_with_overrides_keeps_unset_values(self):
        base = LockConfig(max_pause=0.5, max_attempts=4, max_hold_seconds=30)

        assert base.with_overrides() is base
        changed = base.with_overrides(max_attempts=8)

        assert changed == LockConfig(max_pause=0.5, max_attempts=8, max_hold_seconds=30)
        assert base.max_attempts == 4

    def test_from_env(self):
        config = LockConfig.from_env(
            {
                "RESLOCK_MAX_PAUSE": "0.25",
                "RESLOCK_MAX_ATTEMPTS": " 40 ",
                "RESLOCK_MAX_HOLD_SECONDS": "",
            }
        )
        assert config == LockConfig(max_pause=0.25, max_attempts=40, max_hold_seconds=6.0)

    def test_from_env_rejects_garbage(self):
        with pytest.raises(ConfigurationError) as excinfo:
            LockConfig.from_env({"RESLOCK_MAX_ATTEMPTS": "ten"})
        assert excinfo.value.field == "RESLOCK_MAX_ATTEMPTS"
        assert "'ten'" in str(excinfo.value)

    def test_from_args_overrides_env(self):
        args = argparse.Namespace(max_pause=None, max_attempts=3, max_hold=None)
        config = LockConfig.from_args(args, {"RESLOCK_MAX_ATTEMPTS": "40", "RESLOCK_MAX_PAUSE": "0.5"})
        assert config == LockConfig(max_pause=0.5, max_attempts=3, max_hold_seconds=6.0)

    def test_to_dict(self):
        assert LockConfig().to_dict() == {"max_pause": 0.01, "max_attempts": 10, "max_hold_seconds": 6.0}


class TestLogConfig:
    def test_from_args_priority(self):
        args = argparse.Namespace(log_level=None, log_format="json", log_file=None)
        config = LogConfig.from_args(args, {"LOG_LEVEL": "DEBUG", "LOG_FORMAT": "text"})
        assert config.level == "DEBUG"
        assert config.format == "json"

    def test_defaults_without_env(self):
        config = LogConfig.from_args(argparse.Namespace(), {})
        assert (config.level, config.format, config.file) == ("INFO", "text", None)

    def test_invalid_level(self):
        with pytest.raises(ConfigurationError):
            LogConfig(level="LOUD").validate()

    def test_invalid_format(self):
        with pytest.raises(ConfigurationError):
            LogConfig(format="xml").validate()


class TestExceptions:
    def test_details_are_appended(self):
        assert str(ResLockError("Failed")) == "Failed"
        assert str(ResLockError("Failed", details="because")) == "Failed: because"

    def test_lock_timeout_message(self):
        error = LockTimeoutError("reports.csv", 0.1)
        assert isinstance(error, ResLockError)
        assert str(error) == "Unable to lock resource 'reports.csv': gave up after 0.100s"
        assert str(LockTimeoutError("x")) == "Unable to lock resource 'x'"
