from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from termprompt import config
from termprompt.config import PromptSettings, get_settings, reset_settings
from termprompt.core.logging.logger import configure_logging, get_logger


def test_defaults() -> None:
    settings = PromptSettings()
    assert settings.show is True
    assert settings.color is True
    assert settings.ascii_symbols is False
    assert settings.rows is None
    assert settings.cols is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TERMPROMPT_SHOW", "false")
    monkeypatch.setenv("TERMPROMPT_COLS", "120")
    monkeypatch.setenv("TERMPROMPT_ASCII_SYMBOLS", "1")

    settings = get_settings()

    assert settings.show is False
    assert settings.cols == 120
    assert settings.ascii_symbols is True


def test_get_settings_is_cached_until_reset(monkeypatch) -> None:
    first = get_settings()
    monkeypatch.setenv("TERMPROMPT_COLOR", "false")

    assert get_settings() is first

    reset_settings()
    assert config._settings is None
    assert get_settings().color is False


def test_invalid_dimensions_are_rejected() -> None:
    with pytest.raises(ValidationError):
        PromptSettings(rows=0)


def test_logger_appends_structured_data(caplog) -> None:
    logger = get_logger("termprompt.tests")
    with caplog.at_level(logging.INFO, logger="termprompt"):
        logger.info("Prompt closed", data={"name": "color"})

    record = caplog.records[-1]
    assert record.getMessage() == "Prompt closed [name='color']"
    assert record.data == {"name": "color"}


def test_logger_skips_disabled_levels(caplog) -> None:
    logger = get_logger("termprompt.tests")
    with caplog.at_level(logging.WARNING, logger="termprompt"):
        logger.debug("hidden", data={"x": 1})

    assert not [r for r in caplog.records if r.name == "termprompt.tests"]


def test_get_logger_is_shared() -> None:
    assert get_logger("termprompt.a") is get_logger("termprompt.a")


def test_configure_logging_sets_level() -> None:
    root = logging.getLogger("termprompt")
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        configure_logging("not-a-level")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
