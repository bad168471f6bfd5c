# remote_sdk/tests/test_config.py
import logging

import pytest

from remote_sdk.config import ClientSettings, get_settings
from remote_sdk.logging_config import SDK_LOGGER_NAME, get_sdk_logger, setup_sdk_logging


def test_defaults():
    settings = ClientSettings()
    assert settings.API_PREFIX == "/api/remote"
    assert settings.SECRET_HEADER == "X-Remote-Secret"
    assert settings.REQUEST_TIMEOUT == 30.0
    assert settings.RESOURCE_TIMEOUT == 60.0
    assert settings.DEFAULT_PAGE_LIMIT == 20


def test_env_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REMOTE_SDK_DEFAULT_PAGE_LIMIT", "50")
    monkeypatch.setenv("REMOTE_SDK_DISPLAY_LOCALE", "de")
    settings = ClientSettings()
    assert settings.DEFAULT_PAGE_LIMIT == 50
    assert settings.DISPLAY_LOCALE == "de"


def test_sdk_logger_names():
    assert get_sdk_logger().name == SDK_LOGGER_NAME
    assert get_sdk_logger("clients.base").name == "remote_sdk.clients.base"
    assert get_sdk_logger("remote_sdk.services").name == "remote_sdk.services"


def test_setup_logging_is_idempotent():
    logger = logging.getLogger(SDK_LOGGER_NAME)
    saved = list(logger.handlers)
    for handler in saved:
        logger.removeHandler(handler)
    try:
        setup_sdk_logging(logging.DEBUG)
        setup_sdk_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for handler in saved:
            logger.addHandler(handler)


def test_setup_logging_defaults_to_configured_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REMOTE_SDK_LOGGING_LEVEL", "warning")
    get_settings.cache_clear()
    logger = logging.getLogger(SDK_LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    for handler in saved_handlers:
        logger.removeHandler(handler)
    try:
        setup_sdk_logging()
        assert logger.level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for handler in saved_handlers:
            logger.addHandler(handler)
        logger.setLevel(saved_level)
        get_settings.cache_clear()
