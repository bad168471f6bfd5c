# remote_sdk/logging_config.py
import logging
import sys
from typing import Optional, Union

from remote_sdk.config import get_settings

# Имя базового логгера для всего SDK
SDK_LOGGER_NAME = "remote_sdk"


def setup_sdk_logging(
    level: Optional[Union[int, str]] = None,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> logging.Logger:
    """
    Настраивает базовый логгер SDK. Повторный вызов не добавляет обработчиков.
    Без level берется LOGGING_LEVEL из настроек.
    """
    logger = logging.getLogger(SDK_LOGGER_NAME)

    if logger.handlers:
        logger.debug(f"Logger '{SDK_LOGGER_NAME}' already has handlers. Skipping setup.")
        return logger

    if level is None:
        level = get_settings().LOGGING_LEVEL.upper()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.debug(
        f"SDK Logging setup complete for '{SDK_LOGGER_NAME}' at level {logging.getLevelName(logger.level)}"
    )
    return logger


def get_sdk_logger(name: str = SDK_LOGGER_NAME) -> logging.Logger:
    """Возвращает логгер SDK (или его дочерний)."""
    if name != SDK_LOGGER_NAME and not name.startswith(f"{SDK_LOGGER_NAME}."):
        name = f"{SDK_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
