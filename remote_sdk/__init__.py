# remote_sdk/__init__.py
"""Клиент для динамических таблиц, схема которых задается сервером (/api/remote)."""

from .clients.base import RemoteDataClient
from .config import ClientSettings, get_settings
from .logging_config import setup_sdk_logging, get_sdk_logger

__all__ = [
    "RemoteDataClient",
    "ClientSettings",
    "get_settings",
    "setup_sdk_logging",
    "get_sdk_logger",
]
