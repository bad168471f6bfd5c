# remote_sdk/clients/__init__.py
from .base import RemoteDataClient, classify_status

__all__ = ["RemoteDataClient", "classify_status"]
