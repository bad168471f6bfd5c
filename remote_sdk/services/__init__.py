# remote_sdk/services/__init__.py
from .state import (
    ConnectionStatus,
    ConnectionState,
    LoadStatus,
    SchemaState,
    FetchResult,
    SaveResult,
)
from .connection_service import ConnectionService
from .schema_service import SchemaService
from .records_service import RecordsService

__all__ = [
    "ConnectionStatus",
    "ConnectionState",
    "LoadStatus",
    "SchemaState",
    "FetchResult",
    "SaveResult",
    "ConnectionService",
    "SchemaService",
    "RecordsService",
]
