# remote_sdk/services/state.py
from enum import Enum
from typing import Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from remote_sdk.exceptions import RemoteValidationError, display_message_for
from remote_sdk.schemas.pagination import PaginationInfo
from remote_sdk.schemas.record import Record
from remote_sdk.schemas.schema import Schema

StateType = TypeVar("StateType")
StateCallback = Callable[[StateType], None]


class ConnectionStatus(str, Enum):
    UNKNOWN = "unknown"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class ConnectionState(BaseModel):
    """
    Состояние подключения к компании: unknown -> connecting -> connected | failed.
    Из любого состояния можно снова перейти в connecting.
    """

    status: ConnectionStatus = ConnectionStatus.UNKNOWN
    message: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def connecting(cls) -> "ConnectionState":
        return cls(status=ConnectionStatus.CONNECTING)

    @classmethod
    def connected(cls) -> "ConnectionState":
        return cls(status=ConnectionStatus.CONNECTED)

    @classmethod
    def failed(cls, message: str) -> "ConnectionState":
        return cls(status=ConnectionStatus.FAILED, message=message)

    @property
    def display_text(self) -> str:
        if self.status is ConnectionStatus.CONNECTING:
            return "Подключение..."
        if self.status is ConnectionStatus.CONNECTED:
            return "Подключено"
        if self.status is ConnectionStatus.FAILED:
            return f"Ошибка: {self.message}" if self.message else "Ошибка подключения"
        return "Не проверено"


class LoadStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class SchemaState(BaseModel):
    status: LoadStatus
    current: Optional[Schema] = None
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class FetchResult(BaseModel):
    """Результат загрузки страницы записей таблицы."""

    table: str
    status: LoadStatus
    records: List[Record] = Field(default_factory=list)
    pagination: Optional[PaginationInfo] = None
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return bool(self.pagination and self.pagination.has_more)


class SaveResult(BaseModel):
    """Результат создания, обновления или удаления одной записи."""

    table: str
    status: LoadStatus
    record: Optional[Record] = None
    error: Optional[str] = None
    field_errors: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED


def error_details(error: Exception) -> Dict[str, object]:
    """Общее сообщение и ошибки по полям для состояния, которое увидит UI."""
    field_errors: Dict[str, str] = {}
    if isinstance(error, RemoteValidationError):
        field_errors = error.error.field_messages()
    return {"error": display_message_for(error), "field_errors": field_errors}
