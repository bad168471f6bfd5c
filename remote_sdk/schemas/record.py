# remote_sdk/schemas/record.py
import logging
import re
import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from remote_sdk.exceptions import DecodeError
from remote_sdk.schemas.values import (
    DynamicValue,
    StringValue,
    dumps_json,
    loads_json,
    to_python,
    value_from_json,
)

logger = logging.getLogger("remote_sdk.schemas.record")

# Только канонический вид 8-4-4-4-12; 32 hex-символа подряд остаются серверным id
_UUID_RE = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")

ID_KEY = "id"
CREATED_AT_KEY = "created_at"
UPDATED_AT_KEY = "updated_at"
RESERVED_KEYS = frozenset({ID_KEY, CREATED_AT_KEY, UPDATED_AT_KEY})

_datetime_adapter = TypeAdapter(datetime)


class Record(BaseModel):
    """
    Одна запись динамической таблицы.

    local_id - стабильный ключ для UI; server_id - идентификатор, назначенный
    сервером (строкой, даже если сервер прислал число). Все сетевые операции
    адресуют запись по server_id, если он известен.
    """

    local_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    server_id: Optional[str] = None
    data: Dict[str, DynamicValue] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Ключи, значения которых не удалось декодировать и которые были пропущены
    dropped_fields: List[str] = Field(default_factory=list, exclude=True)

    @classmethod
    def new(cls, data: Optional[Mapping[str, DynamicValue]] = None) -> "Record":
        """Пустая запись (или заполненная формой) перед запросом на создание."""
        return cls(data=dict(data or {}))

    @property
    def wire_id(self) -> str:
        return self.server_id if self.server_id is not None else str(self.local_id)

    def get(self, field_name: str) -> Optional[DynamicValue]:
        return self.data.get(field_name)

    def apply_update(self, other: "Record") -> "Record":
        """
        Переносит данные из ответа сервера на обновление в эту запись.
        local_id сохраняется, чтобы UI не терял выделение.
        """
        self.data = dict(other.data)
        if other.server_id is not None:
            self.server_id = other.server_id
        if other.created_at is not None:
            self.created_at = other.created_at
        self.updated_at = other.updated_at
        self.dropped_fields = list(other.dropped_fields)
        return self


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        return _datetime_adapter.validate_python(raw)
    except ValidationError:
        logger.debug(f"Ignoring malformed timestamp: {raw!r}")
        return None


def _resolve_identity(raw_id: Any) -> Dict[str, Any]:
    if isinstance(raw_id, bool) or raw_id is None:
        return {}
    if isinstance(raw_id, str):
        if _UUID_RE.fullmatch(raw_id):
            return {"local_id": uuid.UUID(raw_id), "server_id": raw_id}
        return {"server_id": raw_id}
    if isinstance(raw_id, int):
        return {"server_id": str(raw_id)}
    if isinstance(raw_id, float):
        return {"server_id": str(int(raw_id)) if raw_id.is_integer() else repr(raw_id)}
    logger.warning(f"Unsupported record id of type {type(raw_id).__name__}; treating as absent")
    return {}


def record_from_mapping(payload: Any, allow_composite: bool = True) -> Record:
    """
    Строит Record из уже разобранного JSON-объекта.
    Поля, которые не удалось декодировать, пропускаются (с предупреждением в лог).
    """
    if not isinstance(payload, dict):
        raise DecodeError(f"Record must be a JSON object, got {type(payload).__name__}")

    data: Dict[str, DynamicValue] = {}
    dropped: List[str] = []
    for key, raw_value in payload.items():
        if key in RESERVED_KEYS:
            continue
        try:
            data[key] = value_from_json(raw_value, allow_composite)
        except DecodeError as e:
            dropped.append(key)
            logger.warning(f"Dropping field '{key}' from record: {e.message}")

    return Record(
        **_resolve_identity(payload.get(ID_KEY)),
        data=data,
        created_at=_parse_timestamp(payload.get(CREATED_AT_KEY)),
        updated_at=_parse_timestamp(payload.get(UPDATED_AT_KEY)),
        dropped_fields=dropped,
    )


def parse_record(raw: Union[bytes, bytearray, str], allow_composite: bool = True) -> Record:
    # NaN/Infinity разрешены на уровне JSON, чтобы отбросить только само поле
    return record_from_mapping(loads_json(raw, allow_nan=True), allow_composite)


def _is_json_key(key: str) -> bool:
    return "json" in key.lower()


def _wire_value(key: str, value: DynamicValue) -> Any:
    # Поле *json* со строкой внутри отправляем как структуру, а не как экранированную строку
    if _is_json_key(key) and isinstance(value, StringValue):
        try:
            return loads_json(value.value)
        except DecodeError:
            pass
    return to_python(value)


def record_to_mapping(record: Record, include_id: bool = False) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if include_id:
        payload[ID_KEY] = record.wire_id
    for key, value in record.data.items():
        if key in RESERVED_KEYS:
            continue
        payload[key] = _wire_value(key, value)
    if record.created_at is not None:
        payload[CREATED_AT_KEY] = record.created_at.isoformat()
    if record.updated_at is not None:
        payload[UPDATED_AT_KEY] = record.updated_at.isoformat()
    return payload


def encode_create(record: Record) -> bytes:
    """Тело POST-запроса: без поля id."""
    return dumps_json(record_to_mapping(record, include_id=False))


def encode_update(record: Record) -> bytes:
    """Тело PUT-запроса: с полем id (server_id, иначе local_id)."""
    return dumps_json(record_to_mapping(record, include_id=True))
