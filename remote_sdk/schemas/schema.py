# remote_sdk/schemas/schema.py
import logging
import uuid
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from remote_sdk.exceptions import DecodeError, SchemaError
from remote_sdk.schemas.values import loads_json

logger = logging.getLogger("remote_sdk.schemas.schema")


def _without_wire_id(data: Any) -> Any:
    if isinstance(data, dict) and "id" in data:
        data = {k: v for k, v in data.items() if k != "id"}
    return data


class FieldType(str, Enum):
    """
    Закрытый набор типов полей, которые объявляет сервер.
    Новый тип = новый элемент здесь + по одной записи в таблицах remote_sdk.fields.
    """
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    JSON = "json"


class SchemaField(BaseModel):
    # Сервер не присылает идентификатор, генерируем локальный при декодировании
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    type: FieldType
    readonly: bool = False
    required: bool = False

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _assign_local_id(cls, data: Any) -> Any:
        return _without_wire_id(data)

    @field_validator("readonly", "required", mode="before")
    @classmethod
    def _none_is_false(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def is_editable(self) -> bool:
        return not self.readonly


class Table(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(..., min_length=1)
    fields: List[SchemaField]

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _assign_local_id(cls, data: Any) -> Any:
        return _without_wire_id(data)

    @field_validator("fields")
    @classmethod
    def _unique_field_names(cls, fields: List[SchemaField]) -> List[SchemaField]:
        seen = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(f"duplicate field name '{f.name}'")
            seen.add(f.name)
        return fields

    def field(self, name: str) -> Optional[SchemaField]:
        return next((f for f in self.fields if f.name == name), None)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def editable_fields(self) -> List[SchemaField]:
        return [f for f in self.fields if not f.readonly]

    def required_fields(self) -> List[SchemaField]:
        return [f for f in self.fields if f.required]


class Schema(BaseModel):
    """Неизменяемое описание таблиц компании. При повторной загрузке заменяется целиком."""

    tables: List[Table]

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("tables")
    @classmethod
    def _unique_table_names(cls, tables: List[Table]) -> List[Table]:
        seen = set()
        for t in tables:
            if t.name in seen:
                raise ValueError(f"duplicate table name '{t.name}'")
            seen.add(t.name)
        return tables

    def table(self, name: str) -> Optional[Table]:
        return next((t for t in self.tables if t.name == name), None)

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]


def schema_from_mapping(payload: Any) -> Schema:
    if not isinstance(payload, dict):
        raise SchemaError(f"Schema document must be a JSON object, got {type(payload).__name__}")
    try:
        return Schema.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Schema document rejected: {e.error_count()} error(s)")
        raise SchemaError(f"Malformed schema: {e}") from e


def parse_schema(raw: Union[bytes, bytearray, str]) -> Schema:
    try:
        payload = loads_json(raw)
    except DecodeError as e:
        raise SchemaError(e.message) from e
    schema = schema_from_mapping(payload)
    logger.debug(f"Parsed schema with tables: {schema.table_names}")
    return schema
