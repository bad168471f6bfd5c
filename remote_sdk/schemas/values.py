# remote_sdk/schemas/values.py
"""
Динамическое значение: размеченное объединение для любого JSON-значения,
которое может прислать сервер.

Скалярные варианты: null, bool, int (64 бита), float (64 бита), string.
Составные: list и map (нужны для вложенных JSON-полей).

Порядок декодирования: null -> bool -> int -> float -> string -> list -> map.
Строка "true" остается строкой, целое число никогда не превращается в float,
а float (например, 1.0) никогда не становится целым.
"""
import json
import math
from typing import Annotated, Any, Dict, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, field_validator

from remote_sdk.exceptions import DecodeError, EncodeError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class _ValueBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class NullValue(_ValueBase):
    kind: Literal["null"] = "null"


class BoolValue(_ValueBase):
    kind: Literal["bool"] = "bool"
    value: StrictBool


class IntValue(_ValueBase):
    kind: Literal["int"] = "int"
    value: StrictInt

    @field_validator("value")
    @classmethod
    def _check_int64(cls, v: int) -> int:
        if not INT64_MIN <= v <= INT64_MAX:
            raise ValueError("integer does not fit into 64 bits")
        return v


class FloatValue(_ValueBase):
    kind: Literal["float"] = "float"
    value: StrictFloat

    @field_validator("value")
    @classmethod
    def _check_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("non-finite float")
        return v


class StringValue(_ValueBase):
    kind: Literal["string"] = "string"
    value: StrictStr


class ListValue(_ValueBase):
    kind: Literal["list"] = "list"
    items: Tuple["DynamicValue", ...] = ()


class MapValue(_ValueBase):
    kind: Literal["map"] = "map"
    entries: Dict[str, "DynamicValue"] = Field(default_factory=dict)


DynamicValue = Annotated[
    Union[NullValue, BoolValue, IntValue, FloatValue, StringValue, ListValue, MapValue],
    Field(discriminator="kind"),
]

ListValue.model_rebuild()
MapValue.model_rebuild()

SCALAR_KINDS = frozenset({"null", "bool", "int", "float", "string"})


def is_scalar(value: DynamicValue) -> bool:
    return value.kind in SCALAR_KINDS


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"Non-finite number {name} is not supported")


def value_from_json(obj: Any, allow_composite: bool = True) -> DynamicValue:
    """
    Преобразует уже разобранный JSON-объект (результат json.loads) в DynamicValue.
    При allow_composite=False массивы и объекты считаются неподдерживаемыми.
    """
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BoolValue(value=obj)
    if isinstance(obj, int):
        if INT64_MIN <= obj <= INT64_MAX:
            return IntValue(value=obj)
        try:
            return FloatValue(value=float(obj))
        except (OverflowError, ValueError) as e:
            raise DecodeError(f"Number {obj} is out of range") from e
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise DecodeError(f"Non-finite number {obj!r} is not supported")
        return FloatValue(value=obj)
    if isinstance(obj, str):
        return StringValue(value=obj)
    if isinstance(obj, list):
        if not allow_composite:
            raise DecodeError("Arrays are not supported at the scalar layer")
        return ListValue(items=tuple(value_from_json(item, allow_composite) for item in obj))
    if isinstance(obj, dict):
        if not allow_composite:
            raise DecodeError("Objects are not supported at the scalar layer")
        return MapValue(entries={str(k): value_from_json(v, allow_composite) for k, v in obj.items()})
    raise DecodeError(f"Unsupported JSON value of type {type(obj).__name__}")


def loads_json(raw: Union[bytes, bytearray, str], allow_nan: bool = False) -> Any:
    """
    json.loads, который сообщает об ошибке как DecodeError. NaN/Infinity
    отвергаются, если allow_nan=False; иначе их отбросит value_from_json.
    """
    try:
        if allow_nan:
            return json.loads(raw)
        return json.loads(raw, parse_constant=_reject_constant)
    except DecodeError:
        raise
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Invalid JSON: {e}") from e


def decode_value(raw: Union[bytes, bytearray, str], allow_composite: bool = True) -> DynamicValue:
    """Декодирует одно JSON-значение из байтов (или строки)."""
    return value_from_json(loads_json(raw), allow_composite)


def from_python(obj: Any) -> DynamicValue:
    """
    Строит DynamicValue из обычного Python-объекта (None, bool, int, float,
    str, list/tuple, dict). Неподдерживаемый объект - ошибка программиста.
    """
    if isinstance(obj, (list, tuple)):
        return ListValue(items=tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        return MapValue(entries={str(k): from_python(v) for k, v in obj.items()})
    if obj is None or isinstance(obj, (bool, int, float, str)):
        try:
            return value_from_json(obj)
        except DecodeError as e:
            raise EncodeError(e.message) from e
    raise EncodeError(f"Cannot represent {type(obj).__name__} as a dynamic value")


def to_python(value: DynamicValue) -> Any:
    """Обратное преобразование: DynamicValue -> обычный Python-объект, готовый для json.dumps."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, (BoolValue, IntValue, FloatValue, StringValue)):
        return value.value
    if isinstance(value, ListValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, MapValue):
        return {key: to_python(item) for key, item in value.entries.items()}
    raise EncodeError(f"Unsupported dynamic value: {value!r}")


def dumps_json(obj: Any) -> bytes:
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Cannot encode to JSON: {e}") from e


def encode_value(value: DynamicValue) -> bytes:
    return dumps_json(to_python(value))
