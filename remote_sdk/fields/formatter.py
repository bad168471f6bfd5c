# remote_sdk/fields/formatter.py
"""
Преобразование между DynamicValue и строкой, которую видит и редактирует
пользователь, для каждого типа поля схемы.

Валидация здесь носит рекомендательный характер (подсказки в форме):
окончательное решение о корректности принимает сервер.
"""
import json
import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Callable, Dict, Optional

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_datetime
from pydantic import HttpUrl, TypeAdapter, ValidationError

from remote_sdk.config import get_settings
from remote_sdk.exceptions import DecodeError, ValidationFailure
from remote_sdk.schemas.schema import FieldType
from remote_sdk.schemas.values import (
    BoolValue,
    DynamicValue,
    FloatValue,
    IntValue,
    NullValue,
    StringValue,
    is_scalar,
    loads_json,
    to_python,
    value_from_json,
)
from .config import (
    BOOLEAN_FALSE_WORDS,
    BOOLEAN_LABELS,
    BOOLEAN_TRUE_WORDS,
    DATE_DISPLAY_FORMAT,
    DATE_EDIT_FORMAT,
    DATETIME_DISPLAY_FORMAT,
    DECIMAL_DISPLAY_DIGITS,
    DEFAULT_BOOLEAN_LABELS,
    FIELD_WIDGETS,
    PASSWORD_MASK,
    REQUIRED_FIELD_MESSAGE,
    FieldWidget,
)

logger = logging.getLogger("remote_sdk.fields.formatter")

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_http_url_adapter = TypeAdapter(HttpUrl)

TEXT_TYPES = frozenset({
    FieldType.STRING,
    FieldType.TEXT,
    FieldType.EMAIL,
    FieldType.URL,
    FieldType.PASSWORD,
})


def widget_for(field_type: FieldType) -> FieldWidget:
    return FIELD_WIDGETS[field_type]


# --- Вспомогательные разборщики ---

def parse_boolean_word(text: str) -> Optional[bool]:
    word = text.strip().lower()
    if word in BOOLEAN_TRUE_WORDS:
        return True
    if word in BOOLEAN_FALSE_WORDS:
        return False
    return None


def parse_edit_date(text: str) -> date:
    return datetime.strptime(text.strip(), DATE_EDIT_FORMAT).date()


def parse_edit_datetime(text: str) -> datetime:
    stripped = text.strip()
    # Только дата без времени для поля datetime не подходит
    if "T" not in stripped and " " not in stripped:
        raise ValueError(f"{text!r} has no time component")
    return datetime.fromisoformat(stripped)


def _plain_text(value: DynamicValue) -> str:
    if isinstance(value, NullValue):
        return ""
    if isinstance(value, StringValue):
        return value.value
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, FloatValue):
        return repr(value.value)
    return json.dumps(to_python(value), ensure_ascii=False, separators=(",", ":"))


def _as_bool(value: DynamicValue) -> Optional[bool]:
    if isinstance(value, BoolValue):
        return value.value
    if isinstance(value, IntValue) and value.value in (0, 1):
        return value.value == 1
    if isinstance(value, StringValue):
        return parse_boolean_word(value.value)
    return None


def _as_float(value: DynamicValue) -> Optional[float]:
    if isinstance(value, (IntValue, FloatValue)):
        return float(value.value)
    if isinstance(value, StringValue):
        try:
            number = float(value.value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _boolean_labels(locale: str) -> tuple:
    try:
        language = Locale.parse(locale).language
    except (UnknownLocaleError, ValueError):
        language = locale.split("_")[0].split("-")[0].lower()
    return BOOLEAN_LABELS.get(language, DEFAULT_BOOLEAN_LABELS)


# --- Отображение ---

def _display_text(value: DynamicValue, locale: str) -> str:
    return _plain_text(value)


def _display_password(value: DynamicValue, locale: str) -> str:
    return PASSWORD_MASK if _plain_text(value) else ""


def _display_integer(value: DynamicValue, locale: str) -> str:
    if isinstance(value, FloatValue) and value.value.is_integer():
        return str(int(value.value))
    return _plain_text(value)


def _display_decimal(value: DynamicValue, locale: str) -> str:
    number = _as_float(value)
    if number is None:
        return _plain_text(value)
    return f"{number:.{DECIMAL_DISPLAY_DIGITS}f}"


def _display_boolean(value: DynamicValue, locale: str) -> str:
    flag = _as_bool(value)
    if flag is None:
        return _plain_text(value)
    yes, no = _boolean_labels(locale)
    return yes if flag else no


def _display_date(value: DynamicValue, locale: str) -> str:
    raw = _plain_text(value)
    if not isinstance(value, StringValue):
        return raw
    try:
        parsed = parse_edit_date(raw)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(raw.strip()).date()
        except ValueError:
            logger.debug(f"Showing unparsable date as is: {raw!r}")
            return raw
    try:
        return format_date(parsed, format=DATE_DISPLAY_FORMAT, locale=locale)
    except (UnknownLocaleError, ValueError):
        logger.warning(f"Unknown display locale {locale!r}; showing date as is")
        return raw


def _display_datetime(value: DynamicValue, locale: str) -> str:
    raw = _plain_text(value)
    if not isinstance(value, StringValue):
        return raw
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        logger.debug(f"Showing unparsable datetime as is: {raw!r}")
        return raw
    try:
        return format_datetime(
            parsed,
            format=DATETIME_DISPLAY_FORMAT,
            tzinfo=parsed.tzinfo or timezone.utc,
            locale=locale,
        )
    except (UnknownLocaleError, ValueError):
        logger.warning(f"Unknown display locale {locale!r}; showing datetime as is")
        return raw


def _display_json(value: DynamicValue, locale: str) -> str:
    return _plain_text(value)


_DISPLAY: Dict[FieldType, Callable[[DynamicValue, str], str]] = {
    FieldType.STRING: _display_text,
    FieldType.TEXT: _display_text,
    FieldType.EMAIL: _display_text,
    FieldType.URL: _display_text,
    FieldType.PASSWORD: _display_password,
    FieldType.INTEGER: _display_integer,
    FieldType.DECIMAL: _display_decimal,
    FieldType.BOOLEAN: _display_boolean,
    FieldType.DATE: _display_date,
    FieldType.DATETIME: _display_datetime,
    FieldType.JSON: _display_json,
}


def to_display_string(value: Optional[DynamicValue], field_type: FieldType, locale: Optional[str] = None) -> str:
    """Строка для показа в таблице или карточке. Пароль маскируется, null -> пустая строка."""
    if value is None or isinstance(value, NullValue):
        return ""
    return _DISPLAY[field_type](value, locale or get_settings().DISPLAY_LOCALE)


# --- Разбор введенной строки ---

def _parse_text(text: str, field_type: FieldType) -> DynamicValue:
    return StringValue(value=text)


def _parse_integer(text: str, field_type: FieldType) -> DynamicValue:
    stripped = text.strip()
    if not _INTEGER_RE.match(stripped):
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text)
    try:
        return IntValue(value=int(stripped))
    except ValidationError as e:
        raise ValidationFailure(field_type.value, text, "Число слишком большое") from e


def _parse_decimal(text: str, field_type: FieldType) -> DynamicValue:
    stripped = text.strip()
    # Только цифры с точкой и необязательной экспонентой
    if not _DECIMAL_RE.match(stripped):
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text)
    number = float(stripped)
    if not math.isfinite(number):
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text)
    return FloatValue(value=number)


def _parse_boolean(text: str, field_type: FieldType) -> DynamicValue:
    flag = parse_boolean_word(text)
    if flag is None:
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text)
    return BoolValue(value=flag)


def _parse_date(text: str, field_type: FieldType) -> DynamicValue:
    try:
        parsed = parse_edit_date(text)
    except ValueError as e:
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text) from e
    return StringValue(value=parsed.strftime(DATE_EDIT_FORMAT))


def _parse_datetime(text: str, field_type: FieldType) -> DynamicValue:
    try:
        parse_edit_datetime(text)
    except ValueError as e:
        raise ValidationFailure(field_type.value, text, widget_for(field_type).help_text) from e
    return StringValue(value=text.strip())


def _parse_json(text: str, field_type: FieldType) -> DynamicValue:
    try:
        return value_from_json(loads_json(text))
    except DecodeError:
        # Невалидный JSON отправляем как строку: валидность решает сервер
        logger.debug("JSON field holds non-JSON text; keeping it as a string")
        return StringValue(value=text)


_PARSERS: Dict[FieldType, Callable[[str, FieldType], DynamicValue]] = {
    FieldType.STRING: _parse_text,
    FieldType.TEXT: _parse_text,
    FieldType.EMAIL: _parse_text,
    FieldType.URL: _parse_text,
    FieldType.PASSWORD: _parse_text,
    FieldType.INTEGER: _parse_integer,
    FieldType.DECIMAL: _parse_decimal,
    FieldType.BOOLEAN: _parse_boolean,
    FieldType.DATE: _parse_date,
    FieldType.DATETIME: _parse_datetime,
    FieldType.JSON: _parse_json,
}


def from_edited_string(text: str, field_type: FieldType) -> DynamicValue:
    """
    Разбирает строку из поля ввода в значение объявленного типа.
    Бросает ValidationFailure, если строка не приводится к типу, в том числе
    для пустой строки у нетекстовых типов (кроме json). Очищенное необязательное
    поле превращает в null форма (record_from_form).
    """
    return _PARSERS[field_type](text, field_type)


def validate_edited_string(text: str, field_type: FieldType, required: bool = False) -> Optional[str]:
    """Подсказка для поля формы или None, если значение выглядит корректным."""
    if not text.strip():
        return REQUIRED_FIELD_MESSAGE if required else None
    try:
        from_edited_string(text, field_type)
    except ValidationFailure as e:
        return e.message
    if field_type is FieldType.EMAIL and not _EMAIL_RE.match(text.strip()):
        return widget_for(field_type).help_text
    if field_type is FieldType.URL:
        try:
            _http_url_adapter.validate_python(text.strip())
        except ValidationError:
            return widget_for(field_type).help_text
    return None


# --- Начальные значения для формы редактирования ---

def to_edit_string(value: Optional[DynamicValue], field_type: FieldType) -> str:
    """Строка, которой заполняется поле ввода при редактировании существующей записи."""
    if value is None or isinstance(value, NullValue):
        return ""
    if field_type is FieldType.BOOLEAN:
        flag = _as_bool(value)
        if flag is not None:
            return "true" if flag else "false"
    if field_type is FieldType.JSON and not is_scalar(value):
        return json.dumps(to_python(value), ensure_ascii=False, indent=2)
    return _plain_text(value)


def default_edit_string(field_type: FieldType, now: Optional[datetime] = None) -> str:
    """Значение по умолчанию для пустого поля новой записи."""
    now = now or datetime.now()
    if field_type is FieldType.BOOLEAN:
        return "false"
    if field_type is FieldType.DATE:
        return now.strftime(DATE_EDIT_FORMAT)
    if field_type is FieldType.DATETIME:
        return now.isoformat(timespec="seconds")
    return ""
