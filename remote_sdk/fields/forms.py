# remote_sdk/fields/forms.py
from datetime import datetime
from typing import Dict, Mapping, Optional

from remote_sdk.exceptions import FormValidationError, ValidationFailure
from remote_sdk.schemas.record import Record
from remote_sdk.schemas.schema import FieldType, Table
from remote_sdk.schemas.values import DynamicValue, NullValue
from .config import REQUIRED_FIELD_MESSAGE
from .formatter import TEXT_TYPES, default_edit_string, from_edited_string, to_edit_string

# Пустая строка в этих полях означает очищенное значение
_CLEARABLE_TYPES = frozenset(FieldType) - TEXT_TYPES - {FieldType.JSON}


def form_values_for(table: Table, record: Optional[Record] = None, now: Optional[datetime] = None) -> Dict[str, str]:
    """
    Начальные строки для формы создания/редактирования.
    Для существующей записи берутся ее значения, пустые редактируемые поля
    получают значения по умолчанию (false, сегодняшняя дата, текущее время).
    """
    values: Dict[str, str] = {}
    for field in table.fields:
        current = record.get(field.name) if record is not None else None
        if current is not None and not isinstance(current, NullValue):
            values[field.name] = to_edit_string(current, field.type)
        elif not field.readonly:
            values[field.name] = default_edit_string(field.type, now)
    return values


def record_from_form(
    table: Table,
    edited: Mapping[str, str],
    base: Optional[Record] = None,
) -> Record:
    """
    Собирает запись из строк формы. Только редактируемые поля таблицы попадают
    в data; readonly-поля и лишние ключи игнорируются. При ошибках бросает
    FormValidationError со всеми проблемными полями сразу.

    Для новой записи отсутствующее обязательное поле считается пустым. Для
    существующей (base) отсутствующие ключи оставляют прежние значения.
    """
    data: Dict[str, DynamicValue] = dict(base.data) if base is not None else {}
    errors: Dict[str, str] = {}
    for field in table.editable_fields():
        if field.name not in edited:
            if base is None and field.required:
                errors[field.name] = REQUIRED_FIELD_MESSAGE
            continue
        text = edited[field.name]
        if not text.strip():
            if field.required:
                errors[field.name] = REQUIRED_FIELD_MESSAGE
                continue
            if field.type in _CLEARABLE_TYPES:
                data[field.name] = NullValue()
                continue
        try:
            data[field.name] = from_edited_string(text, field.type)
        except ValidationFailure as e:
            errors[field.name] = e.message
    if errors:
        raise FormValidationError(errors)

    if base is None:
        return Record.new(data)
    return base.model_copy(update={"data": data})
