# remote_sdk/fields/config.py
from typing import Dict, FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict

from remote_sdk.schemas.schema import FieldType

PASSWORD_MASK = "••••••••"

# Формат даты в поле ввода (yyyy-MM-dd)
DATE_EDIT_FORMAT = "%Y-%m-%d"
DATE_DISPLAY_FORMAT = "medium"
DATETIME_DISPLAY_FORMAT = "short"
DECIMAL_DISPLAY_DIGITS = 2

BOOLEAN_TRUE_WORDS: FrozenSet[str] = frozenset({"true", "1", "yes"})
BOOLEAN_FALSE_WORDS: FrozenSet[str] = frozenset({"false", "0", "no"})

# Подписи Да/Нет по языку локали; неизвестный язык -> английский
BOOLEAN_LABELS: Dict[str, Tuple[str, str]] = {
    "ru": ("Да", "Нет"),
    "en": ("Yes", "No"),
    "uk": ("Так", "Ні"),
    "de": ("Ja", "Nein"),
}
DEFAULT_BOOLEAN_LABELS = BOOLEAN_LABELS["en"]


class FieldWidget(BaseModel):
    """Описание виджета ввода для типа поля. Само отображение - забота UI."""

    input_kind: str
    icon: str
    placeholder: str
    help_text: str
    multiline: bool = False
    secure: bool = False

    model_config = ConfigDict(frozen=True)


FIELD_WIDGETS: Dict[FieldType, FieldWidget] = {
    FieldType.STRING: FieldWidget(
        input_kind="text", icon="textformat",
        placeholder="Введите текст", help_text="Текстовое значение",
    ),
    FieldType.TEXT: FieldWidget(
        input_kind="textarea", icon="textformat",
        placeholder="Введите длинный текст", help_text="Многострочный текст", multiline=True,
    ),
    FieldType.INTEGER: FieldWidget(
        input_kind="number", icon="number",
        placeholder="Введите число", help_text="Введите целое число",
    ),
    FieldType.DECIMAL: FieldWidget(
        input_kind="number", icon="number",
        placeholder="Введите десятичное число",
        help_text="Введите десятичное число (например: 123.45)",
    ),
    FieldType.BOOLEAN: FieldWidget(
        input_kind="toggle", icon="checkmark.circle",
        placeholder="Выберите значение", help_text="Выберите Да или Нет",
    ),
    FieldType.DATE: FieldWidget(
        input_kind="date", icon="calendar",
        placeholder="Выберите дату", help_text="Дата в формате ГГГГ-ММ-ДД",
    ),
    FieldType.DATETIME: FieldWidget(
        input_kind="datetime", icon="clock",
        placeholder="Выберите дату и время", help_text="Дата и время в формате ISO-8601",
    ),
    FieldType.EMAIL: FieldWidget(
        input_kind="email", icon="envelope",
        placeholder="example@domain.com", help_text="Введите корректный email адрес",
    ),
    FieldType.URL: FieldWidget(
        input_kind="url", icon="link",
        placeholder="https://example.com", help_text="Введите полный URL с протоколом",
    ),
    FieldType.PASSWORD: FieldWidget(
        input_kind="secure", icon="lock",
        placeholder="Введите пароль", help_text="Введите пароль", secure=True,
    ),
    FieldType.JSON: FieldWidget(
        input_kind="json", icon="curlybraces",
        placeholder="Введите JSON", help_text="Введите валидный JSON", multiline=True,
    ),
}

REQUIRED_FIELD_MESSAGE = "Обязательное поле"
