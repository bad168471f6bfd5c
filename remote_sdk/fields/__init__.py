# remote_sdk/fields/__init__.py
from .config import FieldWidget, FIELD_WIDGETS, PASSWORD_MASK
from .formatter import (
    to_display_string,
    from_edited_string,
    validate_edited_string,
    to_edit_string,
    default_edit_string,
    widget_for,
)
from .forms import form_values_for, record_from_form

__all__ = [
    "FieldWidget",
    "FIELD_WIDGETS",
    "PASSWORD_MASK",
    "to_display_string",
    "from_edited_string",
    "validate_edited_string",
    "to_edit_string",
    "default_edit_string",
    "widget_for",
    "form_values_for",
    "record_from_form",
]
