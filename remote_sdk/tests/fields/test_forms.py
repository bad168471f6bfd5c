# remote_sdk/tests/fields/test_forms.py
from datetime import datetime

import pytest

from remote_sdk.exceptions import FormValidationError
from remote_sdk.fields.forms import form_values_for, record_from_form
from remote_sdk.schemas.record import parse_record
from remote_sdk.schemas.schema import Table
from remote_sdk.schemas.values import BoolValue, FloatValue, IntValue, MapValue, NullValue, StringValue

NOW = datetime(2024, 3, 5, 10, 30, 0)


def test_new_record_form_gets_defaults_for_editable_fields(users_table: Table):
    values = form_values_for(users_table, now=NOW)

    assert values["is_active"] == "false"
    assert values["birthday"] == "2024-03-05"
    assert values["name"] == ""
    # readonly-поля без значения в форму не попадают
    assert "id" not in values
    assert "last_login" not in values


def test_edit_form_uses_record_values(users_table: Table):
    record = parse_record(
        b'{"id": 1, "name": "Alice", "is_active": 1, "age": 30, "last_login": "2024-03-01T09:00:00Z", "extra_json": {"a": 1}}'
    )
    values = form_values_for(users_table, record, now=NOW)

    assert values["name"] == "Alice"
    assert values["is_active"] == "true"
    assert values["age"] == "30"
    assert values["last_login"] == "2024-03-01T09:00:00Z"
    assert values["extra_json"] == '{\n  "a": 1\n}'
    assert values["birthday"] == "2024-03-05"


def test_record_from_form_parses_each_field(users_table: Table):
    record = record_from_form(users_table, {
        "name": "Bob",
        "email": "bob@example.com",
        "age": "41",
        "balance": "12.5",
        "is_active": "yes",
        "birthday": "",
        "extra_json": '{"a": 1}',
        "id": "999",
        "unknown": "ignored",
    })

    assert record.server_id is None
    assert record.data["name"] == StringValue(value="Bob")
    assert record.data["age"] == IntValue(value=41)
    assert record.data["balance"] == FloatValue(value=12.5)
    assert record.data["is_active"] == BoolValue(value=True)
    assert record.data["birthday"] == NullValue()
    assert record.data["extra_json"] == MapValue(entries={"a": IntValue(value=1)})
    assert "id" not in record.data
    assert "unknown" not in record.data


def test_record_from_form_collects_all_errors(users_table: Table):
    with pytest.raises(FormValidationError) as exc_info:
        record_from_form(users_table, {"name": " ", "email": "x@y.z", "age": "old", "is_active": "maybe"})

    assert set(exc_info.value.errors) == {"name", "age", "is_active"}
    assert exc_info.value.errors["name"] == "Обязательное поле"


def test_record_from_form_on_existing_record_keeps_identity(users_table: Table):
    original = parse_record(b'{"id": 7, "name": "Old", "age": 20}')
    updated = record_from_form(users_table, {"name": "New"}, base=original)

    assert updated.local_id == original.local_id
    assert updated.server_id == "7"
    assert updated.data["name"] == StringValue(value="New")
    assert updated.data["age"] == IntValue(value=20)
    assert original.data["name"] == StringValue(value="Old")


def test_new_record_requires_missing_required_fields(users_table: Table):
    with pytest.raises(FormValidationError) as exc_info:
        record_from_form(users_table, {"age": "3"})

    assert exc_info.value.errors == {"name": "Обязательное поле", "email": "Обязательное поле"}


def test_new_record_skips_missing_optional_fields(users_table: Table):
    record = record_from_form(users_table, {"name": "Bob", "email": "bob@example.com"})

    assert set(record.data) == {"name", "email"}


def test_existing_record_may_omit_required_fields(users_table: Table):
    original = parse_record(b'{"id": 7, "name": "Old", "email": "old@example.com"}')
    updated = record_from_form(users_table, {"age": "21"}, base=original)

    assert updated.data["name"] == StringValue(value="Old")
    assert updated.data["age"] == IntValue(value=21)


def test_cleared_optional_fields(users_table: Table):
    original = parse_record(b'{"id": 7, "name": "Old", "email": "o@example.com", "age": 20, "is_active": true, "extra_json": {"a": 1}}')
    updated = record_from_form(users_table, {"age": " ", "is_active": "", "extra_json": ""}, base=original)

    assert updated.data["age"] == NullValue()
    assert updated.data["is_active"] == NullValue()
    assert updated.data["extra_json"] == StringValue(value="")
