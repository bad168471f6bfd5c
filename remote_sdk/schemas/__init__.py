# remote_sdk/schemas/__init__.py

from .values import (
    DynamicValue,
    NullValue,
    BoolValue,
    IntValue,
    FloatValue,
    StringValue,
    ListValue,
    MapValue,
    decode_value,
    encode_value,
    from_python,
    to_python,
)
from .schema import FieldType, SchemaField, Table, Schema, parse_schema
from .record import Record, parse_record, encode_create, encode_update
from .pagination import PaginationInfo, PaginatedResponse, parse_page
from .validation import FieldValidationError, ServerValidationError, parse_validation_error
from .company import Company, CompanyRegistry

__all__ = [
    "DynamicValue",
    "NullValue",
    "BoolValue",
    "IntValue",
    "FloatValue",
    "StringValue",
    "ListValue",
    "MapValue",
    "decode_value",
    "encode_value",
    "from_python",
    "to_python",
    "FieldType",
    "SchemaField",
    "Table",
    "Schema",
    "parse_schema",
    "Record",
    "parse_record",
    "encode_create",
    "encode_update",
    "PaginationInfo",
    "PaginatedResponse",
    "parse_page",
    "FieldValidationError",
    "ServerValidationError",
    "parse_validation_error",
    "Company",
    "CompanyRegistry",
]
