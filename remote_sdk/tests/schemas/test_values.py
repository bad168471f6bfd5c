# remote_sdk/tests/schemas/test_values.py
import json

import pytest

from remote_sdk.exceptions import DecodeError, EncodeError
from remote_sdk.schemas.values import (
    BoolValue,
    FloatValue,
    IntValue,
    ListValue,
    MapValue,
    NullValue,
    StringValue,
    decode_value,
    encode_value,
    from_python,
    is_scalar,
    to_python,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"null", NullValue()),
        (b"true", BoolValue(value=True)),
        (b"false", BoolValue(value=False)),
        (b"42", IntValue(value=42)),
        (b"-7", IntValue(value=-7)),
        (b"3.5", FloatValue(value=3.5)),
        (b"1.0", FloatValue(value=1.0)),
        (b"1e3", FloatValue(value=1000.0)),
        (b'"true"', StringValue(value="true")),  # строка "true" не становится bool
        (b'"42"', StringValue(value="42")),
        ('"Привет"'.encode("utf-8"), StringValue(value="Привет")),
    ],
)
def test_decode_scalars(raw: bytes, expected):
    assert decode_value(raw) == expected


@pytest.mark.parametrize(
    "value",
    [
        NullValue(),
        BoolValue(value=True),
        IntValue(value=0),
        IntValue(value=2 ** 63 - 1),
        IntValue(value=-(2 ** 63)),
        FloatValue(value=0.1),
        FloatValue(value=2.0),
        FloatValue(value=-1.5e-300),
        StringValue(value=""),
        StringValue(value="line\nbreak \"quoted\""),
        ListValue(items=(IntValue(value=1), StringValue(value="a"), NullValue())),
        MapValue(entries={"nested": MapValue(entries={"x": FloatValue(value=1.25)})}),
    ],
)
def test_round_trip_preserves_value_and_kind(value):
    decoded = decode_value(encode_value(value))
    assert decoded == value
    assert decoded.kind == value.kind


def test_integer_never_round_trips_as_float():
    encoded = encode_value(IntValue(value=5))
    assert encoded == b"5"
    assert isinstance(decode_value(encoded), IntValue)


def test_float_with_integral_value_stays_float():
    encoded = encode_value(FloatValue(value=5.0))
    assert encoded == b"5.0"
    assert isinstance(decode_value(encoded), FloatValue)


def test_int_and_float_values_are_not_equal():
    assert IntValue(value=1) != FloatValue(value=1.0)


def test_integer_outside_int64_decodes_as_float():
    decoded = decode_value(str(2 ** 70).encode())
    assert isinstance(decoded, FloatValue)
    assert decoded.value == float(2 ** 70)


def test_decode_composites():
    decoded = decode_value(b'{"tags": ["a", 1, true], "meta": {"k": null}}')
    assert decoded == MapValue(
        entries={
            "tags": ListValue(items=(StringValue(value="a"), IntValue(value=1), BoolValue(value=True))),
            "meta": MapValue(entries={"k": NullValue()}),
        }
    )


@pytest.mark.parametrize("raw", [b"[1, 2]", b'{"a": 1}'])
def test_scalar_layer_rejects_composites(raw: bytes):
    with pytest.raises(DecodeError):
        decode_value(raw, allow_composite=False)


@pytest.mark.parametrize("raw", [b"NaN", b"Infinity", b"-Infinity", b"{", b"", b"\xff"])
def test_decode_rejects_invalid_input(raw: bytes):
    with pytest.raises(DecodeError):
        decode_value(raw)


def test_from_python_and_to_python():
    obj = {"a": [1, 2.5, "x", None, False], "b": {"c": True}}
    value = from_python(obj)
    assert isinstance(value, MapValue)
    assert to_python(value) == obj
    assert json.loads(encode_value(value)) == obj


def test_from_python_tuple_becomes_list():
    assert from_python((1, 2)) == ListValue(items=(IntValue(value=1), IntValue(value=2)))


@pytest.mark.parametrize("obj", [object(), {1, 2}, float("nan"), float("inf")])
def test_from_python_unsupported_is_encode_error(obj):
    with pytest.raises(EncodeError):
        from_python(obj)


def test_to_python_unknown_object_is_encode_error():
    with pytest.raises(EncodeError):
        to_python("not a dynamic value")  # type: ignore[arg-type]


def test_is_scalar():
    assert is_scalar(StringValue(value="x"))
    assert is_scalar(NullValue())
    assert not is_scalar(ListValue())
    assert not is_scalar(MapValue())


def test_values_are_frozen():
    value = IntValue(value=1)
    with pytest.raises(Exception):
        value.value = 2  # type: ignore[misc]
