import json

import pytest

from json_encoder import encode_json


def test_scalars():
    assert encode_json(None) == "null"
    assert encode_json(True) == "true"
    assert encode_json(False) == "false"
    assert encode_json(42) == "42"
    assert encode_json(1.5) == "1.5"
    assert encode_json("hi") == '"hi"'


def test_string_escapes():
    assert encode_json('a"b\\c\nd\re') == '"a\\"b\\\\c\\nd\\re"'


def test_nested_structures_keep_order():
    value = {"z": 1, "a": [True, None, {"k": "v"}], "m": ()}
    assert encode_json(value) == '{"z":1,"a":[true,null,{"k":"v"}],"m":[]}'


@pytest.mark.parametrize(
    "text",
    ["plain", "quote \" and \\ slash", "line\nbreak\r\n", "tab\there", "\x00\x1f", "Ünïcødé ✓"],
)
def test_strings_round_trip_through_json_parser(text):
    assert json.loads(encode_json({"value": text})) == {"value": text}


@pytest.mark.parametrize("value", [object(), b"bytes", {1: "int key"}, {"s": {1, 2}}])
def test_unsupported_values_raise_type_error(value):
    with pytest.raises(TypeError):
        encode_json(value)


def test_non_finite_float_is_rejected():
    with pytest.raises(ValueError):
        encode_json(float("nan"))
