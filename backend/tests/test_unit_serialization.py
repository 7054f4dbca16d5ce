"""
Unit tests for the JSON serialization helpers.
"""
import json
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum

import pytest
from pydantic import BaseModel

from core.errors import SerializationError
from core.serialization import JsonSerializable, as_structured, escape_js_chars, to_json_text


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class User(BaseModel):
    name: str
    email: str
    joined: date


class Tagged:
    def __json__(self, options):
        return {"tags": {"b", "a"} if options.get("as_set") else ["a"], "when": date(2024, 1, 2)}


class TestAsStructured:
    def test_scalars(self):
        assert as_structured(None) is None
        assert as_structured(True) is True
        assert as_structured(3) == 3
        assert as_structured("x") == "x"
        assert as_structured(1.5) == 1.5

    def test_non_finite_floats_become_null(self):
        assert as_structured(float("nan")) is None
        assert as_structured([float("inf")]) == [None]

    def test_enum_keys_encoded(self):
        assert as_structured({Color.RED: 1}) == {"red": 1}

    def test_tuple_and_set(self):
        assert as_structured((1, 2)) == [1, 2]
        assert as_structured(frozenset({1})) == [1]

    def test_temporal_and_misc_types(self):
        uid = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert as_structured(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
        assert as_structured(date(2024, 1, 2)) == "2024-01-02"
        assert as_structured(time(3, 4)) == "03:04:00"
        assert as_structured(Decimal("1.10")) == 1.1
        assert as_structured(Decimal("3")) == 3
        assert as_structured(uid) == "12345678-1234-5678-1234-567812345678"
        assert as_structured(Color.RED) == "red"

    def test_dataclass(self):
        assert as_structured(Point(1, 2)) == {"x": 1, "y": 2}

    def test_pydantic_model_honours_except(self):
        user = User(name="a", email="a@example.com", joined=date(2024, 1, 2))
        assert as_structured(user) == {"name": "a", "email": "a@example.com", "joined": "2024-01-02"}
        assert as_structured(user, {"except": ["email"]}) == {"name": "a", "joined": "2024-01-02"}

    def test_hook_result_is_converted(self):
        assert as_structured(Tagged()) == {"tags": ["a"], "when": "2024-01-02"}

    def test_hook_gets_copy_of_options(self):
        seen = {}

        class Mutating:
            def __json__(self, options):
                options["touched"] = True
                seen.update(options)
                return None

        opts = {"except": ["x"]}
        as_structured(Mutating(), opts)
        assert opts == {"except": ["x"]}
        assert seen["touched"] is True

    def test_nested_values_get_no_options(self):
        class Inner:
            def __json__(self, options):
                return options

        assert as_structured({"inner": Inner()}, {"except": ["a"]}) == {"inner": {}}

    def test_nested_hook_is_called(self):
        assert as_structured([Tagged()]) == [{"tags": ["a"], "when": "2024-01-02"}]

    def test_except_ignored_for_plain_mapping(self):
        assert as_structured({"a": 1, "email": 2}, {"except": ["email"]}) == {"a": 1, "email": 2}

    def test_nested_model_non_finite_float(self):
        class Reading(BaseModel):
            value: float

        assert as_structured({"r": Reading(value=float("nan"))}) == {"r": {"value": None}}

    def test_protocol_is_runtime_checkable(self):
        assert isinstance(Tagged(), JsonSerializable)
        assert not isinstance({}, JsonSerializable)

    def test_unsupported_type_raises(self):
        with pytest.raises(SerializationError, match="not JSON serializable"):
            as_structured(object())

    def test_serialization_error_is_type_error(self):
        with pytest.raises(TypeError):
            as_structured({"bad": object()})

    def test_unsupported_key_raises(self):
        with pytest.raises(SerializationError):
            as_structured({(1, 2): "x"})


class TestToJsonText:
    def test_compact_output(self):
        assert to_json_text({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'

    def test_non_ascii_not_escaped(self):
        assert to_json_text({"k": "é\u2028"}) == '{"k":"é\u2028"}'

    def test_scalar_keys_stringified(self):
        text = to_json_text({1: "a", None: "b", False: "c", Color.RED: "d"})
        assert text == '{"1":"a","null":"b","false":"c","red":"d"}'

    def test_nan_serialized_as_null(self):
        assert to_json_text({"x": float("nan")}) == '{"x":null}'

    def test_key_order_preserved(self):
        assert to_json_text({"b": 1, "a": 2}) == '{"b":1,"a":2}'


class TestEscapeJsChars:
    def test_escapes_all_special_chars(self):
        assert escape_js_chars("\u2028\u2029<>&") == "\\u2028\\u2029\\u003c\\u003e\\u0026"

    def test_leaves_other_text_alone(self):
        assert escape_js_chars('{"a":"b c"}') == '{"a":"b c"}'

    def test_idempotent_and_decodes_to_original(self):
        text = json.dumps({"k": "\u2028a&b<c>\u2029"}, ensure_ascii=False)
        once = escape_js_chars(text)
        assert once != text
        assert escape_js_chars(once) == once
        assert json.loads(once) == {"k": "\u2028a&b<c>\u2029"}
