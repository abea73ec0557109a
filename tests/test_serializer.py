from __future__ import annotations

import copy

import pytest
from pydantic import BaseModel
from toon_tabular import (
    ToonConfig,
    ToonDecodeError,
    ToonEncodeError,
    ToonSerializer,
    decode_json,
    json_to_toon,
    serialize,
)
from toon_tabular.values import format_number


def test_end_to_end_users_example():
    src = ('{"users":[{"id":1,"name":"Alice","role":"admin","active":true},'
           '{"id":2,"name":"Bob","role":"developer","active":true}]}')
    assert json_to_toon(src) == (
        "users[2]{active,id,name,role}:\n"
        "  true, 1, Alice, admin\n"
        "  true, 2, Bob, developer"
    )


def test_root_scalars():
    assert serialize("hello") == "hello"
    assert serialize("") == '""'
    assert serialize(42) == "42"
    assert serialize(None) == "null"
    assert serialize(False) == "false"


def test_nested_mapping_keys_sorted():
    assert serialize({"b": {"y": 1, "x": "hi"}, "a": 1}) == "a: 1\nb:\n  x: hi\n  y: 1"


def test_empty_nested_mapping():
    assert serialize({"a": {}, "b": 1}) == "a:\nb: 1"


def test_quoted_keys_and_values():
    assert serialize({"first name": "true"}) == '"first name": "true"'


def test_empty_arrays():
    assert serialize({"e": []}) == "e[0]:"
    assert serialize([]) == "[0]:"


def test_inline_scalar_array():
    assert serialize({"tags": ["x", "y", "z"]}) == "tags[3]: x, y, z"
    assert serialize({"n": [1, 2, 3, 4, 5]}) == "n[5]: 1, 2, 3, 4, 5"


def test_inline_array_switches_delimiter():
    assert serialize({"tags": ["a,b", "c"]}) == 'tags[2|]: "a,b"| c'
    assert serialize({"tags": ["a,b", "c|d"]}) == 'tags[2\t]: "a,b"\t"c|d"'


def test_long_scalar_array_becomes_list():
    assert serialize({"n": [1, 2, 3, 4, 5, 6]}) == (
        "n[6]:\n  - 1\n  - 2\n  - 3\n  - 4\n  - 5\n  - 6"
    )


def test_inline_limit_is_configurable():
    out = ToonSerializer(ToonConfig(inline_array_limit=2)).serialize({"t": ["a", "b", "c"]})
    assert out == "t[3]:\n  - a\n  - b\n  - c"


def test_indent_step_is_configurable():
    out = serialize({"a": {"b": 1}}, ToonConfig(indent_step=4))
    assert out == "a:\n    b: 1"


def test_root_tabular_array():
    assert serialize([{"a": 1}, {"a": 2}]) == "[2]{a}:\n  1\n  2"


def test_tabular_with_pipe_delimiter():
    out = serialize({"rows": [{"n": "a,b", "k": 1}, {"n": "c", "k": 2}]})
    assert out == 'rows[2|]{k|n}:\n  1| "a,b"\n  2| c'


def test_tabular_with_tab_delimiter():
    out = serialize([{"a": "x,y", "b": "p|q"}])
    assert out == '[1\t]{a\tb}:\n  "x,y"\t"p|q"'


def test_nested_value_falls_back_to_list():
    data = {"items": [{"a": 1, "b": {"c": 2}}, {"x": 1}]}
    assert serialize(data) == (
        "items[2]:\n"
        "  - a: 1\n"
        "    b:\n"
        "      c: 2\n"
        "  - x: 1"
    )


def test_list_item_with_nested_first_field():
    assert serialize({"items": [{"b": {"c": 1}}, 1]}) == (
        "items[2]:\n"
        "  - b:\n"
        "      c: 1\n"
        "  - 1"
    )


def test_list_item_with_tabular_first_field():
    data = {"groups": [{"members": [{"id": 1}, {"id": 2}], "title": "x"}, "solo"]}
    assert serialize(data) == (
        "groups[2]:\n"
        "  - members[2]{id}:\n"
        "      1\n"
        "      2\n"
        "    title: x\n"
        "  - solo"
    )


def test_nested_sequences_under_bare_dash():
    assert serialize([[1, 2], [3]]) == "[2]:\n  -\n    [2]: 1, 2\n  -\n    [1]: 3"


def test_empty_objects_in_list():
    assert serialize([{}, {}]) == "[2]:\n  -\n  -"


def test_numbers():
    assert serialize({"x": 1.5, "y": 2.0, "z": 1e-7, "w": -0.0}) == "w: 0\nx: 1.5\ny: 2\nz: 0.0000001"
    assert format_number(1e16) == "1e+16"
    assert format_number(9007199254740992.0) == "9007199254740992"
    assert format_number(float("nan")) == "null"
    assert format_number(123456789012345678901234567890) == "123456789012345678901234567890"


def test_pydantic_models_are_accepted():
    class User(BaseModel):
        id: int
        name: str

    assert serialize({"users": [User(id=1, name="A"), User(id=2, name="B")]}) == (
        "users[2]{id,name}:\n  1, A\n  2, B"
    )


def test_input_is_not_mutated():
    data = {"b": [{"y": 1, "x": 2}], "a": (1, 2)}
    snapshot = copy.deepcopy(data)
    serialize(data)
    assert data == snapshot


def test_unsupported_values_raise():
    with pytest.raises(ToonEncodeError):
        serialize({"a": object()})
    with pytest.raises(ToonEncodeError):
        serialize({1: "a"})


def test_malformed_json_is_reported():
    with pytest.raises(ToonDecodeError) as exc:
        json_to_toon('{"a": ')
    assert "Failed to parse JSON" in str(exc.value)


def test_decode_json_values():
    assert decode_json('{"a": [1, 2.5, null, true, "x"]}') == {"a": [1, 2.5, None, True, "x"]}
