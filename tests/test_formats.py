import json

import pytest

from dotstate.formats import (
    FORMATS,
    HexBytes,
    JSONFormat,
    TOMLFormat,
    YAMLFormat,
)


def test_formats_registry():
    assert {"json", "toml", "yaml"} <= set(FORMATS)
    assert isinstance(FORMATS["json"], JSONFormat)
    assert isinstance(FORMATS["toml"], TOMLFormat)
    assert isinstance(FORMATS["yaml"], YAMLFormat)
    for fmt in (JSONFormat(), TOMLFormat(), YAMLFormat()):
        assert FORMATS[fmt.name].name == fmt.name
        assert fmt.unmarshal(fmt.marshal({"key": "value"})) == {"key": "value"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (b"", b'""\n'),
        (b"\x00", b'"00"\n'),
        (b"\x00\x01\x02\x03", b'"00010203"\n'),
    ],
)
@pytest.mark.parametrize("fmt", [JSONFormat(), YAMLFormat()], ids=lambda f: f.name)
def test_hex_bytes_round_trip(fmt, value, expected):
    actual = fmt.marshal(HexBytes(value))
    assert actual == expected
    assert HexBytes.from_text(fmt.unmarshal(actual)) == value


def test_hex_bytes_text():
    assert HexBytes(b"\x00\x01\x02\x03").to_text() == "00010203"
    assert HexBytes.from_text(b"00010203") == b"\x00\x01\x02\x03"
    assert HexBytes.from_text("") == b""


@pytest.mark.parametrize("text", ["0", "zz", "00 01"])
def test_hex_bytes_invalid(text):
    with pytest.raises(ValueError):
        HexBytes.from_text(text)


def test_json_marshal_indented_with_newline():
    data = JSONFormat().marshal({"a": [1, 2], "b": {"c": "d"}})
    assert data.endswith(b"\n")
    assert b'\n  "a": [' in data
    assert json.loads(data) == {"a": [1, 2], "b": {"c": "d"}}


def test_json_nested_hex_bytes():
    fmt = JSONFormat()
    assert fmt.unmarshal(fmt.marshal({"sum": HexBytes(b"\xab")})) == {"sum": "ab"}


def test_json_unmarshal_invalid():
    with pytest.raises(ValueError):
        JSONFormat().unmarshal(b"{not json")


def test_toml_round_trip():
    fmt = TOMLFormat()
    value = {"a": 1, "b": {"c": "d", "e": [1, 2, 3]}}
    assert fmt.unmarshal(fmt.marshal(value)) == value


def test_toml_hex_bytes():
    fmt = TOMLFormat()
    assert fmt.unmarshal(fmt.marshal({"h": HexBytes(b"\x01")})) == {"h": "01"}


def test_yaml_round_trip():
    fmt = YAMLFormat()
    value = {"a": 1, "b": {"c": "d", "e": [1, 2, 3]}}
    assert fmt.unmarshal(fmt.marshal(value)) == value