"""Serialization formats and a hex-encoded bytes type."""

from __future__ import annotations

import binascii
import json
import tomllib
from abc import ABC, abstractmethod
from typing import Any

import tomli_w
import yaml


class HexBytes(bytes):
    """Bytes that serialize as a lowercase hex string."""

    def to_text(self) -> str:
        """Return the hex encoding of these bytes."""
        return self.hex()

    @classmethod
    def from_text(cls, text: str | bytes) -> HexBytes:
        """Decode a hex string, raising ValueError if it is not valid hex."""
        if isinstance(text, str):
            text = text.encode("ascii")
        if not text:
            return cls(b"")
        return cls(binascii.unhexlify(text))

    def __repr__(self) -> str:
        return f"HexBytes({bytes(self)!r})"


def _plain(value: Any) -> Any:
    """Replace HexBytes anywhere in value with their text form."""
    if isinstance(value, HexBytes):
        return value.to_text()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class Format(ABC):
    """A serialization format."""

    name: str = ""

    @abstractmethod
    def marshal(self, value: Any) -> bytes:
        """Serialize value."""

    @abstractmethod
    def unmarshal(self, data: bytes | str) -> Any:
        """Deserialize data."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _json_default(value: Any) -> Any:
    if isinstance(value, HexBytes):
        return value.to_text()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JSONFormat(Format):
    """The JSON serialization format, indented by two spaces."""

    name = "json"

    def marshal(self, value: Any) -> bytes:
        text = json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)
        return (text + "\n").encode("utf-8")

    def unmarshal(self, data: bytes | str) -> Any:
        return json.loads(data)


class TOMLFormat(Format):
    """The TOML serialization format."""

    name = "toml"

    def marshal(self, value: Any) -> bytes:
        return tomli_w.dumps(_plain(value)).encode("utf-8")

    def unmarshal(self, data: bytes | str) -> Any:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return tomllib.loads(data)


class _YAMLDumper(yaml.SafeDumper):
    pass


def _represent_hex_bytes(dumper: yaml.SafeDumper, value: HexBytes) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", value.to_text(), style='"')


_YAMLDumper.add_representer(HexBytes, _represent_hex_bytes)


class YAMLFormat(Format):
    """The YAML serialization format."""

    name = "yaml"

    def marshal(self, value: Any) -> bytes:
        text = yaml.dump(
            value,
            Dumper=_YAMLDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        return text.encode("utf-8")

    def unmarshal(self, data: bytes | str) -> Any:
        return yaml.safe_load(data)


JSON_FORMAT = JSONFormat()
TOML_FORMAT = TOMLFormat()
YAML_FORMAT = YAMLFormat()

FORMATS: dict[str, Format] = {
    "json": JSON_FORMAT,
    "toml": TOML_FORMAT,
    "yaml": YAML_FORMAT,
}