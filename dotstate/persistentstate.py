"""Persistent key/value state organised in buckets."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .formats import JSON_FORMAT

CONFIG_STATE_BUCKET = b"configState"
ENTRY_STATE_BUCKET = b"entryState"
SCRIPT_STATE_BUCKET = b"scriptState"

_STATE_FORMAT = JSON_FORMAT

BytesLike = bytes | bytearray | str


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected bytes or str, got {type(value).__name__}")


def _check_bytes(*values: BytesLike) -> None:
    for value in values:
        _as_bytes(value)


class PersistentState(ABC):
    """A store of byte values addressed by bucket and key."""

    closed: bool = False

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the state."""

    @abstractmethod
    def copy_to(self, other: PersistentState) -> None:
        """Copy every bucket, key and value into other."""

    @abstractmethod
    def data(self) -> Any:
        """Return the raw contents of the state."""

    @abstractmethod
    def delete(self, bucket: BytesLike, key: BytesLike) -> None:
        """Remove key from bucket, if present."""

    @abstractmethod
    def for_each(self, bucket: BytesLike, fn: Callable[[bytes, bytes], None]) -> None:
        """Call fn with every key and value in bucket; exceptions from fn propagate."""

    @abstractmethod
    def get(self, bucket: BytesLike, key: BytesLike) -> bytes | None:
        """Return the value of key in bucket, or None."""

    @abstractmethod
    def set(self, bucket: BytesLike, key: BytesLike, value: bytes) -> None:
        """Store value under key in bucket."""

    def __enter__(self) -> PersistentState:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MockPersistentState(PersistentState):
    """An in-memory persistent state.

    Closing only records that the state was closed; its buckets stay readable.
    """

    def __init__(self) -> None:
        self._buckets: dict[bytes, dict[bytes, bytes]] = {}

    def close(self) -> None:
        self.closed = True

    def copy_to(self, other: PersistentState) -> None:
        for bucket, bucket_map in self._buckets.items():
            for key, value in bucket_map.items():
                other.set(bucket, key, value)

    def data(self) -> dict[bytes, dict[bytes, bytes]]:
        return self._buckets

    def delete(self, bucket: BytesLike, key: BytesLike) -> None:
        bucket_map = self._buckets.get(_as_bytes(bucket))
        if bucket_map is not None:
            bucket_map.pop(_as_bytes(key), None)

    def for_each(self, bucket: BytesLike, fn: Callable[[bytes, bytes], None]) -> None:
        for key, value in list(self._buckets.get(_as_bytes(bucket), {}).items()):
            fn(key, value)

    def get(self, bucket: BytesLike, key: BytesLike) -> bytes | None:
        bucket_map = self._buckets.get(_as_bytes(bucket))
        if bucket_map is None:
            return None
        return bucket_map.get(_as_bytes(key))

    def set(self, bucket: BytesLike, key: BytesLike, value: bytes) -> None:
        self._buckets.setdefault(_as_bytes(bucket), {})[_as_bytes(key)] = value


class NullPersistentState(PersistentState):
    """An empty state: reads return nothing and writes are discarded.

    Arguments are still checked, so misuse fails the same way as with a
    real state.
    """

    def close(self) -> None:
        self.closed = True

    def copy_to(self, other: PersistentState) -> None:
        if not isinstance(other, PersistentState):
            raise TypeError(f"expected a PersistentState, got {type(other).__name__}")

    def data(self) -> None:
        return None

    def delete(self, bucket: BytesLike, key: BytesLike) -> None:
        _check_bytes(bucket, key)

    def for_each(self, bucket: BytesLike, fn: Callable[[bytes, bytes], None]) -> None:
        _check_bytes(bucket)
        if not callable(fn):
            raise TypeError(f"expected a callable, got {type(fn).__name__}")

    def get(self, bucket: BytesLike, key: BytesLike) -> bytes | None:
        _check_bytes(bucket, key)
        return None

    def set(self, bucket: BytesLike, key: BytesLike, value: bytes) -> None:
        _check_bytes(bucket, key, value)


def _bucket_data(state: PersistentState, bucket: bytes) -> dict[str, Any]:
    result: dict[str, Any] = {}

    def collect(key: bytes, value: bytes) -> None:
        result[key.decode("utf-8")] = _STATE_FORMAT.unmarshal(value)

    state.for_each(bucket, collect)
    return result


def persistent_state_data(state: PersistentState) -> dict[str, dict[str, Any]]:
    """Return the decoded contents of the known buckets of state."""
    return {
        "configState": _bucket_data(state, CONFIG_STATE_BUCKET),
        "entryState": _bucket_data(state, ENTRY_STATE_BUCKET),
        "scriptState": _bucket_data(state, SCRIPT_STATE_BUCKET),
    }


def persistent_state_get(state: PersistentState, bucket: BytesLike, key: BytesLike) -> Any:
    """Return the decoded value of key in bucket, or None if it is absent."""
    data = state.get(bucket, key)
    if data is None:
        return None
    return _STATE_FORMAT.unmarshal(data)


def persistent_state_set(
    state: PersistentState, bucket: BytesLike, key: BytesLike, value: Any
) -> None:
    """Encode value and store it under key in bucket."""
    state.set(bucket, key, _STATE_FORMAT.marshal(value))