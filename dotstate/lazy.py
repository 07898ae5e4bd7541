"""Lazily evaluated file contents and symlink targets."""

from __future__ import annotations

import hashlib
from collections.abc import Callable


def sha256_sum(data: bytes | None) -> bytes:
    """Return the SHA-256 digest of data."""
    return hashlib.sha256(data or b"").digest()


class LazyContents:
    """File contents that are computed on first use and then cached."""

    __slots__ = ("_func", "_contents", "_error", "_sha256")

    def __init__(
        self,
        contents: bytes = b"",
        *,
        func: Callable[[], bytes] | None = None,
    ) -> None:
        self._func = func
        self._contents = contents
        self._error: BaseException | None = None
        self._sha256: bytes | None = None

    def contents(self) -> bytes:
        """Return the contents, computing them once; a failure is re-raised each time."""
        if self._func is not None:
            func, self._func = self._func, None
            try:
                self._contents = func()
            except Exception as exc:
                self._error = exc
            else:
                self._sha256 = sha256_sum(self._contents)
        if self._error is not None:
            raise self._error
        return self._contents

    def contents_sha256(self) -> bytes:
        """Return the SHA-256 digest of the contents."""
        if self._sha256 is None:
            self._sha256 = sha256_sum(self.contents())
        return self._sha256


class LazyLinkname:
    """A symlink target that is computed on first use and then cached."""

    __slots__ = ("_func", "_linkname", "_error", "_sha256")

    def __init__(
        self,
        linkname: str = "",
        *,
        func: Callable[[], str] | None = None,
    ) -> None:
        self._func = func
        self._linkname = linkname
        self._error: BaseException | None = None
        self._sha256: bytes | None = None

    def linkname(self) -> str:
        """Return the link target, computing it once; a failure is re-raised each time."""
        if self._func is not None:
            func, self._func = self._func, None
            try:
                self._linkname = func()
            except Exception as exc:
                self._error = exc
        if self._error is not None:
            raise self._error
        return self._linkname

    def linkname_sha256(self) -> bytes:
        """Return the SHA-256 digest of the link target."""
        if self._sha256 is None:
            self._sha256 = sha256_sum(self.linkname().encode("utf-8"))
        return self._sha256