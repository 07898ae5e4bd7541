"""A System that can only be read from."""

from __future__ import annotations

from typing import Any

from .paths import AbsPath
from .system import Command, NoUpdateSystemMixin, System


class ReadOnlySystem(NoUpdateSystemMixin, System):
    """Wraps a System, passing reads through and refusing every update."""

    def __init__(self, system: System) -> None:
        self._system = system

    @property
    def root(self) -> str | None:
        return self._system.root

    def glob(self, pattern: str) -> list[str]:
        return self._system.glob(pattern)

    def idempotent_cmd_combined_output(self, cmd: Command) -> bytes:
        return self._system.idempotent_cmd_combined_output(cmd)

    def idempotent_cmd_output(self, cmd: Command) -> bytes:
        return self._system.idempotent_cmd_output(cmd)

    def lstat(self, name: AbsPath) -> Any:
        return self._system.lstat(name)

    def raw_path(self, path: AbsPath) -> AbsPath:
        return self._system.raw_path(path)

    def read_dir(self, name: AbsPath) -> list[str]:
        return self._system.read_dir(name)

    def read_file(self, name: AbsPath) -> bytes:
        return self._system.read_file(name)

    def readlink(self, name: AbsPath) -> str:
        return self._system.readlink(name)

    def stat(self, name: AbsPath) -> Any:
        return self._system.stat(name)