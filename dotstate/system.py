"""The System interface and helpers that operate on any System."""

from __future__ import annotations

import fnmatch
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import IO, Any

from .paths import AbsPath, RelPath


@dataclass
class Command:
    """A command to run, with its input, output streams and environment."""

    args: list[str]
    input: bytes | None = None
    stdin: IO[Any] | int | None = None
    stdout: IO[Any] | int | None = None
    stderr: IO[Any] | int | None = None
    cwd: str | None = None
    env: Mapping[str, str] | None = None


class SkipDir(Exception):
    """Raised by a walk function to skip the rest of a directory."""


class ReadOnlyError(RuntimeError):
    """Raised when a read-only system is asked to make a change."""

    def __init__(self, operation: str, target: str | None = None) -> None:
        super().__init__(f"{operation}: system is read-only")
        self.operation = operation
        self.target = target


class System(ABC):
    """Reads from and writes to a filesystem, runs commands and scripts."""

    @property
    def root(self) -> str | None:
        """The directory on disk that stands for "/", or None for the real root."""
        return None

    @abstractmethod
    def chmod(self, name: AbsPath, mode: int) -> None:
        """Set the permissions of name."""

    @abstractmethod
    def glob(self, pattern: str) -> list[str]:
        """Return the paths matching pattern."""

    @abstractmethod
    def idempotent_cmd_combined_output(self, cmd: Command) -> bytes:
        """Run cmd, which changes nothing, and return its stdout and stderr."""

    @abstractmethod
    def idempotent_cmd_output(self, cmd: Command) -> bytes:
        """Run cmd, which changes nothing, and return its stdout."""

    @abstractmethod
    def lstat(self, name: AbsPath) -> Any:
        """Return the status of name without following symlinks."""

    @abstractmethod
    def mkdir(self, name: AbsPath, perm: int) -> None:
        """Create the directory name."""

    @abstractmethod
    def raw_path(self, path: AbsPath) -> AbsPath:
        """Return the path on disk that path stands for."""

    @abstractmethod
    def read_dir(self, name: AbsPath) -> list[str]:
        """Return the sorted names of the entries of directory name."""

    @abstractmethod
    def read_file(self, name: AbsPath) -> bytes:
        """Return the contents of name."""

    @abstractmethod
    def readlink(self, name: AbsPath) -> str:
        """Return the target of the symlink name."""

    @abstractmethod
    def remove_all(self, name: AbsPath) -> None:
        """Remove name and everything below it; a missing name is not an error."""

    @abstractmethod
    def rename(self, oldpath: AbsPath, newpath: AbsPath) -> None:
        """Rename oldpath to newpath."""

    @abstractmethod
    def run_cmd(self, cmd: Command) -> None:
        """Run cmd."""

    @abstractmethod
    def run_script(self, scriptname: RelPath, dir: AbsPath, data: bytes) -> None:
        """Run the script data, named scriptname, in dir."""

    @abstractmethod
    def stat(self, name: AbsPath) -> Any:
        """Return the status of name, following symlinks."""

    @abstractmethod
    def write_file(self, filename: AbsPath, data: bytes, perm: int) -> None:
        """Write data to filename with permissions perm."""

    @abstractmethod
    def write_symlink(self, oldname: str, newname: AbsPath) -> None:
        """Make newname a symlink to oldname."""


def _check_command(cmd: Command) -> None:
    if not cmd.args:
        raise ValueError("empty command")


class EmptySystemMixin:
    """Read operations of a system that holds nothing.

    Nothing matches a glob, commands are not run and produce no output,
    and every lookup fails with FileNotFoundError.
    """

    def glob(self, pattern: str) -> list[str]:
        return fnmatch.filter([], pattern)

    def idempotent_cmd_combined_output(self, cmd: Command) -> bytes:
        _check_command(cmd)
        return b""

    def idempotent_cmd_output(self, cmd: Command) -> bytes:
        _check_command(cmd)
        return b""

    def lstat(self, name: AbsPath) -> Any:
        raise FileNotFoundError(str(name))

    def raw_path(self, path: AbsPath) -> AbsPath:
        return AbsPath(path)

    def read_dir(self, name: AbsPath) -> list[str]:
        raise FileNotFoundError(str(name))

    def read_file(self, name: AbsPath) -> bytes:
        raise FileNotFoundError(str(name))

    def readlink(self, name: AbsPath) -> str:
        raise FileNotFoundError(str(name))

    def stat(self, name: AbsPath) -> Any:
        raise FileNotFoundError(str(name))


class NoUpdateSystemMixin:
    """Update operations that raise ReadOnlyError naming what was targeted."""

    def chmod(self, name: AbsPath, mode: int) -> None:
        raise ReadOnlyError("chmod", str(name))

    def mkdir(self, name: AbsPath, perm: int) -> None:
        raise ReadOnlyError("mkdir", str(name))

    def remove_all(self, name: AbsPath) -> None:
        raise ReadOnlyError("remove_all", str(name))

    def rename(self, oldpath: AbsPath, newpath: AbsPath) -> None:
        raise ReadOnlyError("rename", f"{oldpath} -> {newpath}")

    def run_cmd(self, cmd: Command) -> None:
        raise ReadOnlyError("run_cmd", " ".join(cmd.args))

    def run_script(self, scriptname: RelPath, dir: AbsPath, data: bytes) -> None:
        raise ReadOnlyError("run_script", str(scriptname))

    def write_file(self, filename: AbsPath, data: bytes, perm: int) -> None:
        raise ReadOnlyError("write_file", str(filename))

    def write_symlink(self, oldname: str, newname: AbsPath) -> None:
        raise ReadOnlyError("write_symlink", str(newname))


def mkdir_all(system: System, abs_path: str, perm: int) -> None:
    """Create abs_path and any missing parents in system."""
    abs_path = AbsPath(abs_path)
    try:
        system.mkdir(abs_path, perm)
    except FileExistsError:
        # The path exists; it is only an error if it is not a directory.
        info = system.stat(abs_path)
        if not stat.S_ISDIR(info.st_mode):
            raise
    except FileNotFoundError:
        parent = abs_path.dir()
        if parent in ("/", ".") or parent == abs_path:
            raise
        mkdir_all(system, parent, perm)
        system.mkdir(abs_path, perm)


WalkFunc = Callable[[AbsPath, Any], None]


def _walk(system: System, path: AbsPath, info: Any, walk_fn: WalkFunc) -> None:
    is_dir = stat.S_ISDIR(info.st_mode)
    try:
        walk_fn(path, info)
    except SkipDir:
        if is_dir:
            return
        raise
    if not is_dir:
        return
    for name in system.read_dir(path):
        child = path.join(name)
        try:
            _walk(system, child, system.lstat(child), walk_fn)
        except SkipDir:
            # A non-directory asked to skip the rest of this directory.
            break


def walk(system: System, root_abs_path: str, walk_fn: WalkFunc) -> None:
    """Call walk_fn with every path below root_abs_path, in lexical order.

    walk_fn receives the path and its lstat result and may raise SkipDir:
    on a directory this skips its contents, on a file the rest of the
    containing directory.
    """
    root = AbsPath(root_abs_path)
    try:
        _walk(system, root, system.lstat(root), walk_fn)
    except SkipDir:
        pass