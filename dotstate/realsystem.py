"""A System that acts on the real filesystem and runs real commands."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import stat
import subprocess
import tempfile
from typing import Any

from .paths import AbsPath, RelPath
from .patternset import doublestar_glob
from .system import Command, System

_log = logging.getLogger(__name__)

_WINDOWS = os.name == "nt"


def _run(cmd: Command, **streams: Any) -> subprocess.CompletedProcess[bytes]:
    stdin_kwargs: dict[str, Any] = (
        {"input": cmd.input} if cmd.input is not None else {"stdin": cmd.stdin}
    )
    result = subprocess.run(
        cmd.args,
        cwd=cmd.cwd,
        env=dict(cmd.env) if cmd.env is not None else None,
        check=False,
        **stdin_kwargs,
        **streams,
    )
    _log.debug("ran %s: exit status %d", cmd.args, result.returncode)
    if result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, cmd.args, output=result.stdout, stderr=result.stderr
        )
    return result


class RealSystem(System):
    """A System on disk, optionally confined below a root directory."""

    def __init__(self, root: str | os.PathLike[str] | None = None) -> None:
        self._root = os.fspath(root) if root is not None else None

    @property
    def root(self) -> str | None:
        return self._root

    def _real(self, name: str) -> str:
        path = str(name)
        if self._root is None:
            return path
        return os.path.join(self._root, path.lstrip("/"))

    def chmod(self, name: AbsPath, mode: int) -> None:
        if _WINDOWS:
            return
        os.chmod(self._real(name), mode)

    def glob(self, pattern: str) -> list[str]:
        return doublestar_glob(pattern, self._root or "")

    def idempotent_cmd_combined_output(self, cmd: Command) -> bytes:
        return _run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT).stdout

    def idempotent_cmd_output(self, cmd: Command) -> bytes:
        return _run(cmd, stdout=subprocess.PIPE, stderr=cmd.stderr).stdout

    def lstat(self, name: AbsPath) -> os.stat_result:
        return os.lstat(self._real(name))

    def mkdir(self, name: AbsPath, perm: int) -> None:
        os.mkdir(self._real(name), perm)

    def raw_path(self, path: AbsPath) -> AbsPath:
        return AbsPath(self._real(path))

    def read_dir(self, name: AbsPath) -> list[str]:
        return sorted(os.listdir(self._real(name)))

    def read_file(self, name: AbsPath) -> bytes:
        with open(self._real(name), "rb") as f:
            return f.read()

    def readlink(self, name: AbsPath) -> str:
        linkname = os.readlink(self._real(name))
        if _WINDOWS:
            return linkname.replace("\\", "/")
        return linkname

    def remove_all(self, name: AbsPath) -> None:
        real = self._real(name)
        try:
            info = os.lstat(real)
        except FileNotFoundError:
            return
        if stat.S_ISDIR(info.st_mode):
            shutil.rmtree(real)
        else:
            os.remove(real)

    def rename(self, oldpath: AbsPath, newpath: AbsPath) -> None:
        os.rename(self._real(oldpath), self._real(newpath))

    def run_cmd(self, cmd: Command) -> None:
        _run(cmd, stdout=cmd.stdout, stderr=cmd.stderr)

    def run_script(self, scriptname: RelPath, dir: AbsPath, data: bytes) -> None:
        # Random part first so that any file extension is preserved.
        fd, script_path = tempfile.mkstemp(suffix="." + RelPath(scriptname).base())
        try:
            with os.fdopen(fd, "wb") as f:
                if not _WINDOWS:
                    # Private before writing, in case the script holds secrets.
                    os.fchmod(f.fileno(), 0o700)
                f.write(data)

            # A before_ script's directory may not exist yet, so use the
            # nearest existing ancestor.
            current = AbsPath(dir)
            while True:
                try:
                    info = self.stat(current)
                except FileNotFoundError:
                    info = None
                if info is not None and stat.S_ISDIR(info.st_mode):
                    cwd = str(self.raw_path(current))
                    break
                parent = current.dir()
                if parent == current:
                    raise FileNotFoundError(f"{dir}: no existing directory")
                current = parent

            self.run_cmd(Command(args=[script_path], cwd=cwd))
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.remove(script_path)

    def stat(self, name: AbsPath) -> os.stat_result:
        return os.stat(self._real(name))

    def write_file(self, filename: AbsPath, data: bytes, perm: int) -> None:
        real = self._real(filename)
        if _WINDOWS:
            with open(real, "wb") as f:
                f.write(data)
            return
        if self._root is None:
            self._write_file_atomically(real, data, perm)
            return
        fd = os.open(real, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            # Set permissions after truncation but before writing, in case
            # the old or new contents are private.
            os.fchmod(f.fileno(), perm)
            f.write(data)

    @staticmethod
    def _write_file_atomically(real: str, data: bytes, perm: int) -> None:
        directory = os.path.dirname(real) or "."
        fd, temp_path = tempfile.mkstemp(
            dir=directory, prefix="." + os.path.basename(real) + "."
        )
        try:
            with os.fdopen(fd, "wb") as f:
                os.fchmod(f.fileno(), perm)
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, real)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.remove(temp_path)
            raise

    def write_symlink(self, oldname: str, newname: AbsPath) -> None:
        real = self._real(newname)
        if _WINDOWS:
            self.remove_all(newname)
            os.symlink(oldname.replace("/", "\\"), real)
            return
        if self._root is None:
            directory = os.path.dirname(real) or "."
            temp_path = os.path.join(
                directory, f".{os.path.basename(real)}.{os.urandom(8).hex()}"
            )
            os.symlink(oldname, temp_path)
            try:
                os.replace(temp_path, real)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.remove(temp_path)
                raise
            return
        self.remove_all(newname)
        os.symlink(oldname, real)