"""Absolute and relative slash-separated paths."""

from __future__ import annotations

import os

_WINDOWS = os.name == "nt"
_SLASHES = "/\\" if _WINDOWS else "/"


def _clean(path: str) -> str:
    """Return the shortest lexically equivalent slash path."""
    if path == "":
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(part)
    joined = "/".join(parts)
    if rooted:
        return "/" + joined
    return joined or "."


def _split(path: str) -> tuple[str, str]:
    index = path.rfind("/")
    return path[: index + 1], path[index + 1 :]


def _base(path: str) -> str:
    if path == "":
        return "."
    path = path.rstrip("/")
    if path == "":
        return "/"
    return path[path.rfind("/") + 1 :]


def _dir(path: str) -> str:
    return _clean(_split(path)[0])


def _join(*elems: str) -> str:
    non_empty = [elem for elem in elems if elem]
    if not non_empty:
        return ""
    return _clean("/".join(non_empty))


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/")


class NotInAbsDirError(ValueError):
    """An absolute path is not inside a directory."""

    def __init__(self, path: str, dir: str) -> None:
        super().__init__(f"{path}: not in {dir}")
        self.path = path
        self.dir = dir


class NotInRelDirError(ValueError):
    """A relative path is not inside a directory."""

    def __init__(self, path: str, dir: str) -> None:
        super().__init__(f"{path}: not in {dir}")
        self.path = path
        self.dir = dir


class RelPath(str):
    """A relative, slash-separated path."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"RelPath({str(self)!r})"

    def base(self) -> str:
        """Return the last element of the path."""
        return _base(str(self))

    def dir(self) -> RelPath:
        """Return all but the last element of the path."""
        return RelPath(_dir(str(self)))

    def has_dir_prefix(self, dir_prefix: str) -> bool:
        """Return whether the path lies inside dir_prefix."""
        return str(self).startswith(str(dir_prefix) + "/")

    def join(self, *args: str) -> RelPath:
        """Append args to the path."""
        return RelPath(_join(str(self), *(str(arg) for arg in args)))

    def split(self) -> tuple[RelPath, RelPath]:
        """Return the directory (with trailing slash) and the file name."""
        directory, file = _split(str(self))
        return RelPath(directory), RelPath(file)

    def trim_dir_prefix(self, dir_prefix: str) -> RelPath:
        """Return the path relative to dir_prefix."""
        if not self.has_dir_prefix(dir_prefix):
            raise NotInRelDirError(str(self), str(dir_prefix))
        return RelPath(str(self)[len(dir_prefix) + 1 :])


class AbsPath(str):
    """An absolute, slash-separated path."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"AbsPath({str(self)!r})"

    def base(self) -> str:
        """Return the last element of the path."""
        return _base(str(self))

    def dir(self) -> AbsPath:
        """Return all but the last element of the path."""
        return AbsPath(_dir(str(self)))

    def join(self, *args: str) -> AbsPath:
        """Append relative elements to the path."""
        return AbsPath(_join(str(self), *(str(arg) for arg in args)))

    def split(self) -> tuple[AbsPath, RelPath]:
        """Return the directory (with trailing slash) and the file name."""
        directory, file = _split(str(self))
        return AbsPath(directory), RelPath(file)

    def trim_dir_prefix(self, dir_prefix: str) -> RelPath:
        """Return the path relative to dir_prefix."""
        if not str(self).startswith(str(dir_prefix) + "/"):
            raise NotInAbsDirError(str(self), str(dir_prefix))
        return RelPath(str(self)[len(dir_prefix) + 1 :])

    @classmethod
    def parse(cls, s: str) -> AbsPath:
        """Parse a user-supplied path, expanding a leading tilde."""
        return new_abs_path_from_ext_path(s, home_dir_abs_path())


def new_abs_path(path: str) -> AbsPath:
    """Return path as an AbsPath, raising ValueError if it is not absolute."""
    if not os.path.isabs(path):
        raise ValueError(f"{path}: not an absolute path")
    return AbsPath(path)


def expand_tilde(path: str, home_dir_abs_path: str) -> str:
    """Expand a leading tilde in path."""
    if path == "~":
        return str(home_dir_abs_path)
    if len(path) >= 2 and path[0] == "~" and path[1] in _SLASHES:
        return str(AbsPath(home_dir_abs_path).join(path[2:]))
    return path


def _is_slash(char: str) -> bool:
    return char in "/\\"


def volume_name_len(path: str) -> int:
    """Return the length of a leading drive letter or UNC volume name, or 0."""
    length = len(path)
    if length < 2:
        return 0
    first = path[0]
    if path[1] == ":" and first.isascii() and first.isalpha():
        return 2
    if (
        length >= 5
        and _is_slash(path[0])
        and _is_slash(path[1])
        and not _is_slash(path[2])
        and path[2] != "."
    ):
        n = 3
        while n < length - 1:
            if _is_slash(path[n]):
                n += 1
                if not _is_slash(path[n]):
                    if path[n] == ".":
                        break
                    while n < length and not _is_slash(path[n]):
                        n += 1
                    return n
                break
            n += 1
    return 0


def volume_name_to_upper(path: str) -> str:
    """Return path with its volume name in upper case."""
    n = volume_name_len(path)
    if n > 0:
        return path[:n].upper() + path[n:]
    return path


def new_abs_path_from_ext_path(ext_path: str, home_dir_abs_path: str) -> AbsPath:
    """Convert ext_path to slashes, expand a tilde, and make it absolute."""
    if _WINDOWS:
        slash_path = _to_slash(expand_tilde(ext_path, home_dir_abs_path))
        if os.path.isabs(slash_path):
            return AbsPath(volume_name_to_upper(slash_path))
        return AbsPath(_to_slash(volume_name_to_upper(os.path.abspath(slash_path))))
    tilde_path = expand_tilde(_to_slash(ext_path), home_dir_abs_path)
    if os.path.isabs(tilde_path):
        return AbsPath(tilde_path)
    return AbsPath(os.path.abspath(tilde_path))


def normalize_path(path: str) -> AbsPath:
    """Return path as an absolute path; on Windows with an upper-case volume and slashes."""
    abs_path = os.path.abspath(path)
    if _WINDOWS:
        return AbsPath(_to_slash(volume_name_to_upper(abs_path)))
    return AbsPath(abs_path)


def home_dir_abs_path() -> AbsPath:
    """Return the user's normalized home directory."""
    home = os.path.expanduser("~")
    if home == "~":
        raise OSError("cannot determine home directory")
    return normalize_path(home)