import os
import stat
import subprocess

import pytest

from dotstate.paths import AbsPath, RelPath
from dotstate.realsystem import RealSystem
from dotstate.system import Command


@pytest.fixture
def home(tmp_path):
    user = tmp_path / "home" / "user"
    (user / "dir" / "subdir").mkdir(parents=True)
    for name in ["bar", "baz", "foo", "dir/bar", "dir/foo", "dir/subdir/foo"]:
        (user / name).write_text("")
    return tmp_path


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("/home/user/foo", ["/home/user/foo"]),
        (
            "/home/user/**/foo",
            ["/home/user/dir/foo", "/home/user/dir/subdir/foo", "/home/user/foo"],
        ),
        (
            "/home/user/**/ba*",
            ["/home/user/bar", "/home/user/baz", "/home/user/dir/bar"],
        ),
    ],
)
def test_glob(home, pattern, expected):
    system = RealSystem(home)
    assert sorted(system.glob(pattern)) == expected


def test_write_file_sets_exact_permissions(tmp_path):
    system = RealSystem(tmp_path)
    (tmp_path / "f").write_bytes(b"old contents that are longer")
    os.chmod(tmp_path / "f", 0o644)
    system.write_file(AbsPath("/f"), b"new", 0o600)
    assert (tmp_path / "f").read_bytes() == b"new"
    assert stat.S_IMODE(os.stat(tmp_path / "f").st_mode) == 0o600


def test_write_file_atomic_on_real_root(tmp_path):
    system = RealSystem()
    target = AbsPath(str(tmp_path / "file"))
    system.write_file(target, b"contents", 0o640)
    assert system.read_file(target) == b"contents"
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o640
    assert os.listdir(tmp_path) == ["file"]


def test_write_symlink_and_readlink(tmp_path):
    system = RealSystem(tmp_path)
    (tmp_path / "link").write_text("in the way")
    system.write_symlink(".dir/subdir/file", AbsPath("/link"))
    assert system.readlink(AbsPath("/link")) == ".dir/subdir/file"
    assert stat.S_ISLNK(system.lstat(AbsPath("/link")).st_mode)


def test_write_symlink_atomic_on_real_root(tmp_path):
    system = RealSystem()
    link = AbsPath(str(tmp_path / "link"))
    system.write_symlink("first", link)
    system.write_symlink("second", link)
    assert system.readlink(link) == "second"
    assert os.listdir(tmp_path) == ["link"]


def test_remove_all(tmp_path):
    system = RealSystem(tmp_path)
    (tmp_path / "d" / "e").mkdir(parents=True)
    (tmp_path / "d" / "e" / "f").write_text("x")
    system.remove_all(AbsPath("/d"))
    system.remove_all(AbsPath("/missing"))
    assert not (tmp_path / "d").exists()


def test_rename_and_read_dir(tmp_path):
    system = RealSystem(tmp_path)
    (tmp_path / "old").write_text("x")
    (tmp_path / "a").write_text("y")
    system.rename(AbsPath("/old"), AbsPath("/new"))
    assert system.read_dir(AbsPath("/")) == ["a", "new"]


def test_mkdir_and_stat(tmp_path):
    system = RealSystem(tmp_path)
    system.mkdir(AbsPath("/d"), 0o755)
    info = system.stat(AbsPath("/d"))
    assert stat.S_IFMT(info.st_mode) == stat.S_IFDIR
    assert (tmp_path / "d").is_dir()


def test_chmod(tmp_path):
    system = RealSystem(tmp_path)
    (tmp_path / "f").write_text("")
    system.chmod(AbsPath("/f"), 0o600)
    assert stat.S_IMODE(os.stat(tmp_path / "f").st_mode) == 0o600


def test_raw_path(tmp_path):
    system = RealSystem(tmp_path)
    assert system.raw_path(AbsPath("/a/b")) == os.path.join(str(tmp_path), "a/b")


def test_read_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        RealSystem(tmp_path).read_file(AbsPath("/missing"))


def test_idempotent_cmd_output(tmp_path):
    system = RealSystem(tmp_path)
    cmd = Command(args=["sh", "-c", "cat; printf err >&2"], input=b"hello")
    assert system.idempotent_cmd_output(cmd) == b"hello"


def test_idempotent_cmd_combined_output(tmp_path):
    system = RealSystem(tmp_path)
    cmd = Command(args=["sh", "-c", "printf out; printf err >&2"])
    assert system.idempotent_cmd_combined_output(cmd) == b"outerr"


def test_failing_command_raises(tmp_path):
    system = RealSystem(tmp_path)
    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        system.run_cmd(Command(args=["sh", "-c", "exit 3"]))
    assert excinfo.value.returncode == 3


def test_run_script_uses_nearest_existing_directory(tmp_path):
    (tmp_path / "home" / "user").mkdir(parents=True)
    system = RealSystem(tmp_path)
    script = b"#!/bin/sh\necho hello > output.txt\n"
    system.run_script(RelPath("script.sh"), AbsPath("/home/user/missing/deeper"), script)
    assert (tmp_path / "home" / "user" / "output.txt").read_text() == "hello\n"


def test_run_script_removes_temporary_file(tmp_path):
    system = RealSystem(tmp_path)
    script = b"#!/bin/sh\necho \"$0\" > name.txt\n"
    system.run_script(RelPath("script"), AbsPath("/"), script)
    script_path = (tmp_path / "name.txt").read_text().strip()
    assert script_path.endswith(".script")
    assert not os.path.exists(script_path)