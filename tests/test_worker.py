import os
import stat
import sys
from pathlib import Path

import pytest

from oxidizr.command import Command
from oxidizr.mock import MockSystem
from oxidizr.worker import (
    CommandError,
    Distribution,
    System,
    Worker,
    backup_filename,
    remove_file_if_exists,
    vecs_eq,
)


class _FailingSystem(System):
    def run(self, cmd):
        raise CommandError(f"Failed to run command '{cmd.full()}': no")


@pytest.mark.parametrize(
    "file, expected",
    [
        ("/home/user/config", "/home/user/.config.oxidizr.bak"),
        ("config", ".config.oxidizr.bak"),
        ("/etc/hosts", "/etc/.hosts.oxidizr.bak"),
        (".hidden", "..hidden.oxidizr.bak"),
    ],
)
def test_backup_filename(file, expected):
    assert backup_filename(Path(file)) == Path(expected)


def test_backup_filename_without_name_raises():
    with pytest.raises(ValueError):
        backup_filename("/")


def test_vecs_eq_unordered():
    assert vecs_eq(["a", "b"], ["b", "a"])
    assert not vecs_eq(["a"], ["a", "b"])
    assert not vecs_eq(["a", "b"], ["a", "c"])


def test_vecs_eq_tuples():
    assert vecs_eq([("x", "y"), ("z", "w")], [("z", "w"), ("x", "y")])


def test_remove_file_if_exists(tmp_path):
    f = tmp_path / "f"
    f.write_text("data")
    remove_file_if_exists(f)
    assert not f.exists()
    remove_file_if_exists(f)
    assert not f.exists()


def test_distribution_from_worker():
    system = MockSystem(Distribution(id="Fedora", release="42"))
    assert system.distribution() == Distribution("Fedora", "42")
    assert system.commands == ["lsb_release -is", "lsb_release -rs"]


def test_install_and_remove_package_commands():
    system = MockSystem()
    system.install_package("sudo-rs")
    system.remove_package("sudo-rs")
    assert system.commands == ["dnf install -y sudo-rs", "dnf remove -y sudo-rs"]


def test_default_check_installed_false_on_failure():
    assert Worker.check_installed(_FailingSystem(), "sudo-rs") is False


def test_default_check_installed_true_on_success():
    system = MockSystem()
    assert Worker.check_installed(system, "sudo-rs") is True
    assert system.commands == ["dnf list sudo-rs"]


def test_system_run_captures_stdout():
    result = System().run(Command.build(sys.executable, ["-c", "print('hi')"]))
    assert result.stdout.strip() == b"hi"


def test_system_run_failure_raises():
    cmd = Command.build(sys.executable, ["-c", "import sys; sys.exit(3)"])
    with pytest.raises(CommandError, match="Failed to run command"):
        System().run(cmd)


def test_system_which_missing_raises():
    with pytest.raises(FileNotFoundError):
        System().which("definitely-no-such-binary-oxidizr")


def test_system_which_finds_executable(tmp_path, monkeypatch):
    exe = tmp_path / "mytool"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(0o755)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert System().which("mytool") == exe


def test_list_files(tmp_path):
    (tmp_path / "a").write_text("")
    (tmp_path / "b").write_text("")
    assert sorted(System().list_files(tmp_path)) == [tmp_path / "a", tmp_path / "b"]


def test_list_files_not_a_directory(tmp_path):
    f = tmp_path / "file"
    f.write_text("")
    with pytest.raises(NotADirectoryError):
        System().list_files(f)
    with pytest.raises(NotADirectoryError):
        System().list_files(tmp_path / "missing")


def test_backup_file_preserves_contents_and_mode(tmp_path):
    f = tmp_path / "tool"
    f.write_text("original")
    f.chmod(0o4755)
    System().backup_file(f)
    backup = tmp_path / ".tool.oxidizr.bak"
    assert backup.read_text() == "original"
    assert stat.S_IMODE(backup.stat().st_mode) == stat.S_IMODE(f.stat().st_mode)


def test_restore_file_moves_backup_back(tmp_path):
    f = tmp_path / "tool"
    backup = tmp_path / ".tool.oxidizr.bak"
    backup.write_text("original")
    f.write_text("replaced")
    System().restore_file(f)
    assert f.read_text() == "original"
    assert not backup.exists()


def test_restore_file_without_backup_leaves_file(tmp_path):
    f = tmp_path / "tool"
    f.write_text("current")
    System().restore_file(f)
    assert f.read_text() == "current"


def test_create_symlink_replaces_existing(tmp_path):
    source = tmp_path / "source"
    source.write_text("new")
    target = tmp_path / "target"
    target.write_text("old")
    System().create_symlink(source, target)
    assert target.is_symlink()
    assert os.readlink(target) == str(source)


def test_replace_file_with_symlink_backs_up(tmp_path):
    source = tmp_path / "source"
    source.write_text("new")
    target = tmp_path / "target"
    target.write_text("old")
    System().replace_file_with_symlink(source, target)
    assert target.is_symlink()
    assert target.read_text() == "new"
    assert (tmp_path / ".target.oxidizr.bak").read_text() == "old"


def test_replace_file_with_symlink_skips_existing_symlink(tmp_path):
    first = tmp_path / "first"
    first.write_text("first")
    second = tmp_path / "second"
    second.write_text("second")
    target = tmp_path / "target"
    os.symlink(first, target)
    System().replace_file_with_symlink(second, target)
    assert os.readlink(target) == str(first)
    assert not (tmp_path / ".target.oxidizr.bak").exists()


def test_replace_then_restore_round_trip(tmp_path):
    source = tmp_path / "source"
    source.write_text("new")
    target = tmp_path / "target"
    target.write_text("old")
    system = System()
    system.replace_file_with_symlink(source, target)
    system.restore_file(target)
    assert not target.is_symlink()
    assert target.read_text() == "old"