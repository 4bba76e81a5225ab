"""An in-memory Worker that records what it is asked to do."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable
from pathlib import Path

from oxidizr.command import Command
from oxidizr.worker import Distribution, Worker


class MockSystem(Worker):
    """A Worker that simulates files, packages and commands without touching the system.

    Each mocked file maps to ``(contents, primary)``, where ``primary`` marks the
    file as the one ``which`` reports for its name.
    """

    def __init__(self, distribution: Distribution | None = None) -> None:
        if distribution is None:
            distribution = Distribution(id="Fedora", release="42")
        self.commands: list[str] = []
        self.files: dict[Path, tuple[str, bool]] = {}
        self.installed_packages: list[str] = []
        self.created_symlinks: list[tuple[str, str]] = []
        self.restored_files: list[str] = []
        self.backed_up_files: list[str] = []
        self.mocked_commands: dict[str, str] = {}
        self.mock_command("lsb_release -is", distribution.id)
        self.mock_command("lsb_release -rs", distribution.release)

    def mock_files(self, files: Iterable[tuple[str, str, bool]]) -> None:
        """Add files as ``(path, contents, primary)`` triples."""
        for path, contents, primary in files:
            self.files[Path(path)] = (contents, primary)

    def mock_install_package(self, package: str) -> None:
        """Mark a package as installed."""
        self.installed_packages.append(package)

    def mock_command(self, command: str, stdout: str) -> None:
        """Set the standard output returned for a full command line."""
        self.mocked_commands[command] = stdout

    def run(self, cmd: Command) -> subprocess.CompletedProcess[bytes]:
        line = cmd.full()
        self.commands.append(line)
        stdout = self.mocked_commands.get(line, "")
        return subprocess.CompletedProcess(
            [cmd.command, *cmd.args], 0, stdout=stdout.encode("utf-8"), stderr=b""
        )

    def check_installed(self, package: str) -> bool:
        return package in self.installed_packages

    def list_files(self, directory: str | os.PathLike[str]) -> list[Path]:
        base = Path(directory)
        return [path for path in self.files if path.is_relative_to(base)]

    def which(self, binary_name: str) -> Path:
        for path, (_, primary) in self.files.items():
            if path.name == binary_name and primary:
                return path
        raise FileNotFoundError(f"{binary_name} not found in mocked filesystem")

    def replace_file_with_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        if Path(target) in self.files:
            self.backup_file(target)
        self.create_symlink(source, target)

    def create_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        self.created_symlinks.append((os.fspath(source), os.fspath(target)))

    def backup_file(self, file: str | os.PathLike[str]) -> None:
        self.backed_up_files.append(os.fspath(file))

    def restore_file(self, file: str | os.PathLike[str]) -> None:
        self.restored_files.append(os.fspath(file))