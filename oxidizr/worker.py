"""System access: running commands, querying packages and manipulating files."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from pathlib import Path

from oxidizr.command import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Distribution:
    """Linux distribution information for the system."""

    id: str
    release: str


class CommandError(RuntimeError):
    """Raised when a command exits with a non-zero status."""


def vecs_eq(v1: Sequence[Hashable], v2: Sequence[Hashable]) -> bool:
    """Return True if the two (possibly unordered) sequences hold the same elements."""
    if len(v1) != len(v2):
        return False
    seen = set(v1)
    return all(item in seen for item in v2)


def backup_filename(file: str | os.PathLike[str]) -> Path:
    """Return the backup path for a file: ``/path/to/file`` -> ``/path/to/.file.oxidizr.bak``."""
    path = Path(file)
    if not path.name:
        raise ValueError(f"{path} has no file name")
    return path.parent / f".{path.name}.oxidizr.bak"


def remove_file_if_exists(file: str | os.PathLike[str]) -> None:
    """Remove a file from the filesystem if it exists."""
    if os.path.exists(file):
        os.remove(file)


class Worker(ABC):
    """Operations the experiments need from the system."""

    def distribution(self) -> Distribution:
        """Report the distribution information for the system."""
        ident = self.run(Command.build("lsb_release", ["-is"]))
        release = self.run(Command.build("lsb_release", ["-rs"]))
        return Distribution(
            id=ident.stdout.decode("utf-8").strip(),
            release=release.stdout.decode("utf-8").strip(),
        )

    @abstractmethod
    def run(self, cmd: Command) -> subprocess.CompletedProcess[bytes]:
        """Run a command and return its result; raise if it fails."""

    @abstractmethod
    def list_files(self, directory: str | os.PathLike[str]) -> list[Path]:
        """List the entries of a directory; raise if it is not a directory."""

    @abstractmethod
    def which(self, binary_name: str) -> Path:
        """Find a binary on the PATH; raise FileNotFoundError if absent."""

    def install_package(self, package: str) -> None:
        """Install a package using the system package manager."""
        self.run(Command.build("dnf", ["install", "-y", package]))

    def remove_package(self, package: str) -> None:
        """Remove a package using the system package manager."""
        self.run(Command.build("dnf", ["remove", "-y", package]))

    def check_installed(self, package: str) -> bool:
        """Check whether a package is installed using the system package manager."""
        try:
            self.run(Command.build("dnf", ["list", package]))
        except (CommandError, OSError):
            return False
        return True

    @abstractmethod
    def replace_file_with_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        """Replace ``target`` with a symlink to ``source``, backing it up first."""

    @abstractmethod
    def backup_file(self, file: str | os.PathLike[str]) -> None:
        """Copy a file to its ``.oxidizr.bak`` backup."""

    @abstractmethod
    def restore_file(self, file: str | os.PathLike[str]) -> None:
        """Restore a file from its backup if one exists."""

    @abstractmethod
    def create_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        """Create a symlink at ``target`` pointing to ``source``."""


class System(Worker):
    """The real system: runs commands and changes files on the filesystem."""

    def run(self, cmd: Command) -> subprocess.CompletedProcess[bytes]:
        logger.debug("Running command: %s", cmd.full())
        result = subprocess.run([cmd.command, *cmd.args], capture_output=True, check=False)
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise CommandError(f"Failed to run command '{cmd.full()}': {stderr}")
        return result

    def list_files(self, directory: str | os.PathLike[str]) -> list[Path]:
        path = Path(directory)
        if not path.is_dir():
            raise NotADirectoryError(f"{path} is not a directory")
        return list(path.iterdir())

    def which(self, binary_name: str) -> Path:
        found = shutil.which(binary_name)
        if found is None:
            raise FileNotFoundError(f"{binary_name} not found in PATH")
        return Path(found)

    def replace_file_with_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        target_path = Path(target)
        if target_path.exists():
            if target_path.is_symlink():
                logger.debug("Skipping %s, symlink already exists", target_path)
                return
            self.backup_file(target_path)
            target_path.unlink()
        self.create_symlink(source, target_path)

    def backup_file(self, file: str | os.PathLike[str]) -> None:
        backup = backup_filename(file)
        logger.debug("Backing up %s -> %s", file, backup)
        shutil.copyfile(file, backup)
        # Keep SUID/SGID/sticky bits alongside the ordinary permission bits.
        shutil.copymode(file, backup)

    def restore_file(self, file: str | os.PathLike[str]) -> None:
        backup = backup_filename(file)
        if backup.exists():
            logger.debug("Restoring %s -> %s", backup, file)
            os.rename(backup, file)
        else:
            logger.warning("No backup found for '%s', skipping restore", file)

    def create_symlink(
        self, source: str | os.PathLike[str], target: str | os.PathLike[str]
    ) -> None:
        logger.debug("Symlinking %s -> %s", source, target)
        remove_file_if_exists(target)
        os.symlink(source, target)