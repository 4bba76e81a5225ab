"""Experiment replacing a set of system utilities with a packaged alternative."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from oxidizr.worker import Worker

logger = logging.getLogger(__name__)

_DEFAULT_BIN = Path("/usr/bin")


class UutilsExperiment:
    """Installs a package and points the system's utilities at its binaries."""

    def __init__(
        self,
        name: str,
        system: Worker,
        package: str,
        supported_releases: Iterable[str],
        unified_binary: str | os.PathLike[str] | None,
        bin_directory: str | os.PathLike[str],
    ) -> None:
        self._name = name
        self.system = system
        self.package = package
        self._supported_releases = list(supported_releases)
        self.unified_binary = Path(unified_binary) if unified_binary is not None else None
        self.bin_directory = Path(bin_directory)

    def check_compatible(self) -> bool:
        """Return True if the system's release is supported."""
        return self.system.distribution().release in self._supported_releases

    def supported_releases(self) -> list[str]:
        """Return the supported releases."""
        return list(self._supported_releases)

    def check_installed(self) -> bool:
        """Return True if the package is installed."""
        try:
            return self.system.check_installed(self.package)
        except Exception:
            return False

    def name(self) -> str:
        """Return the experiment's name."""
        return self._name

    def _existing(self, filename: str) -> Path:
        try:
            return self.system.which(filename)
        except Exception:
            return _DEFAULT_BIN / filename

    def enable(self) -> None:
        """Install the package and symlink the system utilities to it."""
        logger.info("Installing and configuring %s", self.package)
        self.system.install_package(self.package)
        for f in self.system.list_files(self.bin_directory):
            existing = self._existing(Path(f).name)
            source = self.unified_binary if self.unified_binary is not None else f
            self.system.replace_file_with_symlink(source, existing)

    def disable(self) -> None:
        """Restore the original utilities and remove the package."""
        for f in self.system.list_files(self.bin_directory):
            self.system.restore_file(self._existing(Path(f).name))
        logger.info("Removing %s", self.package)
        self.system.remove_package(self.package)