"""Experiment replacing sudo with sudo-rs."""

from __future__ import annotations

import logging
from pathlib import Path

from oxidizr.worker import Worker

logger = logging.getLogger(__name__)

PACKAGE = "sudo-rs"

_DEFAULT_BIN = Path("/usr/bin")

_SUDORS_FILES = (
    Path("/usr/bin/su-rs"),
    Path("/usr/bin/sudo-rs"),
    Path("/usr/bin/visudo-rs"),
)


class SudoRsExperiment:
    """Installs sudo-rs and points the system's sudo binaries at it."""

    def __init__(self, system: Worker) -> None:
        self.system = system

    def check_compatible(self) -> bool:
        """Return True if the system's release is supported."""
        return self.system.distribution().release in self.supported_releases()

    def supported_releases(self) -> list[str]:
        """Return the supported releases."""
        return ["42"]

    def check_installed(self) -> bool:
        """Return True if the package is installed."""
        try:
            return self.system.check_installed(PACKAGE)
        except Exception:
            return False

    def name(self) -> str:
        """Return the experiment's name."""
        return "sudo-rs"

    def _existing(self, filename: str) -> Path:
        try:
            return self.system.which(filename)
        except Exception:
            return _DEFAULT_BIN / filename

    def enable(self) -> None:
        """Install the package and symlink the system files to it."""
        logger.info("Installing and configuring %s", PACKAGE)
        self.system.install_package(PACKAGE)
        for f in _SUDORS_FILES:
            self.system.replace_file_with_symlink(f, self._existing(f.name))

    def disable(self) -> None:
        """Restore the original files and remove the package."""
        for f in _SUDORS_FILES:
            self.system.restore_file(self._existing(f.name))
        logger.info("Removing %s", PACKAGE)
        self.system.remove_package(PACKAGE)