"""A selectable experiment that swaps system utilities for alternatives."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ExperimentImpl(Protocol):
    """What a concrete experiment provides."""

    def name(self) -> str: ...

    def enable(self) -> None: ...

    def disable(self) -> None: ...

    def check_compatible(self) -> bool: ...

    def supported_releases(self) -> list[str]: ...

    def check_installed(self) -> bool: ...


class Experiment:
    """Wraps a concrete experiment with compatibility and installation guards."""

    def __init__(self, inner: ExperimentImpl) -> None:
        self.inner = inner

    def name(self) -> str:
        """Return the experiment's name."""
        return self.inner.name()

    def enable(self, no_compatibility_check: bool = False) -> None:
        """Enable the experiment, skipping it on unsupported releases unless told not to check."""
        if not no_compatibility_check and not self.check_compatible():
            logger.warning(
                "Skipping '%s'. Minimum supported releases are %s.",
                self.name(),
                ", ".join(self.supported_releases()),
            )
            return
        self.inner.enable()

    def disable(self) -> None:
        """Disable the experiment if its package is installed."""
        if not self.check_installed():
            logger.warning("'%s' not enabled, skipping restore", self.name())
            return
        self.inner.disable()

    def check_compatible(self) -> bool:
        """Return True if the system release is supported."""
        return self.inner.check_compatible()

    def supported_releases(self) -> list[str]:
        """Return the releases the experiment supports."""
        return self.inner.supported_releases()

    def check_installed(self) -> bool:
        """Return True if the experiment's package is installed."""
        return self.inner.check_installed()

    def __repr__(self) -> str:
        return f"Experiment({self.name()!r})"