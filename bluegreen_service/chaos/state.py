"""
Chaos mode state for simulated pool failure.

One ChaosState lives on each application instance. It is never persisted,
so a restarted process always comes back healthy.
"""

import threading
from dataclasses import dataclass, replace
from enum import Enum

from bluegreen_service.errors import InvalidChaosModeError
from bluegreen_service.logging import get_logger

logger = get_logger(__name__)


class ChaosMode(str, Enum):
    """Fault behavior applied to gated routes while chaos is enabled."""

    ERROR = "error"
    TIMEOUT = "timeout"

    @classmethod
    def parse(cls, value: object) -> "ChaosMode":
        """
        Convert a client-supplied value into a ChaosMode.

        Raises:
            InvalidChaosModeError: value is not exactly "error" or "timeout"
        """
        if isinstance(value, str):
            for mode in cls:
                if mode.value == value:
                    return mode
        raise InvalidChaosModeError(value)


@dataclass(frozen=True)
class ChaosSnapshot:
    """Immutable view of the chaos record."""

    enabled: bool = False
    mode: ChaosMode = ChaosMode.ERROR


class ChaosState:
    """
    Process-local chaos toggle.

    The two fields are swapped as one immutable snapshot under a lock, so
    readers never observe a half-applied transition. Concurrent writers are
    last-write-wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = ChaosSnapshot()

    @property
    def enabled(self) -> bool:
        return self._snapshot.enabled

    @property
    def mode(self) -> ChaosMode:
        return self._snapshot.mode

    def snapshot(self) -> ChaosSnapshot:
        """Get the current chaos record."""
        return self._snapshot

    def start(self, mode: ChaosMode) -> ChaosSnapshot:
        """
        Enable chaos with the given mode.

        Args:
            mode: Validated fault behavior

        Returns:
            The new chaos record
        """
        with self._lock:
            self._snapshot = ChaosSnapshot(enabled=True, mode=mode)
            current = self._snapshot

        logger.warning("Chaos mode STARTED - Mode: %s", mode.value)
        return current

    def stop(self) -> bool:
        """
        Disable chaos, keeping the last mode.

        Returns:
            Whether chaos was enabled before the call
        """
        with self._lock:
            was_enabled = self._snapshot.enabled
            self._snapshot = replace(self._snapshot, enabled=False)

        logger.warning("Chaos mode STOPPED (was enabled: %s)", was_enabled)
        return was_enabled

    def get_state(self) -> dict[str, str | bool]:
        """Get current chaos state."""
        snap = self._snapshot
        return {"enabled": snap.enabled, "mode": snap.mode.value}
