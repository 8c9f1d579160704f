"""Shutdown controller: persisted offline flag plus the teardown narrative."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .content import SHUTDOWN_LINES
from .flags import SessionFlags
from .scheduling import Scheduler
from .sequencer import Sequencer, SequencerScript


__all__ = ["ShutdownController"]


logger = logging.getLogger(__name__)


class ShutdownController:
    """
    Drives the shutdown narrative and the offline state.

    ``phase`` is 0 before any shutdown, ``i + 1`` once narrative line ``i``
    has revealed, and equal to the line count once the system is offline.
    The persisted flag is written when shutdown is requested, before the
    first line reveals.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        flags: SessionFlags,
        line_interval: float = 0.4,
        on_offline: Optional[Callable[[], None]] = None,
        lines: tuple[str, ...] = SHUTDOWN_LINES,
    ) -> None:
        self._flags = flags
        self._on_offline = on_offline
        self._lines = tuple(lines)
        self._sequencer = Sequencer(
            scheduler,
            SequencerScript(
                lines=self._lines,
                delay_min=line_interval,
                reveal_first_immediately=True,
            ),
            on_line=self._on_line,
            on_complete=self._on_complete,
            name="shutdown",
        )
        self._active = False
        self._phase = 0
        self._offline = False

    @property
    def active(self) -> bool:
        """True from the shutdown request until reboot."""
        return self._active

    @property
    def phase(self) -> int:
        return self._phase

    @property
    def total_phases(self) -> int:
        return len(self._lines)

    @property
    def is_offline(self) -> bool:
        return self._offline

    @property
    def revealed_lines(self) -> list[str]:
        return list(self._lines[: self._phase])

    def request_shutdown(self) -> bool:
        """
        Persist the flag and start the narrative.

        Returns:
            False if a shutdown is already active (the request is a no-op).
        """
        if self._active:
            logger.debug("Shutdown already active")
            return False
        self._flags.mark_shutdown()
        self._active = True
        self._phase = 0
        self._offline = False
        logger.info("Shutdown requested")
        self._sequencer.restart()
        return True

    def restore_offline(self) -> None:
        """Jump straight to the offline state (persisted flag found at startup)."""
        self._sequencer.cancel()
        self._active = True
        self._phase = len(self._lines)
        self._offline = True
        logger.info("System restored in offline state")

    def reboot(self) -> None:
        """Clear the persisted flag and reset to the pre-shutdown state."""
        self._flags.clear_shutdown()
        self._sequencer.cancel()
        self._active = False
        self._phase = 0
        self._offline = False
        logger.info("Reboot requested")

    def teardown(self) -> None:
        self._sequencer.cancel()

    def _on_line(self, index: int, line: str) -> None:
        self._phase = index + 1
        logger.info("[shutdown %d/%d] %s", self._phase, len(self._lines), line)

    def _on_complete(self) -> None:
        self._offline = True
        logger.info("System offline")
        if self._on_offline is not None:
            self._on_offline()
