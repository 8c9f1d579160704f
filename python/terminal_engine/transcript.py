"""
Append-only terminal transcript.

The transcript is the shared data structure every other component writes
into and the rendering layer reads from. Insertion order is display order;
entries are never mutated, and the only removal is a wholesale ``clear``.

Thread Safety:
    Not thread-safe. All mutations are expected to happen on the single
    event loop that runs the session's scheduled callbacks.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .models import EntryKind, TranscriptEntry


__all__ = ["Transcript", "TranscriptListener"]


logger = logging.getLogger(__name__)


TranscriptListener = Callable[[TranscriptEntry], None]


class Transcript:
    """
    Ordered, append-only log of transcript entries.

    Sequence numbers keep increasing across ``clear`` calls so that a
    client polling with ``entries_after`` never sees a number twice. The
    ``generation`` counter tells the client that a clear happened.

    Example:
        >>> transcript = Transcript()
        >>> transcript.append_input("help")
        >>> transcript.append_output("Available Commands:")
        >>> len(transcript)
        2
    """

    def __init__(self, initial: Iterable[tuple[EntryKind, str]] = ()) -> None:
        self._entries: list[TranscriptEntry] = []
        self._next_sequence = 1
        self._generation = 0
        self._listeners: list[TranscriptListener] = []
        for kind, content in initial:
            self.append(kind, content)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[TranscriptEntry]:
        """Copy of all current entries, oldest first."""
        return list(self._entries)

    @property
    def generation(self) -> int:
        """Number of times the transcript has been cleared."""
        return self._generation

    @property
    def last_sequence(self) -> int:
        """Sequence number of the most recently appended entry (0 if none yet)."""
        return self._next_sequence - 1

    def add_listener(self, listener: TranscriptListener) -> None:
        """Register a callback invoked with every appended entry."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TranscriptListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, kind: EntryKind, content: str) -> TranscriptEntry:
        """
        Append one entry.

        Args:
            kind: Entry kind.
            content: Text payload; multi-line blocks are newline-joined.

        Returns:
            The newly created entry.
        """
        entry = TranscriptEntry(
            sequence=self._next_sequence,
            kind=kind,
            content=content,
        )
        self._next_sequence += 1
        self._entries.append(entry)
        logger.debug("Appended %s entry #%d", kind.value, entry.sequence)

        for listener in list(self._listeners):
            listener(entry)
        return entry

    def append_input(self, content: str) -> TranscriptEntry:
        return self.append(EntryKind.INPUT, content)

    def append_output(self, content: str) -> TranscriptEntry:
        return self.append(EntryKind.OUTPUT, content)

    def append_system(self, content: str) -> TranscriptEntry:
        return self.append(EntryKind.SYSTEM, content)

    def append_block(self, lines: Iterable[str], kind: EntryKind = EntryKind.OUTPUT) -> TranscriptEntry:
        """Append several lines as a single entry."""
        return self.append(kind, "\n".join(lines))

    def clear(self) -> None:
        """Remove every entry and bump the generation counter."""
        removed = len(self._entries)
        self._entries = []
        self._generation += 1
        logger.info("Transcript cleared (%d entries removed)", removed)

    def entries_after(self, sequence: int) -> list[TranscriptEntry]:
        """Return current entries whose sequence number is greater than ``sequence``."""
        return [entry for entry in self._entries if entry.sequence > sequence]

    def snapshot(self) -> list[dict[str, object]]:
        """Return entries as plain dicts for APIs and archives."""
        return [entry.model_dump(mode="json") for entry in self._entries]
