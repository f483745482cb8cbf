"""Thread-safe, time-ordered transcript shared between capture and editing."""
import bisect
import threading
from typing import Optional

from talkalong.models import TranscriptEntry


class TranscriptBuffer:
    """
    Transcript entries kept sorted by ts after every mutation.

    All writes go through this class under one lock. Each clear() starts a
    new generation; inserts tagged with an older generation are refused so
    late results from a previous session never leak into a new one.
    """

    def __init__(self, entries: Optional[list[TranscriptEntry]] = None):
        self._lock = threading.Lock()
        self._entries: list[TranscriptEntry] = sorted(entries or [], key=lambda e: e.ts)
        self._keys: list[float] = [entry.ts for entry in self._entries]
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def insert(self, entry: TranscriptEntry, generation: Optional[int] = None) -> bool:
        """
        Insert an entry after any existing entries with the same ts.

        Args:
            entry: Entry to insert.
            generation: Generation the entry was produced for. None skips
                        the check (user-initiated inserts).

        Returns:
            True if inserted, False if the generation is stale.
        """
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            position = bisect.bisect_right(self._keys, entry.ts)
            self._keys.insert(position, entry.ts)
            self._entries.insert(position, entry)
            return True

    def update(self, index: int, text: str) -> TranscriptEntry:
        """Replace the text of the entry at index. Raises IndexError."""
        with self._lock:
            current = self._entries[index]
            updated = TranscriptEntry(text=text, ts=current.ts)
            self._entries[index] = updated
            return updated

    def remove(self, index: int) -> TranscriptEntry:
        """Delete and return the entry at index. Raises IndexError."""
        with self._lock:
            self._keys.pop(index)
            return self._entries.pop(index)

    def clear(self) -> int:
        """Drop all entries and start a new generation, which is returned."""
        with self._lock:
            self._entries = []
            self._keys = []
            self._generation += 1
            return self._generation

    def entries(self) -> list[TranscriptEntry]:
        """Snapshot of the current entries."""
        with self._lock:
            return list(self._entries)

    def to_list(self) -> list[dict]:
        return [entry.to_dict() for entry in self.entries()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
