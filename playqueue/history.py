from playqueue import config
from playqueue.logging import log_history_append
from playqueue.models import QueueItem


class PlayHistory:
    """Append-only log of items that were previously current.

    The log itself is unbounded; bounding to the last N entries happens when
    it is read.
    """

    def __init__(self):
        self._entries: list[QueueItem] = []

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, item: QueueItem) -> None:
        self._entries.append(item)
        log_history_append(item.id, len(self._entries))

    def entries(self) -> list[QueueItem]:
        """Get every entry, oldest first."""
        return list(self._entries)

    def recent(self, limit: int | None = None) -> list[QueueItem]:
        """Get the most recent entries, newest first.

        Args:
            limit: Maximum number of entries; defaults to ``HISTORY_LIMIT``

        Returns:
            Up to ``limit`` entries in reverse-chronological order
        """
        if limit is None:
            limit = config.HISTORY_LIMIT
        if limit <= 0:
            return []
        return self._entries[-limit:][::-1]

    def clear(self) -> None:
        self._entries.clear()
