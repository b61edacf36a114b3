"""Translate queue items back into library playback requests."""

from collections.abc import Callable
from playqueue.errors import IndexOutOfRange
from playqueue.library import Library
from playqueue.logging import log_library_lookup
from playqueue.models import QueueItem
from playqueue.queue import QueueManager


class TrackResolver:
    """Looks up queued items in the library by their stable id.

    A queued track may have been removed from the library since it was added;
    resolution then yields None and callers skip playback without touching the
    queue.
    """

    def __init__(self, library: Library):
        self.library = library

    def resolve(self, item: QueueItem) -> int | None:
        """Find the library index of a queued item.

        Args:
            item: Queue item to resolve

        Returns:
            Position of the track in ``library.all_tracks()``, or None if the
            library no longer knows it
        """
        if self.library.find_track_by_id(item.id) is None:
            log_library_lookup(item.id, found=False)
            return None

        for i, track in enumerate(self.library.all_tracks()):
            if track.id == item.id:
                log_library_lookup(item.id, found=True, library_index=i)
                return i

        log_library_lookup(item.id, found=False, reason="missing_from_enumeration")
        return None

    def play_at(self, queue: QueueManager, index: int, on_play: Callable[[int], None]) -> int | None:
        """Start playback of the queue item at index.

        Args:
            queue: Queue holding the item
            index: Position in the unfiltered queue
            on_play: Called with the library index when the track resolves

        Returns:
            Library index that was played, or None if the track is gone

        Raises:
            IndexOutOfRange: If index is not a valid queue position
        """
        items = queue.get_queue()
        if not (0 <= index < len(items)):
            raise IndexOutOfRange("play_at", index, len(items))

        library_index = self.resolve(items[index])
        if library_index is None:
            return None

        queue.set_current(index)
        on_play(library_index)
        return library_index
