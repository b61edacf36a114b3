import random
import threading
from collections.abc import Callable, Iterable
from playqueue import config
from playqueue.errors import IndexOutOfRange
from playqueue.filtering import filter_queue
from playqueue.history import PlayHistory
from playqueue.logging import log_error, log_queue_index_error, log_queue_operation
from playqueue.models import FilterMatch, QueueItem, QueueUpdatedEvent, Track
from playqueue.mover import move_item
from playqueue.shuffler import shuffle_tracking

QueueObserver = Callable[[QueueUpdatedEvent], None]


class QueueManager:
    """Manages the playback queue in-memory (session-only, not persisted).

    Owns the ordered queue, the current-position pointer and the play history.
    Every mutator changes the queue and the pointer under one lock and notifies
    observers only after the change has committed.
    """

    def __init__(self, rng: random.Random | None = None):
        self.queue_items: list[QueueItem] = []
        self.current_index = -1  # -1 means nothing is active
        self.history = PlayHistory()
        self._rng = rng if rng is not None else random.Random(config.SHUFFLE_SEED)
        self._observers: list[QueueObserver] = []
        self._lock = threading.RLock()  # Reentrant lock for thread-safe operations

    def __len__(self) -> int:
        return len(self.queue_items)

    # Observers

    def subscribe(self, callback: QueueObserver) -> Callable[[], None]:
        """Register a callback for queue changes.

        Args:
            callback: Called with a QueueUpdatedEvent after each committed mutation

        Returns:
            Function that removes the callback again
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self, action: str, positions: list[int] | None = None) -> None:
        event = QueueUpdatedEvent(
            action=action,
            positions=positions,
            queue_length=len(self.queue_items),
            current_index=self.current_index,
        )
        for callback in list(self._observers):
            try:
                callback(event)
            except Exception as e:
                # The mutation has already committed; keep delivering to the rest
                log_error(e, observer=getattr(callback, "__name__", repr(callback)), action=action)

    def _check_index(self, operation: str, index: int) -> None:
        if not (0 <= index < len(self.queue_items)):
            log_queue_index_error(operation, index, len(self.queue_items))
            raise IndexOutOfRange(operation, index, len(self.queue_items))

    # Adding

    def enqueue(self, item: Track) -> None:
        """Append a single track to the end of the queue.

        Args:
            item: Track to add; it is copied into the queue by value
        """
        self.add_to_queue([item])

    def add_to_queue(self, items: Iterable[Track], position: str = "end") -> None:
        """Add tracks to the queue.

        Args:
            items: Tracks to add
            position: "end" to append, "next" to insert after the current track,
                "start" to prepend

        Raises:
            ValueError: If position is not one of the above
        """
        if position not in ("end", "next", "start"):
            raise ValueError(f"Unknown queue position: {position!r}")

        new_items = [QueueItem.from_track(item) for item in items]
        if not new_items:
            return

        with self._lock:
            log_queue_operation("add", count=len(new_items), position=position, current_index=self.current_index)

            if position == "end":
                insert_pos = len(self.queue_items)
            elif position == "next":
                insert_pos = self.current_index + 1
            else:
                insert_pos = 0

            self.queue_items[insert_pos:insert_pos] = new_items

            # Keep the same item current when inserting at or before it
            if self.current_index >= insert_pos:
                self.current_index += len(new_items)

            positions = list(range(insert_pos, insert_pos + len(new_items)))

        self._notify("added", positions)

    def insert_after_current(self, items: Iterable[Track]) -> None:
        """Insert tracks after the currently playing track.

        Args:
            items: Tracks to insert
        """
        self.add_to_queue(items, position="next")

    def replace_queue(self, items: Iterable[Track], start_index: int = 0) -> QueueItem | None:
        """Replace the queue with new tracks and set the current position.

        History is kept; the replaced current item is not recorded in it.

        Args:
            items: Tracks forming the new queue
            start_index: Index to start playback from; ignored for an empty queue

        Returns:
            Item now current, or None if the new queue is empty

        Raises:
            IndexOutOfRange: If start_index is not a position in a non-empty new queue
        """
        new_items = [QueueItem.from_track(item) for item in items]

        if new_items and not (0 <= start_index < len(new_items)):
            log_queue_index_error("replace_queue", start_index, len(new_items))
            raise IndexOutOfRange("replace_queue", start_index, len(new_items))

        with self._lock:
            log_queue_operation("replace", count=len(new_items), start_index=start_index)

            self.queue_items = new_items
            self.current_index = start_index if new_items else -1
            current = self.get_current_item()

        self._notify("replaced")
        return current

    # Removing

    def remove_at(self, index: int) -> QueueItem:
        """Remove the track at a specific index.

        Args:
            index: Index of track to remove

        Returns:
            The removed item

        Raises:
            IndexOutOfRange: If index is not a valid queue position
        """
        with self._lock:
            self._check_index("remove_at", index)

            item = self.queue_items.pop(index)
            log_queue_operation("remove", index=index, track_id=item.id, current_index=self.current_index)

            if index < self.current_index:
                self.current_index -= 1
            elif index == self.current_index:
                # Removed the current track: the slot now holds the next one
                if not self.queue_items:
                    self.current_index = -1
                elif self.current_index >= len(self.queue_items):
                    self.current_index = len(self.queue_items) - 1

        self._notify("removed", [index])
        return item

    def clear(self) -> None:
        """Clear all items from the queue. History is kept."""
        with self._lock:
            if not self.queue_items:
                return

            log_queue_operation("clear", count=len(self.queue_items))
            self.queue_items = []
            self.current_index = -1

        self._notify("cleared")

    def clear_history(self) -> None:
        with self._lock:
            if not len(self.history):
                return
            log_queue_operation("clear_history", count=len(self.history))
            self.history.clear()

        self._notify("history_cleared")

    def reset(self) -> None:
        """Drop queue and history, as at session teardown."""
        with self._lock:
            if not self.queue_items and not len(self.history):
                return

            log_queue_operation("reset", count=len(self.queue_items), history_size=len(self.history))
            self.queue_items = []
            self.current_index = -1
            self.history.clear()

        self._notify("cleared")

    # Position

    def _activate(self, index: int) -> QueueItem:
        """Move the pointer to a valid index, recording the outgoing item."""
        log_queue_operation("set_current", from_index=self.current_index, to_index=index)

        if self.current_index != -1:
            self.history.append(self.queue_items[self.current_index])
        self.current_index = index
        return self.queue_items[index]

    def set_current(self, index: int) -> QueueItem:
        """Make the track at index the current one.

        The previously current item, if any, is appended to history unless the
        index does not change.

        Args:
            index: Queue position to activate

        Returns:
            The item now current

        Raises:
            IndexOutOfRange: If index is not a valid queue position
        """
        with self._lock:
            self._check_index("set_current", index)

            if index == self.current_index:
                return self.queue_items[index]
            item = self._activate(index)

        self._notify("current_changed", [index])
        return item

    def next_item(self) -> QueueItem | None:
        """Advance to the next track in the queue.

        Returns:
            The new current item, or None if at the end
        """
        with self._lock:
            next_index = self.current_index + 1
            if next_index >= len(self.queue_items):
                return None
            item = self._activate(next_index)

        self._notify("current_changed", [next_index])
        return item

    def previous_item(self) -> QueueItem | None:
        """Go back to the previous track in the queue.

        Returns:
            The new current item, or None if at the beginning
        """
        with self._lock:
            if self.current_index <= 0:
                return None
            prev_index = self.current_index - 1
            item = self._activate(prev_index)

        self._notify("current_changed", [prev_index])
        return item

    # Reordering

    def move_in_queue(self, from_index: int, to_index: int) -> None:
        """Move a track from one position to another.

        Args:
            from_index: Current position of track
            to_index: Target position for track

        Raises:
            IndexOutOfRange: If either index is not a valid queue position
        """
        with self._lock:
            self._check_index("move_in_queue", from_index)
            self._check_index("move_in_queue", to_index)

            if from_index == to_index:
                return

            log_queue_operation("reorder", from_index=from_index, to_index=to_index, current_index=self.current_index)

            move_item(self.queue_items, from_index, to_index)

            # Adjust current_index if affected
            if from_index == self.current_index:
                # Currently playing track was moved
                self.current_index = to_index
            elif from_index < self.current_index <= to_index:
                # Track moved from before to after current
                self.current_index -= 1
            elif to_index <= self.current_index < from_index:
                # Track moved from after to before current
                self.current_index += 1

        self._notify("reordered", [from_index, to_index])

    def shuffle(self) -> None:
        """Randomly reorder the whole queue.

        The current track keeps playing: the pointer follows it to wherever it
        lands.
        """
        with self._lock:
            if len(self.queue_items) < 2:
                return

            log_queue_operation("shuffle", count=len(self.queue_items), current_index=self.current_index)
            self.current_index = shuffle_tracking(self.queue_items, self.current_index, self._rng)

        self._notify("shuffled")

    # Reading

    def get_queue(self) -> list[QueueItem]:
        """Get a copy of the queue in playback order."""
        return list(self.queue_items)

    def get_current_index(self) -> int:
        return self.current_index

    def get_current_item(self) -> QueueItem | None:
        """Get currently playing item.

        Returns:
            Current item, or None if nothing is active
        """
        if 0 <= self.current_index < len(self.queue_items):
            return self.queue_items[self.current_index]
        return None

    def peek_next(self) -> QueueItem | None:
        """Get the item after the current one without advancing."""
        next_index = self.current_index + 1
        if next_index < len(self.queue_items):
            return self.queue_items[next_index]
        return None

    def get_upcoming_count(self) -> int:
        """Get the number of items after the current one."""
        return max(0, len(self.queue_items) - self.current_index - 1)

    def get_history(self) -> list[QueueItem]:
        """Get every previously current item, oldest first."""
        return self.history.entries()

    def get_recent_history(self, limit: int | None = None) -> list[QueueItem]:
        """Get the last ``limit`` previously current items, newest first."""
        return self.history.recent(limit)

    def search(self, query: str | None) -> list[FilterMatch]:
        """Search queue items by text across title, artist, and album.

        Args:
            query: Text to search for

        Returns:
            Matches paired with their index in the unfiltered queue
        """
        return filter_queue(self.queue_items, query)
