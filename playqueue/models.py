"""Track and queue models."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

TrackId = int | str


class Track(BaseModel):
    """Library track.

    Everything except ``id`` is optional; tracks scanned without tags only
    carry an id and a filepath.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: TrackId
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    duration: float | None = None
    play_count: int = 0
    rating: int | None = None
    filepath: str | None = None
    added_date: datetime | None = None


class QueueItem(Track):
    """A track value placed into the queue."""

    queued_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_track(cls, track: Track) -> "QueueItem":
        """Copy a library track into a queue item.

        Queue items pass through unchanged so re-queuing from history keeps
        the original value.
        """
        if isinstance(track, QueueItem):
            return track
        return cls(**track.model_dump())


class FilterMatch(BaseModel):
    """A queue item matched by a search, with its position in the unfiltered queue."""

    model_config = ConfigDict(frozen=True)

    item: QueueItem
    original_index: int


class QueueUpdatedEvent(BaseModel):
    """Event delivered to queue observers after a mutation commits."""

    action: Literal[
        "added",
        "removed",
        "reordered",
        "cleared",
        "shuffled",
        "current_changed",
        "replaced",
        "history_cleared",
    ]
    positions: list[int] | None = None
    queue_length: int
    current_index: int
