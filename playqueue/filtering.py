"""Search view over the queue that keeps each match's original position."""

from collections.abc import Sequence
from playqueue.models import FilterMatch, QueueItem

# Optional track fields that contribute to the searchable text, in order
SEARCH_FIELDS = ("title", "artist", "album")


def searchable_text(item: QueueItem) -> str:
    """Join the item's present search fields into one lowercase string."""
    values = (getattr(item, field) for field in SEARCH_FIELDS)
    return " ".join(value for value in values if value).lower()


def filter_queue(queue: Sequence[QueueItem], query: str | None) -> list[FilterMatch]:
    """Search queue items by text across title, artist, and album.

    Args:
        queue: Queue items in playback order
        query: Text to search for; blank matches everything

    Returns:
        Matching items paired with their index in ``queue``, in queue order
    """
    if not query or not query.strip():
        return [FilterMatch(item=item, original_index=i) for i, item in enumerate(queue)]

    search_lower = query.lower()
    return [
        FilterMatch(item=item, original_index=i)
        for i, item in enumerate(queue)
        if search_lower in searchable_text(item)
    ]
