"""Playback queue and history core."""

from playqueue.errors import IndexOutOfRange, QueueError
from playqueue.filtering import filter_queue
from playqueue.library import InMemoryLibrary, Library, SqliteLibrary
from playqueue.models import FilterMatch, QueueItem, QueueUpdatedEvent, Track
from playqueue.queue import QueueManager
from playqueue.resolver import TrackResolver

__all__ = [
    'FilterMatch',
    'InMemoryLibrary',
    'IndexOutOfRange',
    'Library',
    'QueueError',
    'QueueItem',
    'QueueManager',
    'QueueUpdatedEvent',
    'SqliteLibrary',
    'Track',
    'TrackResolver',
    'filter_queue',
]
