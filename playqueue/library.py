"""Library collaborators consumed by the track resolver.

The library itself is populated by an external scanner; the queue only reads
from it.
"""

import sqlite3
from collections.abc import Iterable
from playqueue import config
from playqueue.models import Track, TrackId
from typing import Protocol

TRACK_COLUMNS = "id, filepath, title, artist, album, duration, added_date, play_count"


class Library(Protocol):
    """Read-only view of the track library."""

    def find_track_by_id(self, track_id: TrackId) -> Track | None: ...

    def all_tracks(self) -> list[Track]: ...


class InMemoryLibrary:
    """Library backed by a list of tracks, in library order."""

    def __init__(self, tracks: Iterable[Track] = ()):
        self._tracks = list(tracks)

    def find_track_by_id(self, track_id: TrackId) -> Track | None:
        return next((track for track in self._tracks if track.id == track_id), None)

    def all_tracks(self) -> list[Track]:
        return list(self._tracks)


class SqliteLibrary:
    """Library read from the player's SQLite ``library`` table.

    The table is created and filled by the scanner; only the columns in
    TRACK_COLUMNS are read.
    """

    def __init__(self, db_conn: sqlite3.Connection):
        self.db_conn = db_conn
        self.db_cursor = db_conn.cursor()

    @classmethod
    def from_path(cls, db_name: str | None = None) -> "SqliteLibrary":
        """Open the library database.

        Args:
            db_name: SQLite path; defaults to the DB_NAME setting
        """
        return cls(sqlite3.connect(db_name or config.DB_NAME))

    def close(self) -> None:
        self.db_conn.close()

    @staticmethod
    def _row_to_track(row: tuple) -> Track:
        track_id, filepath, title, artist, album, duration, added_date, play_count = row
        return Track(
            id=track_id,
            filepath=filepath,
            title=title,
            artist=artist,
            album=album,
            duration=duration,
            added_date=added_date,
            play_count=play_count or 0,
        )

    def find_track_by_id(self, track_id: TrackId) -> Track | None:
        """Get a track by its library id.

        Returns:
            Track, or None if no row has that id
        """
        self.db_cursor.execute(f'SELECT {TRACK_COLUMNS} FROM library WHERE id = ?', (track_id,))
        row = self.db_cursor.fetchone()
        return self._row_to_track(row) if row else None

    def all_tracks(self) -> list[Track]:
        """Get every track in library order."""
        self.db_cursor.execute(f'SELECT {TRACK_COLUMNS} FROM library ORDER BY id')
        return [self._row_to_track(row) for row in self.db_cursor.fetchall()]
