"""
Persistence of songs in SQLite.

``SongRepository`` opens one connection per operation through the
injected ``connection_factory`` and closes it before returning.  All
statements are parameterized; listing queries come from
``query_builder``.  Any ``sqlite3.Error`` is logged and re-raised as
``StorageError`` so a failed write is never reported as a success.
Identifiers and pagination outside SQLite's integer range are
rejected with ``ValidationError`` before a statement is executed.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable, List, Mapping, Optional

from ..core.db import get_connection
from ..core.errors import NotFoundError, StorageError
from ..schemas.song import SongRead, SongUpdate
from .query_builder import (
    SONG_COLUMNS,
    FilterField,
    build_count_query,
    build_list_query,
    normalize_pagination,
    normalize_song_id,
)


class SongRepository:
    """CRUD access to the ``songs`` table."""

    def __init__(
        self,
        connection_factory: Callable[[], sqlite3.Connection] = get_connection,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._connect = connection_factory
        self._logger = logger or logging.getLogger(__name__)

    def _connection(self) -> sqlite3.Connection:
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            self._logger.error("Could not open database connection: %s", exc)
            raise StorageError("database unavailable", cause=exc) from exc
        conn.row_factory = sqlite3.Row
        return conn

    def create(self, song: SongUpdate) -> int:
        """Insert ``song`` and return the identifier assigned by the database."""
        conn = self._connection()
        try:
            cursor = conn.execute(
                """
                INSERT INTO songs (group_name, song_title, release_date, text, link)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    song.group,
                    song.title,
                    song.release_date or "",
                    song.text or "",
                    song.link or "",
                ),
            )
            song_id = cursor.lastrowid
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            self._logger.error("Failed to insert song %r by %r: %s", song.title, song.group, exc)
            raise StorageError("failed to create song", cause=exc) from exc
        finally:
            conn.close()
        self._logger.info("Created song %s", song_id)
        return song_id

    def get_by_id(self, song_id: int) -> SongRead:
        """Return the song with ``song_id`` or raise ``NotFoundError``."""
        song_id = normalize_song_id(song_id)
        conn = self._connection()
        try:
            row = conn.execute(
                f"SELECT {', '.join(SONG_COLUMNS)} FROM songs WHERE id = ?",
                (song_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            self._logger.error("Failed to read song %s: %s", song_id, exc)
            raise StorageError("failed to read song", cause=exc) from exc
        finally:
            conn.close()
        if row is None:
            self._logger.warning("Song %s not found", song_id)
            raise NotFoundError(f"song {song_id} not found")
        return self._row_to_song(row)

    def update(self, song_id: int, song: SongUpdate) -> SongRead:
        """Replace every mutable field of song ``song_id``.

        Raises ``NotFoundError`` when no row has that identifier.
        """
        song_id = normalize_song_id(song_id)
        conn = self._connection()
        try:
            cursor = conn.execute(
                """
                UPDATE songs
                SET group_name = ?, song_title = ?, release_date = ?, text = ?, link = ?
                WHERE id = ?
                """,
                (
                    song.group,
                    song.title,
                    song.release_date or "",
                    song.text or "",
                    song.link or "",
                    song_id,
                ),
            )
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            self._logger.error("Failed to update song %s: %s", song_id, exc)
            raise StorageError("failed to update song", cause=exc) from exc
        finally:
            conn.close()
        if not affected:
            self._logger.warning("Update of missing song %s", song_id)
            raise NotFoundError(f"song {song_id} not found")
        self._logger.info("Updated song %s", song_id)
        return SongRead(
            id=song_id,
            group=song.group,
            title=song.title,
            release_date=song.release_date or "",
            text=song.text or "",
            link=song.link or "",
        )

    def delete(self, song_id: int) -> bool:
        """Delete song ``song_id``.

        Returns ``True`` if a row was removed; deleting a missing song
        is not an error.
        """
        song_id = normalize_song_id(song_id)
        conn = self._connection()
        try:
            cursor = conn.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            self._logger.error("Failed to delete song %s: %s", song_id, exc)
            raise StorageError("failed to delete song", cause=exc) from exc
        finally:
            conn.close()
        if affected:
            self._logger.info("Deleted song %s", song_id)
        return affected > 0

    def list(self, filters: Mapping[FilterField, str], limit: int, offset: int) -> List[SongRead]:
        """Return songs matching ``filters``, ordered by id, one page at a time."""
        limit, offset = normalize_pagination(limit, offset)
        query = build_list_query(filters, limit, offset)
        self._logger.debug("Listing songs: %s %s", query.sql, query.params)
        conn = self._connection()
        try:
            rows = conn.execute(query.sql, query.params).fetchall()
        except sqlite3.Error as exc:
            self._logger.error("Failed to list songs: %s", exc)
            raise StorageError("failed to list songs", cause=exc) from exc
        finally:
            conn.close()
        return [self._row_to_song(row) for row in rows]

    def count(self, filters: Mapping[FilterField, str]) -> int:
        """Return how many songs match ``filters`` in total."""
        query = build_count_query(filters)
        conn = self._connection()
        try:
            row = conn.execute(query.sql, query.params).fetchone()
        except sqlite3.Error as exc:
            self._logger.error("Failed to count songs: %s", exc)
            raise StorageError("failed to count songs", cause=exc) from exc
        finally:
            conn.close()
        return row["total"]

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> SongRead:
        """Convert a database row to a SongRead, mapping NULLs to empty strings."""
        return SongRead(
            id=row["id"],
            group=row["group_name"],
            title=row["song_title"],
            release_date=row["release_date"] or "",
            text=row["text"] or "",
            link=row["link"] or "",
        )
