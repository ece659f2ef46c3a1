"""
Construction of the filtered, ordered and paginated song listing query.

Filter keys come from the closed ``FilterField`` enum and are mapped to
column names through ``FILTER_COLUMNS``; no caller-supplied string is
ever interpolated into SQL text.  Filter values, ``limit`` and
``offset`` are always bound as parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..core.errors import ValidationError

DEFAULT_LIMIT = 11
MAX_LIMIT = 1000
DEFAULT_OFFSET = 0
# Largest value SQLite can bind as an INTEGER.
MAX_SQLITE_INT = 2**63 - 1

SONG_COLUMNS = ("id", "group_name", "song_title", "release_date", "text", "link")


class FilterField(str, Enum):
    """Song attributes a listing can be filtered on (exact match)."""

    GROUP = "group"
    TITLE = "song_title"


FILTER_COLUMNS: Dict[FilterField, str] = {
    FilterField.GROUP: "group_name",
    FilterField.TITLE: "song_title",
}

# ``song`` is the title's name in the JSON payloads.
FILTER_KEY_ALIASES: Dict[str, FilterField] = {
    "song": FilterField.TITLE,
}


@dataclass(frozen=True)
class SongQuery:
    """A SQL statement together with its ordered bind parameters."""

    sql: str
    params: Tuple[Any, ...]


def normalize_filter(
    raw: Optional[Mapping[Union[FilterField, str], Any]],
) -> Dict[FilterField, str]:
    """Validate filter keys against ``FilterField`` and values as strings.

    Raises ``ValidationError`` for the first unrecognized key, a
    non-string value, or an alias and its key given different values.
    """
    filters: Dict[FilterField, str] = {}
    for key, value in (raw or {}).items():
        field = FILTER_KEY_ALIASES.get(key)
        if field is None:
            try:
                field = FilterField(key)
            except ValueError:
                raise ValidationError(f"unsupported filter key: {key!r}") from None
        if not isinstance(value, str):
            raise ValidationError(f"filter value for {field.value!r} must be a string")
        if field in filters and filters[field] != value:
            raise ValidationError(f"conflicting values for filter {field.value!r}")
        filters[field] = value
    return filters


def normalize_song_id(song_id: Any) -> int:
    """Reject identifiers that cannot name a stored song."""
    if isinstance(song_id, bool) or not isinstance(song_id, int):
        raise ValidationError("song id must be an integer")
    if song_id < 1 or song_id > MAX_SQLITE_INT:
        raise ValidationError(f"song id must be between 1 and {MAX_SQLITE_INT}")
    return song_id


def normalize_pagination(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    """Apply listing defaults and reject out-of-range values.

    A missing or zero ``limit`` becomes ``DEFAULT_LIMIT``; a missing
    ``offset`` becomes 0.
    """
    if limit is None or limit == 0:
        limit = DEFAULT_LIMIT
    if offset is None:
        offset = DEFAULT_OFFSET
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("limit must be an integer")
    if isinstance(offset, bool) or not isinstance(offset, int):
        raise ValidationError("offset must be an integer")
    if limit < 0 or limit > MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")
    if offset < 0 or offset > MAX_SQLITE_INT:
        raise ValidationError(f"offset must be between 0 and {MAX_SQLITE_INT}")
    return limit, offset


def _where_clause(filters: Mapping[FilterField, str]) -> Tuple[str, list]:
    where_clauses: list[str] = []
    params: list = []
    # Declaration order keeps the SQL text stable for a given key set.
    for field in FilterField:
        if field in filters:
            where_clauses.append(f"{FILTER_COLUMNS[field]} = ?")
            params.append(filters[field])
    if not where_clauses:
        return "", params
    return " WHERE " + " AND ".join(where_clauses), params


def build_list_query(
    filters: Mapping[FilterField, str],
    limit: int,
    offset: int,
) -> SongQuery:
    """Build the listing query for already-normalized filters and pagination."""
    where, params = _where_clause(filters)
    sql = f"SELECT {', '.join(SONG_COLUMNS)} FROM songs{where} ORDER BY id ASC LIMIT ? OFFSET ?"
    params.extend([limit, offset])
    return SongQuery(sql=sql, params=tuple(params))


def build_count_query(filters: Mapping[FilterField, str]) -> SongQuery:
    """Build a query counting every row the filters match, ignoring pagination."""
    where, params = _where_clause(filters)
    return SongQuery(sql=f"SELECT COUNT(*) AS total FROM songs{where}", params=tuple(params))
