"""
Business logic for the song catalogue.

``SongService`` holds no state of its own.  It validates listing
input, enriches new songs through the metadata provider before they
are stored, and paginates lyrics.  Database and provider calls block,
so they run in the threadpool and never stall the event loop.  Errors
from the repository and the enrichment client propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from starlette.concurrency import run_in_threadpool

from ..schemas.song import SongCreate, SongRead, SongUpdate
from .enrichment_client import EnrichmentClient
from .query_builder import FilterField, normalize_filter, normalize_pagination, normalize_song_id
from .song_repository import SongRepository
from .verse_paginator import paginate_verses


class SongService:
    """Orchestrates the repository, enrichment client and verse paginator."""

    def __init__(
        self,
        repository: SongRepository,
        enrichment_client: EnrichmentClient,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repository = repository
        self.enrichment_client = enrichment_client
        self._logger = logger or logging.getLogger(__name__)

    async def list_songs(
        self,
        filters: Optional[Mapping[Union[FilterField, str], Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[SongRead]:
        """Return one page of songs matching every given filter.

        Unknown filter keys and out-of-range pagination raise
        ``ValidationError`` before the database is queried.
        """
        normalized = normalize_filter(filters)
        limit, offset = normalize_pagination(limit, offset)
        return await run_in_threadpool(self.repository.list, normalized, limit, offset)

    async def count_songs(
        self,
        filters: Optional[Mapping[Union[FilterField, str], Any]] = None,
    ) -> int:
        """Return the total number of songs matching ``filters``."""
        normalized = normalize_filter(filters)
        return await run_in_threadpool(self.repository.count, normalized)

    async def create_song(self, data: SongCreate) -> SongRead:
        """Enrich ``data`` from the metadata provider, then store it.

        If enrichment fails nothing is written.
        """
        info = await run_in_threadpool(self.enrichment_client.fetch, data.group, data.title)
        draft = SongUpdate(
            group=data.group,
            title=data.title,
            release_date=info.release_date,
            text=info.text,
            link=info.link,
        )
        song_id = await run_in_threadpool(self.repository.create, draft)
        self._logger.info("Song %s '%s' by '%s' added", song_id, data.title, data.group)
        return SongRead(
            id=song_id,
            group=draft.group,
            title=draft.title,
            release_date=info.release_date,
            text=info.text,
            link=info.link,
        )

    async def update_song(self, song_id: int, data: SongUpdate) -> SongRead:
        song_id = normalize_song_id(song_id)
        return await run_in_threadpool(self.repository.update, song_id, data)

    async def delete_song(self, song_id: int) -> None:
        song_id = normalize_song_id(song_id)
        await run_in_threadpool(self.repository.delete, song_id)

    async def get_song_by_id(self, song_id: int) -> SongRead:
        song_id = normalize_song_id(song_id)
        return await run_in_threadpool(self.repository.get_by_id, song_id)

    async def get_song_text(
        self,
        song: SongRead,
        verse_page: Optional[int] = None,
        verse_page_size: Optional[int] = None,
    ) -> str:
        """Return the verses of ``song`` on the requested verse page."""
        if not song.text:
            self._logger.info("Song %s has no lyrics", song.id)
        return paginate_verses(song.text, verse_page, verse_page_size, logger=self._logger)
