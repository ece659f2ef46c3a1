"""
Song endpoints for API v1.

These routes expose the song catalogue: filtered listing with
limit/offset pagination, CRUD by identifier and verse-paginated lyrics.
Failures raised by the service layer are translated to status codes by
the exception handlers registered in ``app.main``.
"""

from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.responses import PlainTextResponse

from song_library_api.app.schemas.song import ErrorResponse, SongCreate, SongRead, SongUpdate
from song_library_api.app.services.enrichment_client import EnrichmentClient
from song_library_api.app.services.query_builder import DEFAULT_LIMIT, MAX_SQLITE_INT
from song_library_api.app.services.song_repository import SongRepository
from song_library_api.app.services.song_service import SongService
from song_library_api.app.services.verse_paginator import (
    DEFAULT_VERSE_PAGE,
    DEFAULT_VERSE_PAGE_SIZE,
    count_verses,
)

router = APIRouter()

# Query parameters of the listing that are not filter keys.
PAGINATION_PARAMS = {"limit", "offset"}

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


# Ids outside SQLite's integer range are rejected before reaching the service.
SongId = Annotated[int, Path(ge=1, le=MAX_SQLITE_INT, description="Song identifier")]


def get_song_service(request: Request) -> SongService:
    """Build the service around the application's shared enrichment client."""
    client: EnrichmentClient = request.app.state.enrichment_client
    return SongService(repository=SongRepository(), enrichment_client=client)


@router.get("", response_model=List[SongRead], responses=ERROR_RESPONSES)
async def list_songs(
    request: Request,
    response: Response,
    group: Optional[str] = Query(None, description="Exact group name"),
    song_title: Optional[str] = Query(None, description="Exact song title"),
    song: Optional[str] = Query(None, description="Alias of song_title"),
    limit: int = Query(DEFAULT_LIMIT, description="Page size; 0 means the default of 11"),
    offset: int = Query(0, description="Number of songs to skip"),
    service: SongService = Depends(get_song_service),
) -> List[SongRead]:
    """Return songs ordered by id, filtered by ``group`` and/or ``song_title``.

    Every non-pagination query parameter is treated as a filter key, so
    an unsupported one is rejected with 400 instead of being ignored.
    Empty values are skipped.  The total number of matches is returned
    in the ``X-Total-Count`` header.
    """
    filters: Dict[str, str] = {
        key: value
        for key, value in request.query_params.items()
        if key not in PAGINATION_PARAMS and value != ""
    }
    songs = await service.list_songs(filters, limit=limit, offset=offset)
    response.headers["X-Total-Count"] = str(await service.count_songs(filters))
    return songs


@router.post(
    "",
    response_model=SongRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse}, **ERROR_RESPONSES},
)
async def create_song(
    song_in: SongCreate,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Add a song, enriched with release date, lyrics and link from the provider.

    Answers 502 and stores nothing when the provider fails.
    """
    return await service.create_song(song_in)


@router.get("/{song_id}", response_model=SongRead, responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}})
async def get_song(
    song_id: SongId,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    return await service.get_song_by_id(song_id)


@router.put("/{song_id}", response_model=SongRead, responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}})
async def update_song(
    song_id: SongId,
    song_in: SongUpdate,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Replace all fields of a song; omitted optional fields become empty."""
    return await service.update_song(song_id, song_in)


@router.delete("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_song(
    song_id: SongId,
    service: SongService = Depends(get_song_service),
) -> Response:
    """Delete a song.  Deleting an unknown id also answers 204."""
    await service.delete_song(song_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{song_id}/text",
    response_class=PlainTextResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_song_text(
    song_id: SongId,
    verse_page: Optional[int] = Query(DEFAULT_VERSE_PAGE, alias="versePage"),
    verse_page_size: Optional[int] = Query(DEFAULT_VERSE_PAGE_SIZE, alias="versePageSize"),
    service: SongService = Depends(get_song_service),
) -> PlainTextResponse:
    """Return one page of verses as plain text.

    ``versePage`` is 1-indexed; zero or negative values fall back to the
    defaults.  A page past the end is empty.  The ``X-Total-Verses``
    header holds the number of verses of the whole song.
    """
    song = await service.get_song_by_id(song_id)
    text = await service.get_song_text(song, verse_page, verse_page_size)
    return PlainTextResponse(text, headers={"X-Total-Verses": str(count_verses(song.text))})
