"""
Pydantic models for song data.

Python attributes are snake_case; on the wire the models use the JSON
names clients and the metadata provider already speak (``group``,
``song``, ``releaseDate``, ``text``, ``link``).  ``populate_by_name``
lets services build the models with either spelling.
"""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RELEASE_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def check_release_date(value: Optional[str]) -> Optional[str]:
    if value and not RELEASE_DATE_RE.fullmatch(value):
        raise ValueError("releaseDate must use the YYYY-MM-DD format")
    return value


class SongCreate(BaseModel):
    """Schema for creating a song; the rest is filled in by enrichment."""

    model_config = ConfigDict(populate_by_name=True)

    group: str = Field(..., min_length=1, examples=["Muse"])
    title: str = Field(..., alias="song", min_length=1, examples=["Supermassive Black Hole"])

    @field_validator("group", "title")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class SongUpdate(SongCreate):
    """Schema for replacing a song.

    All mutable fields are written; omitted optional fields are stored
    as empty strings rather than kept from the previous version.
    """

    release_date: Optional[str] = Field(None, alias="releaseDate", examples=["2006-07-16"])
    text: Optional[str] = None
    link: Optional[str] = None

    @field_validator("release_date")
    @classmethod
    def validate_release_date(cls, v: Optional[str]) -> Optional[str]:
        return check_release_date(v)


class SongRead(BaseModel):
    """Schema for reading a song from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    group: str
    title: str = Field(..., alias="song")
    release_date: str = Field("", alias="releaseDate")
    text: str = ""
    link: str = ""


class EnrichmentResult(BaseModel):
    """Supplementary data returned by the external metadata provider."""

    model_config = ConfigDict(populate_by_name=True)

    release_date: str = Field(..., alias="releaseDate")
    text: str
    link: str

    @field_validator("release_date")
    @classmethod
    def validate_release_date(cls, v: str) -> str:
        return check_release_date(v)


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    code: int = Field(..., examples=[500])
    message: str = Field(..., examples=["Internal Server Error"])
