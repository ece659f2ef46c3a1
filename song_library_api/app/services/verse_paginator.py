"""
Verse-level pagination over song lyrics.

Lyrics are stored as newline-delimited text; each line is a verse.
Pages are 1-indexed and a page beyond the end of the lyrics is simply
empty.
"""

import logging
from typing import Optional

VERSE_SEPARATOR = "\n"
DEFAULT_VERSE_PAGE = 1
DEFAULT_VERSE_PAGE_SIZE = 5


def count_verses(text: Optional[str]) -> int:
    """Return the number of verses in ``text`` (0 for empty lyrics)."""
    if not text:
        return 0
    return len(text.split(VERSE_SEPARATOR))


def paginate_verses(
    text: Optional[str],
    page: Optional[int] = DEFAULT_VERSE_PAGE,
    page_size: Optional[int] = DEFAULT_VERSE_PAGE_SIZE,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Return the verses of ``text`` that fall on ``page``.

    Missing or non-positive ``page`` and ``page_size`` fall back to 1
    and 5.  The selected verses are joined with the separator they were
    split on.
    """
    log = logger or logging.getLogger(__name__)
    if not text:
        return ""
    if not page or page < 1:
        page = DEFAULT_VERSE_PAGE
    if not page_size or page_size < 1:
        page_size = DEFAULT_VERSE_PAGE_SIZE

    verses = text.split(VERSE_SEPARATOR)
    total = len(verses)
    start = (page - 1) * page_size
    end = start + page_size
    log.debug(
        "Paginating verses: total=%s page=%s page_size=%s start=%s",
        total, page, page_size, start,
    )
    if start >= total:
        return ""
    end = min(end, total)
    return VERSE_SEPARATOR.join(verses[start:end])
