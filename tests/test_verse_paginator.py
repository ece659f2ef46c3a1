import pytest

from song_library_api.app.services.verse_paginator import count_verses, paginate_verses

LYRICS = "a\nb\nc\nd\ne"


@pytest.mark.unit
@pytest.mark.parametrize(
    "page, size, expected",
    [
        (1, 2, "a\nb"),
        (2, 2, "c\nd"),
        (3, 2, "e"),
        (10, 2, ""),
        (1, 5, LYRICS),
        (1, 50, LYRICS),
    ],
)
def test_paginate_verses(page, size, expected):
    assert paginate_verses(LYRICS, page, size) == expected


@pytest.mark.unit
@pytest.mark.parametrize("page, size", [(1, 5), (3, 2), (0, 0)])
def test_empty_lyrics_give_empty_page(page, size):
    assert paginate_verses("", page, size) == ""
    assert paginate_verses(None, page, size) == ""


@pytest.mark.unit
def test_non_positive_values_fall_back_to_defaults():
    text = "\n".join(str(i) for i in range(1, 13))
    assert paginate_verses(text, 0, 0) == "1\n2\n3\n4\n5"
    assert paginate_verses(text, -3, None) == "1\n2\n3\n4\n5"
    assert paginate_verses(text, 2, -1) == "6\n7\n8\n9\n10"


@pytest.mark.unit
def test_count_verses():
    assert count_verses(LYRICS) == 5
    assert count_verses("") == 0
    assert count_verses("single") == 1
