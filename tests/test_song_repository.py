import sqlite3

import pytest

from song_library_api.app.core.errors import NotFoundError, StorageError, ValidationError
from song_library_api.app.schemas.song import SongUpdate
from song_library_api.app.services.query_builder import MAX_SQLITE_INT, FilterField
from song_library_api.app.services.song_repository import SongRepository


def _song(group, title, release_date="2006-07-16", text="line 1\nline 2", link="https://example.com"):
    return SongUpdate(group=group, title=title, release_date=release_date, text=text, link=link)


@pytest.fixture
def repo():
    return SongRepository()


@pytest.fixture
def catalogue(repo):
    rows = [
        ("Muse", "Uprising"),
        ("Muse", "Starlight"),
        ("The Beatles", "Hey Jude"),
        ("Muse", "Uprising"),
        ("Queen", "Starlight"),
    ]
    return [repo.create(_song(group, title)) for group, title in rows]


@pytest.mark.unit
def test_create_then_get_by_id(repo):
    song_id = repo.create(_song("Muse", "Uprising", text="a\nb"))
    song = repo.get_by_id(song_id)
    assert song.id == song_id
    assert (song.group, song.title) == ("Muse", "Uprising")
    assert song.release_date == "2006-07-16"
    assert song.text == "a\nb"
    assert song.link == "https://example.com"


@pytest.mark.unit
def test_missing_optional_fields_are_stored_as_empty_strings(repo):
    song_id = repo.create(SongUpdate(group="Muse", title="Uprising"))
    song = repo.get_by_id(song_id)
    assert (song.release_date, song.text, song.link) == ("", "", "")


@pytest.mark.unit
def test_get_unknown_id_raises_not_found(repo):
    with pytest.raises(NotFoundError):
        repo.get_by_id(999)


@pytest.mark.unit
def test_update_replaces_every_field(repo):
    song_id = repo.create(_song("Muse", "Uprising"))
    updated = repo.update(song_id, SongUpdate(group="Muse", title="Resistance", text="new"))
    assert updated.title == "Resistance"

    song = repo.get_by_id(song_id)
    assert song.title == "Resistance"
    assert song.text == "new"
    # Omitted fields are cleared, not merged from the previous version.
    assert song.release_date == ""
    assert song.link == ""


@pytest.mark.unit
def test_update_unknown_id_raises_not_found(repo, row_count):
    with pytest.raises(NotFoundError):
        repo.update(42, _song("Muse", "Uprising"))
    assert row_count() == 0


@pytest.mark.unit
def test_delete_is_idempotent(repo):
    song_id = repo.create(_song("Muse", "Uprising"))
    assert repo.delete(song_id) is True
    assert repo.delete(song_id) is False
    assert repo.delete(12345) is False
    with pytest.raises(NotFoundError):
        repo.get_by_id(song_id)


@pytest.mark.unit
def test_ids_are_not_reused_after_delete(repo):
    first = repo.create(_song("Muse", "Uprising"))
    repo.delete(first)
    second = repo.create(_song("Muse", "Uprising"))
    assert second > first


@pytest.mark.unit
def test_list_applies_every_filter(repo, catalogue):
    muse = repo.list({FilterField.GROUP: "Muse"}, 11, 0)
    assert [s.id for s in muse] == [catalogue[0], catalogue[1], catalogue[3]]

    both = repo.list({FilterField.GROUP: "Muse", FilterField.TITLE: "Uprising"}, 11, 0)
    assert [s.id for s in both] == [catalogue[0], catalogue[3]]
    assert all(s.group == "Muse" and s.title == "Uprising" for s in both)

    assert repo.list({FilterField.GROUP: "Nobody"}, 11, 0) == []


@pytest.mark.unit
def test_filter_values_are_matched_literally(repo, catalogue):
    assert repo.list({FilterField.GROUP: "Muse' OR '1'='1"}, 11, 0) == []
    assert repo.count({FilterField.GROUP: "Muse' OR '1'='1"}) == 0


@pytest.mark.unit
def test_pages_concatenate_to_the_full_listing(repo, catalogue):
    pages = []
    for offset in range(0, len(catalogue) + 2, 2):
        pages.extend(repo.list({}, 2, offset))
    assert [s.id for s in pages] == sorted(catalogue)
    assert len({s.id for s in pages}) == len(catalogue)


@pytest.mark.unit
def test_count(repo, catalogue):
    assert repo.count({}) == 5
    assert repo.count({FilterField.TITLE: "Starlight"}) == 2


@pytest.mark.unit
def test_connection_failures_become_storage_errors():
    def broken():
        raise sqlite3.OperationalError("unable to open database file")

    repo = SongRepository(connection_factory=broken)
    with pytest.raises(StorageError) as excinfo:
        repo.create(_song("Muse", "Uprising"))
    assert isinstance(excinfo.value.cause, sqlite3.OperationalError)


@pytest.mark.unit
def test_query_failures_become_storage_errors(tmp_path):
    # A database without the songs table makes every statement fail.
    empty_db = tmp_path / "empty.db"
    repo = SongRepository(connection_factory=lambda: sqlite3.connect(str(empty_db)))
    with pytest.raises(StorageError):
        repo.create(_song("Muse", "Uprising"))
    with pytest.raises(StorageError):
        repo.list({}, 11, 0)
    with pytest.raises(StorageError):
        repo.get_by_id(1)


@pytest.mark.unit
def test_ids_and_offsets_beyond_sqlite_integers_are_rejected(repo, row_count):
    repo.create(_song("Muse", "Uprising"))
    too_big = MAX_SQLITE_INT + 1
    with pytest.raises(ValidationError):
        repo.get_by_id(too_big)
    with pytest.raises(ValidationError):
        repo.update(2**64, _song("Muse", "x"))
    with pytest.raises(ValidationError):
        repo.delete(too_big)
    with pytest.raises(ValidationError):
        repo.list({}, 11, too_big)
    assert row_count() == 1
