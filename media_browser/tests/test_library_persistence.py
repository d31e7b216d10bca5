#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for saving, looking up and updating records in the database.
"""

import sqlite3
from unittest.mock import patch

import pytest

from media_browser.models.media_file import MediaKind, build
from media_browser.tests.fixtures.sample_media import create_test_database


class TestDatabaseManager:

    def test_add_and_lookup(self, db):
        file_id = db.add_file({"basename": "a.mkv", "fullpath": "/a.mkv", "favorited": True})
        row = db.get_file(file_id)
        assert row["fullpath"] == "/a.mkv"
        assert row["favorited"] == 1
        assert db.find_by_fullpath("/a.mkv")["id"] == file_id
        assert db.find_by_fullpath("/missing") is None

    def test_fullpath_is_unique(self, db):
        db.add_file({"basename": "a.mkv", "fullpath": "/a.mkv"})
        with pytest.raises(sqlite3.IntegrityError):
            db.add_file({"basename": "a.mkv", "fullpath": "/a.mkv"})

    def test_modify_by_filter(self, db):
        file_id = db.add_file({"basename": "a.mkv", "fullpath": "/a.mkv"})
        assert db.modify({"id": file_id}, {"favorited": True}) == 1
        assert db.get_file(file_id)["favorited"] == 1
        assert db.modify({"id": file_id + 100}, {"favorited": True}) == 0

    def test_modify_rejects_unknown_columns(self, db):
        with pytest.raises(ValueError):
            db.modify({"id": 1}, {"favorited; DROP TABLE files": 1})

    def test_list_files(self, tmp_path):
        db = create_test_database(tmp_path / "sample.db")
        try:
            names = [r["basename"] for r in db.list_files()]
            assert names == ["concert.MP4", "comic.zip", "holiday.mkv"]
            assert [r["basename"] for r in db.list_files(favorites_only=True)] == ["concert.MP4"]
        finally:
            db.close()


class TestSave:

    @pytest.mark.asyncio
    async def test_save_round_trips_through_storage(self, library, tmp_path):
        source = tmp_path / "trip.mkv"
        source.write_bytes(b"\x00" * 128)
        media = await library.build_by_path(source)
        assert media.id is None
        assert media.filesize == 128
        assert not await library.is_persisted(media)

        saved = await library.save(media)
        assert saved.id is not None
        assert saved.kind is MediaKind.MOVIE
        assert saved.width == 1920
        assert saved.duration == 5421
        assert saved.favorited is False
        assert await library.is_persisted(saved)
        assert await library.is_persisted(media)

    @pytest.mark.asyncio
    async def test_save_failure_returns_input(self, library, caplog):
        media = build({"basename": "c.zip", "fullpath": "/b/c.zip"})
        first = await library.save(media)
        assert first.id is not None

        again = await library.save(media)
        assert again is media
        assert "Unable to save" in caplog.text

    @pytest.mark.asyncio
    async def test_is_persisted_swallows_errors(self, library):
        media = build({"id": 3, "basename": "c.zip", "fullpath": "/b/c.zip"})
        with patch.object(library.db_manager, "get_file", side_effect=sqlite3.OperationalError("locked")):
            assert await library.is_persisted(media) is False


class TestToggleFavorite:

    @pytest.mark.asyncio
    async def test_toggle_persists(self, library):
        saved = await library.save(build({"basename": "c.zip", "fullpath": "/b/c.zip"}))
        assert saved.favorited is False

        toggled = await library.toggle_favorite(saved)
        assert toggled.favorited is True
        assert saved.favorited is False
        assert (await library.get(saved.id)).favorited is True

        back = await library.toggle_favorite(toggled)
        assert back.favorited is False
        assert (await library.get(saved.id)).favorited is False

    @pytest.mark.asyncio
    async def test_failure_returns_original(self, library):
        saved = await library.save(build({"basename": "c.zip", "fullpath": "/b/c.zip"}))
        with patch.object(library.db_manager, "modify", side_effect=sqlite3.OperationalError("disk I/O error")):
            result = await library.toggle_favorite(saved)
        assert result is saved
        assert result.favorited is False

    @pytest.mark.asyncio
    async def test_unsaved_record_is_not_flipped(self, library, caplog):
        media = build({"basename": "c.zip", "fullpath": "/b/c.zip"})
        result = await library.toggle_favorite(media)
        assert result is media
        assert result.favorited is False
        assert "no stored record" in caplog.text

    @pytest.mark.asyncio
    async def test_deleted_row_returns_original(self, library):
        saved = await library.save(build({"basename": "c.zip", "fullpath": "/b/c.zip"}))
        with library.db_manager.conn:
            library.db_manager.conn.execute("DELETE FROM files WHERE id=?", (saved.id,))

        result = await library.toggle_favorite(saved)
        assert result is saved
        assert result.favorited is False


class TestBuildByPath:

    @pytest.mark.asyncio
    async def test_archive_from_stat(self, library, tmp_path):
        source = tmp_path / "book.ZIP"
        source.write_bytes(b"PK")
        media = await library.build_by_path(source)
        assert media.kind is MediaKind.ARCHIVE
        assert media.basename == "book.ZIP"
        assert media.fullpath == str(source)
        assert media.ctime == source.stat().st_ctime

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, library, tmp_path):
        with pytest.raises(FileNotFoundError):
            await library.build_by_path(tmp_path / "gone.mkv")
