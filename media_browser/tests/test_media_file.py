#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for MediaFile records and variant dispatch.
"""

import dataclasses
from pathlib import Path

import pytest

from media_browser.models.media_file import MediaFile, MediaKind, build


class TestBuildDispatch:
    """Variant selection from the file extension."""

    def test_upper_case_movie_extension(self):
        media = build({"basename": "movie.MKV", "fullpath": "/v/movie.MKV"})
        assert media.kind is MediaKind.MOVIE
        assert media.is_movie

    def test_zip_is_archive(self):
        media = build({"basename": "archive.zip", "fullpath": "/b/archive.zip"})
        assert media.kind is MediaKind.ARCHIVE
        assert not media.is_movie

    def test_unknown_extension_falls_back_to_archive(self):
        media = build({"basename": "notes.cbz", "fullpath": "/b/notes.cbz"})
        assert media.kind is MediaKind.ARCHIVE

    def test_row_keys_are_mapped_and_extras_ignored(self):
        row = {
            "id": 7, "basename": "a.mp4", "fullpath": "/x/a.mp4", "filesize": 10,
            "ctime": 1.5, "favorited": 1, "thumbnail_version": None,
            "created_at": "2024-01-01 00:00:00", "kind": "archive",
        }
        media = build(row)
        assert media.id == 7
        assert media.favorited is True
        assert media.thumbnail_version == 0
        # Stored kind never overrides the extension
        assert media.kind is MediaKind.MOVIE


class TestDerivedFields:

    def test_names(self):
        media = build({"basename": "Some.Show.S01E02.mkv", "fullpath": "/tv/Some.Show.S01E02.mkv"})
        assert media.extname == "mkv"
        assert media.basename_without_extension == "Some.Show.S01E02"

    def test_movie_resolution_and_duration(self):
        media = build({"basename": "a.mkv", "fullpath": "/a.mkv",
                       "width": 1280, "height": 720, "duration": 3725})
        assert media.resolution == "1280x720"
        assert media.duration_str == "1:02:05"

    def test_unknown_duration_is_nan(self):
        media = build({"basename": "a.avi", "fullpath": "/a.avi"})
        assert media.duration_str == "NaN"

    def test_archive_has_no_movie_fields(self):
        media = build({"basename": "c.zip", "fullpath": "/c.zip", "duration": 10})
        assert media.resolution is None
        assert media.duration_str is None


class TestThumbnailPaths:

    def test_absolute_path_nests_under_root(self, tmp_path):
        media = build({"basename": "holiday.mkv", "fullpath": "/media/videos/holiday.mkv"})
        assert media.thumbnail_dir(tmp_path) == tmp_path / "media" / "videos"
        assert media.thumbnail_path(tmp_path, 2) == tmp_path / "media" / "videos" / "holiday_2.png"

    def test_relative_path(self, tmp_path):
        media = build({"basename": "b.zip", "fullpath": "books/b.zip"})
        assert media.thumbnail_dir(tmp_path) == tmp_path / "books"

    def test_thumbnails_lists_one_based_indices(self, tmp_path):
        media = build({"basename": "m.mp4", "fullpath": "/m.mp4"})
        assert media.thumbnails(tmp_path, 3) == [
            tmp_path / "m_1.png", tmp_path / "m_2.png", tmp_path / "m_3.png"
        ]


class TestImmutability:

    def test_fields_cannot_be_assigned(self):
        media = build({"basename": "m.mp4", "fullpath": "/m.mp4"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            media.favorited = True

    def test_with_changes_copies(self):
        media = build({"basename": "m.mp4", "fullpath": "/m.mp4"})
        changed = media.with_changes(favorited=True)
        assert changed.favorited is True
        assert media.favorited is False
        assert changed.fullpath == media.fullpath

    def test_exists(self, tmp_path):
        f = tmp_path / "m.mp4"
        media = build({"basename": f.name, "fullpath": str(f)})
        assert not media.exists()
        f.write_bytes(b"x")
        assert media.exists()
