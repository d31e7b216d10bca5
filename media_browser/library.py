#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Library service for the Media Browser.

``MediaLibrary`` owns the configuration, the database and the tool runner and
implements every operation on ``MediaFile`` records. None of the coroutines
raise: I/O, tool and persistence failures are logged and degrade to doing
less (a False, a None, the unchanged record, or missing thumbnails).
"""

import asyncio
import logging
import os
import shlex
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import LibraryConfig
from .database.manager import DatabaseManager
from .models.media_file import MediaFile, MediaKind, build
from .models.thumbnail import ThumbnailOutcome
from .thumbnails.archive import ArchiveThumbnailer
from .thumbnails.movie import MovieThumbnailer
from .utils.path import check_access, ensure_directory
from .utils.process import ToolRunner

logger = logging.getLogger(__name__)


class MediaLibrary:
    """Entry point for record construction, thumbnails and persistence."""

    def __init__(self, config: LibraryConfig, db_manager: DatabaseManager,
                 runner: Optional[ToolRunner] = None):
        self.config = config
        self.db_manager = db_manager
        self.runner = runner or ToolRunner()
        self.strategies = {
            MediaKind.MOVIE: MovieThumbnailer(self.runner),
            MediaKind.ARCHIVE: ArchiveThumbnailer(),
        }

    # Construction

    @staticmethod
    def build(data: Mapping[str, Any]) -> MediaFile:
        return build(data)

    async def build_by_path(self, filepath: Union[str, Path]) -> MediaFile:
        """Stat ``filepath`` and build an unpersisted record from it."""
        st = await asyncio.to_thread(os.stat, filepath)
        return build({
            "basename": os.path.basename(filepath),
            "fullpath": str(filepath),
            "filesize": st.st_size,
            "ctime": st.st_ctime,
        })

    # Thumbnails

    def thumbnail_dir(self, media: MediaFile) -> Path:
        return media.thumbnail_dir(self.config.thumbnail_dir)

    def thumbnail_path(self, media: MediaFile, index: int) -> Path:
        return media.thumbnail_path(self.config.thumbnail_dir, index)

    def thumbnails(self, media: MediaFile) -> List[Path]:
        return media.thumbnails(self.config.thumbnail_dir, self.config.thumbnail_count)

    async def has_all_thumbnails(self, media: MediaFile, count: Optional[int] = None) -> bool:
        count = self.config.thumbnail_count if count is None else count
        results = []
        for i in range(1, count + 1):
            results.append(await check_access(self.thumbnail_path(media, i)))
        return all(results)

    async def create_thumbnail(self, media: MediaFile, count: Optional[int] = None,
                               size: Optional[int] = None,
                               force: bool = False) -> List[ThumbnailOutcome]:
        """Make sure ``count`` thumbnails of width ``size`` exist for ``media``.

        Returns one outcome per attempted index; an empty list when nothing
        needed doing or the source could not be read.
        """
        count = self.config.thumbnail_count if count is None else count
        size = self.config.thumbnail_size if size is None else size

        await ensure_directory(self.thumbnail_dir(media))
        if not force and await self.has_all_thumbnails(media, count):
            return []

        logger.info("create thumbnail: %s", media.fullpath)
        strategy = self.strategies[media.kind]
        try:
            return await strategy.create_thumbnail(
                media, self.config.thumbnail_dir, count, size, force
            )
        except Exception as e:
            logger.warning("%s: thumbnail generation aborted: %s", media.fullpath, e, exc_info=True)
            return []

    # External commands

    def main_command(self, media: MediaFile) -> Optional[str]:
        return self.config.get_command(media.extname)

    def commands(self, media: MediaFile) -> Dict[str, str]:
        return self.config.get_all_commands(media.extname)

    def execute(self, media: MediaFile, command_name: Optional[str] = None) -> bool:
        """Launch the main (or named) command on ``media`` and return at once."""
        if command_name:
            template = self.commands(media).get(command_name)
        else:
            template = self.main_command(media)
        if not template:
            logger.warning("No command %r configured for .%s files",
                           command_name or "default", media.extname)
            return False

        try:
            args = shlex.split(template)
        except ValueError as e:
            logger.warning("Malformed command template %r: %s", template, e)
            return False
        if not args:
            return False
        return self.runner.spawn_detached(args + [media.fullpath])

    # Metadata and persistence

    async def get_media_info(self, media: MediaFile) -> Optional[Dict[str, Any]]:
        try:
            return await self.strategies[media.kind].get_media_info(media)
        except Exception as e:
            logger.warning("%s: media info failed: %s", media.fullpath, e)
            return None

    async def to_db_data(self, media: MediaFile) -> Dict[str, Any]:
        data = {
            "basename": media.basename,
            "fullpath": media.fullpath,
            "filesize": media.filesize,
            "ctime": media.ctime,
        }
        info = await self.get_media_info(media)
        data.update(self.strategies[media.kind].media_fields(info))
        return data

    async def is_persisted(self, media: MediaFile) -> bool:
        try:
            if media.id is not None:
                row = await asyncio.to_thread(self.db_manager.get_file, media.id)
            else:
                row = await asyncio.to_thread(self.db_manager.find_by_fullpath, media.fullpath)
        except sqlite3.Error as e:
            logger.debug("Persistence lookup failed for %s: %s", media.fullpath, e)
            return False
        return row is not None

    async def save(self, media: MediaFile) -> MediaFile:
        """Insert ``media`` and return the record as stored."""
        data = await self.to_db_data(media)
        try:
            await asyncio.to_thread(self.db_manager.add_file, data)
            row = await asyncio.to_thread(self.db_manager.find_by_fullpath, media.fullpath)
        except sqlite3.Error as e:
            logger.warning("Unable to save %s: %s", media.fullpath, e)
            return media
        if row is None:
            logger.warning("Saved record for %s could not be read back", media.fullpath)
            return media
        return build(row)

    async def toggle_favorite(self, media: MediaFile) -> MediaFile:
        favorited = not media.favorited
        try:
            changed = await asyncio.to_thread(
                self.db_manager.modify, {"id": media.id}, {"favorited": favorited}
            )
        except (sqlite3.Error, ValueError) as e:
            logger.warning("Unable to update favorite for %s: %s", media.fullpath, e)
            return media
        if not changed:
            logger.warning("Unable to update favorite for %s: no stored record", media.fullpath)
            return media
        return media.with_changes(favorited=favorited)

    # Queries used by the catalog

    async def get(self, file_id: int) -> Optional[MediaFile]:
        try:
            row = await asyncio.to_thread(self.db_manager.get_file, file_id)
        except sqlite3.Error as e:
            logger.warning("Unable to read file %s: %s", file_id, e)
            return None
        return build(row) if row else None

    async def list_files(self, favorites_only: bool = False) -> List[MediaFile]:
        try:
            rows = await asyncio.to_thread(self.db_manager.list_files, favorites_only)
        except sqlite3.Error as e:
            logger.warning("Unable to list files: %s", e)
            return []
        return [build(r) for r in rows]
