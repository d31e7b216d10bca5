#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Movie thumbnails via ffmpegthumbnailer.
"""

import asyncio
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import THUMBNAILER
from ..models.media_file import MediaFile
from ..models.thumbnail import ThumbnailOutcome, CREATED, SKIPPED, FAILED
from ..scanning.probe import probe, media_fields
from ..utils.path import check_access
from ..utils.process import ToolRunner

logger = logging.getLogger(__name__)


def position_percent(index: int, count: int) -> int:
    """Seek position for the 1-based ``index`` of ``count`` thumbnails.

    100/(count+1-i) capped at 99, rounded half up: for count=3 this gives
    33, 50 and 99.
    """
    return int(math.floor(min(100 / (count + 1 - index), 99) + 0.5))


class MovieThumbnailer:
    """Thumbnail and metadata strategy for movie records."""

    def __init__(self, runner: ToolRunner):
        self.runner = runner

    async def create_thumbnail(self, media: MediaFile, root: Path, count: int,
                               size: int, force: bool = False) -> List[ThumbnailOutcome]:
        """Extract ``count`` frames concurrently; failures are logged, never raised."""
        tasks = [self._create_one(media, root, i, count, size, force) for i in range(1, count + 1)]
        return list(await asyncio.gather(*tasks))

    async def _create_one(self, media: MediaFile, root: Path, index: int, count: int,
                          size: int, force: bool) -> ThumbnailOutcome:
        output = media.thumbnail_path(root, index)
        if not force and await check_access(output):
            return ThumbnailOutcome(index, output, SKIPPED)

        result = await self.runner.run([
            THUMBNAILER,
            "-i", media.fullpath,
            "-o", str(output),
            "-s", str(size),
            "-t", f"{position_percent(index, count)}%",
        ])
        if not result.ok:
            logger.warning("%s: thumbnail %d failed: %s", media.fullpath, index, result.describe())
            return ThumbnailOutcome(index, output, FAILED, result.describe())
        return ThumbnailOutcome(index, output, CREATED)

    async def get_media_info(self, media: MediaFile) -> Optional[Dict[str, Any]]:
        return await probe(self.runner, media.fullpath)

    def media_fields(self, info: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if info is None:
            return {}
        return media_fields(info)
