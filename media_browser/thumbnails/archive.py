#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Archive thumbnails: images inside a zip, rescaled with Pillow.
"""

import asyncio
import io
import logging
import os
import re
import zipfile
import zlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from PIL import Image

from ..config import IMAGE_EXTENSIONS
from ..models.media_file import MediaFile
from ..models.thumbnail import ThumbnailOutcome, CREATED, SKIPPED, FAILED
from ..utils.path import check_access

logger = logging.getLogger(__name__)

COVER_PATTERN = re.compile(r"cover", re.IGNORECASE)


def select_entries(names: Sequence[str], count: int) -> List[str]:
    """Pick up to ``count`` image entries, cover first.

    With at least ``count`` candidates the list is split into ``count``
    contiguous groups and the first entry of each is taken, so picks spread
    over the whole archive even when it holds fewer than ``count ** 2``
    images (5 pages with a count of 3 give pages 1, 2 and 4, not the first
    three). With fewer candidates than ``count`` all of them are returned.
    """
    images = [
        n for n in names
        if not n.endswith("/") and os.path.splitext(n)[1][1:].lower() in IMAGE_EXTENSIONS
    ]
    cover = next((n for n in images if COVER_PATTERN.search(n)), None)
    if cover is not None:
        images.remove(cover)
        images.insert(0, cover)

    if len(images) < count:
        return images
    return [images[(i * len(images)) // count] for i in range(count)]


def render_thumbnail(data: bytes, size: int) -> bytes:
    """Decode an image and resize it to ``size`` pixels wide as PNG bytes."""
    if size < 1:
        raise ValueError(f"thumbnail size must be at least 1, got {size}")
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        width, height = img.size
        target_height = max(1, round(height / (width / size)))
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "transparency" in img.info else "RGB")
        resized = img.resize((size, target_height), Image.Resampling.LANCZOS)
    out = io.BytesIO()
    resized.save(out, format="PNG")
    return out.getvalue()


class ArchiveThumbnailer:
    """Thumbnail strategy for zip archives of images."""

    async def create_thumbnail(self, media: MediaFile, root: Path, count: int,
                               size: int, force: bool = False) -> List[ThumbnailOutcome]:
        try:
            archive = await asyncio.to_thread(zipfile.ZipFile, media.fullpath)
        except (OSError, zipfile.BadZipFile) as e:
            logger.warning("%s: cannot open archive: %s", media.fullpath, e)
            return []

        outcomes = []
        with archive:
            targets = select_entries(archive.namelist(), count)
            for index, name in enumerate(targets, start=1):
                outcomes.append(await self._create_one(archive, media, root, name, index, size, force))
        return outcomes

    async def _create_one(self, archive: zipfile.ZipFile, media: MediaFile, root: Path,
                          name: str, index: int, size: int, force: bool) -> ThumbnailOutcome:
        output = media.thumbnail_path(root, index)
        if not force and await check_access(output):
            return ThumbnailOutcome(index, output, SKIPPED)

        try:
            data = await asyncio.to_thread(archive.read, name)
            png = await asyncio.to_thread(render_thumbnail, data, size)
            await asyncio.to_thread(output.write_bytes, png)
        except (OSError, ValueError, RuntimeError, zipfile.BadZipFile, zlib.error,
                Image.DecompressionBombError) as e:
            logger.warning("%s: thumbnail %d from %s failed: %s", media.fullpath, index, name, e)
            return ThumbnailOutcome(index, output, FAILED, str(e))
        return ThumbnailOutcome(index, output, CREATED)

    async def get_media_info(self, media: MediaFile) -> Optional[Dict[str, Any]]:
        return {}

    def media_fields(self, info: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {}
