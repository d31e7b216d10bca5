#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Catalog command implementations for the Media Browser.

Each command is a coroutine taking a ``MediaLibrary``; with ``as_json`` the
result goes to stdout as a single JSON payload (see ``jsonio``).
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..jsonio import success, error
from ..library import MediaLibrary
from ..models.media_file import MediaFile
from ..models.thumbnail import CREATED, FAILED
from ..scanning.discovery import FileDiscovery
from ..utils.time import format_ctime

logger = logging.getLogger(__name__)


def _summary(media: MediaFile) -> Dict[str, Any]:
    return {
        "id": media.id,
        "kind": media.kind.value,
        "basename": media.basename,
        "fullpath": media.fullpath,
        "filesize": media.filesize,
        "duration": media.duration_str,
        "resolution": media.resolution,
        "favorited": media.favorited,
    }


async def _load(library: MediaLibrary, command: str, file_id: int, as_json: bool) -> Optional[MediaFile]:
    media = await library.get(file_id)
    if media is None:
        if as_json:
            error(command, f"File {file_id} not found")
        else:
            print("File not found")
    return media


async def cmd_scan(library: MediaLibrary, source: Path, as_json: bool = False):
    """Discover media under ``source`` and persist records that are new."""
    if not source.is_dir():
        if as_json:
            return error("scan", f"Source {source} is not a directory")
        print(f"Source {source} is not a directory")
        return 1

    paths = await asyncio.to_thread(FileDiscovery().discover_files, source)
    added: List[MediaFile] = []
    skipped = 0
    failed = 0

    for path in tqdm(paths, desc="Indexing", unit="file", disable=as_json or not paths):
        try:
            media = await library.build_by_path(path)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", path, e)
            failed += 1
            continue
        if await library.is_persisted(media):
            skipped += 1
            continue
        saved = await library.save(media)
        if saved.id is None:
            failed += 1
        else:
            added.append(saved)

    if as_json:
        return success("scan", {
            "source": str(source),
            "discovered": len(paths),
            "added": [_summary(m) for m in added],
            "already_indexed": skipped,
            "failed": failed,
        })
    print(f"Discovered {len(paths):,} media files: {len(added):,} added, "
          f"{skipped:,} already indexed, {failed:,} failed")


async def cmd_list(library: MediaLibrary, favorites_only: bool = False, as_json: bool = False):
    """List indexed media files."""
    files = await library.list_files(favorites_only)

    if as_json:
        return success("list", {
            "files": [_summary(m) for m in files],
            "total_count": len(files),
            "favorites_only": favorites_only,
        })

    if not files:
        print("No media files indexed.")
        return

    print(f"{'ID':<6} {'Kind':<8} {'Fav':<4} {'Size (MB)':>10} {'Duration':>9}  {'Name'}")
    print("-" * 80)
    for m in files:
        size_mb = (m.filesize or 0) / (1024 ** 2)
        star = "*" if m.favorited else ""
        print(f"{m.id:<6} {m.kind.value:<8} {star:<4} {size_mb:>10.1f} {m.duration_str or '':>9}  {m.basename}")


async def cmd_thumbnails(library: MediaLibrary, count: Optional[int] = None, size: Optional[int] = None,
                         force: bool = False, workers: int = 4, as_json: bool = False):
    """Ensure thumbnails for every indexed file.

    Records are processed ``workers`` at a time so one slow file does not
    hold up the rest of the catalog.
    """
    files = [m for m in await library.list_files() if m.exists()]
    semaphore = asyncio.Semaphore(max(1, workers))
    totals = {"created": 0, "failed": 0, "complete": 0, "unreadable": 0}
    failures: List[Dict[str, Any]] = []

    with tqdm(total=len(files), desc="Thumbnails", unit="file", disable=as_json or not files) as bar:
        async def run(media: MediaFile):
            async with semaphore:
                outcomes = await library.create_thumbnail(media, count=count, size=size, force=force)
            if not outcomes:
                # Nothing attempted: already complete, or the source yielded nothing
                if await library.has_all_thumbnails(media, count):
                    totals["complete"] += 1
                else:
                    totals["unreadable"] += 1
                    failures.append({"file_id": media.id, "path": media.fullpath,
                                     "status": FAILED, "error": "no thumbnails could be produced"})
            for outcome in outcomes:
                if outcome.status == CREATED:
                    totals["created"] += 1
                elif outcome.status == FAILED:
                    totals["failed"] += 1
                    failures.append({"file_id": media.id, **outcome.to_dict()})
            bar.update(1)

        await asyncio.gather(*(run(m) for m in files))

    if as_json:
        return success("thumbnails", {
            "files": len(files),
            "created": totals["created"],
            "failed": totals["failed"],
            "already_complete": totals["complete"],
            "unreadable": totals["unreadable"],
            "failures": failures,
        })
    print(f"Thumbnails for {len(files):,} files: {totals['created']:,} created, "
          f"{totals['failed']:,} failed, {totals['complete']:,} already complete, "
          f"{totals['unreadable']:,} unreadable")


async def cmd_info(library: MediaLibrary, file_id: int, as_json: bool = False):
    """Show one record with its derived fields and thumbnail paths."""
    media = await _load(library, "info", file_id, as_json)
    if media is None:
        return 1

    thumbs = library.thumbnails(media)
    present = [await asyncio.to_thread(p.exists) for p in thumbs]
    if as_json:
        data = media.to_dict()
        data.update({
            "extname": media.extname,
            "resolution": media.resolution,
            "duration_str": media.duration_str,
            "thumbnail_dir": str(library.thumbnail_dir(media)),
            "thumbnails": [{"path": str(p), "exists": ok} for p, ok in zip(thumbs, present)],
            "commands": sorted(library.commands(media)),
        })
        return success("info", data)

    print(f"{media.basename} (id {media.id}, {media.kind.value})")
    print(f"  Path:      {media.fullpath}")
    print(f"  Size:      {(media.filesize or 0):,} bytes")
    print(f"  Created:   {format_ctime(media.ctime)}")
    if media.is_movie:
        print(f"  Duration:  {media.duration_str}")
        print(f"  Video:     {media.vcodec or '-'} {media.resolution} @ {media.v_bit_rate or '-'} bps")
        print(f"  Audio:     {media.acodec or '-'} {media.sample_rate or '-'} Hz @ {media.a_bit_rate or '-'} bps")
    print(f"  Favorite:  {'yes' if media.favorited else 'no'}")
    print("  Thumbnails:")
    for path, ok in zip(thumbs, present):
        print(f"    [{'x' if ok else ' '}] {path}")


async def cmd_favorite(library: MediaLibrary, file_id: int, as_json: bool = False):
    """Toggle the favorite flag of one record."""
    media = await _load(library, "favorite", file_id, as_json)
    if media is None:
        return 1

    updated = await library.toggle_favorite(media)
    changed = updated.favorited != media.favorited
    if as_json:
        if not changed:
            return error("favorite", f"Could not update file {file_id}")
        return success("favorite", {"file_id": file_id, "favorited": updated.favorited})
    if not changed:
        print(f"Could not update file {file_id}")
        return 1
    print(f"File {file_id} is {'now' if updated.favorited else 'no longer'} a favorite")


async def cmd_open(library: MediaLibrary, file_id: int, command_name: Optional[str] = None,
                   as_json: bool = False):
    """Launch the configured command for one record without waiting for it."""
    media = await _load(library, "open", file_id, as_json)
    if media is None:
        return 1

    launched = library.execute(media, command_name)
    if as_json:
        if not launched:
            return error("open", f"Could not launch command for file {file_id}")
        return success("open", {"file_id": file_id, "command": command_name or "default"})
    if not launched:
        print(f"Could not launch command for file {file_id}")
        return 1
    print(f"Opened {media.basename}")


async def cmd_commands(library: MediaLibrary, file_id: int, as_json: bool = False):
    """List the main and named commands available for one record."""
    media = await _load(library, "commands", file_id, as_json)
    if media is None:
        return 1

    main = library.main_command(media)
    named = library.commands(media)
    if as_json:
        return success("commands", {"file_id": file_id, "main": main, "named": named})

    print(f"Main command: {main or '(none)'}")
    for name, template in sorted(named.items()):
        print(f"  {name}: {template}")
