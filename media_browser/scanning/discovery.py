#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File discovery logic for the Media Browser.
Handles recursive scanning of directories to find movies and archives.
"""

import fnmatch
import logging
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import SUPPORTED_EXTENSIONS
from ..utils.time import utc_now_str

logger = logging.getLogger(__name__)


class FileDiscovery:
    """Finds supported media files below a source directory."""

    def __init__(self, extensions: Optional[Iterable[str]] = None,
                 exclude_patterns: Optional[List[str]] = None,
                 include_hidden: bool = False):
        self.extensions = {e.lower().lstrip(".") for e in (extensions or SUPPORTED_EXTENSIONS)}
        self.exclude_patterns = exclude_patterns or []
        self.include_hidden = include_hidden

    def discover_files(self, source: Path) -> List[Path]:
        """
        Discover media files in source directory.

        Args:
            source: Source directory to scan

        Returns:
            Sorted list of discovered media file paths
        """
        logger.info("[%s] Discovering media files in %s...", utc_now_str(), source)

        candidates: List[Path] = []
        stats = {
            'total_scanned': 0,
            'permission_errors': 0,
        }

        start_time = time.perf_counter()
        self._scan_recursive(Path(source), candidates, stats)
        elapsed = time.perf_counter() - start_time

        logger.info("Discovery complete: %s media files (%s items scanned in %.1fs)",
                    f"{len(candidates):,}", f"{stats['total_scanned']:,}", elapsed)
        if stats['permission_errors'] > 0:
            logger.warning("Permission errors: %s", f"{stats['permission_errors']:,}")

        return sorted(candidates)

    def _scan_recursive(self, path: Path, candidates: List[Path], stats: dict):
        """Recursively scan directory for media files."""
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    stats['total_scanned'] += 1

                    if stats['total_scanned'] % 10000 == 0:
                        logger.info("Scanned %s items, found %s media files...",
                                    f"{stats['total_scanned']:,}", f"{len(candidates):,}")

                    if not self.include_hidden and entry.name.startswith("."):
                        continue
                    if self._is_excluded(entry.path):
                        continue

                    try:
                        if entry.is_file():
                            if self._is_media_file(entry.name):
                                candidates.append(Path(entry.path))
                        elif entry.is_dir(follow_symlinks=False):
                            self._scan_recursive(Path(entry.path), candidates, stats)
                    except OSError:
                        stats['permission_errors'] += 1
                        continue

        except OSError:
            stats['permission_errors'] += 1

    def _is_media_file(self, filename: str) -> bool:
        """Check if file is a supported media type."""
        return Path(filename).suffix.lower().lstrip(".") in self.extensions

    def _is_excluded(self, path: str) -> bool:
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_patterns)


def discover_media_files(source: Path, **kwargs) -> List[Path]:
    """Convenience function for media file discovery."""
    return FileDiscovery(**kwargs).discover_files(source)
