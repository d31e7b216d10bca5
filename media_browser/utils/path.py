#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the Media Browser.

The async helpers never raise: failures collapse to ``False``.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary."""
    p.mkdir(parents=True, exist_ok=True)


async def check_access(path: PathLike) -> bool:
    """Return True if ``path`` exists and is accessible."""
    try:
        return await asyncio.to_thread(os.access, path, os.F_OK)
    except (OSError, ValueError):
        return False


async def ensure_directory(path: PathLike) -> bool:
    """Create ``path`` recursively if absent; False (logged) on failure."""
    try:
        await asyncio.to_thread(ensure_dir, Path(path))
        return True
    except (OSError, ValueError) as e:
        logger.warning("Unable to create directory %s: %s", path, e)
        return False
