"""Per-variant thumbnail strategies for the Media Browser."""

from .movie import MovieThumbnailer, position_percent
from .archive import ArchiveThumbnailer, select_entries, render_thumbnail

__all__ = [
    'MovieThumbnailer',
    'ArchiveThumbnailer',
    'position_percent',
    'select_entries',
    'render_thumbnail',
]
