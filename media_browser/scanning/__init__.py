"""Scanning and media inspection modules for the Media Browser."""

from .discovery import FileDiscovery, discover_media_files
from .probe import probe, media_fields, parse_int

__all__ = [
    'FileDiscovery',
    'discover_media_files',
    'probe',
    'media_fields',
    'parse_int',
]
