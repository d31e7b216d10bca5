"""Data models for the Media Browser."""

from .media_file import MediaFile, MediaKind, build
from .thumbnail import ThumbnailOutcome

__all__ = ['MediaFile', 'MediaKind', 'build', 'ThumbnailOutcome']
