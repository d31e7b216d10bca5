#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Media file records for the Media Browser.
"""

import os
from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from pathlib import Path, PurePath
from typing import Any, Dict, List, Mapping, Optional

from ..config import MOVIE_EXTENSIONS


class MediaKind(str, Enum):
    MOVIE = "movie"
    ARCHIVE = "archive"


def kind_for(basename: str) -> MediaKind:
    """Pick the variant from the file extension alone."""
    ext = os.path.splitext(basename)[1][1:]
    return MediaKind.MOVIE if ext.lower() in MOVIE_EXTENSIONS else MediaKind.ARCHIVE


@dataclass(frozen=True)
class MediaFile:
    """Immutable record describing one media file."""
    basename: str
    fullpath: str
    kind: MediaKind
    id: Optional[int] = None
    filesize: Optional[int] = None
    ctime: Optional[float] = None

    # Filled from the probe for movies
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    vcodec: Optional[str] = None
    v_bit_rate: Optional[int] = None
    acodec: Optional[str] = None
    a_bit_rate: Optional[int] = None
    sample_rate: Optional[int] = None

    thumbnail_version: int = 0
    favorited: bool = False

    @property
    def extname(self) -> str:
        return os.path.splitext(self.basename)[1][1:]

    @property
    def basename_without_extension(self) -> str:
        return os.path.splitext(self.basename)[0]

    @property
    def is_movie(self) -> bool:
        return self.kind is MediaKind.MOVIE

    @property
    def resolution(self) -> Optional[str]:
        if not self.is_movie:
            return None
        return f"{self.width}x{self.height}"

    @property
    def duration_str(self) -> Optional[str]:
        """Return duration as H:MM:SS, "NaN" when unknown, None for archives."""
        if not self.is_movie:
            return None
        if self.duration is None:
            return "NaN"
        total = int(self.duration)
        hour, rest = divmod(total, 3600)
        minute, sec = divmod(rest, 60)
        return "%d:%02d:%02d" % (hour, minute, sec)

    def thumbnail_dir(self, root: Path) -> Path:
        """Directory mirroring the source file's directory under ``root``."""
        source = PurePath(self.fullpath)
        relative = PurePath(*source.parts[1:]) if source.anchor else source
        return Path(root).joinpath(relative).parent

    def thumbnail_path(self, root: Path, index: int) -> Path:
        """Path of the 1-based ``index`` thumbnail."""
        return self.thumbnail_dir(root) / f"{self.basename_without_extension}_{index}.png"

    def thumbnails(self, root: Path, count: int) -> List[Path]:
        return [self.thumbnail_path(root, i) for i in range(1, count + 1)]

    def exists(self) -> bool:
        return os.path.exists(self.fullpath)

    def with_changes(self, **changes: Any) -> "MediaFile":
        """Copy-on-write update."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


_FIELD_NAMES = {f.name for f in fields(MediaFile)}


def build(data: Mapping[str, Any]) -> MediaFile:
    """Create a typed record from a stat projection or a database row.

    Unknown keys are ignored and the variant is always recomputed from the
    basename so a stored ``kind`` cannot disagree with the extension.
    """
    values = {k: v for k, v in dict(data).items() if k in _FIELD_NAMES and k != "kind"}
    if "favorited" in values:
        values["favorited"] = bool(values["favorited"])
    if values.get("thumbnail_version") is None:
        values.pop("thumbnail_version", None)
    return MediaFile(kind=kind_for(values["basename"]), **values)
