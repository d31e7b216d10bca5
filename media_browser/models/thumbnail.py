#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Per-index results of a thumbnail generation run.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Dict, Any

CREATED = "created"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class ThumbnailOutcome:
    """What happened to one (record, index) thumbnail."""
    index: int
    path: Path
    status: str  # 'created', 'skipped', 'failed'
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != FAILED

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary for serialization."""
        data = asdict(self)
        data["path"] = str(self.path)
        return data
