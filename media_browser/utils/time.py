#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Time utility functions for the Media Browser.
"""

from datetime import datetime, timezone
from typing import Optional


def format_ctime(ts: Optional[float]) -> str:
    """Render a POSIX timestamp as local ``YYYY-MM-DD HH:MM``."""
    if ts is None:
        return "-"
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def utc_now_str() -> str:
    """Return current UTC time in ISO-8601 format with 'Z'."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
