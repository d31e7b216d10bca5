"""Utility functions for the Media Browser."""

from .time import format_ctime, utc_now_str
from .path import ensure_dir, check_access, ensure_directory
from .process import ToolResult, ToolRunner

__all__ = [
    'format_ctime', 'utc_now_str',
    'ensure_dir', 'check_access', 'ensure_directory',
    'ToolResult', 'ToolRunner',
]
