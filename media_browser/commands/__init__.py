"""Command line commands for the Media Browser."""

from .catalog import (
    cmd_scan, cmd_list, cmd_thumbnails, cmd_info, cmd_favorite, cmd_open, cmd_commands
)

__all__ = [
    'cmd_scan', 'cmd_list', 'cmd_thumbnails', 'cmd_info',
    'cmd_favorite', 'cmd_open', 'cmd_commands',
]
