#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
External process helpers for the Media Browser.

``ToolRunner.run`` awaits a tool and reports the outcome as a ``ToolResult``
instead of raising; ``ToolRunner.spawn_detached`` launches a process in its
own session and forgets about it.
"""

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    returncode: Optional[int]
    stdout: bytes = b""
    stderr: bytes = b""
    error: Optional[str] = None  # set when the process could not be started

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    def describe(self) -> str:
        if self.error:
            return self.error
        tail = self.stderr.decode("utf-8", errors="replace").strip()
        return f"exit status {self.returncode}" + (f": {tail}" if tail else "")


class ToolRunner:
    """Runs external tools; tests substitute a fake with the same methods."""

    async def run(self, args: Sequence[str]) -> ToolResult:
        logger.debug("Running %s", " ".join(args))
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except (OSError, ValueError) as e:
            return ToolResult(returncode=None, error=f"{args[0]}: {e}")
        return ToolResult(returncode=proc.returncode, stdout=stdout, stderr=stderr)

    def spawn_detached(self, args: Sequence[str]) -> bool:
        """Start ``args`` in a new session without waiting for it."""
        logger.debug("Launching %s", " ".join(args))
        try:
            subprocess.Popen(
                list(args),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            logger.warning("Unable to launch %s: %s", args[0], e)
            return False
        return True
