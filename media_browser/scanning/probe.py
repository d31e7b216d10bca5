#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ffprobe-based media information for movie records.
"""

import json
import logging
import math
from typing import Any, Dict, Optional

from ..config import PROBE
from ..utils.process import ToolRunner

logger = logging.getLogger(__name__)


def parse_int(value: Any) -> Optional[int]:
    """Leading-number integer parse: "12.7" -> 12, garbage/None -> None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


async def probe(runner: ToolRunner, path: str) -> Optional[Dict[str, Any]]:
    """Run ffprobe on ``path`` and return its parsed JSON, or None on failure."""
    result = await runner.run([
        PROBE,
        "-v", "error",
        "-print_format", "json",
        "-show_streams",
        "-show_format",
        path,
    ])
    if not result.ok:
        logger.warning("ffprobe failed for %s: %s", path, result.describe())
        return None
    try:
        data = json.loads(result.stdout.decode("utf-8", errors="replace"))
    except json.JSONDecodeError as e:
        logger.warning("Invalid ffprobe output for %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Unexpected ffprobe output for %s", path)
        return None
    return data


def _first_stream(info: Dict[str, Any], codec_type: str) -> Dict[str, Any]:
    for stream in info.get("streams") or []:
        if isinstance(stream, dict) and stream.get("codec_type") == codec_type:
            return stream
    return {}


def media_fields(info: Dict[str, Any]) -> Dict[str, Any]:
    """Project ffprobe output onto the record's video/audio columns.

    The stream duration falls back to the container's ``format.duration``
    when it is missing or not numeric.
    """
    video = _first_stream(info, "video")
    audio = _first_stream(info, "audio")

    duration = parse_int(video.get("duration"))
    if duration is None:
        duration = parse_int((info.get("format") or {}).get("duration"))

    return {
        "width": parse_int(video.get("width")),
        "height": parse_int(video.get("height")),
        "duration": duration,
        "vcodec": video.get("codec_name"),
        "v_bit_rate": parse_int(video.get("bit_rate")),
        "acodec": audio.get("codec_name"),
        "a_bit_rate": parse_int(audio.get("bit_rate")),
        "sample_rate": parse_int(audio.get("sample_rate")),
    }
