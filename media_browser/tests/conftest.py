#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Shared pytest fixtures for the Media Browser tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Make the package importable when run from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from media_browser.config import LibraryConfig
from media_browser.database.manager import DatabaseManager
from media_browser.library import MediaLibrary
from media_browser.tests.fixtures.sample_media import FakeToolRunner


@pytest.fixture
def thumb_root(tmp_path):
    root = tmp_path / "thumbnails"
    root.mkdir()
    return root


@pytest.fixture
def config(thumb_root, tmp_path):
    return LibraryConfig(
        thumbnail_dir=thumb_root,
        thumbnail_count=3,
        thumbnail_size=160,
        database=tmp_path / "library.db",
        commands={
            "mkv": {"default": "mpv --fs", "vlc": "vlc --play-and-exit"},
            "zip": {"default": "mcomix"},
        },
    )


@pytest.fixture
def db(tmp_path):
    """Fresh database for each test."""
    db_manager = DatabaseManager(tmp_path / "library.db")
    yield db_manager
    db_manager.close()


@pytest.fixture
def runner():
    return FakeToolRunner()


@pytest.fixture
def library(config, db, runner):
    return MediaLibrary(config, db, runner)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it so caplog keeps working."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
