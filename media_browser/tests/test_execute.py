#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for launching configured commands on records.
"""

from dataclasses import replace
from unittest.mock import patch

from media_browser.library import MediaLibrary
from media_browser.models.media_file import build
from media_browser.utils.process import ToolRunner


MOVIE = build({"basename": "my film.mkv", "fullpath": "/videos/my film.mkv"})
ARCHIVE = build({"basename": "c.zip", "fullpath": "/b/c.zip"})


class TestExecute:

    def test_main_command_gets_path_appended(self, library, runner):
        assert library.execute(MOVIE) is True
        assert runner.spawned == [["mpv", "--fs", "/videos/my film.mkv"]]

    def test_named_command(self, library, runner):
        assert library.execute(MOVIE, "vlc") is True
        assert runner.spawned == [["vlc", "--play-and-exit", "/videos/my film.mkv"]]

    def test_unknown_named_command(self, library, runner, caplog):
        assert library.execute(MOVIE, "kodi") is False
        assert runner.spawned == []
        assert "No command 'kodi'" in caplog.text

    def test_falls_back_to_default_command(self, library, runner):
        media = build({"basename": "a.avi", "fullpath": "/a.avi"})
        assert library.execute(media) is True
        assert runner.spawned == [["xdg-open", "/a.avi"]]

    def test_no_command_at_all(self, config, db, runner):
        library = MediaLibrary(replace(config, default_command=""), db, runner)
        media = build({"basename": "a.avi", "fullpath": "/a.avi"})
        assert library.execute(media) is False
        assert runner.spawned == []

    def test_quoted_template(self, config, db, runner):
        commands = {"zip": {"default": "viewer --title 'My Books' -f"}}
        library = MediaLibrary(replace(config, commands=commands), db, runner)
        library.execute(ARCHIVE)
        assert runner.spawned == [["viewer", "--title", "My Books", "-f", "/b/c.zip"]]

    def test_commands_listing(self, library):
        assert library.main_command(MOVIE) == "mpv --fs"
        assert set(library.commands(MOVIE)) == {"default", "vlc"}
        assert library.commands(build({"basename": "x.MKV", "fullpath": "/x.MKV"}))["vlc"]


class TestToolRunnerSpawn:

    def test_detached_launch(self):
        with patch("media_browser.utils.process.subprocess.Popen") as popen:
            assert ToolRunner().spawn_detached(["mpv", "/a.mkv"]) is True
        args, kwargs = popen.call_args
        assert args[0] == ["mpv", "/a.mkv"]
        assert kwargs["start_new_session"] is True

    def test_missing_program(self):
        with patch("media_browser.utils.process.subprocess.Popen", side_effect=FileNotFoundError("mpv")):
            assert ToolRunner().spawn_detached(["mpv", "/a.mkv"]) is False
