#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Database schema definitions for the Media Browser.
"""

# Main schema for media files
MAIN_SCHEMA = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS files (
    id INTEGER PRIMARY KEY,
    basename TEXT NOT NULL,
    fullpath TEXT NOT NULL UNIQUE,
    filesize INTEGER,
    ctime REAL,
    width INTEGER,
    height INTEGER,
    duration INTEGER,
    vcodec TEXT,
    v_bit_rate INTEGER,
    acodec TEXT,
    a_bit_rate INTEGER,
    sample_rate INTEGER,
    thumbnail_version INTEGER DEFAULT 0,
    favorited INTEGER DEFAULT 0 CHECK (favorited IN (0, 1)),
    created_at TEXT DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_files_favorited ON files(favorited);
CREATE INDEX IF NOT EXISTS idx_files_ctime ON files(ctime);
"""

# Columns callers may write; everything else is managed by SQLite
FILE_COLUMNS = (
    "basename", "fullpath", "filesize", "ctime",
    "width", "height", "duration", "vcodec", "v_bit_rate",
    "acodec", "a_bit_rate", "sample_rate",
    "thumbnail_version", "favorited",
)
