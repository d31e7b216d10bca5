from pathlib import Path
import sqlite3

from .schema import MAIN_SCHEMA

def init_db_if_needed(db_path: Path):
    db_path = Path(db_path)
    if str(db_path) != ":memory:":
        db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.executescript(MAIN_SCHEMA)
        conn.commit()
    finally:
        conn.close()
