"""
high_score_db.py: Durable high-score storage.
Exposes the small read/write surface the game state machine depends on.
"""

import sqlite3
from typing import Optional, Protocol

from .constants import HIGH_SCORE_DB, HIGH_SCORE_KEY


class HighScoreStore(Protocol):
    def read(self) -> int: ...

    def write(self, score: int) -> None: ...

    def close(self) -> None: ...


def parse_high_score(raw: Optional[str]) -> int:
    """Missing, malformed or negative values read as 0."""
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        return 0
    return max(value, 0)


class SqliteHighScoreStore:
    """Keeps the high score in a key/value table of an sqlite file."""
    def __init__(self, db_file: str = HIGH_SCORE_DB, key: str = HIGH_SCORE_KEY):
        self.key = key
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)
        self.conn.commit()

    def read(self) -> int:
        self.cur.execute("SELECT value FROM Settings WHERE key=?", (self.key,))
        row = self.cur.fetchone()
        return parse_high_score(row[0] if row else None)

    def write(self, score: int):
        """Stores the score and commits at once."""
        self.cur.execute(
            "INSERT OR REPLACE INTO Settings (key, value) VALUES (?, ?)",
            (self.key, str(int(score))))
        self.conn.commit()

    def close(self):
        self.conn.close()


class MemoryHighScoreStore:
    """Non-durable store for hosts without a writable disk."""
    def __init__(self, score: int = 0):
        self.score = score

    def read(self) -> int:
        return self.score

    def write(self, score: int):
        self.score = int(score)

    def close(self):
        pass
