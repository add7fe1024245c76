"""Session history and best score with SQLite persistence."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from pianohero.models import SessionStats

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".pianohero" / "scores.db"


class ScoreStore:
    def __init__(self, db_path: Path | str = DEFAULT_DB_PATH) -> None:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self._init_db()

    def _init_db(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                score INTEGER NOT NULL,
                starting_level INTEGER,
                final_level INTEGER,
                hits INTEGER,
                bonus_hits INTEGER,
                wrong_presses INTEGER,
                missed_notes INTEGER,
                duration_ms REAL,
                played_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        self.conn.commit()

    def save_session(self, stats: SessionStats) -> bool:
        """Record a finished session. Returns False if the write failed."""
        try:
            self.conn.execute(
                """INSERT INTO sessions
                   (score, starting_level, final_level, hits, bonus_hits,
                    wrong_presses, missed_notes, duration_ms)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    stats.score,
                    stats.starting_level,
                    stats.final_level,
                    stats.hits,
                    stats.bonus_hits,
                    stats.wrong_presses,
                    stats.missed_notes,
                    stats.duration_ms,
                ),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.warning("Failed to save session (score %d): %s", stats.score, exc)
            return False
        return True

    def best_score(self) -> int:
        row = self.conn.execute("SELECT MAX(score) FROM sessions").fetchone()
        return row[0] or 0

    def top_scores(self, limit: int = 10) -> list[dict]:
        cur = self.conn.execute(
            "SELECT * FROM sessions ORDER BY score DESC, played_at ASC LIMIT ?", (limit,)
        )
        cols = [d[0] for d in cur.description]
        return [dict(zip(cols, row)) for row in cur.fetchall()]

    def close(self) -> None:
        self.conn.close()
