import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from sentinel.analysis_record import AnalysisRecord

HISTORY_CAPACITY = 10

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Bounded analysis history (newest first). Beyond `capacity` the oldest
    entries are dropped. Only redacted records are ever written here.
    """

    def __init__(self, db_path: str = "data/history.db", capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1.")
        self.db_path = Path(db_path)
        self.capacity = capacity
        self._connection: Optional[sqlite3.Connection] = None

        self._create_table_if_not_exists()

    def _connect(self):
        if self._connection is None:
            if str(self.db_path) != ":memory:":
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(str(self.db_path))
        return self._connection

    def _create_table_if_not_exists(self):
        conn = self._connect()
        # seq keeps insertion order even when two records share a timestamp
        conn.execute("""
            CREATE TABLE IF NOT EXISTS history (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                password_label TEXT NOT NULL,
                score INTEGER NOT NULL,
                entropy REAL NOT NULL,
                crack_time TEXT NOT NULL,
                suggestions TEXT NOT NULL,
                warning TEXT,
                occurrence_count INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
        """)
        conn.commit()

    def add_record(self, record: AnalysisRecord) -> None:
        """
        Adds the record as the newest entry and evicts the oldest ones
        beyond capacity.
        """
        conn = self._connect()
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO history (id, password_label, score, entropy, crack_time,
                                 suggestions, warning, occurrence_count, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, record.to_tuple_db())
        cursor.execute("""
            DELETE FROM history
            WHERE seq NOT IN (
                SELECT seq FROM history ORDER BY seq DESC LIMIT ?
            )
        """, (self.capacity,))
        if cursor.rowcount > 0:
            logger.debug("Evicted %d old history entries", cursor.rowcount)
        conn.commit()

    def get_all(self) -> List[AnalysisRecord]:
        conn = self._connect()
        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, password_label, score, entropy, crack_time,
                   suggestions, warning, occurrence_count, created_at
            FROM history
            ORDER BY seq DESC
        """)
        return [AnalysisRecord.from_db_row(row) for row in cursor.fetchall()]

    def clear(self):
        """
        Removes every entry and resets the sequence.
        """
        conn = self._connect()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM history")
        cursor.execute("DELETE FROM sqlite_sequence WHERE name = 'history'")
        conn.commit()

    def __len__(self):
        conn = self._connect()
        return conn.execute("SELECT COUNT(*) FROM history").fetchone()[0]

    def close(self):
        if self._connection:
            self._connection.close()
            self._connection = None
