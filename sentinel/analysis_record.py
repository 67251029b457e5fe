import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from sentinel.breach_check import BreachResult
from sentinel.strength import StrengthLevel, StrengthStats


def redact_label(password: str) -> str:
    """
    Keeps the first and last character and masks everything in between.
    A single character is shown twice ("a" -> "aa"); empty stays empty.
    Characters that cannot be stored as UTF-8 come out as "?".
    """
    if not password:
        return ""
    label = password[0] + "*" * max(0, len(password) - 2) + password[-1]
    return label.encode("utf-8", "replace").decode("utf-8")


def new_record_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


@dataclass(frozen=True)
class AnalysisRecord:
    """
    Result of one analysis run, as shown to the user and kept in history.
    Holds only the redacted label, never the password itself.
    """
    password_label: str
    score: int
    entropy: float
    crack_time: str
    suggestions: tuple = ()
    warning: str = ""
    occurrence_count: int = 0
    created_at: str = field(default_factory=_now)
    id: str = field(default_factory=new_record_id)

    @classmethod
    def create(cls, password: str, stats: StrengthStats, breach: BreachResult) -> "AnalysisRecord":
        return cls(
            password_label=redact_label(password),
            score=stats.score,
            entropy=stats.entropy,
            crack_time=stats.crack_time,
            suggestions=tuple(stats.suggestions),
            warning=stats.warning,
            occurrence_count=breach.occurrence_count,
        )

    @property
    def is_compromised(self) -> bool:
        return self.occurrence_count > 0

    @property
    def level(self) -> StrengthLevel:
        return StrengthLevel(self.score)

    def to_tuple_db(self) -> tuple:
        """
        Row layout used by HistoryStore (suggestions are stored as JSON).
        """
        return (
            self.id,
            self.password_label,
            self.score,
            self.entropy,
            self.crack_time,
            json.dumps(list(self.suggestions)),
            self.warning,
            self.occurrence_count,
            self.created_at,
        )

    @staticmethod
    def from_db_row(row: tuple) -> "AnalysisRecord":
        return AnalysisRecord(
            id=row[0],
            password_label=row[1],
            score=row[2],
            entropy=row[3],
            crack_time=row[4],
            suggestions=tuple(json.loads(row[5] or "[]")),
            warning=row[6] or "",
            occurrence_count=row[7],
            created_at=row[8],
        )

    def __str__(self):
        status = f"PWNED x{self.occurrence_count}" if self.is_compromised else "safe"
        return (
            f"[{self.created_at}] {self.password_label} "
            f"{self.level.label} ({self.score}/4), {status}"
        )
