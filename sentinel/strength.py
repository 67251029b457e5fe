import math
import re
from dataclasses import dataclass
from enum import IntEnum

GUESSES_PER_SECOND = 1.0e11  # high-end offline cracking rig

MIN_LENGTH = 8

LOWER_RE = re.compile(r"[a-z]")
UPPER_RE = re.compile(r"[A-Z]")
DIGIT_RE = re.compile(r"[0-9]")
SYMBOL_RE = re.compile(r"[^a-zA-Z0-9]")

WARNING_TOO_SHORT = "Password is too short."
SUGGEST_LENGTH = "Use at least 12 characters."
SUGGEST_SYMBOLS = "Add special characters (!@#$%^&*)."
SUGGEST_DIGIT = "Include at least one number."

# (upper bound in seconds, divisor, unit)
_CRACK_TIME_BUCKETS = (
    (60, 1, "seconds"),
    (3600, 60, "minutes"),
    (86400, 3600, "hours"),
    (31536000, 86400, "days"),
    (31536000000, 31536000, "years"),
)


class StrengthLevel(IntEnum):
    VERY_WEAK = 0
    WEAK = 1
    FAIR = 2
    STRONG = 3
    EXPERT = 4

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True)
class StrengthStats:
    score: int
    entropy: float
    crack_time: str
    suggestions: tuple = ()
    warning: str = ""

    @property
    def level(self) -> StrengthLevel:
        return StrengthLevel(self.score)


def pool_size(pwd: str) -> int:
    """
    Estimated alphabet size: sum of the character classes present in the password.
    """
    size = 0
    if LOWER_RE.search(pwd):  size += 26
    if UPPER_RE.search(pwd):  size += 26
    if DIGIT_RE.search(pwd):  size += 10
    if SYMBOL_RE.search(pwd): size += 32  # roughly the printable symbols
    return size or 1


def entropy_bits(pwd: str) -> float:
    return len(pwd) * math.log2(pool_size(pwd))


def base_score(entropy: float) -> int:
    if entropy > 80:
        return 4
    if entropy > 60:
        return 3
    if entropy > 40:
        return 2
    if entropy > 20:
        return 1
    return 0


def crack_time_label(entropy: float) -> str:
    """
    Bucketed brute-force time for a given entropy.
    Depends on entropy only; values are truncated, never rounded.
    """
    try:
        seconds = 2 ** entropy / GUESSES_PER_SECOND
    except OverflowError:
        return "centuries"

    if seconds < 1:
        return "instantly"
    for limit, divisor, unit in _CRACK_TIME_BUCKETS:
        if seconds < limit:
            return f"{math.floor(seconds / divisor)} {unit}"
    return "centuries"


def estimate_strength(pwd: str) -> StrengthStats:
    """
    Estimates password strength (score 0..4) from approximate entropy
    and returns remediation suggestions. Never raises, never does I/O.
    """
    if not pwd:
        return StrengthStats(score=0, entropy=0.0, crack_time="0s")

    entropy = entropy_bits(pwd)
    score = base_score(entropy)
    suggestions = []
    warning = ""

    if len(pwd) < MIN_LENGTH:
        score = max(0, score - 2)
        warning = WARNING_TOO_SHORT
        suggestions.append(SUGGEST_LENGTH)

    if not SYMBOL_RE.search(pwd):
        suggestions.append(SUGGEST_SYMBOLS)

    if not DIGIT_RE.search(pwd):
        suggestions.append(SUGGEST_DIGIT)

    return StrengthStats(
        score=min(4, max(0, score)),
        entropy=entropy,
        crack_time=crack_time_label(entropy),
        suggestions=tuple(suggestions),
        warning=warning,
    )
