import math

import pytest

from sentinel.strength import (
    GUESSES_PER_SECOND,
    SUGGEST_DIGIT,
    SUGGEST_LENGTH,
    SUGGEST_SYMBOLS,
    WARNING_TOO_SHORT,
    StrengthLevel,
    StrengthStats,
    base_score,
    crack_time_label,
    estimate_strength,
    pool_size,
)


def entropy_for(seconds):
    return math.log2(seconds * GUESSES_PER_SECOND)


def test_empty_password():
    stats = estimate_strength("")
    assert stats == StrengthStats(score=0, entropy=0.0, crack_time="0s", suggestions=(), warning="")


@pytest.mark.parametrize("pwd, expected", [
    ("abc", 26),
    ("ABC", 26),
    ("123", 10),
    ("!!!", 32),
    ("aB", 52),
    ("aB3", 62),
    ("aB3$", 94),
    ("é", 32),
])
def test_pool_size(pwd, expected):
    assert pool_size(pwd) == expected


def test_pool_size_defaults_to_one():
    assert pool_size("") == 1


def test_password_example():
    stats = estimate_strength("password")
    assert stats.entropy == pytest.approx(8 * math.log2(26))
    assert stats.entropy == pytest.approx(37.6, abs=0.05)
    assert stats.score == 1
    assert stats.warning == ""
    assert stats.suggestions == (SUGGEST_SYMBOLS, SUGGEST_DIGIT)
    assert stats.level is StrengthLevel.WEAK


@pytest.mark.parametrize("pwd", ["a", "abc", "aB3$", "Zq9!x2#", "1234567"])
def test_short_passwords_are_penalized(pwd):
    stats = estimate_strength(pwd)
    assert stats.warning == WARNING_TOO_SHORT
    assert stats.suggestions[0] == SUGGEST_LENGTH
    assert stats.score == max(0, base_score(stats.entropy) - 2)


def test_length_eight_is_not_penalized():
    stats = estimate_strength("Zq9!x2#k")
    assert stats.warning == ""
    assert SUGGEST_LENGTH not in stats.suggestions
    assert stats.score == base_score(stats.entropy)


def test_suggestion_order():
    stats = estimate_strength("abc")
    assert stats.suggestions == (SUGGEST_LENGTH, SUGGEST_SYMBOLS, SUGGEST_DIGIT)


def test_strong_password_has_no_suggestions():
    stats = estimate_strength("Tr0ub4dor&3-Horse-Battery!")
    assert stats.score == 4
    assert stats.suggestions == ()
    assert stats.warning == ""
    assert stats.level.label == "Expert"


@pytest.mark.parametrize("pwd", ["", "a", "password", "P@ssw0rd", "x" * 200, "é" * 1000, "Aa1!" * 300])
def test_score_and_entropy_bounds(pwd):
    stats = estimate_strength(pwd)
    assert 0 <= stats.score <= 4
    assert stats.entropy >= 0


@pytest.mark.parametrize("unit", ["a", "aB", "aB3", "aB3$"])
def test_entropy_monotonic_in_length(unit):
    entropies = [estimate_strength(unit * n).entropy for n in range(1, 30)]
    assert entropies == sorted(entropies)


@pytest.mark.parametrize("entropy, expected", [
    (20, 0), (20.01, 1), (40, 1), (40.01, 2), (60, 2), (60.01, 3), (80, 3), (80.01, 4),
])
def test_base_score_thresholds(entropy, expected):
    assert base_score(entropy) == expected


@pytest.mark.parametrize("seconds, below, above", [
    (1, "instantly", "1 seconds"),
    (60, "59 seconds", "1 minutes"),
    (3600, "59 minutes", "1 hours"),
    (86400, "23 hours", "1 days"),
    (31536000, " days", "1 years"),
    (31536000000, " years", "centuries"),
])
def test_crack_time_boundaries(seconds, below, above):
    edge = entropy_for(seconds)
    assert crack_time_label(edge - 0.01).endswith(below)
    assert crack_time_label(edge + 0.01) == above


def test_crack_time_truncates():
    # 90 seconds -> 1.5 minutes
    assert crack_time_label(entropy_for(90)) == "1 minutes"


def test_crack_time_huge_entropy():
    assert crack_time_label(5000.0) == "centuries"
    assert estimate_strength("Aa1!" * 300).crack_time == "centuries"
