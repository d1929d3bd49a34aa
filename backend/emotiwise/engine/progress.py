"""Progress analytics over a user's journal history, pure functions.

Produces ProgressMetrics from a snapshot of journal entries:

1. Mood distribution + average mood score (fixed mood → score mapping)
2. Current / longest day streaks and a consistency score
3. Weekly trend (last 7 days vs the 7 before) and monthly coverage
4. Emotional-intelligence sub-scores from keyword hits

The EI sub-scores are a lexical heuristic, not a validated psychometric
instrument.  The keyword lists and the normalisation below are versioned
constants so results stay reproducible.

Nothing here raises on a malformed entry: unknown moods count as
neutral, entries without a timestamp are left out of the date math.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable, Optional

MOODS: tuple[str, ...] = ("positive", "negative", "mixed", "neutral")
DEFAULT_MOOD = "neutral"

MOOD_SCORES: dict[str, int] = {
    "positive": 100,
    "mixed": 60,
    "neutral": 50,
    "negative": 20,
}

WEEK = timedelta(days=7)
MONTH_DAYS = 30

# ── EI keyword lists (v1) ────────────────────────────────────────────────
# Matched as substrings of the lower-cased content, each keyword counted
# at most once per entry.  "aware" is intentionally in two lists.

KEYWORDS_VERSION = 1

SELF_AWARENESS_KEYWORDS: tuple[str, ...] = (
    "feel", "realize", "understand", "recognize", "aware",
    "notice", "reflect", "think", "believe", "sense",
)
REGULATION_KEYWORDS: tuple[str, ...] = (
    "calm", "manage", "control", "cope", "handle",
    "breathe", "relax", "focus", "center", "balance",
)
MINDFULNESS_KEYWORDS: tuple[str, ...] = (
    "present", "moment", "mindful", "grateful", "appreciate",
    "observe", "aware", "conscious", "here", "now",
)

KEYWORD_DENSITY_SCALE = 1000
ENTRY_SCORE_CAP = 100
BASELINE_BOOST_PER_ENTRY = 5
BASELINE_BOOST_CAP = 40


@dataclass
class JournalEntryRecord:
    """Read-only snapshot of a journal entry as the engine sees it."""
    id: int
    content: str
    mood: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class ProgressMetrics:
    self_awareness: int = 0
    emotional_regulation: int = 0
    mindfulness: int = 0
    consistency_score: int = 0
    total_entries: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    average_mood_score: int = 0
    mood_distribution: dict[str, int] = field(
        default_factory=lambda: {mood: 0 for mood in MOODS}
    )
    weekly_trend: int = 0
    monthly_growth: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MoodTrendPoint:
    date: str              # YYYY-MM-DD
    mood: Optional[str]    # raw label as stored
    score: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def empty_metrics() -> ProgressMetrics:
    """Metrics for a user with no entries: every figure is zero."""
    return ProgressMetrics()


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def round_half_up(value: float) -> int:
    """Round .5 toward +inf (the built-in round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def effective_mood(mood: Optional[str]) -> str:
    return mood if mood in MOOD_SCORES else DEFAULT_MOOD


def mood_score(mood: Optional[str]) -> int:
    return MOOD_SCORES[effective_mood(mood)]


def _resolve_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None:
        return now.astimezone()
    return now


def _localize(ts: datetime, tz: tzinfo) -> datetime:
    # Naive timestamps are taken to be in the same zone as "now".
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=tz)
    return ts.astimezone(tz)


def _timestamped(entries: Iterable[JournalEntryRecord], tz: tzinfo) -> list[tuple[datetime, JournalEntryRecord]]:
    """(local timestamp, entry) pairs, oldest first, untimestamped dropped."""
    stamped = [(_localize(e.created_at, tz), e) for e in entries if e.created_at is not None]
    stamped.sort(key=lambda pair: pair[0])
    return stamped


def _mean_mood(entries: list[JournalEntryRecord]) -> Optional[float]:
    if not entries:
        return None
    return sum(mood_score(e.mood) for e in entries) / len(entries)


# ═══════════════════════════════════════════════════════════════════════════
# Mood
# ═══════════════════════════════════════════════════════════════════════════

def calculate_mood_distribution(entries: list[JournalEntryRecord]) -> dict[str, int]:
    """Percentage per mood bucket, each rounded on its own (may not sum to 100)."""
    counts = {mood: 0 for mood in MOODS}
    for entry in entries:
        counts[effective_mood(entry.mood)] += 1
    total = len(entries)
    if total == 0:
        return counts
    return {mood: round_half_up(count / total * 100) for mood, count in counts.items()}


def calculate_average_mood(entries: list[JournalEntryRecord]) -> int:
    mean = _mean_mood(entries)
    return round_half_up(mean) if mean is not None else 0


# ═══════════════════════════════════════════════════════════════════════════
# Streaks & consistency
# ═══════════════════════════════════════════════════════════════════════════

def calculate_streaks(days: list[date], today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak) for ascending entry days.

    The current streak is anchored at ``today``: an entry from yesterday
    alone yields 0, not 1.  In the longest-streak scan any gap other than
    exactly one day restarts the run, including two entries on one day.
    """
    if not days:
        return 0, 0

    current = 0
    expected = today
    for day in reversed(days):
        if day == expected:
            current += 1
            expected -= timedelta(days=1)
        elif day < expected:
            break

    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in days:
        if previous is None:
            run = 1
        elif (day - previous).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
        previous = day
    longest = max(longest, run)

    return current, longest


def calculate_consistency(days: list[date]) -> int:
    """Entries per calendar day over the inclusive span they cover, as %."""
    if not days:
        return 0
    if len(days) == 1:
        return 100
    span = (days[-1] - days[0]).days + 1
    return min(round_half_up(len(days) / span * 100), 100)


# ═══════════════════════════════════════════════════════════════════════════
# Trends
# ═══════════════════════════════════════════════════════════════════════════

def calculate_weekly_trend(
    stamped: list[tuple[datetime, JournalEntryRecord]],
    now: datetime,
    average_mood_score: int,
) -> int:
    """Mean mood of the last 7 days minus the mean of the 7 days before.

    An empty window borrows the other window's mean; with both empty the
    overall average stands in for each, so the delta is 0.
    """
    one_week_ago = now - WEEK
    two_weeks_ago = now - 2 * WEEK

    recent = [e for ts, e in stamped if ts >= one_week_ago]
    previous = [e for ts, e in stamped if two_weeks_ago <= ts < one_week_ago]

    recent_avg = _mean_mood(recent)
    previous_avg = _mean_mood(previous)

    if recent_avg is None and previous_avg is None:
        recent_avg = previous_avg = float(average_mood_score)
    elif recent_avg is None:
        recent_avg = previous_avg
    elif previous_avg is None:
        previous_avg = recent_avg

    return round_half_up(recent_avg - previous_avg)


def calculate_monthly_growth(stamped: list[tuple[datetime, JournalEntryRecord]], now: datetime) -> int:
    """Entries in the trailing 30 days per day, as %.  Not clamped: several
    entries a day push it past 100."""
    month_ago = now - timedelta(days=MONTH_DAYS)
    count = sum(1 for ts, _ in stamped if ts >= month_ago)
    return round_half_up(count / MONTH_DAYS * 100)


# ═══════════════════════════════════════════════════════════════════════════
# Emotional-intelligence sub-scores
# ═══════════════════════════════════════════════════════════════════════════

def keyword_density_score(content: str, keywords: Iterable[str]) -> float:
    """Per-entry score: min(hits / word_count * 1000, 100)."""
    text = content.lower()
    word_count = len(text.split(" "))
    hits = sum(1 for keyword in keywords if keyword in text)
    return min(hits / word_count * KEYWORD_DENSITY_SCALE, ENTRY_SCORE_CAP)


def calculate_ei_scores(entries: list[JournalEntryRecord]) -> dict[str, int]:
    total = len(entries)
    if total == 0:
        return {"self_awareness": 0, "emotional_regulation": 0, "mindfulness": 0}

    lists = {
        "self_awareness": SELF_AWARENESS_KEYWORDS,
        "emotional_regulation": REGULATION_KEYWORDS,
        "mindfulness": MINDFULNESS_KEYWORDS,
    }
    baseline_boost = min(total * BASELINE_BOOST_PER_ENTRY, BASELINE_BOOST_CAP)

    scores: dict[str, int] = {}
    for name, keywords in lists.items():
        mean = sum(keyword_density_score(e.content, keywords) for e in entries) / total
        scores[name] = max(0, min(round_half_up(mean + baseline_boost), 100))
    return scores


# ═══════════════════════════════════════════════════════════════════════════
# Entry points
# ═══════════════════════════════════════════════════════════════════════════

def analyze(entries: Iterable[JournalEntryRecord], now: Optional[datetime] = None) -> ProgressMetrics:
    """Compute ProgressMetrics for a snapshot of entries.

    ``now`` anchors "today" and the trailing windows; it defaults to the
    current local time.  An empty snapshot yields ``empty_metrics()``.
    """
    entries = list(entries)
    if not entries:
        return empty_metrics()

    now = _resolve_now(now)
    stamped = _timestamped(entries, now.tzinfo)
    days = [ts.date() for ts, _ in stamped]

    average = calculate_average_mood(entries)
    current_streak, longest_streak = calculate_streaks(days, now.date())
    ei = calculate_ei_scores(entries)

    return ProgressMetrics(
        self_awareness=ei["self_awareness"],
        emotional_regulation=ei["emotional_regulation"],
        mindfulness=ei["mindfulness"],
        consistency_score=calculate_consistency(days),
        total_entries=len(entries),
        current_streak=current_streak,
        longest_streak=longest_streak,
        average_mood_score=average,
        mood_distribution=calculate_mood_distribution(entries),
        weekly_trend=calculate_weekly_trend(stamped, now, average),
        monthly_growth=calculate_monthly_growth(stamped, now),
    )


def calculate_mood_trends(
    entries: Iterable[JournalEntryRecord],
    now: Optional[datetime] = None,
) -> list[MoodTrendPoint]:
    """One point per timestamped entry, oldest first, for charting."""
    tz = _resolve_now(now).tzinfo
    return [
        MoodTrendPoint(date=ts.date().isoformat(), mood=entry.mood, score=mood_score(entry.mood))
        for ts, entry in _timestamped(entries, tz)
    ]
