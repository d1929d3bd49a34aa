"""Shared test fixtures for the EmotiWise backend test suite."""

import pytest
import fakeredis
from datetime import datetime, timedelta, timezone

from emotiwise.engine.personality import QUESTIONS, Response
from emotiwise.engine.progress import JournalEntryRecord


# ── Redis ────────────────────────────────────────────────────────────────

@pytest.fixture
def r():
    """Fresh fakeredis instance per test (decode_responses=True like production)."""
    return fakeredis.FakeRedis(decode_responses=True)


# ── Time Freezing ───────────────────────────────────────────────────────

@pytest.fixture
def frozen_now():
    """Fixed 'now' for deterministic progress tests.

    2026-02-15T12:00:00Z (noon UTC on a Sunday).
    """
    return datetime(2026, 2, 15, 12, 0, 0, tzinfo=timezone.utc)


# ── Entry Factories ─────────────────────────────────────────────────────

@pytest.fixture
def make_entry(frozen_now):
    """Factory for JournalEntryRecord snapshots.

    ``days_ago`` places the entry relative to frozen_now; pass
    ``created_at`` explicitly (or None) to override.

    Usage:
        entry = make_entry(mood="positive", days_ago=1)
    """
    _counter = 0

    def _factory(content="Today was an ordinary day", mood="neutral", days_ago=0, hours_ago=0, **overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "id": _counter,
            "content": content,
            "mood": mood,
            "created_at": frozen_now - timedelta(days=days_ago, hours=hours_ago),
        }
        defaults.update(overrides)
        return JournalEntryRecord(**defaults)

    return _factory


# ── Questionnaire ───────────────────────────────────────────────────────

@pytest.fixture
def full_responses():
    """Factory for a complete 32-answer submission.

    ``scores`` maps question id → score; everything else gets ``default``.
    """
    def _factory(default=4, scores=None):
        scores = scores or {}
        return [Response(question_id=q.id, score=scores.get(q.id, default)) for q in QUESTIONS]

    return _factory
