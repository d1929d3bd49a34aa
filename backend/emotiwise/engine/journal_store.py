"""Redis-backed store for journal entries and assessments.

Entries and assessments are hashes keyed by an integer id drawn from a
counter; each user has a sorted set per record kind, scored by creation
time, so "latest N" is a single ZREVRANGE.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import redis

from emotiwise.config.settings import REDIS_URL
from emotiwise.errors import EntryNotFoundError
from emotiwise.models.journal import (
    ASSESSMENT_COUNTER_KEY,
    ASSESSMENT_USER_PREFIX,
    ENTRY_COUNTER_KEY,
    ENTRY_USER_PREFIX,
    Assessment,
    JournalEntry,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("content", "mood", "selected_mentor", "sage_response", "jax_response")


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


# ── Journal entries ──────────────────────────────────────────────────────

def create_entry(
    user_id: str,
    content: str,
    mood: str = "",
    selected_mentor: str = "",
    r: redis.Redis | None = None,
) -> JournalEntry:
    """Create and persist a new entry for a user."""
    r = r or _get_redis()
    entry = JournalEntry(
        entry_id=int(r.incr(ENTRY_COUNTER_KEY)),
        user_id=user_id,
        content=content,
        mood=mood or "",
        selected_mentor=selected_mentor or "",
    )
    entry.to_redis(r)
    logger.info("Created journal entry %s for user %s", entry.entry_id, user_id)
    return entry


def get_entry(entry_id: int, r: redis.Redis | None = None) -> Optional[JournalEntry]:
    r = r or _get_redis()
    return JournalEntry.from_redis(r, entry_id)


def get_entries(user_id: str, limit: int = 10, r: redis.Redis | None = None) -> list[JournalEntry]:
    """Newest-first entries for a user, at most ``limit``."""
    r = r or _get_redis()
    if limit <= 0:
        return []
    entry_ids = r.zrevrange(f"{ENTRY_USER_PREFIX}{user_id}", 0, limit - 1)
    entries = []
    for eid in entry_ids:
        entry = JournalEntry.from_redis(r, int(eid))
        if entry:
            entries.append(entry)
    return entries


def update_entry(
    entry_id: int,
    user_id: str,
    r: redis.Redis | None = None,
    **fields: str,
) -> JournalEntry:
    """Apply field updates to an entry the user owns.

    Raises EntryNotFoundError when the entry is missing or owned by
    someone else.  Unknown field names are ignored.
    """
    r = r or _get_redis()
    entry = JournalEntry.from_redis(r, entry_id)
    if entry is None or entry.user_id != user_id:
        raise EntryNotFoundError(entry_id)

    for name, value in fields.items():
        if name in UPDATABLE_FIELDS and value is not None:
            setattr(entry, name, value)
    entry.updated_at = datetime.now(timezone.utc).isoformat()
    entry.to_redis(r)
    return entry


# ── Assessments ──────────────────────────────────────────────────────────

def create_assessment(
    user_id: str,
    assessment_type: str,
    results: dict,
    r: redis.Redis | None = None,
) -> Assessment:
    r = r or _get_redis()
    assessment = Assessment(
        assessment_id=int(r.incr(ASSESSMENT_COUNTER_KEY)),
        user_id=user_id,
        assessment_type=assessment_type,
        results=results,
    )
    assessment.to_redis(r)
    logger.info(
        "Stored %s assessment %s for user %s",
        assessment_type, assessment.assessment_id, user_id,
    )
    return assessment


def get_assessments(user_id: str, r: redis.Redis | None = None) -> list[Assessment]:
    """All of a user's assessments, newest first."""
    r = r or _get_redis()
    assessment_ids = r.zrevrange(f"{ASSESSMENT_USER_PREFIX}{user_id}", 0, -1)
    assessments = []
    for aid in assessment_ids:
        assessment = Assessment.from_redis(r, int(aid))
        if assessment:
            assessments.append(assessment)
    return assessments


def get_latest_assessment(
    user_id: str,
    assessment_type: str,
    r: redis.Redis | None = None,
) -> Optional[Assessment]:
    for assessment in get_assessments(user_id, r):
        if assessment.assessment_type == assessment_type:
            return assessment
    return None


def get_latest_mbti_type(user_id: str, r: redis.Redis | None = None) -> Optional[str]:
    """Type code from the user's latest MBTI assessment, if any."""
    latest = get_latest_assessment(user_id, "mbti", r)
    if latest is None:
        return None
    type_code = latest.results.get("type")
    return type_code if isinstance(type_code, str) else None
