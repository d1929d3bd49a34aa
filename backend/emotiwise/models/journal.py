"""Journal entry and assessment models.

Redis-backed records owned by a user.  Each record lives in a hash and is
indexed in a per-user sorted set scored by creation time.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import redis

from emotiwise.engine.progress import JournalEntryRecord

ENTRY_PREFIX = "journal:"
ENTRY_USER_PREFIX = "journal:user:"
ENTRY_COUNTER_KEY = "journal:next_id"

ASSESSMENT_PREFIX = "assessment:"
ASSESSMENT_USER_PREFIX = "assessment:user:"
ASSESSMENT_COUNTER_KEY = "assessment:next_id"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _epoch(iso: str) -> float:
    try:
        return datetime.fromisoformat(iso).timestamp()
    except (ValueError, TypeError):
        return 0.0


@dataclass
class JournalEntry:
    entry_id: int
    user_id: str
    content: str
    mood: str = ""                 # positive | negative | mixed | neutral | ""
    selected_mentor: str = ""      # sage | jax | ""
    sage_response: str = ""
    jax_response: str = ""
    created_at: str = field(default_factory=_now_iso)
    updated_at: str = field(default_factory=_now_iso)

    @property
    def created_datetime(self) -> Optional[datetime]:
        if not self.created_at:
            return None
        try:
            return datetime.fromisoformat(self.created_at)
        except (ValueError, TypeError):
            return None

    def to_record(self) -> JournalEntryRecord:
        """Snapshot for the progress engine."""
        return JournalEntryRecord(
            id=self.entry_id,
            content=self.content,
            mood=self.mood or None,
            created_at=self.created_datetime,
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["entry_id"] = int(self.entry_id)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> JournalEntry:
        data = dict(data)
        if "entry_id" in data and isinstance(data["entry_id"], str):
            data["entry_id"] = int(data["entry_id"])
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        """Persist entry hash and index it under its owner."""
        r.hset(f"{ENTRY_PREFIX}{self.entry_id}", mapping=self.to_dict())
        r.zadd(f"{ENTRY_USER_PREFIX}{self.user_id}", {str(self.entry_id): _epoch(self.created_at)})

    @classmethod
    def from_redis(cls, r: redis.Redis, entry_id: int) -> Optional[JournalEntry]:
        data = r.hgetall(f"{ENTRY_PREFIX}{entry_id}")
        if not data:
            return None
        decoded = {k.decode() if isinstance(k, bytes) else k:
                   v.decode() if isinstance(v, bytes) else v
                   for k, v in data.items()}
        return cls.from_dict(decoded)


@dataclass
class Assessment:
    assessment_id: int
    user_id: str
    assessment_type: str           # mbti | big5 | enneagram | disc
    results: dict = field(default_factory=dict)
    created_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Assessment:
        data = dict(data)
        if isinstance(data.get("results"), str):
            data["results"] = json.loads(data["results"])
        if "assessment_id" in data and isinstance(data["assessment_id"], str):
            data["assessment_id"] = int(data["assessment_id"])
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        mapping: dict[str, Any] = self.to_dict()
        mapping["results"] = json.dumps(self.results)
        r.hset(f"{ASSESSMENT_PREFIX}{self.assessment_id}", mapping=mapping)
        r.zadd(
            f"{ASSESSMENT_USER_PREFIX}{self.user_id}",
            {str(self.assessment_id): _epoch(self.created_at)},
        )

    @classmethod
    def from_redis(cls, r: redis.Redis, assessment_id: int) -> Optional[Assessment]:
        data = r.hgetall(f"{ASSESSMENT_PREFIX}{assessment_id}")
        if not data:
            return None
        decoded = {k.decode() if isinstance(k, bytes) else k:
                   v.decode() if isinstance(v, bytes) else v
                   for k, v in data.items()}
        return cls.from_dict(decoded)
