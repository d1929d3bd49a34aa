"""FastAPI server for the EmotiWise journal.

REST endpoints for journal entries, mentor replies, progress analytics
and personality assessments.  Every request acts on behalf of the user
named in the ``X-User-Id`` header (``DEFAULT_USER_ID`` when absent).

Persistence goes through the Redis journal store; narrative text comes
from the mentor service, which never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal, Optional

import redis
from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, Field, field_validator

from emotiwise.config.settings import (
    DEFAULT_USER_ID,
    ENTRY_CONTENT_MAX,
    INSIGHTS_ENTRY_LIMIT,
    MENTOR_CONTEXT_ENTRIES,
    PROGRESS_ENTRY_LIMIT,
    REDIS_URL,
)
from emotiwise.engine.journal_store import (
    create_assessment,
    create_entry,
    get_assessments,
    get_entries,
    get_latest_assessment,
    get_latest_mbti_type,
    update_entry,
)
from emotiwise.engine.narratives import get_journaling_insights
from emotiwise.engine.personality import QUESTIONS, Response, classify, validate_responses
from emotiwise.errors import EntryNotFoundError
from emotiwise.services.mentor_service import (
    analyze_mood,
    build_progress_report,
    generate_emotional_insights,
    generate_mentor_response,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="EmotiWise", description="Emotional wellness journal with AI mentors")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

PREVIOUS_ENTRY_EXCERPT_CHARS = 100

_SCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_INLINE_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)


def _get_redis() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


def sanitize_text(value: str) -> str:
    """Strip whitespace, angle brackets, script URLs and inline handlers."""
    value = value.strip().replace("<", "").replace(">", "")
    value = _SCRIPT_SCHEME.sub("", value)
    return _INLINE_HANDLER.sub("", value)


def _sanitize(value: Any) -> Any:
    return sanitize_text(value) if isinstance(value, str) else value


def current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    user_id = sanitize_text(x_user_id) if x_user_id else ""
    return user_id or DEFAULT_USER_ID


def _bad_request(message: str, problems: list[str]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": message, "problems": problems})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err.get("loc", ())[1:])
        problems.append(f"{where}: {err.get('msg', 'invalid')}" if where else err.get("msg", "invalid"))
    return _bad_request("Invalid input", problems)


# ── Request models ───────────────────────────────────────────────────────

Mood = Literal["positive", "negative", "mixed", "neutral"]
Mentor = Literal["sage", "jax"]


class CreateEntryRequest(BaseModel):
    content: str = Field(min_length=1, max_length=ENTRY_CONTENT_MAX)
    mood: Optional[Mood] = None
    selected_mentor: Optional[Mentor] = Field(
        default=None, validation_alias=AliasChoices("selected_mentor", "selectedMentor"),
    )

    @field_validator("content", mode="before")
    @classmethod
    def _clean_content(cls, value):
        return _sanitize(value)


class UpdateEntryRequest(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=ENTRY_CONTENT_MAX)
    mood: Optional[Mood] = None
    selected_mentor: Optional[Mentor] = Field(
        default=None, validation_alias=AliasChoices("selected_mentor", "selectedMentor"),
    )
    sage_response: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("sage_response", "sageResponse"),
    )
    jax_response: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("jax_response", "jaxResponse"),
    )

    @field_validator("content", "sage_response", "jax_response", mode="before")
    @classmethod
    def _clean_text(cls, value):
        return _sanitize(value)


class CreateAssessmentRequest(BaseModel):
    assessment_type: Literal["mbti", "big5", "enneagram", "disc"] = Field(
        validation_alias=AliasChoices("assessment_type", "assessmentType"),
    )
    results: dict[str, Any]

    @field_validator("results")
    @classmethod
    def _results_not_empty(cls, value):
        if not value:
            raise ValueError("results must not be empty")
        return value


class MbtiResponseItem(BaseModel):
    question_id: str = Field(validation_alias=AliasChoices("question_id", "questionId"))
    score: int


class MbtiSubmitRequest(BaseModel):
    responses: list[MbtiResponseItem]


# ── Health ───────────────────────────────────────────────────────────────

@app.get("/api/health")
async def health():
    r = _get_redis()
    try:
        r.ping()
        redis_ok = True
    except redis.RedisError:
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}


# ── Journal ──────────────────────────────────────────────────────────────

@app.get("/api/journal/entries")
async def list_entries(
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(current_user),
):
    """Newest journal entries for the current user."""
    try:
        entries = get_entries(user_id, limit=limit, r=_get_redis())
    except Exception:
        logger.exception("Failed to fetch journal entries for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")
    return [entry.to_dict() for entry in entries]


@app.post("/api/journal/entries", status_code=201)
async def add_entry(req: CreateEntryRequest, user_id: str = Depends(current_user)):
    """Create an entry, detecting its mood and asking the chosen mentor."""
    try:
        r = _get_redis()
        mood = req.mood or await analyze_mood(req.content)
        entry = create_entry(
            user_id, req.content, mood=mood, selected_mentor=req.selected_mentor or "", r=r,
        )

        mentor_reply = None
        if req.selected_mentor:
            recent = get_entries(user_id, limit=MENTOR_CONTEXT_ENTRIES + 1, r=r)
            previous = [
                e.content[:PREVIOUS_ENTRY_EXCERPT_CHARS]
                for e in recent if e.entry_id != entry.entry_id
            ][:MENTOR_CONTEXT_ENTRIES]
            mentor_reply = await generate_mentor_response(
                req.selected_mentor,
                req.content,
                mbti_type=get_latest_mbti_type(user_id, r=r),
                previous_entries=previous,
            )
            entry = update_entry(
                entry.entry_id, user_id, r=r,
                **{f"{req.selected_mentor}_response": mentor_reply["response"]},
            )
    except Exception:
        logger.exception("Failed to create journal entry for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to create journal entry")

    return {"entry": entry.to_dict(), "mentor_response": mentor_reply}


@app.put("/api/journal/entries/{entry_id}")
async def edit_entry(entry_id: int, req: UpdateEntryRequest, user_id: str = Depends(current_user)):
    fields = req.model_dump(exclude_none=True)
    if not fields:
        return _bad_request("Invalid input", ["At least one field must be provided"])

    try:
        entry = update_entry(entry_id, user_id, r=_get_redis(), **fields)
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception:
        logger.exception("Failed to update journal entry %s", entry_id)
        raise HTTPException(status_code=500, detail="Failed to update journal entry")
    return entry.to_dict()


# ── Insights & progress ──────────────────────────────────────────────────

@app.get("/api/insights/emotional")
async def emotional_insights(user_id: str = Depends(current_user)):
    try:
        r = _get_redis()
        entries = get_entries(user_id, limit=INSIGHTS_ENTRY_LIMIT, r=r)
        mbti_type = get_latest_mbti_type(user_id, r=r)
        return await generate_emotional_insights([e.to_record() for e in entries], mbti_type)
    except Exception:
        logger.exception("Failed to generate emotional insights for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to generate insights")


@app.get("/api/progress/comprehensive")
async def comprehensive_progress(user_id: str = Depends(current_user)):
    """Progress metrics, mood trends and narrative insights."""
    try:
        r = _get_redis()
        entries = get_entries(user_id, limit=PROGRESS_ENTRY_LIMIT, r=r)
        mbti_type = get_latest_mbti_type(user_id, r=r)
        return await build_progress_report([e.to_record() for e in entries], mbti_type)
    except Exception:
        logger.exception("Failed to build progress report for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to generate progress analysis")


# ── Assessments ──────────────────────────────────────────────────────────

@app.get("/api/assessments")
async def list_assessments(user_id: str = Depends(current_user)):
    try:
        assessments = get_assessments(user_id, r=_get_redis())
    except Exception:
        logger.exception("Failed to fetch assessments for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to fetch assessments")
    return [a.to_dict() for a in assessments]


@app.post("/api/assessments", status_code=201)
async def add_assessment(req: CreateAssessmentRequest, user_id: str = Depends(current_user)):
    try:
        assessment = create_assessment(user_id, req.assessment_type, req.results, r=_get_redis())
    except Exception:
        logger.exception("Failed to create assessment for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to create assessment")
    return assessment.to_dict()


@app.get("/api/assessments/mbti/questions")
async def mbti_questions():
    return {"questions": [q.to_dict() for q in QUESTIONS]}


@app.post("/api/assessments/mbti/submit", status_code=201)
async def submit_mbti(req: MbtiSubmitRequest, user_id: str = Depends(current_user)):
    """Validate, score and store a questionnaire submission."""
    responses = [Response(question_id=item.question_id, score=item.score) for item in req.responses]
    problems = validate_responses(responses)
    if problems:
        return _bad_request("Invalid MBTI responses", problems)

    try:
        profile = classify(responses)
        insights = get_journaling_insights(profile.type)
        results = profile.to_dict()
        results["journaling_insights"] = insights
        results["responses"] = [
            {"question_id": resp.question_id, "score": resp.score} for resp in responses
        ]
        assessment = create_assessment(user_id, "mbti", results, r=_get_redis())
    except Exception:
        logger.exception("Failed to process MBTI assessment for %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to process MBTI assessment")

    logger.info("User %s classified as %s", user_id, profile.type)
    return {
        "assessment": assessment.to_dict(),
        "results": profile.to_dict(),
        "journaling_insights": insights,
    }


@app.get("/api/assessments/mbti/latest")
async def latest_mbti(user_id: str = Depends(current_user)):
    latest = get_latest_assessment(user_id, "mbti", r=_get_redis())
    if latest is None:
        raise HTTPException(status_code=404, detail="No MBTI assessment found")
    return latest.to_dict()
