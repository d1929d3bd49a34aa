"""Integration tests for FastAPI server endpoints.

Uses httpx.AsyncClient with ASGITransport to test the REST API
without starting a real server. Redis is patched to use fakeredis and
the text-generation client is patched to fail, so every narrative
string comes from the static fallbacks unless a test says otherwise.
"""

import pytest
import fakeredis
from unittest.mock import AsyncMock, patch
from httpx import AsyncClient, ASGITransport

from emotiwise.config.settings import DEFAULT_USER_ID
from emotiwise.engine.personality import QUESTIONS
from emotiwise.errors import TextGenerationError
from emotiwise.models.journal import Assessment, JournalEntry
from emotiwise.services.mentor_service import FALLBACK_MENTOR_RESPONSES

CHAT = "emotiwise.services.mentor_service._chat_completion"


@pytest.fixture
def fake_redis():
    """Create a shared fakeredis instance for this test."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def chat_mock():
    return AsyncMock(side_effect=TextGenerationError("offline"))


@pytest.fixture
def patched_app(fake_redis, chat_mock):
    """Import and patch the FastAPI app to use fakeredis and an offline collaborator."""
    with (
        patch("emotiwise.server._get_redis", return_value=fake_redis),
        patch("emotiwise.engine.journal_store._get_redis", return_value=fake_redis),
        patch(CHAT, new=chat_mock),
    ):
        from emotiwise.server import app
        yield app


@pytest.fixture
async def client(patched_app):
    transport = ASGITransport(app=patched_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _answers(score=4):
    return [{"questionId": q.id, "score": score} for q in QUESTIONS]


def _seed_entries(r, user_id=DEFAULT_USER_ID, count=3):
    for i in range(1, count + 1):
        JournalEntry(
            entry_id=i,
            user_id=user_id,
            content=f"I feel calm today, entry {i}",
            mood="positive",
            created_at=f"2026-02-1{i}T12:00:00+00:00",
        ).to_redis(r)


# ═══════════════════════════════════════════════════════════════════════════
# Health Check
# ═══════════════════════════════════════════════════════════════════════════

class TestHealth:
    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "redis": True}


# ═══════════════════════════════════════════════════════════════════════════
# Journal Entries
# ═══════════════════════════════════════════════════════════════════════════

class TestJournalEntries:
    @pytest.mark.asyncio
    async def test_create_with_mood_and_no_mentor(self, client, fake_redis, chat_mock):
        resp = await client.post("/api/journal/entries", json={"content": "  Quiet day  ", "mood": "neutral"})

        assert resp.status_code == 201
        body = resp.json()
        assert body["entry"]["content"] == "Quiet day"
        assert body["entry"]["user_id"] == DEFAULT_USER_ID
        assert body["mentor_response"] is None
        chat_mock.assert_not_called()

    @pytest.mark.asyncio
    async def test_mood_detected_when_absent(self, client, chat_mock):
        chat_mock.side_effect = None
        chat_mock.return_value = "negative"

        resp = await client.post("/api/journal/entries", json={"content": "Awful meeting"})
        assert resp.json()["entry"]["mood"] == "negative"

    @pytest.mark.asyncio
    async def test_mood_detection_failure_is_neutral(self, client):
        resp = await client.post("/api/journal/entries", json={"content": "Awful meeting"})
        assert resp.json()["entry"]["mood"] == "neutral"

    @pytest.mark.asyncio
    async def test_mentor_reply_stored_on_entry(self, client, fake_redis):
        resp = await client.post(
            "/api/journal/entries",
            json={"content": "I keep putting things off", "mood": "mixed", "selectedMentor": "jax"},
        )

        assert resp.status_code == 201
        body = resp.json()
        expected = FALLBACK_MENTOR_RESPONSES["jax"]
        assert body["mentor_response"] == expected
        assert body["entry"]["jax_response"] == expected["response"]
        stored = JournalEntry.from_redis(fake_redis, body["entry"]["entry_id"])
        assert stored.jax_response == expected["response"]
        assert stored.selected_mentor == "jax"

    @pytest.mark.asyncio
    async def test_content_is_sanitised(self, client):
        resp = await client.post(
            "/api/journal/entries",
            json={"content": "<b onclick=alert(1)>hi</b> javascript:void", "mood": "neutral"},
        )
        content = resp.json()["entry"]["content"]
        assert "<" not in content and ">" not in content
        assert "javascript:" not in content
        assert "onclick=" not in content

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, client):
        resp = await client.post("/api/journal/entries", json={"content": "   "})
        assert resp.status_code == 400
        assert resp.json()["problems"]

    @pytest.mark.asyncio
    async def test_too_long_content_rejected(self, client):
        resp = await client.post("/api/journal/entries", json={"content": "a" * 10001})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_mentor_rejected(self, client):
        resp = await client.post("/api/journal/entries", json={"content": "hi", "selected_mentor": "yoda"})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_list_newest_first_with_limit(self, client, fake_redis):
        _seed_entries(fake_redis, count=3)

        resp = await client.get("/api/journal/entries?limit=2")
        assert resp.status_code == 200
        assert [e["entry_id"] for e in resp.json()] == [3, 2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_out_of_range(self, client, limit):
        resp = await client.get(f"/api/journal/entries?limit={limit}")
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_user_header_scopes_entries(self, client, fake_redis):
        _seed_entries(fake_redis, user_id="someone-else", count=2)

        mine = await client.get("/api/journal/entries")
        theirs = await client.get("/api/journal/entries", headers={"X-User-Id": "someone-else"})
        assert mine.json() == []
        assert len(theirs.json()) == 2

    @pytest.mark.asyncio
    async def test_update_entry(self, client, fake_redis):
        _seed_entries(fake_redis, count=1)

        resp = await client.put("/api/journal/entries/1", json={"mood": "mixed"})
        assert resp.status_code == 200
        assert resp.json()["mood"] == "mixed"

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, client, fake_redis):
        _seed_entries(fake_redis, count=1)

        resp = await client.put("/api/journal/entries/1", json={})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_update_other_users_entry_404(self, client, fake_redis):
        _seed_entries(fake_redis, user_id="someone-else", count=1)

        resp = await client.put("/api/journal/entries/1", json={"mood": "mixed"})
        assert resp.status_code == 404


# ═══════════════════════════════════════════════════════════════════════════
# Insights & Progress
# ═══════════════════════════════════════════════════════════════════════════

class TestInsightsAndProgress:
    @pytest.mark.asyncio
    async def test_emotional_insights_without_entries(self, client):
        resp = await client.get("/api/insights/emotional")
        assert resp.status_code == 200
        assert resp.json()["strengths"] == ["Taking the first step toward emotional awareness"]

    @pytest.mark.asyncio
    async def test_progress_without_entries(self, client, chat_mock):
        resp = await client.get("/api/progress/comprehensive")

        assert resp.status_code == 200
        body = resp.json()
        assert body["metrics"]["total_entries"] == 0
        assert body["mood_trends"] == []
        assert body["growth_areas"] == [
            "Begin your emotional wellness journey by writing your first journal entry"
        ]
        chat_mock.assert_not_called()

    @pytest.mark.asyncio
    async def test_progress_with_entries(self, client, fake_redis):
        _seed_entries(fake_redis, count=3)

        resp = await client.get("/api/progress/comprehensive")
        body = resp.json()
        assert body["metrics"]["total_entries"] == 3
        assert body["metrics"]["average_mood_score"] == 100
        assert [p["date"] for p in body["mood_trends"]] == ["2026-02-11", "2026-02-12", "2026-02-13"]
        assert body["recommendations"] == ["Maintain your journaling practice for continued insights"]


# ═══════════════════════════════════════════════════════════════════════════
# Assessments
# ═══════════════════════════════════════════════════════════════════════════

class TestAssessments:
    @pytest.mark.asyncio
    async def test_question_catalog(self, client):
        resp = await client.get("/api/assessments/mbti/questions")
        questions = resp.json()["questions"]
        assert len(questions) == 32
        assert questions[0]["id"] == "EI_1"

    @pytest.mark.asyncio
    async def test_latest_mbti_404_before_submission(self, client):
        resp = await client.get("/api/assessments/mbti/latest")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No MBTI assessment found"

    @pytest.mark.asyncio
    async def test_submit_valid(self, client, fake_redis):
        resp = await client.post("/api/assessments/mbti/submit", json={"responses": _answers()})

        assert resp.status_code == 201
        body = resp.json()
        assert body["results"]["type"] == "ESTJ"
        assert "journaling_style" in body["journaling_insights"]

        stored = Assessment.from_redis(fake_redis, body["assessment"]["assessment_id"])
        assert stored.assessment_type == "mbti"
        assert stored.results["type"] == "ESTJ"
        assert len(stored.results["responses"]) == 32

        latest = await client.get("/api/assessments/mbti/latest")
        assert latest.status_code == 200
        assert latest.json()["results"]["type"] == "ESTJ"

    @pytest.mark.asyncio
    async def test_submit_incomplete_is_400(self, client, fake_redis):
        resp = await client.post("/api/assessments/mbti/submit", json={"responses": _answers()[:31]})

        assert resp.status_code == 400
        assert "Exactly 32 responses required, got 31" in resp.json()["problems"]
        assert fake_redis.keys("assessment:*") == []

    @pytest.mark.asyncio
    async def test_submit_bad_score_is_400(self, client):
        answers = _answers()
        answers[0]["score"] = 9
        resp = await client.post("/api/assessments/mbti/submit", json={"responses": answers})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_mbti_type_feeds_mentor_prompt(self, client, chat_mock):
        await client.post("/api/assessments/mbti/submit", json={"responses": _answers()})
        await client.post(
            "/api/journal/entries",
            json={"content": "Busy week", "mood": "neutral", "selected_mentor": "sage"},
        )

        prompt = chat_mock.call_args.args[0][1]["content"]
        assert "User's MBTI type: ESTJ" in prompt

    @pytest.mark.asyncio
    async def test_generic_assessment(self, client):
        resp = await client.post(
            "/api/assessments",
            json={"assessmentType": "big5", "results": {"openness": 80}},
        )
        assert resp.status_code == 201

        listing = await client.get("/api/assessments")
        assert [a["assessment_type"] for a in listing.json()] == ["big5"]

    @pytest.mark.asyncio
    async def test_generic_assessment_validation(self, client):
        bad_type = await client.post("/api/assessments", json={"assessment_type": "tarot", "results": {"x": 1}})
        empty = await client.post("/api/assessments", json={"assessment_type": "disc", "results": {}})

        assert bad_type.status_code == 400
        assert empty.status_code == 400
