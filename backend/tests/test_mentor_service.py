"""Tests for the mentor service: prompts, parsing and static fallbacks.

The chat-completions call is patched; no network traffic.
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from emotiwise.engine.progress import empty_metrics
from emotiwise.errors import TextGenerationError
from emotiwise.services import mentor_service
from emotiwise.services.mentor_service import (
    FALLBACK_DETAILED_INSIGHTS,
    FALLBACK_EMOTIONAL_INSIGHTS,
    FALLBACK_MENTOR_RESPONSES,
    STARTER_EMOTIONAL_INSIGHTS,
    STARTER_PROGRESS_INSIGHTS,
    analyze_mood,
    build_mbti_context,
    build_progress_report,
    format_entry_excerpts,
    generate_detailed_insights,
    generate_emotional_insights,
    generate_mentor_response,
)

CHAT = "emotiwise.services.mentor_service._chat_completion"


def _completion(payload):
    """Patch the low-level client to return ``payload`` (JSON-encoded if not a str)."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return patch(CHAT, new=AsyncMock(return_value=text))


def _failing(exc=None):
    return patch(CHAT, new=AsyncMock(side_effect=exc or TextGenerationError("boom")))


# ═══════════════════════════════════════════════════════════════════════════
# Low-level client
# ═══════════════════════════════════════════════════════════════════════════

class TestChatCompletion:
    @pytest.mark.asyncio
    async def test_missing_api_key_fails_fast(self):
        with patch.object(mentor_service, "LLM_API_KEY", ""), \
             patch("httpx.AsyncClient.post") as mock_post:
            with pytest.raises(TextGenerationError):
                await mentor_service._chat_completion([], temperature=0.5, max_tokens=10)
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_timeout_becomes_text_generation_error(self):
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", side_effect=httpx.ReadTimeout("slow")):
            with pytest.raises(TextGenerationError, match="timed out"):
                await mentor_service._chat_completion([], temperature=0.5, max_tokens=10)

    @pytest.mark.asyncio
    async def test_returns_message_content(self):
        request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
        response = httpx.Response(
            200, request=request,
            json={"choices": [{"message": {"content": "positive"}}]},
        )
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", return_value=response) as mock_post:
            text = await mentor_service._chat_completion(
                [{"role": "user", "content": "hi"}], temperature=0.3, max_tokens=10,
            )

        assert text == "positive"
        sent = mock_post.call_args.kwargs["json"]
        assert sent["max_tokens"] == 10
        assert "response_format" not in sent

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
        response = httpx.Response(503, request=request, json={"error": "overloaded"})
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", return_value=response):
            with pytest.raises(TextGenerationError):
                await mentor_service._chat_completion([], temperature=0.3, max_tokens=10)


# ═══════════════════════════════════════════════════════════════════════════
# Mentor replies
# ═══════════════════════════════════════════════════════════════════════════

class TestMentorResponse:
    @pytest.mark.asyncio
    async def test_parses_json_reply(self):
        payload = {
            "response": "That sounds heavy.",
            "emotional_insights": ["You named the feeling"],
            "recommended_actions": ["Go for a walk"],
        }
        with _completion(payload) as mock_chat:
            reply = await generate_mentor_response("sage", "I feel stuck", mbti_type="INFP")

        assert reply == payload
        prompt = mock_chat.call_args.args[0][1]["content"]
        assert "You are Sage" in prompt
        assert "User's MBTI type: INFP" in prompt
        assert mock_chat.call_args.kwargs["temperature"] == 0.7
        assert mock_chat.call_args.kwargs["json_mode"] is True

    @pytest.mark.asyncio
    async def test_jax_persona_and_history(self):
        with _completion({"response": "Move."}) as mock_chat:
            reply = await generate_mentor_response(
                "jax", "Procrastinated again", previous_entries=["work stress", "bad sleep"],
            )

        prompt = mock_chat.call_args.args[0][1]["content"]
        assert "You are Jax" in prompt
        assert "Previous journal themes: work stress; bad sleep" in prompt
        assert reply["emotional_insights"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mentor", ["sage", "jax"])
    async def test_timeout_falls_back_to_persona(self, mentor):
        with _failing(TextGenerationError("text generation timed out after 15.0s")):
            reply = await generate_mentor_response(mentor, "Long day")

        assert reply == FALLBACK_MENTOR_RESPONSES[mentor]

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back(self):
        with _completion("not json at all"):
            reply = await generate_mentor_response("jax", "Long day")

        assert reply == FALLBACK_MENTOR_RESPONSES["jax"]

    @pytest.mark.asyncio
    async def test_fallback_is_a_copy(self):
        with _failing():
            reply = await generate_mentor_response("sage", "x")
        reply["recommended_actions"].append("mutated")

        assert "mutated" not in FALLBACK_MENTOR_RESPONSES["sage"]["recommended_actions"]


# ═══════════════════════════════════════════════════════════════════════════
# Mood detection
# ═══════════════════════════════════════════════════════════════════════════

class TestAnalyzeMood:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw,expected", [
        ("positive", "positive"),
        ("  Mixed\n", "mixed"),
        ("ecstatic", "neutral"),
        ("", "neutral"),
    ])
    async def test_labels(self, raw, expected):
        with _completion(raw):
            assert await analyze_mood("Some entry") == expected

    @pytest.mark.asyncio
    async def test_failure_is_neutral(self):
        with _failing():
            assert await analyze_mood("Some entry") == "neutral"

    @pytest.mark.asyncio
    async def test_list_content_is_neutral(self):
        request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
        response = httpx.Response(
            200, request=request,
            json={"choices": [{"message": {"content": ["positive"]}}]},
        )
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", return_value=response):
            assert await analyze_mood("hi") == "neutral"

    @pytest.mark.asyncio
    async def test_null_content_is_neutral(self):
        request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
        response = httpx.Response(
            200, request=request,
            json={"choices": [{"message": {"content": None}}]},
        )
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", return_value=response):
            assert await analyze_mood("hi") == "neutral"


# ═══════════════════════════════════════════════════════════════════════════
# Insights
# ═══════════════════════════════════════════════════════════════════════════

class TestInsights:
    @pytest.mark.asyncio
    async def test_detailed_insights_parsed(self, make_entry):
        payload = {
            "patterns": ["Evening reflection"],
            "growth_areas": ["Boundaries"],
            "strengths": ["Honesty"],
            "recommendations": ["Keep a gratitude list"],
        }
        with _completion(payload) as mock_chat:
            insights = await generate_detailed_insights([make_entry(mood="mixed")], "ENFP", empty_metrics())

        assert insights == payload
        prompt = mock_chat.call_args.args[0][1]["content"]
        assert "Entry 1 (mixed): Today was an ordinary day..." in prompt
        assert "Current streak: 0 days" in prompt

    @pytest.mark.asyncio
    async def test_detailed_insights_invalid_json(self, make_entry):
        with _completion("[1, 2, 3]"):
            insights = await generate_detailed_insights([make_entry()], None, None)

        assert insights == FALLBACK_DETAILED_INSIGHTS

    @pytest.mark.asyncio
    async def test_detailed_insights_non_list_values_dropped(self, make_entry):
        with _completion({"patterns": "just a string", "strengths": ["ok"]}):
            insights = await generate_detailed_insights([make_entry()])

        assert insights["patterns"] == []
        assert insights["strengths"] == ["ok"]
        assert insights["recommendations"] == []

    @pytest.mark.asyncio
    async def test_emotional_insights_no_entries_skips_call(self):
        with _completion({}) as mock_chat:
            insights = await generate_emotional_insights([])

        assert insights == STARTER_EMOTIONAL_INSIGHTS
        mock_chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_emotional_insights_fallback(self, make_entry):
        with _failing():
            insights = await generate_emotional_insights([make_entry()], "ISTJ")

        assert insights == FALLBACK_EMOTIONAL_INSIGHTS

    def test_excerpts_limited_to_ten_entries(self, make_entry):
        entries = [make_entry(content="x" * 300, mood=None) for _ in range(12)]
        text = format_entry_excerpts(entries)

        assert text.count("Entry ") == 10
        assert "Entry 1 (unknown mood): " + "x" * 200 + "..." in text

    def test_mbti_context_empty_without_type(self):
        assert build_mbti_context(None) == ""
        assert "Journaling style:" in build_mbti_context("ISFJ")


# ═══════════════════════════════════════════════════════════════════════════
# Progress report
# ═══════════════════════════════════════════════════════════════════════════

class TestProgressReport:
    @pytest.mark.asyncio
    async def test_empty_report_has_starter_strings(self):
        with _completion({}) as mock_chat:
            report = await build_progress_report([])

        mock_chat.assert_not_called()
        assert report["metrics"] == empty_metrics().to_dict()
        assert report["growth_areas"] == STARTER_PROGRESS_INSIGHTS["growth_areas"]
        assert report["strengths"] == ["Taking the first step toward emotional awareness"]
        assert report["recommendations"] == ["Start with daily journaling for consistent emotional tracking"]
        assert report["patterns"] == []
        assert report["mood_trends"] == []

    @pytest.mark.asyncio
    async def test_metrics_survive_collaborator_failure(self, make_entry, frozen_now):
        entries = [make_entry(mood="positive", days_ago=0), make_entry(mood="negative", days_ago=1)]
        with _failing():
            report = await build_progress_report(entries, "INTJ", now=frozen_now)

        assert report["metrics"]["total_entries"] == 2
        assert report["metrics"]["current_streak"] == 2
        assert report["metrics"]["average_mood_score"] == 60
        assert report["patterns"] == FALLBACK_DETAILED_INSIGHTS["patterns"]
        assert [p["score"] for p in report["mood_trends"]] == [20, 100]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [{"patterns": []}, ["positive"], 42])
    async def test_metrics_survive_non_text_completion(self, make_entry, frozen_now, content):
        request = httpx.Request("POST", "https://llm.test/v1/chat/completions")
        response = httpx.Response(
            200, request=request,
            json={"choices": [{"message": {"content": content}}]},
        )
        with patch.object(mentor_service, "LLM_API_KEY", "test-key"), \
             patch("httpx.AsyncClient.post", return_value=response):
            report = await build_progress_report([make_entry(mood="positive")], now=frozen_now)

        assert report["metrics"]["total_entries"] == 1
        assert report["metrics"]["average_mood_score"] == 100
        assert report["recommendations"] == FALLBACK_DETAILED_INSIGHTS["recommendations"]
