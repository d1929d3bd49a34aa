"""Mentor Service: text generation for mentor replies and narrative insights.

Talks to an OpenAI-compatible chat-completions endpoint over httpx.
Every public coroutine is total: on timeout, transport error, HTTP error,
missing API key or unparseable output it returns a fixed fallback.

The numeric progress metrics never pass through this module's failure
path: ``build_progress_report`` computes them first and only the
narrative strings depend on the collaborator.
"""

from __future__ import annotations

import copy
import json
import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from emotiwise.config.settings import (
    LLM_API_KEY,
    LLM_API_URL,
    LLM_MODEL,
    LLM_TIMEOUT_SECONDS,
)
from emotiwise.engine.narratives import get_journaling_insights
from emotiwise.engine.progress import (
    JournalEntryRecord,
    ProgressMetrics,
    analyze,
    calculate_mood_trends,
    empty_metrics,
)
from emotiwise.errors import TextGenerationError

logger = logging.getLogger(__name__)

MOOD_LABELS = ("positive", "negative", "mixed", "neutral")
INSIGHT_ENTRY_COUNT = 10
INSIGHT_EXCERPT_CHARS = 200


# ── Personas ─────────────────────────────────────────────────────────────

SAGE_PERSONA = (
    "You are Sage, a wise and compassionate AI mentor specializing in emotional wellness and psychology. Your approach is:\n"
    "- Gentle, understanding, and non-judgmental\n"
    "- Focus on emotional validation and self-compassion\n"
    "- Provide insightful questions that help users explore their feelings\n"
    "- Offer gentle guidance toward emotional regulation and growth\n"
    "- Use warm, supportive language that makes users feel heard and understood\n"
    "- Draw from psychology, mindfulness, and emotional intelligence principles\n"
    "- Help users find their inner wisdom and strength"
)

JAX_PERSONA = (
    "You are Jax, a direct and action-oriented AI mentor focused on personal growth and accountability. Your approach is:\n"
    "- Honest, straightforward, and challenging (but never harsh)\n"
    "- Focus on practical solutions and concrete next steps\n"
    "- Push users toward action and positive change\n"
    "- Call out self-limiting beliefs and patterns constructively\n"
    "- Use clear, motivating language that inspires action\n"
    "- Draw from cognitive behavioral therapy and goal-setting psychology\n"
    "- Help users take responsibility and move forward decisively"
)

PERSONAS = {"sage": SAGE_PERSONA, "jax": JAX_PERSONA}

MENTOR_FOCUS = {
    "sage": (
        "Focus on emotional validation, gentle exploration, and inner wisdom. If MBTI type is known, "
        "adapt your compassionate approach to their personality style (e.g., introverts may need more "
        "internal processing time, feeling types need emotional validation, etc.)."
    ),
    "jax": (
        "Focus on practical solutions, accountability, and forward momentum. If MBTI type is known, "
        "adapt your direct approach to their personality preferences (e.g., thinking types appreciate "
        "logical reasoning, judging types like structured plans, etc.)."
    ),
}

MENTOR_SYSTEM_PROMPT = (
    "You are an expert AI mentor specializing in emotional wellness and personal development. "
    "Respond only with valid JSON in the specified format."
)
MOOD_SYSTEM_PROMPT = (
    "Analyze the emotional tone of this journal entry and categorize it as one of: "
    "positive, negative, mixed, or neutral. Respond only with the category word."
)
INSIGHTS_SYSTEM_PROMPT = (
    "You are an expert in emotional intelligence and psychology. "
    "Provide constructive insights based on journal patterns and progress metrics."
)


# ── Static fallbacks ─────────────────────────────────────────────────────

FALLBACK_MENTOR_RESPONSES: dict[str, dict[str, Any]] = {
    "sage": {
        "response": (
            "I hear you, and I want you to know that sharing your feelings takes courage. "
            "Your emotions are valid, and this moment of reflection is already a step toward "
            "understanding yourself better."
        ),
        "emotional_insights": ["Self-awareness through journaling", "Courage in emotional expression"],
        "recommended_actions": ["Take a few deep breaths", "Practice self-compassion"],
    },
    "jax": {
        "response": (
            "I appreciate you being real about what's going on. Now let's focus on what you "
            "can actually do about it. Every challenge is an opportunity to grow stronger."
        ),
        "emotional_insights": ["Honesty about current situation", "Recognition of growth potential"],
        "recommended_actions": ["Identify one concrete next step", "Take action within 24 hours"],
    },
}

DEFAULT_MENTOR_REPLY = "Thank you for sharing your thoughts. Let me reflect on this with you."

FALLBACK_DETAILED_INSIGHTS: dict[str, list[str]] = {
    "patterns": ["Regular emotional expression through journaling"],
    "growth_areas": ["Continue building consistent emotional awareness"],
    "strengths": ["Commitment to personal emotional growth"],
    "recommendations": ["Maintain your journaling practice for continued insights"],
}

STARTER_PROGRESS_INSIGHTS: dict[str, list[str]] = {
    "patterns": [],
    "growth_areas": ["Begin your emotional wellness journey by writing your first journal entry"],
    "strengths": ["Taking the first step toward emotional awareness"],
    "recommendations": ["Start with daily journaling for consistent emotional tracking"],
}

FALLBACK_EMOTIONAL_INSIGHTS: dict[str, list[str]] = {
    "patterns": ["Regular journaling shows commitment to self-reflection"],
    "growth_areas": ["Continue exploring emotions through writing"],
    "strengths": ["Willingness to examine inner thoughts and feelings"],
}

STARTER_EMOTIONAL_INSIGHTS: dict[str, list[str]] = {
    "patterns": [],
    "growth_areas": ["Continue regular journaling to identify patterns"],
    "strengths": ["Taking the first step toward emotional awareness"],
}


# ═══════════════════════════════════════════════════════════════════════════
# Low-level client
# ═══════════════════════════════════════════════════════════════════════════

async def _chat_completion(
    messages: list[dict[str, str]],
    temperature: float,
    max_tokens: int,
    json_mode: bool = False,
) -> str:
    """POST one chat-completions request and return the message text.

    Raises TextGenerationError for every failure mode.
    """
    if not LLM_API_KEY:
        raise TextGenerationError("LLM_API_KEY not configured")

    payload: dict[str, Any] = {
        "model": LLM_MODEL,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if json_mode:
        payload["response_format"] = {"type": "json_object"}

    try:
        async with httpx.AsyncClient(timeout=LLM_TIMEOUT_SECONDS) as client:
            resp = await client.post(
                LLM_API_URL,
                headers={"Authorization": f"Bearer {LLM_API_KEY}"},
                json=payload,
            )
            resp.raise_for_status()
            data = resp.json()
        content = data["choices"][0]["message"]["content"]
    except httpx.TimeoutException as exc:
        raise TextGenerationError(f"text generation timed out after {LLM_TIMEOUT_SECONDS}s") from exc
    except httpx.HTTPError as exc:
        raise TextGenerationError(f"text generation request failed: {exc}") from exc
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise TextGenerationError(f"unexpected completion payload: {exc}") from exc

    if content is None:
        return ""
    if not isinstance(content, str):
        raise TextGenerationError(f"completion content is {type(content).__name__}, not text")
    return content


async def _chat_json(
    system_prompt: str,
    prompt: str,
    temperature: float,
    max_tokens: int,
) -> dict[str, Any]:
    content = await _chat_completion(
        [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
        json_mode=True,
    )
    try:
        result = json.loads(content)
    except json.JSONDecodeError as exc:
        raise TextGenerationError(f"completion is not valid JSON: {exc}") from exc
    if not isinstance(result, dict):
        raise TextGenerationError("completion JSON is not an object")
    return result


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


# ═══════════════════════════════════════════════════════════════════════════
# Prompt context
# ═══════════════════════════════════════════════════════════════════════════

def build_mbti_context(mbti_type: Optional[str]) -> str:
    if not mbti_type:
        return ""
    insights = get_journaling_insights(mbti_type)
    return (
        f"User's MBTI type: {mbti_type}\n\n"
        "MBTI-specific insights:\n"
        f"- Emotional processing style: {insights['emotional_processing']}\n"
        f"- Stress response patterns: {', '.join(insights['stress_signals'])}\n"
        f"- Journaling style: {insights['journaling_style']}\n"
        f"Consider their {mbti_type} personality type when identifying patterns and recommendations."
    )


def build_metrics_context(metrics: Optional[ProgressMetrics]) -> str:
    if metrics is None:
        return ""
    sign = "+" if metrics.weekly_trend > 0 else ""
    return (
        "\nCurrent Progress Metrics:\n"
        f"- Self-awareness: {metrics.self_awareness}%\n"
        f"- Emotional regulation: {metrics.emotional_regulation}%\n"
        f"- Mindfulness: {metrics.mindfulness}%\n"
        f"- Consistency: {metrics.consistency_score}%\n"
        f"- Current streak: {metrics.current_streak} days\n"
        f"- Average mood: {metrics.average_mood_score}/100\n"
        f"- Weekly trend: {sign}{metrics.weekly_trend}"
    )


def format_entry_excerpts(entries: list[JournalEntryRecord]) -> str:
    return "\n\n".join(
        f"Entry {i} ({entry.mood or 'unknown mood'}): {entry.content[:INSIGHT_EXCERPT_CHARS]}..."
        for i, entry in enumerate(entries[:INSIGHT_ENTRY_COUNT], start=1)
    )


# ═══════════════════════════════════════════════════════════════════════════
# Public operations
# ═══════════════════════════════════════════════════════════════════════════

async def generate_mentor_response(
    mentor: str,
    content: str,
    mbti_type: Optional[str] = None,
    previous_entries: Optional[list[str]] = None,
) -> dict[str, Any]:
    """Reply from the ``sage`` or ``jax`` persona to one journal entry.

    Returns ``{"response", "emotional_insights", "recommended_actions"}``.
    """
    mentor = mentor if mentor in PERSONAS else "sage"
    history = ""
    if previous_entries:
        history = f"Previous journal themes: {'; '.join(previous_entries[:3])}"

    tone = "compassionate and wise" if mentor == "sage" else "direct and actionable"
    prompt = (
        f"{PERSONAS[mentor]}\n\n"
        f"Context: {build_mbti_context(mbti_type)}\n"
        f"{history}\n\n"
        f'The user has written this journal entry:\n"{content}"\n\n'
        "Provide a response in JSON format with:\n"
        "{\n"
        f'  "response": "Your {tone} response to their journal entry (2-3 sentences).",\n'
        '  "emotional_insights": ["Key emotional insight 1", "Key emotional insight 2"],\n'
        '  "recommended_actions": ["Specific action they can take", "Another helpful suggestion"]\n'
        "}\n\n"
        f"{MENTOR_FOCUS[mentor]}"
    )
    if mbti_type:
        prompt += f" Tailor your response style to their {mbti_type} personality type."

    try:
        result = await _chat_json(MENTOR_SYSTEM_PROMPT, prompt, temperature=0.7, max_tokens=500)
    except TextGenerationError as exc:
        logger.warning("Mentor %s fell back to static reply: %s", mentor, exc)
        return copy.deepcopy(FALLBACK_MENTOR_RESPONSES[mentor])

    return {
        "response": str(result.get("response") or DEFAULT_MENTOR_REPLY),
        "emotional_insights": _string_list(result.get("emotional_insights")),
        "recommended_actions": _string_list(result.get("recommended_actions")),
    }


async def analyze_mood(content: str) -> str:
    """Classify an entry's tone; ``neutral`` when unsure or unavailable."""
    try:
        raw = await _chat_completion(
            [
                {"role": "system", "content": MOOD_SYSTEM_PROMPT},
                {"role": "user", "content": content},
            ],
            temperature=0.3,
            max_tokens=10,
        )
    except TextGenerationError as exc:
        logger.warning("Mood detection unavailable: %s", exc)
        return "neutral"

    mood = raw.strip().lower()
    return mood if mood in MOOD_LABELS else "neutral"


async def generate_detailed_insights(
    entries: list[JournalEntryRecord],
    mbti_type: Optional[str] = None,
    metrics: Optional[ProgressMetrics] = None,
) -> dict[str, list[str]]:
    """Patterns, growth areas, strengths and recommendations for recent entries."""
    prompt = (
        "Analyze these recent journal entries for emotional patterns and provide personalized growth insights:\n\n"
        f"{build_mbti_context(mbti_type)}{build_metrics_context(metrics)}\n\n"
        f"Recent Entries:\n{format_entry_excerpts(entries)}\n\n"
        "Provide analysis in JSON format:\n"
        "{\n"
        '  "patterns": ["Observable emotional or behavioral pattern", "Another pattern"],\n'
        '  "growth_areas": ["Area for emotional development", "Another growth opportunity"],\n'
        '  "strengths": ["Emotional strength or positive trait", "Another strength"],\n'
        '  "recommendations": ["Specific actionable recommendation", "Another targeted suggestion"]\n'
        "}\n\n"
        "Focus on constructive, actionable insights that promote emotional growth."
    )

    try:
        result = await _chat_json(INSIGHTS_SYSTEM_PROMPT, prompt, temperature=0.6, max_tokens=500)
    except TextGenerationError as exc:
        logger.warning("Detailed insights fell back to defaults: %s", exc)
        return copy.deepcopy(FALLBACK_DETAILED_INSIGHTS)

    return {key: _string_list(result.get(key)) for key in FALLBACK_DETAILED_INSIGHTS}


async def generate_emotional_insights(
    entries: list[JournalEntryRecord],
    mbti_type: Optional[str] = None,
) -> dict[str, list[str]]:
    """Legacy insight bundle: patterns, growth areas and strengths."""
    if not entries:
        return copy.deepcopy(STARTER_EMOTIONAL_INSIGHTS)

    prompt = (
        "Analyze these recent journal entries for emotional patterns and growth insights:\n\n"
        f"{build_mbti_context(mbti_type)}\n\n"
        f"Recent Entries:\n{format_entry_excerpts(entries)}\n\n"
        "Provide analysis in JSON format:\n"
        "{\n"
        '  "patterns": ["Observable emotional or behavioral pattern", "Another pattern"],\n'
        '  "growth_areas": ["Area for emotional development", "Another growth opportunity"],\n'
        '  "strengths": ["Emotional strength or positive trait", "Another strength"]\n'
        "}\n\n"
        "Focus on constructive, actionable insights that promote emotional growth."
    )

    try:
        result = await _chat_json(INSIGHTS_SYSTEM_PROMPT, prompt, temperature=0.6, max_tokens=400)
    except TextGenerationError as exc:
        logger.warning("Emotional insights fell back to defaults: %s", exc)
        return copy.deepcopy(FALLBACK_EMOTIONAL_INSIGHTS)

    return {key: _string_list(result.get(key)) for key in FALLBACK_EMOTIONAL_INSIGHTS}


async def build_progress_report(
    entries: list[JournalEntryRecord],
    mbti_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Numeric metrics + mood trends + narrative insights for a user.

    ``entries`` are newest first, as the store returns them.
    """
    if not entries:
        return {
            "metrics": empty_metrics().to_dict(),
            **copy.deepcopy(STARTER_PROGRESS_INSIGHTS),
            "mood_trends": [],
        }

    metrics = analyze(entries, now=now)
    mood_trends = [point.to_dict() for point in calculate_mood_trends(entries, now=now)]
    insights = await generate_detailed_insights(entries, mbti_type, metrics)

    return {
        "metrics": metrics.to_dict(),
        **insights,
        "mood_trends": mood_trends,
    }
