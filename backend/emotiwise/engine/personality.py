"""MBTI questionnaire catalog and Likert scoring, pure functions.

Scoring pipeline for a submission of 1-7 Likert answers:

1. Each answer contributes ``score - 4`` (range -3..+3) to its item's
   dimension, sign-flipped for ``negative`` items.
2. Per dimension: preference = first pole letter if total >= 0, else the
   second (a zero total breaks toward the first pole); strength tier on
   ``abs(total)``.
3. Type code = the four preference letters in EI, SN, TF, JP order.

``classify`` trusts its caller: unknown ids are skipped and missing or
duplicate answers just skew the totals.  ``validate_responses`` is the
strict pre-check the HTTP layer runs first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from emotiwise.engine.narratives import get_type_description

LIKERT_MIN = 1
LIKERT_MAX = 7
LIKERT_MIDPOINT = 4

DIMENSIONS: tuple[str, ...] = ("EI", "SN", "TF", "JP")
ITEMS_PER_DIMENSION = 8

STRONG_THRESHOLD = 8
MODERATE_THRESHOLD = 4


class Strength:
    STRONG = "strong"
    MODERATE = "moderate"
    SLIGHT = "slight"


@dataclass(frozen=True)
class QuestionnaireItem:
    id: str
    text: str
    dimension: str   # EI | SN | TF | JP
    direction: str   # positive = agreement leans to the first pole letter
    category: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "text": self.text,
            "dimension": self.dimension,
            "direction": self.direction,
            "category": self.category,
        }


@dataclass(frozen=True)
class Response:
    question_id: str
    score: int  # 1 = strongly disagree ... 7 = strongly agree


@dataclass(frozen=True)
class DimensionResult:
    score: int
    preference: str
    strength: str

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "preference": self.preference, "strength": self.strength}


@dataclass(frozen=True)
class PersonalityProfile:
    type: str
    dimensions: Mapping[str, DimensionResult]  # read-only view
    description: str
    strengths: tuple[str, ...] = field(default_factory=tuple)
    growth_areas: tuple[str, ...] = field(default_factory=tuple)
    emotional_style: str = ""
    relationship_style: str = ""
    stress_response: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "dimensions": {dim: result.to_dict() for dim, result in self.dimensions.items()},
            "description": self.description,
            "strengths": list(self.strengths),
            "growth_areas": list(self.growth_areas),
            "emotional_style": self.emotional_style,
            "relationship_style": self.relationship_style,
            "stress_response": self.stress_response,
        }


# ═══════════════════════════════════════════════════════════════════════════
# Question catalog (v1, 32 items)
# ═══════════════════════════════════════════════════════════════════════════

QUESTIONS: tuple[QuestionnaireItem, ...] = (
    # Extraversion vs Introversion
    QuestionnaireItem("EI_1", "I feel energized after spending time with a large group of people", "EI", "positive", "Energy Source"),
    QuestionnaireItem("EI_2", "I prefer to think things through before speaking in group discussions", "EI", "negative", "Communication Style"),
    QuestionnaireItem("EI_3", "I tend to speak my thoughts out loud to help me process them", "EI", "positive", "Processing Style"),
    QuestionnaireItem("EI_4", "I need quiet time alone to recharge after social activities", "EI", "negative", "Energy Management"),
    QuestionnaireItem("EI_5", "I enjoy being the center of attention in social situations", "EI", "positive", "Social Preference"),
    QuestionnaireItem("EI_6", "I prefer to work independently rather than in teams", "EI", "negative", "Work Style"),
    QuestionnaireItem("EI_7", "I make friends easily and quickly", "EI", "positive", "Social Connection"),
    QuestionnaireItem("EI_8", "I prefer to have a few close friends rather than many acquaintances", "EI", "negative", "Relationship Depth"),
    # Sensing vs Intuition
    QuestionnaireItem("SN_1", "I focus on specific facts and details when making decisions", "SN", "positive", "Information Processing"),
    QuestionnaireItem("SN_2", "I'm more interested in future possibilities than current realities", "SN", "negative", "Time Orientation"),
    QuestionnaireItem("SN_3", "I prefer practical, hands-on learning over theoretical concepts", "SN", "positive", "Learning Style"),
    QuestionnaireItem("SN_4", "I often think about abstract ideas and theories", "SN", "negative", "Thinking Patterns"),
    QuestionnaireItem("SN_5", "I trust information that comes from direct experience and observation", "SN", "positive", "Information Trust"),
    QuestionnaireItem("SN_6", "I enjoy exploring new ideas and creative solutions", "SN", "negative", "Innovation"),
    QuestionnaireItem("SN_7", "I prefer step-by-step instructions over figuring things out myself", "SN", "positive", "Problem Solving"),
    QuestionnaireItem("SN_8", "I often see patterns and connections that others miss", "SN", "negative", "Pattern Recognition"),
    # Thinking vs Feeling
    QuestionnaireItem("TF_1", "I make decisions based on logical analysis rather than personal values", "TF", "positive", "Decision Making"),
    QuestionnaireItem("TF_2", "I consider how decisions will affect people's feelings", "TF", "negative", "Impact Consideration"),
    QuestionnaireItem("TF_3", "I value objective truth over maintaining harmony", "TF", "positive", "Values Priority"),
    QuestionnaireItem("TF_4", "I find it important to understand others' emotional needs", "TF", "negative", "Emotional Awareness"),
    QuestionnaireItem("TF_5", "I'm comfortable giving constructive criticism when necessary", "TF", "positive", "Feedback Style"),
    QuestionnaireItem("TF_6", "I tend to take criticism personally even when it's constructive", "TF", "negative", "Criticism Response"),
    QuestionnaireItem("TF_7", "I believe fairness is more important than mercy", "TF", "positive", "Justice Orientation"),
    QuestionnaireItem("TF_8", "I'm naturally empathetic and can easily sense others' emotions", "TF", "negative", "Empathy"),
    # Judging vs Perceiving
    QuestionnaireItem("JP_1", "I prefer to have a clear schedule and stick to it", "JP", "positive", "Structure Preference"),
    QuestionnaireItem("JP_2", "I like to keep my options open and be spontaneous", "JP", "negative", "Flexibility"),
    QuestionnaireItem("JP_3", "I feel comfortable making decisions quickly", "JP", "positive", "Decision Speed"),
    QuestionnaireItem("JP_4", "I prefer to gather more information before making decisions", "JP", "negative", "Information Gathering"),
    QuestionnaireItem("JP_5", "I like to complete tasks well before deadlines", "JP", "positive", "Time Management"),
    QuestionnaireItem("JP_6", "I work better under pressure and close to deadlines", "JP", "negative", "Pressure Response"),
    QuestionnaireItem("JP_7", "I prefer organized and structured environments", "JP", "positive", "Environment Preference"),
    QuestionnaireItem("JP_8", "I enjoy adapting to changing circumstances as they arise", "JP", "negative", "Change Adaptation"),
)

QUESTIONS_BY_ID: dict[str, QuestionnaireItem] = {q.id: q for q in QUESTIONS}


# ═══════════════════════════════════════════════════════════════════════════
# Scoring
# ═══════════════════════════════════════════════════════════════════════════

def get_strength(abs_score: int) -> str:
    if abs_score >= STRONG_THRESHOLD:
        return Strength.STRONG
    if abs_score >= MODERATE_THRESHOLD:
        return Strength.MODERATE
    return Strength.SLIGHT


def item_contribution(item: QuestionnaireItem, score: int) -> int:
    """Signed -3..+3 contribution of one answer toward the first pole."""
    contribution = score - LIKERT_MIDPOINT
    if item.direction == "negative":
        contribution = -contribution
    return contribution


def dimension_totals(responses: Iterable[Response]) -> dict[str, int]:
    totals = {dim: 0 for dim in DIMENSIONS}
    for response in responses:
        item = QUESTIONS_BY_ID.get(response.question_id)
        if item is None:
            continue
        totals[item.dimension] += item_contribution(item, response.score)
    return totals


def classify(responses: Iterable[Response]) -> PersonalityProfile:
    """Score a questionnaire submission into a PersonalityProfile.

    Never raises on bad input; see ``validate_responses``.
    """
    totals = dimension_totals(responses)

    dimensions: dict[str, DimensionResult] = {}
    for dim in DIMENSIONS:
        total = totals[dim]
        dimensions[dim] = DimensionResult(
            score=total,
            preference=dim[0] if total >= 0 else dim[1],
            strength=get_strength(abs(total)),
        )

    type_code = "".join(dimensions[dim].preference for dim in DIMENSIONS)
    narrative = get_type_description(type_code)

    return PersonalityProfile(
        type=type_code,
        dimensions=MappingProxyType(dimensions),
        description=narrative["description"],
        strengths=tuple(narrative["strengths"]),
        growth_areas=tuple(narrative["growth_areas"]),
        emotional_style=narrative["emotional_style"],
        relationship_style=narrative["relationship_style"],
        stress_response=narrative["stress_response"],
    )


# ═══════════════════════════════════════════════════════════════════════════
# Strict validation (run by the caller before classify)
# ═══════════════════════════════════════════════════════════════════════════

def validate_responses(responses: list[Response]) -> list[str]:
    """Return every problem with a submission; an empty list means valid.

    A valid submission answers each of the 32 catalog items exactly once
    with an integer score in 1..7.
    """
    problems: list[str] = []

    if len(responses) != len(QUESTIONS):
        problems.append(f"Exactly {len(QUESTIONS)} responses required, got {len(responses)}")

    for response in responses:
        if response.question_id not in QUESTIONS_BY_ID:
            problems.append(f"Invalid question ID: {response.question_id}")
        if not LIKERT_MIN <= response.score <= LIKERT_MAX:
            problems.append(
                f"Score for {response.question_id} must be between "
                f"{LIKERT_MIN} and {LIKERT_MAX}, got {response.score}"
            )

    answered = [r.question_id for r in responses]
    if len(set(answered)) != len(answered) or not set(QUESTIONS_BY_ID) <= set(answered):
        problems.append("All question IDs must be answered exactly once")

    return problems
