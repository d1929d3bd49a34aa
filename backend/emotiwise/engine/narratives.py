"""Static narrative tables keyed by four-letter MBTI type code.

Two tables, each with a generic fallback entry for codes that are not in
the table:

1. TYPE_DESCRIPTIONS   : description, strengths, growth areas and
   emotional / relationship / stress narratives shown with a result.
2. JOURNALING_INSIGHTS : journaling style, emotional processing, stress
   signals and growth prompts used to personalise mentor context.

Lookups return deep copies so callers can never mutate the tables.
"""

from __future__ import annotations

import copy
from typing import Any


# ═══════════════════════════════════════════════════════════════════════════
# Type descriptions
# ═══════════════════════════════════════════════════════════════════════════

TYPE_DESCRIPTIONS: dict[str, dict[str, Any]] = {
    "ENFP": {
        "description": "The Campaigner - Enthusiastic, creative, and sociable free spirits who can always find a reason to smile.",
        "strengths": ["Excellent communication skills", "Natural enthusiasm", "Creative problem-solving", "Empathetic and understanding"],
        "growth_areas": ["Following through on commitments", "Managing time and priorities", "Handling routine tasks", "Making difficult decisions"],
        "emotional_style": "Expressive and empathetic, you feel emotions deeply and aren't afraid to show them. You're naturally optimistic and can inspire others with your enthusiasm.",
        "relationship_style": "You form deep, meaningful connections quickly and value authentic emotional bonds. You're supportive and encouraging to those you care about.",
        "stress_response": "Under stress, you may become overwhelmed by possibilities and struggle to focus. You might withdraw emotionally or become uncharacteristically critical.",
    },
    "INFP": {
        "description": "The Mediator - Poetic, kind, and altruistic, always eager to help a good cause.",
        "strengths": ["Deep empathy", "Strong values", "Creative expression", "Authentic relationships"],
        "growth_areas": ["Asserting needs", "Handling criticism", "Making practical decisions", "Managing perfectionism"],
        "emotional_style": "You experience emotions intensely and authentically. Your feelings run deep, and you value emotional honesty and integrity above all.",
        "relationship_style": "You seek deep, meaningful connections and are incredibly loyal. You prefer quality over quantity in relationships and value being truly understood.",
        "stress_response": "When stressed, you may become withdrawn and self-critical. You might struggle with decision-making and feel overwhelmed by external pressures.",
    },
    "ENFJ": {
        "description": "The Protagonist - Charismatic and inspiring leaders, able to mesmerize their listeners.",
        "strengths": ["Natural leadership", "Excellent interpersonal skills", "Inspiring others", "Understanding people's needs"],
        "growth_areas": ["Setting boundaries", "Focusing on own needs", "Handling conflict", "Managing perfectionism"],
        "emotional_style": "You're emotionally expressive and attuned to others' feelings. You have a gift for understanding and motivating people emotionally.",
        "relationship_style": "You're nurturing and supportive, often putting others' needs before your own. You excel at bringing out the best in people.",
        "stress_response": "Under stress, you may become overly critical of yourself and others. You might neglect your own needs while trying to help everyone else.",
    },
    "INFJ": {
        "description": "The Advocate - Creative and insightful, inspired and independent perfectionists.",
        "strengths": ["Deep insight", "Visionary thinking", "Empathetic understanding", "Principled decision-making"],
        "growth_areas": ["Expressing needs directly", "Managing perfectionism", "Handling criticism", "Maintaining work-life balance"],
        "emotional_style": "You feel emotions deeply but may keep them private. You're highly intuitive about others' emotional states and value emotional authenticity.",
        "relationship_style": "You form few but very deep relationships. You value being understood and appreciated for your authentic self.",
        "stress_response": "When stressed, you may become withdrawn and overwhelmed. You might ruminate excessively or become uncharacteristically harsh in your judgments.",
    },
    "ENTP": {
        "description": "The Debater - Smart and curious thinkers who cannot resist an intellectual challenge.",
        "strengths": ["Quick thinking", "Innovative ideas", "Adaptability", "Enthusiasm for learning"],
        "growth_areas": ["Following through on projects", "Attention to detail", "Managing routine tasks", "Being sensitive to others' feelings"],
        "emotional_style": "You're emotionally resilient and optimistic. You tend to intellectualize emotions and may struggle with deep emotional processing.",
        "relationship_style": "You enjoy stimulating conversations and debates. You're charming and enjoy meeting new people but may struggle with emotional depth.",
        "stress_response": "Under stress, you may become scattered and indecisive. You might avoid dealing with problems by pursuing new distractions.",
    },
    "INTP": {
        "description": "The Thinker - Innovative inventors with an unquenchable thirst for knowledge.",
        "strengths": ["Logical analysis", "Independent thinking", "Theoretical understanding", "Objective decision-making"],
        "growth_areas": ["Expressing emotions", "Following schedules", "Completing projects", "Managing practical matters"],
        "emotional_style": "You tend to keep emotions private and may struggle to express feelings. You prefer logical analysis over emotional processing.",
        "relationship_style": "You value intellectual compatibility and need space for independence. You show care through sharing ideas and interests.",
        "stress_response": "When stressed, you may withdraw completely or become uncharacteristically emotional. You might procrastinate or avoid dealing with the stressor.",
    },
    "ENTJ": {
        "description": "The Commander - Bold, imaginative, and strong-willed leaders who always find a way.",
        "strengths": ["Natural leadership", "Strategic thinking", "Efficient organization", "Confident decision-making"],
        "growth_areas": ["Considering others' feelings", "Patience with slower processes", "Delegating effectively", "Managing work-life balance"],
        "emotional_style": "You're emotionally controlled and may struggle to express vulnerability. You prefer action over emotional discussion.",
        "relationship_style": "You're protective and loyal but may struggle with emotional intimacy. You show care through acts of service and problem-solving.",
        "stress_response": "Under stress, you may become more controlling or aggressive. You might ignore your emotional needs and push harder toward goals.",
    },
    "INTJ": {
        "description": "The Architect - Imaginative and strategic thinkers, with a plan for everything.",
        "strengths": ["Strategic planning", "Independent thinking", "High standards", "Long-term vision"],
        "growth_areas": ["Expressing emotions", "Being flexible with plans", "Considering others' input", "Managing perfectionism"],
        "emotional_style": "You keep emotions private and controlled. You may struggle with emotional expression but feel deeply about your values and goals.",
        "relationship_style": "You're selective in relationships and value intellectual connection. You're loyal but may struggle with emotional expression.",
        "stress_response": "When stressed, you may become more withdrawn and critical. You might overanalyze situations or become rigid in your thinking.",
    },
    "ESFP": {
        "description": "The Entertainer - Spontaneous, energetic, and enthusiastic people who love life and charm others.",
        "strengths": ["Enthusiasm", "People skills", "Adaptability", "Practical problem-solving"],
        "growth_areas": ["Long-term planning", "Handling criticism", "Sticking to schedules", "Abstract thinking"],
        "emotional_style": "You're emotionally expressive and spontaneous. You live in the moment and aren't afraid to show your feelings.",
        "relationship_style": "You're warm, caring, and fun-loving. You enjoy being around people and making others feel good about themselves.",
        "stress_response": "Under stress, you may become overly emotional or avoid dealing with problems. You might seek immediate gratification or distraction.",
    },
    "ISFP": {
        "description": "The Adventurer - Flexible and charming artists, always ready to explore new possibilities.",
        "strengths": ["Artistic ability", "Adaptability", "Empathy", "Authentic relationships"],
        "growth_areas": ["Asserting opinions", "Long-term planning", "Handling conflict", "Making decisions quickly"],
        "emotional_style": "You feel emotions deeply but may keep them private. You're sensitive to others' emotions and value harmony.",
        "relationship_style": "You're gentle and caring, preferring harmony in relationships. You show love through actions rather than words.",
        "stress_response": "When stressed, you may withdraw or become overwhelmed by emotions. You might avoid conflict or become indecisive.",
    },
    "ESFJ": {
        "description": "The Consul - Extraordinarily caring, social, and popular people, always eager to help.",
        "strengths": ["Interpersonal skills", "Practical help", "Organization", "Loyalty"],
        "growth_areas": ["Handling criticism", "Setting boundaries", "Being flexible", "Focusing on own needs"],
        "emotional_style": "You're emotionally expressive and attuned to others' needs. You feel responsible for others' emotional well-being.",
        "relationship_style": "You're nurturing and supportive, often putting others first. You value harmony and work hard to maintain good relationships.",
        "stress_response": "Under stress, you may become overly worried about others or take criticism too personally. You might neglect your own needs.",
    },
    "ISFJ": {
        "description": "The Protector - Very dedicated and warm protectors, always ready to defend their loved ones.",
        "strengths": ["Reliability", "Attention to detail", "Empathy", "Practical support"],
        "growth_areas": ["Asserting needs", "Handling change", "Setting boundaries", "Taking risks"],
        "emotional_style": "You're emotionally supportive but may suppress your own needs. You're sensitive to others' emotions and prefer emotional stability.",
        "relationship_style": "You're loyal and caring, often putting others' needs before your own. You show love through acts of service and remembering details.",
        "stress_response": "When stressed, you may become overwhelmed by responsibilities or withdraw to avoid conflict. You might bottle up emotions.",
    },
    "ESTP": {
        "description": "The Entrepreneur - Smart, energetic, and perceptive people who truly enjoy living on the edge.",
        "strengths": ["Adaptability", "Practical problem-solving", "People skills", "Crisis management"],
        "growth_areas": ["Long-term planning", "Following through", "Considering consequences", "Abstract thinking"],
        "emotional_style": "You're emotionally resilient and live in the moment. You may struggle with deep emotional processing but are good at moving on.",
        "relationship_style": "You're fun-loving and spontaneous in relationships. You enjoy shared activities and may struggle with emotional depth.",
        "stress_response": "Under stress, you may become more impulsive or seek immediate relief. You might avoid dealing with emotional issues.",
    },
    "ISTP": {
        "description": "The Virtuoso - Bold and practical experimenters, masters of all kinds of tools.",
        "strengths": ["Practical skills", "Problem-solving", "Adaptability", "Independent thinking"],
        "growth_areas": ["Expressing emotions", "Long-term planning", "Considering others' feelings", "Following schedules"],
        "emotional_style": "You tend to keep emotions private and may struggle with emotional expression. You prefer action over emotional discussion.",
        "relationship_style": "You value independence and may struggle with emotional intimacy. You show care through practical help and shared activities.",
        "stress_response": "When stressed, you may withdraw completely or act impulsively. You might avoid emotional discussions or become more isolated.",
    },
    "ESTJ": {
        "description": "The Executive - Excellent administrators, unsurpassed at managing things or people.",
        "strengths": ["Leadership", "Organization", "Efficiency", "Practical decision-making"],
        "growth_areas": ["Considering others' feelings", "Being flexible", "Expressing emotions", "Delegating"],
        "emotional_style": "You're emotionally controlled and may struggle with vulnerability. You prefer practical solutions over emotional processing.",
        "relationship_style": "You're loyal and responsible but may struggle with emotional expression. You show care through providing and organizing.",
        "stress_response": "Under stress, you may become more controlling or critical. You might work harder instead of addressing emotional needs.",
    },
    "ISTJ": {
        "description": "The Logistician - Practical and fact-minded, reliable and responsible.",
        "strengths": ["Reliability", "Attention to detail", "Organization", "Systematic approach"],
        "growth_areas": ["Adapting to change", "Expressing emotions", "Being flexible", "Considering new perspectives"],
        "emotional_style": "You're emotionally steady but may struggle with expression. You prefer emotional stability and may avoid emotional discussions.",
        "relationship_style": "You're loyal and dependable but may struggle with emotional intimacy. You show love through consistency and reliability.",
        "stress_response": "When stressed, you may become more rigid or withdraw. You might focus excessively on details or become overwhelmed by change.",
    },
}

DEFAULT_TYPE_DESCRIPTION: dict[str, Any] = {
    "description": "A unique personality type with its own strengths and challenges.",
    "strengths": ["Individual strengths", "Personal qualities"],
    "growth_areas": ["Areas for development", "Growth opportunities"],
    "emotional_style": "Your unique emotional approach.",
    "relationship_style": "Your personal relationship style.",
    "stress_response": "Your individual stress response pattern.",
}


# ═══════════════════════════════════════════════════════════════════════════
# Journaling insights
# ═══════════════════════════════════════════════════════════════════════════

JOURNALING_INSIGHTS: dict[str, dict[str, Any]] = {
    "ENFP": {
        "journaling_style": "You likely journal in bursts of inspiration, exploring possibilities and connecting ideas. Your entries may jump between topics as new thoughts emerge.",
        "emotional_processing": "You process emotions externally and may benefit from voice-to-text journaling or sharing entries with trusted friends for processing.",
        "stress_signals": ["Feeling overwhelmed by possibilities", "Difficulty making decisions", "Avoiding routine tasks"],
        "growth_prompts": ["What small step can I take toward my goals today?", "How can I turn this idea into action?", "What routine would actually support my creativity?"],
    },
    "INFP": {
        "journaling_style": "Your journaling is deeply personal and reflective. You may write extensively about values, emotions, and the meaning behind experiences.",
        "emotional_processing": "You process emotions internally and thoroughly. Journaling helps you understand your complex inner world and align actions with values.",
        "stress_signals": ["Feeling misunderstood", "Overwhelmed by criticism", "Struggling with perfectionism"],
        "growth_prompts": ["How can I honor my needs while meeting obligations?", "What would self-compassion look like here?", "How can I share my authentic self safely?"],
    },
    "ENFJ": {
        "journaling_style": "You may focus on relationships and how to help others. Your entries often explore interpersonal dynamics and ways to support those around you.",
        "emotional_processing": "You're naturally attuned to emotions but may neglect your own. Journaling helps you process your feelings separate from others' needs.",
        "stress_signals": ["Feeling responsible for everyone", "Difficulty saying no", "Burnout from overgiving"],
        "growth_prompts": ["What do I need right now?", "How can I set healthy boundaries?", "What would happen if I prioritized my own well-being?"],
    },
    "INFJ": {
        "journaling_style": "Your journaling is introspective and visionary. You explore deep insights, future possibilities, and the underlying meanings of experiences.",
        "emotional_processing": "You process emotions deeply but privately. Journaling provides a safe space to explore your complex inner world without judgment.",
        "stress_signals": ["Feeling overwhelmed by others' emotions", "Perfectionism paralysis", "Withdrawing from social connections"],
        "growth_prompts": ["How can I trust my intuition more?", "What boundaries do I need to protect my energy?", "How can I share my insights with others?"],
    },
    "ENTP": {
        "journaling_style": "Your entries may be scattered and idea-focused, jumping between topics as connections form. You might use journaling to brainstorm and explore possibilities.",
        "emotional_processing": "You may intellectualize emotions rather than feeling them directly. Journaling can help you connect with your emotional experience.",
        "stress_signals": ["Feeling bored or restless", "Avoiding emotional conversations", "Starting many projects without finishing"],
        "growth_prompts": ["What am I really feeling beneath the thoughts?", "How can I turn these ideas into reality?", "What would emotional vulnerability look like for me?"],
    },
    "INTP": {
        "journaling_style": "Your journaling is analytical and exploratory. You may use it to work through complex ideas and understand patterns in your thinking.",
        "emotional_processing": "You prefer to understand emotions logically. Journaling helps you analyze feelings and identify patterns without the pressure of immediate response.",
        "stress_signals": ["Feeling pressured to make decisions", "Overwhelmed by emotional demands", "Avoiding social obligations"],
        "growth_prompts": ["What data am I getting from this emotion?", "How can I communicate my needs clearly?", "What would happen if I acted on this insight?"],
    },
    "ENTJ": {
        "journaling_style": "Your journaling is goal-oriented and strategic. You may use it to plan, review progress, and identify obstacles to overcome.",
        "emotional_processing": "You may focus on practical solutions rather than emotional processing. Journaling can help you recognize the emotional components of situations.",
        "stress_signals": ["Impatience with inefficiency", "Difficulty delegating", "Ignoring personal needs for goals"],
        "growth_prompts": ["What emotions am I experiencing about this situation?", "How can I better support my team?", "What would self-care look like while pursuing my goals?"],
    },
    "INTJ": {
        "journaling_style": "Your journaling is systematic and future-focused. You explore long-term visions, analyze patterns, and plan strategic approaches to goals.",
        "emotional_processing": "You prefer to understand emotions systematically. Journaling helps you process feelings privately and integrate them into your broader understanding.",
        "stress_signals": ["Frustration with inefficiency", "Overwhelmed by social demands", "Perfectionism preventing action"],
        "growth_prompts": ["How can I share my vision with others?", "What emotions are informing this decision?", "How can I be more flexible while maintaining my standards?"],
    },
    "ESFP": {
        "journaling_style": "Your journaling captures moments and experiences vividly. You may write about daily events, people you've met, and immediate feelings.",
        "emotional_processing": "You process emotions in the moment and through experience. Journaling helps you reflect on patterns and learn from experiences.",
        "stress_signals": ["Feeling trapped by routine", "Overwhelmed by future planning", "Difficulty with conflict"],
        "growth_prompts": ["What did I learn from this experience?", "How can I prepare for the future while enjoying today?", "What support do I need to handle this challenge?"],
    },
    "ISFP": {
        "journaling_style": "Your journaling is personal and value-driven. You explore your authentic feelings and how experiences align with your personal values.",
        "emotional_processing": "You feel emotions deeply but may need time to understand them. Journaling provides space to process feelings at your own pace.",
        "stress_signals": ["Feeling pressured to conform", "Overwhelmed by conflict", "Struggling with decisions"],
        "growth_prompts": ["What do my values tell me about this situation?", "How can I honor my needs while maintaining harmony?", "What would courage look like here?"],
    },
    "ESFJ": {
        "journaling_style": "Your journaling often focuses on relationships and how to help others. You may write about social interactions and ways to maintain harmony.",
        "emotional_processing": "You're naturally aware of emotions but may focus more on others' feelings than your own. Journaling helps you attend to your emotional needs.",
        "stress_signals": ["Feeling unappreciated", "Overwhelmed by others' needs", "Difficulty with criticism"],
        "growth_prompts": ["What appreciation do I need right now?", "How can I set boundaries while still caring for others?", "What would putting my needs first look like?"],
    },
    "ISFJ": {
        "journaling_style": "Your journaling is detailed and caring, often focusing on others' well-being and how to be helpful. You may document daily experiences thoroughly.",
        "emotional_processing": "You may suppress your own emotions to maintain harmony. Journaling provides a private space to acknowledge and process your feelings.",
        "stress_signals": ["Feeling overwhelmed by responsibilities", "Difficulty saying no", "Avoiding conflict at personal cost"],
        "growth_prompts": ["What do I need to feel supported?", "How can I express my needs without feeling selfish?", "What changes would improve my well-being?"],
    },
    "ESTP": {
        "journaling_style": "Your journaling captures action and experiences. You may write briefly about daily events, successes, and practical challenges you're facing.",
        "emotional_processing": "You prefer to process emotions through action and experience. Journaling can help you reflect on patterns and learn from experiences.",
        "stress_signals": ["Feeling restless or confined", "Avoiding emotional conversations", "Acting impulsively under pressure"],
        "growth_prompts": ["What is this emotion telling me to do?", "How can I channel this energy productively?", "What would slowing down reveal to me?"],
    },
    "ISTP": {
        "journaling_style": "Your journaling is practical and problem-focused. You may write about challenges you're solving and technical or practical interests.",
        "emotional_processing": "You may struggle with emotional expression but can benefit from exploring feelings through problem-solving frameworks in journaling.",
        "stress_signals": ["Feeling trapped by obligations", "Overwhelmed by emotional demands", "Withdrawing from social interactions"],
        "growth_prompts": ["What is the problem I'm trying to solve here?", "How can I create more space for myself?", "What would expressing this feeling look like?"],
    },
    "ESTJ": {
        "journaling_style": "Your journaling is organized and goal-oriented. You may use it to plan, track progress, and identify obstacles to achieving objectives.",
        "emotional_processing": "You may focus on practical solutions over emotional processing. Journaling can help you recognize and address emotional components of situations.",
        "stress_signals": ["Frustration with inefficiency", "Difficulty delegating control", "Ignoring personal needs for productivity"],
        "growth_prompts": ["What emotions are driving my reactions here?", "How can I better support others while achieving goals?", "What would work-life balance look like for me?"],
    },
    "ISTJ": {
        "journaling_style": "Your journaling is systematic and detailed. You may document experiences thoroughly and reflect on lessons learned and practical applications.",
        "emotional_processing": "You prefer emotional stability and may need structure to process feelings. Journaling provides a reliable framework for emotional exploration.",
        "stress_signals": ["Feeling overwhelmed by change", "Difficulty expressing emotions", "Stress from unexpected disruptions"],
        "growth_prompts": ["How can I adapt to this change while honoring my needs?", "What support systems do I have available?", "What would flexibility look like in this situation?"],
    },
}

DEFAULT_JOURNALING_INSIGHTS: dict[str, Any] = {
    "journaling_style": "Your unique journaling style reflects your personality.",
    "emotional_processing": "You have your own way of processing emotions.",
    "stress_signals": ["Individual stress patterns"],
    "growth_prompts": ["Personal growth questions"],
}


def get_type_description(type_code: str) -> dict[str, Any]:
    """Narrative bundle for a type code, or the generic fallback."""
    return copy.deepcopy(TYPE_DESCRIPTIONS.get(type_code, DEFAULT_TYPE_DESCRIPTION))


def get_journaling_insights(type_code: str) -> dict[str, Any]:
    """Journaling guidance for a type code, or the generic fallback."""
    return copy.deepcopy(JOURNALING_INSIGHTS.get(type_code, DEFAULT_JOURNALING_INSIGHTS))
