# backend/therapy_ai/services/assistant_replies.py
"""
Scripted therapy assistant.

Replies are picked from fixed templates by keyword; nothing is learned or
inferred. Also holds the pools used to regenerate a child's therapy targets
and strategies.
"""
from __future__ import annotations
import random
from typing import List, Optional

from therapy_ai.schemas import Child

ARTICULATION_KEYWORDS = ["articulation", "speech"]
BEHAVIOR_KEYWORDS = ["behavior", "attention"]
LANGUAGE_KEYWORDS = ["language", "vocabulary"]

SAMPLE_MILESTONES = [
    "Follow one-step directions consistently",
    "Label 20+ familiar objects spontaneously",
    "Maintain shared attention for 3+ minutes",
    "Use gestures to communicate needs",
    "Imitate simple actions and sounds",
    "Respond to name when called",
    "Show interest in social games",
    "Use eye contact during interactions",
    "Produce target sounds in isolation with 80% accuracy",
    "Use 2-word combinations spontaneously",
    "Follow 2-step directions in structured settings",
    "Maintain topic for 3+ conversational turns",
    "Use appropriate volume and rate of speech",
    "Demonstrate understanding of basic concepts (big/small, in/out)",
    "Initiate communication for requesting and commenting",
    "Use polite forms (please, thank you) appropriately",
    "Answer simple wh-questions (who, what, where)",
    "Participate in group activities for 10+ minutes",
    "Use functional communication in daily routines",
    "Demonstrate turn-taking skills in play",
    "Express basic emotions verbally",
    "Follow classroom routines independently",
    "Use appropriate pragmatic skills (greetings, eye contact)",
    "Demonstrate phonological awareness skills",
]

SAMPLE_STRATEGIES = [
    "Model short phrases during play activities",
    "Use gestures combined with verbal prompts",
    "Expand child's utterances by adding one word",
    "Wait for child's response before continuing",
    "Use visual supports to aid comprehension",
    "Create opportunities for requesting",
    "Follow child's interests during therapy",
    "Provide immediate positive reinforcement",
    "Use environmental arrangement to encourage communication",
    "Implement naturalistic teaching strategies",
    "Practice target skills in multiple contexts",
    "Use peer modeling during group activities",
    "Incorporate movement and sensory activities",
    "Use technology and apps for engagement",
    "Practice social scripts for common situations",
    "Use video modeling for skill demonstration",
    "Implement choice-making throughout sessions",
    "Use music and rhythm for speech timing",
    "Practice skills during preferred activities",
    "Use systematic prompting and fading procedures",
    "Incorporate family priorities and routines",
    "Use positive behavior support strategies",
    "Practice generalization across settings and people",
    "Use data collection for progress monitoring",
]

SUGGESTION_POOLS = {
    "milestones": SAMPLE_MILESTONES,
    "strategies": SAMPLE_STRATEGIES,
}


def _mentions(text: str, keywords: List[str]) -> bool:
    s = (text or "").lower()
    return any(k in s for k in keywords)


def _generic_replies(child: Child) -> List[str]:
    name = child.name
    return [
        f"For {name}, I recommend focusing on their primary concern: {child.concern}. "
        "Try incorporating play-based activities that target this specific area.",
        f"Based on {name}'s age ({child.age_years} years), here are some developmentally "
        "appropriate strategies you could try...",
        f"Consider using visual supports and hands-on activities with {name}. "
        "Children at this age respond well to multi-sensory approaches.",
        f"It's great that you're working on this with {name}. Remember to follow their "
        "lead and build on their interests to maintain engagement.",
        f"For speech and language development, try the 'wait time' strategy with {name}. "
        "Give them extra time to process and respond.",
        f"Have you tried using songs or rhythmic activities with {name}? "
        "Music can be very effective for speech and language goals.",
        f"Consider breaking down complex tasks into smaller steps for {name}. "
        "This can help reduce frustration and increase success.",
    ]


def generate_reply(message: str, child: Child, rng: Optional[random.Random] = None) -> str:
    name = child.name
    if _mentions(message, ARTICULATION_KEYWORDS):
        return (
            f"For articulation work with {name}, try these techniques: 1) Use a mirror for "
            "visual feedback, 2) Practice target sounds in isolation first, 3) Move to "
            "syllables, then words, 4) Use fun games and activities to maintain motivation."
        )
    if _mentions(message, BEHAVIOR_KEYWORDS):
        return (
            f"For attention and behavior with {name}, consider: 1) Establishing clear routines "
            "and expectations, 2) Using visual schedules, 3) Providing frequent breaks, "
            "4) Incorporating movement breaks, 5) Using positive reinforcement strategies."
        )
    if _mentions(message, LANGUAGE_KEYWORDS):
        return (
            f"To support language development with {name}: 1) Model expanded language, "
            "2) Use the 'comment, don't command' approach, 3) Read books together, "
            "4) Narrate daily activities, 5) Give choices to encourage communication."
        )
    return (rng or random).choice(_generic_replies(child))


def pick_suggestions(kind: str, count: int = 3, rng: Optional[random.Random] = None) -> List[str]:
    """Random ``count`` items from the milestone or strategy pool."""
    try:
        pool = SUGGESTION_POOLS[kind]
    except KeyError:
        raise ValueError(f"Unknown suggestion kind: {kind}")
    return (rng or random).sample(pool, count)
