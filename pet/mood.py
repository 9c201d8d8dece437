# pet/mood.py

from typing import Optional

from config import Config
from event_dispatcher import Event


def mood_event(rabbit, mood: str, emoji: Optional[str] = None) -> Event:
    """
    Builds a rabbit:mood event for a renderer to show as a bubble.

    The anchor sits above the rabbit's head, offset by half its sprite width.
    """
    return Event("rabbit:mood", {
        "mood": mood,
        "emoji": emoji or Config.MOOD_EMOJIS.get(mood, Config.MOOD_EMOJIS["love"]),
        "anchor": (rabbit.x + 13 * rabbit.pixel_size / 2, rabbit.y - 10),
        "lifetime_ms": Config.MOOD_BUBBLE_LIFETIME,
    })


def ambient_mood(rabbit) -> str:
    """Periodic mood by priority: hunger first, then activity."""
    if rabbit.hunger < Config.DISTRESS_HUNGER:
        return "distress"
    if rabbit.hunger > Config.CONTENT_HUNGER:
        return "content"
    if rabbit.state.value == "dancing":
        return "dancing"
    if rabbit.state.value == "walking":
        return "walking"
    return "love"
