# config.py

"""
Configuration settings for the Bunny Garden project.
"""

from enum import Enum
from dataclasses import dataclass
from pathlib import Path
import math
import os


class GameState(Enum):
    """Session lifecycle states."""
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class RabbitState(Enum):
    """Activities the rabbit can be engaged in."""
    IDLE = "idle"
    WALKING = "walking"
    EATING = "eating"
    DANCING = "dancing"


@dataclass(frozen=True)
class GrowthStage:
    """One bracket of the growth table: min_age <= age < max_age."""
    name: str
    min_age: float
    max_age: float
    scale: float
    pixel_size: int
    display_name: str


class Config:
    """
    Centralized configuration management.

    Everything tunable lives here as a class attribute. Values that can be
    overridden from the environment (or a .env file) are read through the
    classmethod getters below.
    """

    @classmethod
    def get_save_dir(cls) -> Path:
        """Directory holding the single save slot."""
        return Path(os.getenv("BUNNY_SAVE_DIR", cls.SAVE_DIR))

    @classmethod
    def get_headless(cls) -> bool:
        return os.getenv("BUNNY_HEADLESS", "False").lower() in ("true", "1", "yes")

    @classmethod
    def get_scene_size(cls) -> tuple:
        """Scene (width, height) in scene units."""
        width = float(os.getenv("BUNNY_SCENE_WIDTH", cls.SCENE_WIDTH))
        height = float(os.getenv("BUNNY_SCENE_HEIGHT", cls.SCENE_HEIGHT))
        return width, height

    @classmethod
    def get_food_spawn_interval(cls) -> float:
        """Auto-spawn period in ms; 0 disables auto-spawn."""
        return float(os.getenv("BUNNY_FOOD_SPAWN_INTERVAL", cls.FOOD_SPAWN_INTERVAL))

    # growth table, ordered; lookups walk it front to back
    GROWTH_STAGES = (
        GrowthStage("baby", 0, 30, 0.6, 3, "Baby Bunny"),
        GrowthStage("teen", 30, 60, 0.8, 4, "Young Bunny"),
        GrowthStage("adult", 60, 120, 1.0, 5, "Adult Bunny"),
        GrowthStage("elder", 120, math.inf, 1.1, 5, "Elder Bunny"),
    )

    STATE_DISPLAY_NAMES = {
        RabbitState.IDLE: "Resting",
        RabbitState.WALKING: "Walking",
        RabbitState.EATING: "Eating",
        RabbitState.DANCING: "Dancing",
    }

    # enumeration order matters for the cumulative walk
    BEHAVIOR_WEIGHTS = {
        RabbitState.IDLE: 0.4,
        RabbitState.WALKING: 0.3,
        RabbitState.DANCING: 0.2,
        RabbitState.EATING: 0.1,
    }

    # Movement
    MOVE_SPEED = 2.0
    TARGET_THRESHOLD = 10.0
    WALK_PADDING = 100.0

    # Hunger
    HUNGER_MAX = 100.0
    HUNGER_MIN = 0.0
    INITIAL_HUNGER = 100.0
    HUNGER_DECREASE_RATE = 0.5
    SEEK_FOOD_HUNGER = 30       # below this the rabbit goes for food
    PLACEMENT_SEEK_HUNGER = 50  # below this placing food sends the rabbit to it
    DISTRESS_HUNGER = 20
    CONTENT_HUNGER = 80
    ARRIVAL_DISTRESS_CHANCE = 0.3
    DANCE_MOOD_CHANCE = 0.3

    # Food
    SATIETY_VALUES = {
        "grass": 15,
        "water": 10,
        "carrot": 25,
        "berry": 20,
    }
    FOOD_DISPLAY_NAMES = {
        "grass": "Grass",
        "water": "Water",
        "carrot": "Carrot",
        "berry": "Berry",
    }
    FOOD_EMOJIS = {
        "grass": "🌿",
        "water": "💧",
        "carrot": "🥕",
        "berry": "🍓",
    }
    FOOD_SPAWN_INTERVAL = 0

    # internal timers (in milliseconds)
    HUNGER_TICK_INTERVAL = 1000
    BEHAVIOR_INTERVAL = 2000
    DANCE_DURATION = 2000
    EATING_DURATION = 500
    MOOD_INTERVAL = 10000
    MOOD_BUBBLE_LIFETIME = 2000
    SAVE_INTERVAL = 5000
    FRAME_INTERVAL = 1000 / 60

    # Scene
    SCENE_WIDTH = 800
    SCENE_HEIGHT = 600
    SPAWN_X = 100.0
    SPAWN_Y = 300.0

    # Persistence
    SAVE_DIR = "data/save"
    SAVE_SLOT = "bunnyGardenGame"

    MOOD_EMOJIS = {
        "greeting": "🐰",
        "celebrate": "🎉",
        "yummy": "😋",
        "sad": "😢",
        "distress": "😫",
        "content": "😊",
        "dancing": "💃",
        "walking": "🚶",
        "love": "❤️",
    }
    DANCE_EMOJIS = ["💃", "🕺", "🎶", "✨"]

    VERSION = "0.1"
