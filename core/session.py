"""
Session controller for the garden.

Owns the one rabbit, the food list, the simulation clock and the save slot,
and exposes the start / pause / reset lifecycle plus the player's inputs.
The host (Qt widget or headless timer loop) calls frame() on every display
tick and autosave() on its save timer; both do nothing unless the session is
running.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import random
import time

from config import Config, GameState
from core.simulation import SimulationClock
from event_dispatcher import Event, EventDispatcher
from loggers import SystemLogger
from pet.food import FoodItem, FoodType
from pet.mood import mood_event
from pet.rabbit import Rabbit
from pet.state_persistence import RabbitStateManager


@dataclass
class SessionState:
    """Lifecycle bookkeeping that decides whether the clock advances."""
    activity: GameState = GameState.STOPPED
    pending_food: Optional[FoodType] = None
    last_tick: Optional[float] = None


class GardenSession:
    """
    A single garden: exactly one rabbit and its food.

    Construct one per running program and hand it to whatever drives it.
    """

    def __init__(self,
                 state_manager: Optional[RabbitStateManager] = None,
                 dispatcher: Optional[EventDispatcher] = None,
                 rng: Optional[random.Random] = None,
                 scene_size=None,
                 time_source: Callable[[], float] = time.monotonic,
                 food_spawn_interval: Optional[float] = None):
        """
        Args:
            state_manager: Save slot; defaults to the configured directory.
            dispatcher: Event sink for renderers; a private one is created if omitted.
            rng: Random source shared by every draw in the simulation.
            scene_size: (width, height); defaults to the configured scene.
            time_source: Monotonic clock in seconds, replaceable in tests.
            food_spawn_interval: Auto-spawn period in ms, 0 disables.
        """
        self.state_manager = state_manager or RabbitStateManager()
        self.events = dispatcher or EventDispatcher()
        self.rng = rng or random.Random()
        self.scene_size = tuple(scene_size or Config.get_scene_size())
        self.time_source = time_source
        self.food_spawn_interval = food_spawn_interval

        self.state = SessionState()
        self.rabbit: Rabbit = Rabbit()
        self.foods: List[FoodItem] = []
        self.clock: SimulationClock = self._build_clock()
        self.loaded_from_save = False

        self.load_or_create()

    def _build_clock(self) -> SimulationClock:
        return SimulationClock(
            self.rabbit,
            self.foods,
            self.events,
            rng=self.rng,
            scene_size=self.scene_size,
            food_spawn_interval=self.food_spawn_interval
        )

    def load_or_create(self) -> bool:
        """
        Restores the saved garden if there is one, otherwise starts fresh.

        Returns:
            bool: True if a save was loaded.
        """
        loaded = self.state_manager.load_state()
        if loaded is None:
            self.rabbit = Rabbit()
            self.foods.clear()
            self.loaded_from_save = False
            SystemLogger.info("Starting a new garden")
        else:
            self.rabbit, foods = loaded
            self.foods[:] = foods
            self.loaded_from_save = True
            SystemLogger.info(f"Restored garden: {self.rabbit!r}, {len(self.foods)} food items")

        self.clock = self._build_clock()
        if self.loaded_from_save:
            self.events.dispatch_event(Event("session:loaded", {
                "rabbit": repr(self.rabbit),
                "food_count": len(self.foods)
            }))
        return self.loaded_from_save

    # Lifecycle

    @property
    def activity(self) -> GameState:
        return self.state.activity

    def is_running(self) -> bool:
        return self.state.activity == GameState.RUNNING

    def start(self) -> bool:
        """Arms the frame driver. Returns False if already running."""
        if self.is_running():
            return False
        self._transition(GameState.RUNNING)
        self.state.last_tick = self.time_source()
        self.events.dispatch_event(Event("session:started", None))
        self.events.dispatch_event(mood_event(self.rabbit, "greeting"))
        return True

    def pause(self) -> bool:
        """Disarms the frame driver. A dancing rabbit stops dancing."""
        if not self.is_running():
            return False
        self._transition(GameState.PAUSED)
        self.clock.stop_dancing()
        self.events.dispatch_event(Event("session:paused", None))
        return True

    def reset(self) -> None:
        """Throws away the garden, in memory and on disk, and starts over stopped."""
        self.pause()
        self._transition(GameState.STOPPED)
        self.state.pending_food = None
        self.state.last_tick = None

        self.foods.clear()
        self.state_manager.clear_state()
        self.rabbit = Rabbit()
        self.clock = self._build_clock()
        self.loaded_from_save = False
        self.events.dispatch_event(Event("session:reset", None))

    def _transition(self, new_activity: GameState) -> None:
        old_activity = self.state.activity
        if old_activity != new_activity:
            self.state.activity = new_activity
            SystemLogger.log_lifecycle(old_activity.value, new_activity.value)

    # Drivers

    def frame(self, now: Optional[float] = None) -> Optional[float]:
        """
        One display tick. Advances the clock by the wall time since the last
        frame.

        Returns:
            float | None: The delta applied in seconds, or None if not running.
        """
        if not self.is_running():
            return None
        now = self.time_source() if now is None else now
        last = self.state.last_tick if self.state.last_tick is not None else now
        delta = max(0.0, now - last)
        self.state.last_tick = now
        self.clock.tick(delta)
        return delta

    def autosave(self) -> bool:
        """Periodic save; skipped unless running."""
        if not self.is_running():
            return False
        return self.save()

    def save(self) -> bool:
        ok = self.state_manager.save_state(self.rabbit, self.foods)
        if ok:
            self.events.dispatch_event(Event("session:saved", {
                "path": str(self.state_manager.state_file)
            }))
        return ok

    def shutdown(self) -> bool:
        """Final save when the host goes away."""
        SystemLogger.info("Session shutting down")
        return self.save()

    # Player input

    def arm_placement(self, food_type) -> FoodType:
        """
        Makes the next scene click drop this food.

        Raises:
            ValueError: If the food type is unknown.
        """
        food_type = FoodType.parse(food_type)
        self.state.pending_food = food_type
        self.events.dispatch_event(Event("session:placement_armed", {"type": food_type.value}))
        return food_type

    def cancel_placement(self) -> None:
        if self.state.pending_food is not None:
            self.state.pending_food = None
            self.events.dispatch_event(Event("session:placement_armed", {"type": None}))

    def click(self, x: float, y: float) -> Optional[FoodItem]:
        """
        A click on the scene: drops the pending food if one is armed,
        otherwise sends a running rabbit walking there.

        Returns:
            FoodItem | None: The food placed, if any.
        """
        if self.state.pending_food is not None:
            food = self.clock.place_food(self.state.pending_food, x, y)
            self.state.pending_food = None
            return food
        if self.is_running():
            self.clock.walk_to(x, y)
        return None

    def place_food(self, food_type, x: float, y: float) -> FoodItem:
        return self.clock.place_food(FoodType.parse(food_type), x, y)

    def spawn_food(self, food_type=None) -> FoodItem:
        if food_type is not None:
            food_type = FoodType.parse(food_type)
        return self.clock.spawn_food(food_type)

    def set_scene_size(self, width: float, height: float) -> None:
        self.scene_size = (float(width), float(height))
        self.clock.set_scene_size(width, height)

    def status(self) -> Dict[str, Any]:
        """Snapshot for a HUD or a console printout."""
        stage = self.rabbit.stage_info()
        pending = self.state.pending_food
        return {
            "activity": self.state.activity.value,
            "state": self.rabbit.state_display_name(),
            "stage": stage.display_name,
            "age": self.rabbit.age,
            "hunger": self.rabbit.hunger,
            "hunger_descriptor": self.rabbit.hunger_descriptor(),
            "food_count": len(self.foods),
            "pending_food": pending.value if pending is not None else None,
        }
