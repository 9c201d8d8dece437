# modules/behaviors/behavior_manager.py

from typing import Optional, Sequence
import random

from .idle import IdleBehavior
from .walk import WalkBehavior
from .dance import DanceBehavior
from .eat import EatBehavior
from config import Config, RabbitState
from event_dispatcher import Event
from loggers import InternalLogger
from utils.helpers import distance


class BehaviorManager:
    """
    Chooses the rabbit's next activity through a weighted random draw.

    Decisions are only taken while the rabbit is free: it has no movement
    goal and is not in the middle of eating. A hungry rabbit that can see
    food skips the draw and heads for the nearest item instead.
    """

    def __init__(self, dispatcher, rng: Optional[random.Random] = None, scene_size=None):
        """
        Args:
            dispatcher (EventDispatcher): Where state changes are announced.
            rng (random.Random, optional): Source of randomness, injectable for tests.
            scene_size (tuple, optional): (width, height) used for walk destinations.
        """
        self.dispatcher = dispatcher
        self.rng = rng or random.Random()
        self.scene_width, self.scene_height = scene_size or Config.get_scene_size()
        self.weights = dict(Config.BEHAVIOR_WEIGHTS)

        self.behaviors = {
            RabbitState.IDLE: IdleBehavior(self),
            RabbitState.WALKING: WalkBehavior(self),
            RabbitState.DANCING: DanceBehavior(self),
            RabbitState.EATING: EatBehavior(self),
        }

    def set_scene_size(self, width: float, height: float) -> None:
        self.scene_width = float(width)
        self.scene_height = float(height)

    def is_free(self, rabbit) -> bool:
        return not rabbit.has_target() and rabbit.state != RabbitState.EATING

    def determine_behavior(self, rabbit, foods: Sequence) -> Optional[RabbitState]:
        """
        Runs one decision for the rabbit.

        Returns:
            RabbitState | None: The chosen state, or None if the rabbit was busy.
        """
        if not self.is_free(rabbit):
            return None

        if rabbit.hunger < Config.SEEK_FOOD_HUNGER and foods:
            self.seek_nearest_food(rabbit, foods)
            return RabbitState.WALKING

        chosen = self.weighted_choice(self.rng.random())
        InternalLogger.log_behavior(chosen.value, {"hunger": rabbit.hunger, "age": rabbit.age})
        self.change_behavior(rabbit, chosen)
        return chosen

    def weighted_choice(self, r: float) -> RabbitState:
        """
        Walks the weight table in order, accumulating until the running sum
        exceeds r. Falls back to the last bucket if rounding leaves r unmatched.
        """
        cumulative = 0.0
        last = None
        for state, weight in self.weights.items():
            cumulative += weight
            last = state
            if r < cumulative:
                return state
        return last

    def change_behavior(self, rabbit, new_state: RabbitState) -> None:
        old_state = rabbit.state
        self.behaviors[new_state].start(rabbit)
        if rabbit.state != old_state:
            self.dispatcher.dispatch_event(Event("rabbit:state_changed", {
                "old_state": old_state.value,
                "new_state": rabbit.state.value
            }))

    def nearest_food(self, rabbit, foods: Sequence):
        """Nearest item by Euclidean distance; ties go to the first encountered."""
        nearest = None
        nearest_distance = float('inf')
        for food in foods:
            d = distance(rabbit.x, rabbit.y, food.x, food.y)
            if d < nearest_distance:
                nearest_distance = d
                nearest = food
        return nearest

    def seek_nearest_food(self, rabbit, foods: Sequence):
        """
        Points the rabbit at the nearest food and sets it walking.

        Returns:
            FoodItem | None: The food being sought.
        """
        food = self.nearest_food(rabbit, foods)
        if food is None:
            return None
        old_state = rabbit.state
        rabbit.set_target(food.x, food.y)
        rabbit.state = RabbitState.WALKING
        InternalLogger.log_behavior("seek_food", {"food": food.type.value, "hunger": rabbit.hunger})
        if old_state != rabbit.state:
            self.dispatcher.dispatch_event(Event("rabbit:state_changed", {
                "old_state": old_state.value,
                "new_state": rabbit.state.value
            }))
        return food

    def random_destination(self):
        """Uniform point inside the scene, inset by the walk padding on each side."""
        padding = Config.WALK_PADDING
        x = padding + self.rng.random() * (self.scene_width - padding * 2)
        y = padding + self.rng.random() * (self.scene_height - padding * 2)
        return x, y
