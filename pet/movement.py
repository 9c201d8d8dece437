# pet/movement.py

from enum import Enum
from typing import List, Optional

from config import Config
from utils.helpers import distance


class MoveStep(Enum):
    """What a single movement update did."""
    NO_TARGET = "no_target"
    STEPPED = "stepped"
    ARRIVED = "arrived"


class SeekMovement:
    """
    Straight-line seeking toward the rabbit's target.

    The step is a fixed distance per tick, tied to the frame rate rather
    than to elapsed time.
    """

    def __init__(self, speed: float = Config.MOVE_SPEED):
        """
        Args:
            speed (float): Scene units advanced per tick.
        """
        self.speed = speed

    def update(self, rabbit) -> MoveStep:
        """
        Advances the rabbit one tick.

        On arrival the rabbit is snapped exactly onto the target and the
        target is cleared; what happens next is up to the caller.
        """
        if rabbit.target is None:
            return MoveStep.NO_TARGET

        if rabbit.has_reached_target():
            rabbit.snap_to(rabbit.target.x, rabbit.target.y)
            rabbit.clear_target()
            return MoveStep.ARRIVED

        direction = (rabbit.target - rabbit.position).normalized()
        rabbit.move_by(direction.x * self.speed, direction.y * self.speed)
        return MoveStep.STEPPED


def food_in_reach(rabbit, foods: List) -> Optional[int]:
    """Index of the first food strictly inside the rabbit's eat radius."""
    radius = rabbit.eat_radius()
    for index, food in enumerate(foods):
        if distance(rabbit.x, rabbit.y, food.x, food.y) < radius:
            return index
    return None


def eat_food_in_reach(rabbit, foods: List):
    """
    Eats at most one food item: the first one in collection order that is
    within reach. Removal, the eating state and the hunger gain happen
    together.

    Returns:
        FoodItem | None: The item eaten, if any.
    """
    index = food_in_reach(rabbit, foods)
    if index is None:
        return None
    food = foods.pop(index)
    rabbit.begin_eating()
    rabbit.adjust_hunger(food.satiety)
    return food
