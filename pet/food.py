# pet/food.py

"""
Food items that can be placed in the garden.

A FoodItem never changes once placed; it only leaves the garden by being eaten.
"""

from enum import Enum

from config import Config


class FoodType(Enum):
    GRASS = "grass"
    WATER = "water"
    CARROT = "carrot"
    BERRY = "berry"

    @property
    def satiety(self) -> int:
        return Config.SATIETY_VALUES[self.value]

    @property
    def display_name(self) -> str:
        return Config.FOOD_DISPLAY_NAMES[self.value]

    @classmethod
    def parse(cls, value) -> "FoodType":
        """
        Accepts a FoodType or its string value.

        Raises:
            ValueError: If the value names no known food.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Food type '{value}' does not exist.") from None


class FoodItem:
    """
    A single piece of food lying in the scene.
    """

    __slots__ = ("_type", "_x", "_y")

    def __init__(self, food_type, x: float, y: float):
        """
        Args:
            food_type (FoodType | str): What kind of food this is.
            x (float): Scene x coordinate.
            y (float): Scene y coordinate.
        """
        self._type = FoodType.parse(food_type)
        self._x = float(x)
        self._y = float(y)

    @property
    def type(self) -> FoodType:
        return self._type

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def satiety(self) -> int:
        """How much hunger this item restores."""
        return self._type.satiety

    def __eq__(self, other):
        if not isinstance(other, FoodItem):
            return NotImplemented
        return (self._type, self._x, self._y) == (other._type, other._x, other._y)

    def __hash__(self):
        return hash((self._type, self._x, self._y))

    def __repr__(self):
        return f"FoodItem({self._type.value!r}, {self._x}, {self._y})"
