# modules/needs/need.py

from utils.helpers import clamp


class Need:
    """
    Represents a single bounded need of the rabbit.

    The value always stays within [min_value, max_value]; every change goes
    through alter().
    """

    def __init__(self, name, value=100.0, decrease_rate=0.5, min_value=0.0, max_value=100.0):
        """
        Initializes a Need instance.

        Args:
            name (str): The name of the need (e.g., 'hunger').
            value (float, optional): The initial value, clamped into range.
            decrease_rate (float, optional): Amount lost per decay step.
            min_value (float, optional): The minimum value the need can have.
            max_value (float, optional): The maximum value the need can have.
        """
        self.name = name
        self.min_value = min_value
        self.max_value = max_value
        self.decrease_rate = decrease_rate
        self.value = clamp(float(value), min_value, max_value)

    def alter(self, amount):
        """
        Alters the need's value by a specified amount, ensuring it stays within min and max bounds.

        Args:
            amount (float): The amount to change the need's value by.

        Returns:
            float: The change actually applied after clamping.
        """
        old_value = self.value
        self.value = clamp(self.value + amount, self.min_value, self.max_value)
        return self.value - old_value

    def decay(self, steps=1):
        """Applies the decrease rate `steps` times."""
        for _ in range(steps):
            self.alter(-self.decrease_rate)
