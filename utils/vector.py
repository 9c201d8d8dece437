# utils/vector.py

import math


class Vector2D:
    """
    Simple 2D vector for scene positions and movement steps.
    """

    def __init__(self, x=0.0, y=0.0):
        """
        Initializes a Vector2D instance.

        Args:
            x (float): X-coordinate.
            y (float): Y-coordinate.
        """
        self.x = float(x)
        self.y = float(y)

    def __sub__(self, other):
        """Subtracts two vectors."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def __eq__(self, other):
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"Vector2D({self.x}, {self.y})"

    def length(self):
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other):
        """Euclidean distance to another vector."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def normalized(self):
        """
        Returns the unit vector in the same direction.
        A zero vector stays zero.
        """
        length = self.length()
        if length == 0:
            return Vector2D(0.0, 0.0)
        return Vector2D(self.x / length, self.y / length)
