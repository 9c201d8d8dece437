# modules/behaviors/walk.py

from config import RabbitState
from .behavior import Behavior


class WalkBehavior(Behavior):
    """
    Wander to a random point inside the padded scene.
    """

    state = RabbitState.WALKING

    def start(self, rabbit):
        super().start(rabbit)
        x, y = self.behavior_manager.random_destination()
        rabbit.set_target(x, y)
