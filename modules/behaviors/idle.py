# modules/behaviors/idle.py

from config import RabbitState
from .behavior import Behavior


class IdleBehavior(Behavior):
    """
    Represents the rabbit's resting/default state.
    """

    state = RabbitState.IDLE

    def start(self, rabbit):
        super().start(rabbit)
