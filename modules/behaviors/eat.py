# modules/behaviors/eat.py

from config import RabbitState
from .behavior import Behavior


class EatBehavior(Behavior):
    """
    Nibbling about. Only a label: nothing is consumed unless the rabbit
    actually touches food.
    """

    state = RabbitState.EATING

    def start(self, rabbit):
        rabbit.begin_eating()
