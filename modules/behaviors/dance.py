# modules/behaviors/dance.py

from config import Config, RabbitState
from pet.mood import mood_event
from .behavior import Behavior


class DanceBehavior(Behavior):
    """
    Dance for a fixed time, sometimes showing off about it.
    """

    state = RabbitState.DANCING

    def start(self, rabbit):
        rabbit.begin_dancing()
        manager = self.behavior_manager
        if manager.rng.random() < Config.DANCE_MOOD_CHANCE:
            emoji = manager.rng.choice(Config.DANCE_EMOJIS)
            manager.dispatcher.dispatch_event(mood_event(rabbit, "happy", emoji))
