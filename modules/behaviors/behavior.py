# modules/behaviors/behavior.py

from abc import ABC, abstractmethod

from config import RabbitState


class Behavior(ABC):
    """
    Abstract base class for all behaviors the selector can choose.
    """

    state: RabbitState

    def __init__(self, behavior_manager):
        """
        Initializes the Behavior.

        Args:
            behavior_manager (BehaviorManager): Reference to the BehaviorManager.
        """
        self.behavior_manager = behavior_manager

    @property
    def name(self) -> str:
        return self.state.value

    @abstractmethod
    def start(self, rabbit):
        """Applies the behavior to the rabbit."""
        rabbit.state = self.state
