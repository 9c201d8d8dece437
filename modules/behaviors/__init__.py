# modules/behaviors/__init__.py

from .behavior import Behavior
from .idle import IdleBehavior
from .walk import WalkBehavior
from .dance import DanceBehavior
from .eat import EatBehavior
from .behavior_manager import BehaviorManager
