# pet/__init__.py

from .rabbit import Rabbit, growth_stage_of
from .food import FoodItem, FoodType
from .movement import SeekMovement, MoveStep, eat_food_in_reach
