"""
Simulation clock for the garden.

One call to tick() advances the whole simulation by a time delta, always in
the same order:

    1. age            5. movement
    2. hunger decay   6. food collision
    3. countdowns     7. ambient mood
    4. behavior       8. food auto-spawn

Later steps see what earlier steps changed within the same tick, so a move
that lands the rabbit next to food gets it eaten immediately.
"""

from typing import List, Optional
import random

from config import Config, RabbitState
from event_dispatcher import Event
from loggers import InternalLogger
from modules.behaviors import BehaviorManager
from pet.food import FoodItem, FoodType
from pet.mood import ambient_mood, mood_event
from pet.movement import MoveStep, SeekMovement, eat_food_in_reach


class SimulationClock:
    """
    Drives the rabbit and the food list forward in time.

    The clock owns every scheduled transition, including the short eating
    spell, as plain countdown fields so that the whole simulation stays
    deterministic for a given random source.
    """

    def __init__(self,
                 rabbit,
                 foods: List[FoodItem],
                 dispatcher,
                 rng: Optional[random.Random] = None,
                 behavior_manager: Optional[BehaviorManager] = None,
                 movement: Optional[SeekMovement] = None,
                 scene_size=None,
                 food_spawn_interval: Optional[float] = None):
        """
        Args:
            rabbit (Rabbit): The creature to simulate.
            foods (list): Shared food collection; mutated in place.
            dispatcher (EventDispatcher): Receives every simulation event.
            rng (random.Random, optional): Random source for all draws.
            behavior_manager (BehaviorManager, optional): Activity selector.
            movement (SeekMovement, optional): Movement strategy.
            scene_size (tuple, optional): (width, height) of the scene.
            food_spawn_interval (float, optional): Auto-spawn period in ms, 0 disables.
        """
        self.rabbit = rabbit
        self.foods = foods
        self.dispatcher = dispatcher
        self.rng = rng or random.Random()
        self.behavior_manager = behavior_manager or BehaviorManager(dispatcher, self.rng, scene_size)
        self.movement = movement or SeekMovement()
        self.food_spawn_interval = (Config.get_food_spawn_interval()
                                    if food_spawn_interval is None else food_spawn_interval)

        self.eating_countdown: Optional[float] = None
        self.spawn_timer = 0.0
        self.ticks = 0
        self._ate_this_tick = False

        # a rabbit restored mid-meal still has to finish eating
        self._sync_eating_countdown()

    @property
    def scene_size(self):
        return self.behavior_manager.scene_width, self.behavior_manager.scene_height

    def set_scene_size(self, width: float, height: float) -> None:
        self.behavior_manager.set_scene_size(width, height)

    def tick(self, delta_seconds: float) -> None:
        """Advances the simulation by delta_seconds of wall-clock time."""
        delta_seconds = max(0.0, delta_seconds)
        delta_ms = delta_seconds * 1000
        self._ate_this_tick = False

        self._update_age(delta_seconds)
        self._update_hunger(delta_ms)
        self._update_countdowns(delta_ms)
        self._update_behavior(delta_ms)
        self._update_movement()
        self.check_food_collision()
        self._update_mood(delta_ms)
        self._update_food_spawn(delta_ms)

        self._sync_eating_countdown()
        self.ticks += 1

    # Steps

    def _update_age(self, delta_seconds: float) -> None:
        old_stage = self.rabbit.growth_stage
        if self.rabbit.advance_age(delta_seconds):
            InternalLogger.log_state_change("growth_stage", old_stage, self.rabbit.growth_stage)
            self.dispatcher.dispatch_event(Event("rabbit:stage_changed", {
                "old_stage": old_stage,
                "new_stage": self.rabbit.growth_stage,
                "age": self.rabbit.age
            }))
            self.dispatcher.dispatch_event(mood_event(self.rabbit, "celebrate"))

    def _update_hunger(self, delta_ms: float) -> None:
        # each full interval is its own decay step, a long frame can fire several
        self.rabbit.hunger_timer += delta_ms
        while self.rabbit.hunger_timer >= Config.HUNGER_TICK_INTERVAL:
            self.rabbit.hunger_timer -= Config.HUNGER_TICK_INTERVAL
            self.rabbit.hunger_need.decay()

    def _update_countdowns(self, delta_ms: float) -> None:
        if self.eating_countdown is not None:
            self.eating_countdown -= delta_ms
            if self.eating_countdown <= 0:
                self.eating_countdown = None
                if self.rabbit.state == RabbitState.EATING:
                    self._set_state(RabbitState.IDLE)

        if self.rabbit.end_dancing_if_expired(delta_ms):
            self._announce_state(RabbitState.DANCING)

    def _update_behavior(self, delta_ms: float) -> None:
        self.rabbit.behavior_timer += delta_ms
        if self.rabbit.behavior_timer >= Config.BEHAVIOR_INTERVAL:
            self.rabbit.behavior_timer = 0.0
            self.behavior_manager.determine_behavior(self.rabbit, self.foods)
            self._sync_eating_countdown()

    def _update_movement(self) -> None:
        if self.movement.update(self.rabbit) != MoveStep.ARRIVED:
            return

        # arrival always ends in idle, even when the arrival check ate something
        self.check_food_collision()
        if self.rabbit.hunger < Config.SEEK_FOOD_HUNGER and not self.foods:
            if self.rng.random() < Config.ARRIVAL_DISTRESS_CHANCE:
                self.dispatcher.dispatch_event(
                    mood_event(self.rabbit, "distress", Config.MOOD_EMOJIS["sad"]))
        self._set_state(RabbitState.IDLE)

    def check_food_collision(self) -> Optional[FoodItem]:
        """
        Eats the first food in reach, if any. At most one item per tick.

        Returns:
            FoodItem | None: The item eaten.
        """
        if self._ate_this_tick:
            return None
        old_state = self.rabbit.state
        food = eat_food_in_reach(self.rabbit, self.foods)
        if food is None:
            return None

        self._ate_this_tick = True
        self.eating_countdown = float(Config.EATING_DURATION)
        self.dispatcher.dispatch_event(Event("food:consumed", {
            "type": food.type.value,
            "x": food.x,
            "y": food.y,
            "satiety": food.satiety,
            "hunger": self.rabbit.hunger
        }))
        self.dispatcher.dispatch_event(mood_event(self.rabbit, "yummy"))
        self._announce_state(old_state)
        return food

    def _update_mood(self, delta_ms: float) -> None:
        self.rabbit.mood_timer += delta_ms
        if self.rabbit.mood_timer >= Config.MOOD_INTERVAL:
            self.rabbit.mood_timer = 0.0
            self.dispatcher.dispatch_event(mood_event(self.rabbit, ambient_mood(self.rabbit)))

    def _update_food_spawn(self, delta_ms: float) -> None:
        if self.food_spawn_interval <= 0:
            return
        self.spawn_timer += delta_ms
        if self.spawn_timer >= self.food_spawn_interval:
            self.spawn_timer = 0.0
            self.spawn_food()

    # Food placement

    def place_food(self, food_type, x: float, y: float) -> FoodItem:
        """
        Drops a food item at a point. A rabbit below the placement hunger
        threshold sets off toward the nearest food right away.
        """
        food = FoodItem(food_type, x, y)
        self.foods.append(food)
        self.dispatcher.dispatch_event(Event("food:placed", {
            "type": food.type.value,
            "x": food.x,
            "y": food.y
        }))
        if self.rabbit.hunger < Config.PLACEMENT_SEEK_HUNGER:
            self.behavior_manager.seek_nearest_food(self.rabbit, self.foods)
        return food

    def spawn_food(self, food_type=None) -> FoodItem:
        """Places food at a random spot along the bottom of the scene."""
        if food_type is None:
            food_type = self.rng.choice(list(FoodType))
        width, height = self.scene_size
        x = 50 + self.rng.random() * (width - 100)
        y = height - 100 + self.rng.random() * 50
        return self.place_food(food_type, x, y)

    def walk_to(self, x: float, y: float) -> None:
        """Sends the rabbit toward a point chosen by the player."""
        self.rabbit.set_target(x, y)
        self._set_state(RabbitState.WALKING)

    def stop_dancing(self) -> bool:
        old_state = self.rabbit.state
        if self.rabbit.stop_dancing():
            self._announce_state(old_state)
            return True
        return False

    # State bookkeeping

    def _set_state(self, new_state: RabbitState) -> None:
        old_state = self.rabbit.state
        self.rabbit.state = new_state
        self._announce_state(old_state)

    def _announce_state(self, old_state: RabbitState) -> None:
        if old_state != self.rabbit.state:
            self.dispatcher.dispatch_event(Event("rabbit:state_changed", {
                "old_state": old_state.value,
                "new_state": self.rabbit.state.value
            }))

    def _sync_eating_countdown(self) -> None:
        if self.rabbit.state == RabbitState.EATING:
            if self.eating_countdown is None:
                self.eating_countdown = float(Config.EATING_DURATION)
        else:
            self.eating_countdown = None
