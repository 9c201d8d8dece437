"""
The rabbit: position, age, hunger, activity and the timers the simulation
clock drives. Pure state plus derived queries; it never renders or emits
events itself.
"""

from typing import Optional

from config import Config, GrowthStage, RabbitState
from modules.needs.need import Need
from utils.vector import Vector2D


def growth_stage_of(age: float) -> GrowthStage:
    """
    Returns the unique growth bracket with min_age <= age < max_age.
    Boundary ages belong to the later stage.
    """
    for stage in Config.GROWTH_STAGES:
        if stage.min_age <= age < stage.max_age:
            return stage
    # only reachable for negative ages
    return Config.GROWTH_STAGES[0]


def stage_by_name(name: str) -> Optional[GrowthStage]:
    for stage in Config.GROWTH_STAGES:
        if stage.name == name:
            return stage
    return None


class Rabbit:
    """
    The single creature living in a garden session.
    """

    def __init__(self,
                 x: Optional[float] = None,
                 y: Optional[float] = None,
                 age: float = 0.0,
                 hunger: Optional[float] = None,
                 state: RabbitState = RabbitState.IDLE,
                 growth_stage: Optional[str] = None):
        """
        Args:
            x, y: Scene position; defaults to the configured spawn point.
            age: Age in seconds.
            hunger: Hunger in [0, 100]; 100 means full.
            state: Current activity.
            growth_stage: Stored stage name. When omitted it is derived from age.
        """
        self.x = float(Config.SPAWN_X if x is None else x)
        self.y = float(Config.SPAWN_Y if y is None else y)
        self.age = max(0.0, float(age))
        self.hunger_need = Need(
            name='hunger',
            value=Config.INITIAL_HUNGER if hunger is None else hunger,
            decrease_rate=Config.HUNGER_DECREASE_RATE,
            min_value=Config.HUNGER_MIN,
            max_value=Config.HUNGER_MAX
        )
        self.state = state
        self.growth_stage = growth_stage or growth_stage_of(self.age).name

        self.target: Optional[Vector2D] = None
        self.facing_left = False

        # all in milliseconds, counting up except dance_timer
        self.behavior_timer = 0.0
        self.dance_timer = 0.0
        self.hunger_timer = 0.0
        self.mood_timer = 0.0

    def __repr__(self):
        return (f"Rabbit(x={self.x:.1f}, y={self.y:.1f}, age={self.age:.1f}, "
                f"hunger={self.hunger:.1f}, state={self.state.value}, stage={self.growth_stage})")

    @property
    def hunger(self) -> float:
        return self.hunger_need.value

    @property
    def position(self) -> Vector2D:
        return Vector2D(self.x, self.y)

    # Growth

    def stage_info(self) -> GrowthStage:
        """Metadata for the current stage; unknown names fall back to baby."""
        return stage_by_name(self.growth_stage) or Config.GROWTH_STAGES[0]

    @property
    def scale(self) -> float:
        return self.stage_info().scale

    @property
    def pixel_size(self) -> int:
        return self.stage_info().pixel_size

    def eat_radius(self) -> float:
        """Distance within which food gets eaten, grows with the sprite."""
        return 13 * self.pixel_size / 2 + 15

    def advance_age(self, delta_seconds: float) -> bool:
        """
        Ages the rabbit and recomputes its growth stage.

        Returns:
            bool: True if the stage changed.
        """
        self.age += max(0.0, delta_seconds)
        new_stage = growth_stage_of(self.age).name
        if new_stage != self.growth_stage:
            self.growth_stage = new_stage
            return True
        return False

    # Hunger

    def adjust_hunger(self, delta: float) -> float:
        """Changes hunger, clamped into [0, 100]. Returns the applied change."""
        return self.hunger_need.alter(delta)

    def hunger_descriptor(self) -> str:
        if self.hunger > 70:
            return "full"
        if self.hunger > 40:
            return "normal"
        if self.hunger > 20:
            return "hungry"
        return "starving"

    # Movement goal

    def set_target(self, x: float, y: float) -> None:
        self.target = Vector2D(x, y)

    def clear_target(self) -> None:
        self.target = None

    def has_target(self) -> bool:
        return self.target is not None

    def distance_to_target(self) -> Optional[float]:
        if self.target is None:
            return None
        return self.position.distance_to(self.target)

    def has_reached_target(self) -> bool:
        """True iff a target exists and is closer than the arrival threshold."""
        if self.target is None:
            return False
        return self.distance_to_target() < Config.TARGET_THRESHOLD

    def move_by(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy
        if dx > 0:
            self.facing_left = True
        elif dx < 0:
            self.facing_left = False

    def snap_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    # Activities

    def begin_eating(self) -> None:
        """Enters the eating state; the clock owns the revert countdown."""
        self.state = RabbitState.EATING

    def begin_dancing(self) -> None:
        self.state = RabbitState.DANCING
        self.dance_timer = float(Config.DANCE_DURATION)

    def stop_dancing(self) -> bool:
        """Returns to idle if dancing. Returns True if the state changed."""
        self.dance_timer = 0.0
        if self.state == RabbitState.DANCING:
            self.state = RabbitState.IDLE
            return True
        return False

    def end_dancing_if_expired(self, delta_ms: float) -> bool:
        """
        Counts the dance down by delta_ms.

        Returns:
            bool: True if the dance ended on this call.
        """
        if self.dance_timer <= 0:
            return False
        self.dance_timer -= delta_ms
        if self.dance_timer <= 0:
            return self.stop_dancing()
        return False

    def state_display_name(self) -> str:
        return Config.STATE_DISPLAY_NAMES.get(self.state, "Unknown")
