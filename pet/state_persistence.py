"""
Rabbit state persistence system.
Converts the simulation to and from a flat record and keeps that record in a
single JSON save slot.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import json
import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from config import Config, RabbitState
from loggers import PersistenceLogger
from pet.food import FoodItem, FoodType
from pet.rabbit import Rabbit, stage_by_name
from utils.helpers import clamp


def _number_or(default):
    def coerce(value):
        if isinstance(value, bool):
            return default
        try:
            return float(value)
        except (TypeError, ValueError):
            return default
    return coerce


class RabbitRecord(BaseModel):
    """Stored rabbit fields. Anything missing or unreadable gets a default."""
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    x: float = Config.SPAWN_X
    y: float = Config.SPAWN_Y
    age: float = 0.0
    hunger: float = Config.INITIAL_HUNGER
    state: str = RabbitState.IDLE.value
    growth_stage: Optional[str] = Field(default=None, alias="growthStage")

    @field_validator('x', mode='before')
    @classmethod
    def coerce_x(cls, v):
        return _number_or(Config.SPAWN_X)(v)

    @field_validator('y', mode='before')
    @classmethod
    def coerce_y(cls, v):
        return _number_or(Config.SPAWN_Y)(v)

    @field_validator('age', mode='before')
    @classmethod
    def coerce_age(cls, v):
        return max(0.0, _number_or(0.0)(v))

    @field_validator('hunger', mode='before')
    @classmethod
    def coerce_hunger(cls, v):
        return clamp(_number_or(Config.INITIAL_HUNGER)(v), Config.HUNGER_MIN, Config.HUNGER_MAX)

    @field_validator('state', mode='before')
    @classmethod
    def known_state(cls, v):
        if v in {s.value for s in RabbitState}:
            return v
        return RabbitState.IDLE.value

    @field_validator('growth_stage', mode='before')
    @classmethod
    def known_stage(cls, v):
        if isinstance(v, str) and stage_by_name(v) is not None:
            return v
        return None


class FoodRecord(BaseModel):
    """Stored food fields. Unlike the rabbit, a food entry must be complete."""
    model_config = ConfigDict(extra='ignore')

    type: str
    x: float
    y: float

    @field_validator('type', mode='before')
    @classmethod
    def known_type(cls, v):
        return FoodType.parse(v).value


class SaveRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    rabbit: RabbitRecord = Field(default_factory=RabbitRecord)
    foods: List[Any] = Field(default_factory=list)
    timestamp: Optional[str] = None

    @field_validator('rabbit', mode='before')
    @classmethod
    def rabbit_mapping(cls, v):
        return v if isinstance(v, (dict, RabbitRecord)) else {}

    @field_validator('foods', mode='before')
    @classmethod
    def foods_list(cls, v):
        return v if isinstance(v, list) else []

    @field_validator('timestamp', mode='before')
    @classmethod
    def timestamp_text(cls, v):
        return v if isinstance(v, str) else None


def serialize(rabbit: Rabbit, foods: List[FoodItem], timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Captures the rabbit and the food list as a flat record.

    Returns:
        dict: {rabbit: {x, y, age, hunger, state, growthStage},
               foods: [{type, x, y}, ...], timestamp: ISO-8601}
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    record = SaveRecord(
        rabbit=RabbitRecord(
            x=rabbit.x,
            y=rabbit.y,
            age=rabbit.age,
            hunger=rabbit.hunger,
            state=rabbit.state.value,
            growth_stage=rabbit.growth_stage
        ),
        foods=[{"type": food.type.value, "x": food.x, "y": food.y} for food in foods],
        timestamp=timestamp.isoformat()
    )
    return record.model_dump(by_alias=True)


def deserialize(record: Any) -> Optional[Tuple[Rabbit, List[FoodItem]]]:
    """
    Rebuilds the rabbit and foods from a stored record.

    Stored values are taken as they are; in particular the growth stage is
    trusted rather than re-derived from age. Missing rabbit fields are
    defaulted and unreadable food entries are skipped.

    Returns:
        tuple | None: (rabbit, foods), or None when the record is unusable.
    """
    if not isinstance(record, dict):
        PersistenceLogger.warning(f"Save record is a {type(record).__name__}, not a mapping")
        return None

    try:
        parsed = SaveRecord.model_validate(record)
    except ValidationError as e:
        PersistenceLogger.error(f"Save record rejected: {e}")
        return None

    stored = parsed.rabbit
    rabbit = Rabbit(
        x=stored.x,
        y=stored.y,
        age=stored.age,
        hunger=stored.hunger,
        state=RabbitState(stored.state),
        growth_stage=stored.growth_stage
    )

    foods: List[FoodItem] = []
    for index, raw in enumerate(parsed.foods):
        try:
            food = FoodRecord.model_validate(raw)
        except ValidationError as e:
            PersistenceLogger.warning(f"Skipping food entry {index}: {e.error_count()} invalid field(s)")
            continue
        foods.append(FoodItem(food.type, food.x, food.y))

    return rabbit, foods


class RabbitStateManager:
    """
    Manages the single save slot on disk.

    Every failure is logged and reported through the return value; nothing
    raised by the file system or by a corrupt file reaches the caller.
    """

    def __init__(self, state_dir: Optional[str] = None, slot: str = Config.SAVE_SLOT):
        self.state_dir = Path(state_dir) if state_dir is not None else Config.get_save_dir()
        self.state_file = self.state_dir / f'{slot}.json'

    def save_state(self, rabbit: Rabbit, foods: List[FoodItem]) -> bool:
        """
        Overwrites the slot with the current state.

        Returns:
            bool: True if the write went through.
        """
        try:
            record = serialize(rabbit, foods)
            self._write_record(record)
        except (OSError, TypeError, ValueError) as e:
            PersistenceLogger.error(f"Error saving rabbit state: {e}")
            return False
        PersistenceLogger.log_save(str(self.state_file), len(foods))
        return True

    def load_state(self) -> Optional[Tuple[Rabbit, List[FoodItem]]]:
        """
        Loads the slot.

        Returns:
            tuple | None: (rabbit, foods), or None if there is no usable save.
        """
        record = self.load_record()
        if record is None:
            return None
        state = deserialize(record)
        if state is not None:
            PersistenceLogger.log_load(str(self.state_file), True)
        return state

    def load_record(self) -> Optional[Dict[str, Any]]:
        """Reads the raw record from the slot, or None."""
        if not self.state_file.exists():
            PersistenceLogger.log_load(str(self.state_file), False)
            return None
        try:
            with open(self.state_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            PersistenceLogger.log_load(str(self.state_file), False, f"{type(e).__name__}: {e}")
            return None

    def clear_state(self) -> bool:
        """Deletes the slot. Returns False only if deletion failed."""
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as e:
            PersistenceLogger.error(f"Error clearing saved state: {e}")
            return False
        PersistenceLogger.info(f"Cleared slot {self.state_file}")
        return True

    def _write_record(self, record: Dict[str, Any]) -> None:
        """Writes via a temp file so a failed write never leaves a truncated slot."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        tmp_file = self.state_file.with_suffix('.tmp')
        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            os.replace(tmp_file, self.state_file)
        except Exception:
            tmp_file.unlink(missing_ok=True)
            raise
