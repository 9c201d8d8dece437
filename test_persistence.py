"""
Tests for the save record codec and the on-disk save slot.
"""

import json
import random
from datetime import datetime

import pytest

from config import RabbitState
from core.simulation import SimulationClock
from pet import FoodItem, Rabbit
from pet.state_persistence import RabbitStateManager, deserialize, serialize


@pytest.fixture
def garden():
    rabbit = Rabbit(x=123.5, y=222.25, age=45.5, hunger=61.5, state=RabbitState.DANCING)
    foods = [FoodItem("carrot", 10, 20), FoodItem("water", 300.5, 510), FoodItem("grass", 10, 20)]
    return rabbit, foods


@pytest.fixture
def manager(tmp_path):
    return RabbitStateManager(tmp_path / "save")


def assert_same_rabbit(a, b):
    assert (a.x, a.y, a.age, a.hunger) == (b.x, b.y, b.age, b.hunger)
    assert a.state == b.state
    assert a.growth_stage == b.growth_stage


def test_record_shape(garden):
    record = serialize(*garden)
    assert set(record) == {"rabbit", "foods", "timestamp"}
    assert record["rabbit"] == {
        "x": 123.5,
        "y": 222.25,
        "age": 45.5,
        "hunger": 61.5,
        "state": "dancing",
        "growthStage": "teen",
    }
    assert record["foods"][1] == {"type": "water", "x": 300.5, "y": 510.0}
    assert datetime.fromisoformat(record["timestamp"]).tzinfo is not None


def test_round_trip(garden):
    rabbit, foods = garden
    restored, restored_foods = deserialize(json.loads(json.dumps(serialize(rabbit, foods))))

    assert_same_rabbit(restored, rabbit)
    assert sorted(restored_foods, key=repr) == sorted(foods, key=repr)


def test_stored_stage_is_trusted(garden):
    record = serialize(*garden)
    record["rabbit"]["age"] = 100
    record["rabbit"]["growthStage"] = "baby"

    rabbit, foods = deserialize(record)
    assert rabbit.growth_stage == "baby"

    # the next tick re-derives it
    clock = SimulationClock(rabbit, foods, _Sink(), rng=random.Random(0), scene_size=(800, 600),
                            food_spawn_interval=0)
    clock.tick(0.0)
    assert rabbit.growth_stage == "adult"


def test_missing_fields_get_defaults():
    rabbit, foods = deserialize({"rabbit": {"age": 12}})
    assert (rabbit.x, rabbit.y) == (100.0, 300.0)
    assert rabbit.age == 12
    assert rabbit.hunger == 100
    assert rabbit.state == RabbitState.IDLE
    assert rabbit.growth_stage == "baby"
    assert foods == []


def test_bad_values_are_replaced():
    rabbit, _ = deserialize({
        "rabbit": {
            "x": "oops",
            "y": None,
            "age": -4,
            "hunger": 250,
            "state": "flying",
            "growthStage": "giant",
        }
    })
    assert (rabbit.x, rabbit.y) == (100.0, 300.0)
    assert rabbit.age == 0
    assert rabbit.hunger == 100
    assert rabbit.state == RabbitState.IDLE
    assert rabbit.growth_stage == "baby"


def test_unknown_stage_is_derived_from_age():
    rabbit, _ = deserialize({"rabbit": {"age": 75, "growthStage": "giant"}})
    assert rabbit.growth_stage == "adult"


@pytest.mark.parametrize("record", [
    {},
    {"rabbit": 5, "foods": "grass", "timestamp": 12},
    {"rabbit": None, "foods": None},
])
def test_malformed_sections_fall_back(record):
    rabbit, foods = deserialize(record)
    assert rabbit.hunger == 100
    assert foods == []


@pytest.mark.parametrize("record", [None, "save", [1, 2, 3], 42])
def test_non_mapping_record_is_no_save(record):
    assert deserialize(record) is None


def test_invalid_food_entries_are_skipped():
    _, foods = deserialize({
        "rabbit": {},
        "foods": [
            {"type": "grass", "x": 1, "y": 2},
            {"type": "pizza", "x": 1, "y": 2},
            {"type": "berry", "x": 3},
            "junk",
            {"type": "BERRY", "x": "7", "y": 8},
        ]
    })
    assert foods == [FoodItem("grass", 1, 2), FoodItem("berry", 7, 8)]


def test_save_and_load_slot(manager, garden):
    rabbit, foods = garden
    assert manager.save_state(rabbit, foods) is True
    assert manager.state_file.exists()
    assert manager.state_file.name == "bunnyGardenGame.json"

    restored, restored_foods = manager.load_state()
    assert_same_rabbit(restored, rabbit)
    assert restored_foods == foods


def test_save_overwrites_slot(manager, garden):
    rabbit, foods = garden
    manager.save_state(rabbit, foods)
    rabbit.adjust_hunger(-30)
    manager.save_state(rabbit, [])

    restored, restored_foods = manager.load_state()
    assert restored.hunger == 31.5
    assert restored_foods == []


def test_missing_slot_is_no_save(manager):
    assert manager.load_state() is None


@pytest.mark.parametrize("contents", ["{not json", "", "[1, 2]", "\"text\"", pytest.param("[" * 200000, id="deep-nesting")])
def test_corrupt_slot_is_no_save(manager, contents):
    manager.state_dir.mkdir(parents=True)
    manager.state_file.write_text(contents, encoding="utf-8")
    assert manager.load_state() is None


def test_clear_slot(manager, garden):
    manager.save_state(*garden)
    assert manager.clear_state() is True
    assert not manager.state_file.exists()
    assert manager.clear_state() is True


def test_unwritable_slot_reports_failure(tmp_path, garden):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    manager = RabbitStateManager(blocker)
    assert manager.save_state(*garden) is False
    assert manager.load_state() is None


def test_failed_swap_keeps_old_slot_and_no_temp_file(manager, garden, monkeypatch):
    rabbit, foods = garden
    assert manager.save_state(rabbit, foods) is True
    before = manager.state_file.read_text(encoding="utf-8")

    def refuse(src, dst):
        raise OSError("disk went away")

    monkeypatch.setattr("pet.state_persistence.os.replace", refuse)
    assert manager.save_state(rabbit, []) is False
    assert manager.state_file.read_text(encoding="utf-8") == before
    assert sorted(p.name for p in manager.state_dir.iterdir()) == ["bunnyGardenGame.json"]


class _Sink:
    def dispatch_event(self, event):
        pass
