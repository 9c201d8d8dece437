"""
Tests for the per-tick simulation clock: movement, collision, timers and
event ordering.
"""

import random

import pytest

from config import RabbitState
from core.simulation import SimulationClock
from pet import FoodItem, Rabbit


@pytest.fixture
def make_clock(dispatcher):
    def make(rabbit, foods=None, rng=None, food_spawn_interval=0):
        return SimulationClock(
            rabbit,
            foods if foods is not None else [],
            dispatcher,
            rng=rng or random.Random(0),
            scene_size=(800, 600),
            food_spawn_interval=food_spawn_interval
        )
    return make


def test_movement_steps_then_snaps(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0, state=RabbitState.WALKING)
    rabbit.set_target(100, 0)
    clock = make_clock(rabbit, rng=scripted())

    distances = [rabbit.distance_to_target()]
    while rabbit.has_target():
        clock.tick(0.0)
        if rabbit.has_target():
            distances.append(rabbit.distance_to_target())

    for before, after in zip(distances, distances[1:]):
        assert before - after == pytest.approx(2.0)
    assert distances[-1] < 10
    assert (rabbit.x, rabbit.y) == (100.0, 0.0)
    assert rabbit.state == RabbitState.IDLE


def test_diagonal_step_length(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0)
    rabbit.set_target(300, 400)
    make_clock(rabbit, rng=scripted()).tick(0.0)
    assert rabbit.x == pytest.approx(1.2)
    assert rabbit.y == pytest.approx(1.6)


def test_food_in_reach_is_eaten(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, hunger=50)
    foods = [FoodItem("grass", 5, 0)]
    make_clock(rabbit, foods, rng=scripted()).tick(0.0)

    assert foods == []
    assert rabbit.hunger == 65
    assert rabbit.state == RabbitState.EATING
    consumed = recorder.of_type("food:consumed")
    assert len(consumed) == 1
    assert consumed[0].data["type"] == "grass"
    assert consumed[0].data["satiety"] == 15


def test_food_outside_radius_is_left(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0, hunger=50)
    foods = [FoodItem("grass", 34.5, 0)]
    make_clock(rabbit, foods, rng=scripted()).tick(0.0)
    assert len(foods) == 1
    assert rabbit.hunger == 50


def test_eaten_on_the_tick_movement_lands_in_reach(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0, hunger=50, state=RabbitState.WALKING)
    rabbit.set_target(50, 0)
    foods = [FoodItem("water", 40, 0)]
    clock = make_clock(rabbit, foods, rng=scripted())

    clock.tick(0.0)
    clock.tick(0.0)
    assert len(foods) == 1

    clock.tick(0.0)
    assert rabbit.x == pytest.approx(6.0)
    assert foods == []
    assert rabbit.hunger == 60


def test_satiety_is_clamped(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0, hunger=95)
    make_clock(rabbit, [FoodItem("carrot", 0, 0)], rng=scripted()).tick(0.0)
    assert rabbit.hunger == 100


def test_at_most_one_item_per_tick(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, hunger=10)
    first = FoodItem("grass", 5, 0)
    second = FoodItem("berry", 0, 5)
    foods = [first, second]
    clock = make_clock(rabbit, foods, rng=scripted())

    clock.tick(0.0)
    assert foods == [second]
    assert rabbit.hunger == 25

    clock.tick(0.0)
    assert foods == []
    assert len(recorder.of_type("food:consumed")) == 2


def test_arrival_eats_once_and_settles_idle(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, hunger=40, state=RabbitState.WALKING)
    rabbit.set_target(5, 0)
    foods = [FoodItem("grass", 5, 0), FoodItem("grass", 5, 0)]
    clock = make_clock(rabbit, foods, rng=scripted())
    clock.tick(0.0)

    assert (rabbit.x, rabbit.y) == (5.0, 0.0)
    assert rabbit.target is None
    assert rabbit.hunger == 55
    assert rabbit.state == RabbitState.IDLE
    assert clock.eating_countdown is None
    assert clock.behavior_manager.is_free(rabbit)
    assert len(foods) == 1
    assert len(recorder.of_type("food:consumed")) == 1
    changes = [e.data for e in recorder.of_type("rabbit:state_changed")]
    assert changes == [
        {"old_state": "walking", "new_state": "eating"},
        {"old_state": "eating", "new_state": "idle"},
    ]


def test_arrival_without_food_when_hungry_may_show_distress(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, hunger=20, state=RabbitState.WALKING)
    rabbit.set_target(5, 0)
    make_clock(rabbit, rng=scripted(0.1)).tick(0.0)

    assert rabbit.state == RabbitState.IDLE
    moods = recorder.of_type("rabbit:mood")
    assert [e.data["mood"] for e in moods] == ["distress"]
    assert moods[0].data["emoji"] == "😢"


def test_arrival_without_food_not_always_distressed(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, hunger=20, state=RabbitState.WALKING)
    rabbit.set_target(5, 0)
    make_clock(rabbit, rng=scripted(0.9)).tick(0.0)

    assert rabbit.state == RabbitState.IDLE
    assert recorder.of_type("rabbit:mood") == []


def test_eating_reverts_after_half_a_second(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0, hunger=50)
    clock = make_clock(rabbit, [FoodItem("grass", 0, 0)], rng=scripted())

    clock.tick(0.0)
    assert rabbit.state == RabbitState.EATING
    clock.tick(0.3)
    assert rabbit.state == RabbitState.EATING
    clock.tick(0.25)
    assert rabbit.state == RabbitState.IDLE
    assert clock.eating_countdown is None


def test_selected_eating_label_also_reverts(make_clock, scripted):
    rabbit = Rabbit(x=0, y=0)
    clock = make_clock(rabbit, rng=scripted(0.95))

    clock.tick(2.0)
    assert rabbit.state == RabbitState.EATING
    clock.tick(0.6)
    assert rabbit.state == RabbitState.IDLE


def test_restored_eating_rabbit_finishes_meal(make_clock, scripted):
    rabbit = Rabbit(state=RabbitState.EATING)
    clock = make_clock(rabbit, rng=scripted())
    assert clock.eating_countdown == 500
    clock.tick(0.5)
    assert rabbit.state == RabbitState.IDLE


def test_hunger_decays_once_per_full_second(make_clock):
    rabbit = Rabbit(x=400, y=300)
    clock = make_clock(rabbit, rng=random.Random(1))

    clock.tick(0.9)
    assert rabbit.hunger == 100
    clock.tick(0.2)
    assert rabbit.hunger == 99.5
    clock.tick(2.5)
    assert rabbit.hunger == 98.5
    assert rabbit.hunger_timer == pytest.approx(600)


def test_hunger_never_drops_below_zero(make_clock):
    rabbit = Rabbit(x=400, y=300, hunger=1)
    make_clock(rabbit, rng=random.Random(2)).tick(10.0)
    assert rabbit.hunger == 0


def test_dance_ends_after_countdown(make_clock, scripted, recorder):
    rabbit = Rabbit()
    rabbit.begin_dancing()
    clock = make_clock(rabbit, rng=scripted(0.1))

    clock.tick(1.0)
    assert rabbit.state == RabbitState.DANCING
    clock.tick(1.0)
    assert rabbit.state == RabbitState.IDLE
    changes = [e.data for e in recorder.of_type("rabbit:state_changed")]
    assert changes == [{"old_state": "dancing", "new_state": "idle"}]


def test_behavior_runs_every_two_seconds(make_clock, scripted):
    rabbit = Rabbit()
    clock = make_clock(rabbit, rng=scripted(0.1, 0.1))

    for _ in range(4):
        clock.tick(0.5)
    assert rabbit.behavior_timer == 0
    for _ in range(4):
        clock.tick(0.5)
    # both scripted draws used, a third would fail
    assert clock.rng.values == []


def test_mood_after_ten_seconds(make_clock, scripted, recorder):
    rabbit = Rabbit()
    clock = make_clock(rabbit, rng=scripted(0.1))

    clock.tick(10.0)
    moods = recorder.of_type("rabbit:mood")
    assert [e.data["mood"] for e in moods] == ["content"]
    assert rabbit.mood_timer == 0


@pytest.mark.parametrize("hunger, state, mood", [
    (10, RabbitState.IDLE, "distress"),
    (50, RabbitState.WALKING, "walking"),
    (50, RabbitState.IDLE, "love"),
])
def test_mood_priority(make_clock, scripted, recorder, hunger, state, mood):
    rabbit = Rabbit(x=400, y=300, hunger=hunger, state=state)
    if state == RabbitState.WALKING:
        rabbit.set_target(700, 300)
    rabbit.mood_timer = 9999
    make_clock(rabbit, rng=scripted()).tick(0.001)
    assert [e.data["mood"] for e in recorder.of_type("rabbit:mood")] == [mood]


def test_stage_change_event(make_clock, scripted, recorder):
    rabbit = Rabbit(age=29.9)
    make_clock(rabbit, rng=scripted()).tick(0.2)

    changed = recorder.of_type("rabbit:stage_changed")
    assert len(changed) == 1
    assert changed[0].data["old_stage"] == "baby"
    assert changed[0].data["new_stage"] == "teen"
    assert recorder.of_type("rabbit:mood")[0].data["mood"] == "celebrate"


def test_step_order_within_a_tick(make_clock, scripted, recorder):
    rabbit = Rabbit(x=0, y=0, age=29.9, hunger=50)
    make_clock(rabbit, [FoodItem("berry", 5, 0)], rng=scripted()).tick(0.2)

    assert recorder.types == [
        "rabbit:stage_changed",
        "rabbit:mood",
        "food:consumed",
        "rabbit:mood",
        "rabbit:state_changed",
    ]


def test_placing_food_near_hungry_rabbit_sends_it(make_clock, scripted):
    rabbit = Rabbit(hunger=40)
    clock = make_clock(rabbit, rng=scripted())
    clock.place_food("carrot", 300, 300)
    assert rabbit.state == RabbitState.WALKING
    assert (rabbit.target.x, rabbit.target.y) == (300, 300)


def test_placing_food_near_fed_rabbit(make_clock, scripted, recorder):
    rabbit = Rabbit(hunger=60)
    clock = make_clock(rabbit, rng=scripted())
    food = clock.place_food("carrot", 300, 300)
    assert clock.foods == [food]
    assert rabbit.target is None
    assert recorder.of_type("food:placed")[0].data == {"type": "carrot", "x": 300.0, "y": 300.0}


def test_spawned_food_lands_near_bottom(make_clock):
    clock = make_clock(Rabbit(), rng=random.Random(5))
    for _ in range(100):
        food = clock.spawn_food()
        assert 50 <= food.x <= 750
        assert 500 <= food.y <= 550


def test_auto_spawn(make_clock):
    rabbit = Rabbit()
    clock = make_clock(rabbit, rng=random.Random(8), food_spawn_interval=1000)
    clock.tick(0.5)
    assert clock.foods == []
    clock.tick(0.5)
    assert len(clock.foods) == 1


def test_auto_spawn_disabled_by_default(make_clock):
    clock = make_clock(Rabbit(), rng=random.Random(8))
    clock.tick(1.5)
    assert clock.foods == []
