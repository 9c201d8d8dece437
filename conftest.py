"""
Shared fixtures for the Bunny Garden test suite.
"""

import random

import pytest

from event_dispatcher import EventDispatcher


class ScriptedRandom(random.Random):
    """
    Random source whose random() returns queued values in order.
    Anything else (choice, shuffle) falls through to a seeded generator.
    """

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if not self.values:
            raise AssertionError("random() called more often than scripted")
        return self.values.pop(0)

    def getrandbits(self, k):
        return super().getrandbits(k)


class EventRecorder:
    """Collects every event a dispatcher sends."""

    def __init__(self, dispatcher):
        self.events = []
        dispatcher.add_listener("*", self.events.append)

    @property
    def types(self):
        return [event.event_type for event in self.events]

    def of_type(self, event_type):
        return [event for event in self.events if event.event_type == event_type]

    def clear(self):
        self.events.clear()


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def recorder(dispatcher):
    return EventRecorder(dispatcher)


@pytest.fixture
def scripted():
    """Factory: scripted(0.1, 0.5) gives a ScriptedRandom with those values."""
    def make(*values):
        return ScriptedRandom(values)
    return make
