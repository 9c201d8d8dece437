"""
Timer coordination for running a garden session without a GUI.

A GUI host drives the session from its own timers; headless runs use this
coordinator instead. It executes named periodic tasks on an asyncio loop,
each optionally gated by a condition, so the frame driver and the autosave
both simply stop firing while the session is not running.
"""

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Callable, Optional, Dict

from event_dispatcher import Event, EventDispatcher


@dataclass
class TimedTask:
    """
    Represents a task that should be executed at specific intervals.

    Attributes:
        name: Unique identifier for the task
        interval: Time between executions in seconds
        callback: Function to execute, sync or async
        condition: Optional function that must return True for execution
        last_run: Timestamp of last execution
        priority: Lower numbers run first
    """
    name: str
    interval: float
    callback: Callable
    condition: Optional[Callable] = None
    last_run: float = 0
    priority: int = 0


class TimerCoordinator:
    """
    Coordinates timed callbacks on a single cooperative loop.

    Tasks run one after another inside the loop, never concurrently, so a
    save can never observe a half-finished tick.
    """

    def __init__(self, dispatcher: Optional[EventDispatcher] = None, resolution: float = 0.005):
        """
        Args:
            dispatcher: Receives timer:* notifications.
            resolution: Loop sleep between scans, in seconds.
        """
        self.dispatcher = dispatcher or EventDispatcher()
        self.resolution = resolution
        self.tasks: Dict[str, TimedTask] = {}
        self.is_running: bool = False

    def add_task(self,
                 name: str,
                 interval: float,
                 callback: Callable,
                 condition: Optional[Callable] = None,
                 priority: int = 0) -> None:
        """
        Add a new task using parameters.

        Args:
            name: Unique identifier for the task
            interval: Time between executions in seconds
            callback: Function to execute
            condition: Optional function that must return True for execution
            priority: Lower numbers run first
        """
        self.tasks[name] = TimedTask(
            name=name,
            interval=interval,
            callback=callback,
            condition=condition,
            priority=priority,
            last_run=time.monotonic()
        )
        self.dispatcher.dispatch_event(Event("timer:task_added", {
            "task_name": name,
            "interval": interval
        }))

    async def run(self, duration: Optional[float] = None) -> None:
        """
        Main loop for executing tasks at their specified intervals.

        Args:
            duration: Stop after this many seconds; run until stop() if None.
        """
        self.is_running = True
        started = time.monotonic()

        while self.is_running:
            current_time = time.monotonic()
            if duration is not None and current_time - started >= duration:
                break

            for task in sorted(self.tasks.values(), key=lambda x: (x.priority, x.interval)):
                if current_time - task.last_run >= task.interval:
                    task.last_run = current_time
                    if task.condition is None or task.condition():
                        await self._execute_task(task)

            await asyncio.sleep(self.resolution)

        self.stop()

    async def _execute_task(self, task: TimedTask) -> None:
        """
        Execute a single task. Errors are reported, not raised, so one bad
        task cannot stop the loop.
        """
        try:
            result = task.callback()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.dispatcher.dispatch_event(Event("timer:task_execution_error", {
                "task_name": task.name,
                "error": str(e)
            }))

    def stop(self) -> None:
        """Stop the timer coordinator."""
        if self.is_running:
            self.is_running = False
            self.dispatcher.dispatch_event(Event("timer:stopped", None))
