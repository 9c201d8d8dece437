"""
Main entry point for Bunny Garden.
Builds the session and hands it to either the Qt window or the headless timer loop.
"""

from __future__ import annotations
import argparse
import asyncio
import random
import sys
from datetime import datetime

from dotenv import load_dotenv

from config import Config
from core.session import GardenSession
from core.timer import TimerCoordinator
from loggers import LogManager, SystemLogger
from pet.state_persistence import RabbitStateManager


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bunny Garden virtual pet")
    parser.add_argument("--headless", action="store_true",
                        help="run without a window, printing moods to the console")
    parser.add_argument("--duration", type=float, default=None,
                        help="headless only: stop after this many seconds")
    parser.add_argument("--save-dir", default=None,
                        help="directory for the save slot (default: BUNNY_SAVE_DIR or data/save)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed the random source for a reproducible run")
    return parser.parse_args(argv)


def print_mood(event) -> None:
    print(f"  {event.data['emoji']}  ({event.data['mood']})")


def print_status(session: GardenSession) -> None:
    status = session.status()
    print(f"[{datetime.now().strftime('%H:%M:%S')}] {status['stage']} | {status['state']} | "
          f"hunger {status['hunger']:.1f} ({status['hunger_descriptor']}) | "
          f"food {status['food_count']}")


async def run_headless(session: GardenSession, duration: float | None = None) -> None:
    """Drives the session from the timer coordinator until stopped."""
    timer = TimerCoordinator(session.events)
    timer.add_task("frame", Config.FRAME_INTERVAL / 1000, session.frame,
                   condition=session.is_running, priority=0)
    timer.add_task("autosave", Config.SAVE_INTERVAL / 1000, session.autosave,
                   condition=session.is_running, priority=1)
    timer.add_task("status", 5.0, lambda: print_status(session), priority=2)

    session.events.add_listener("rabbit:mood", print_mood)
    session.start()
    print_status(session)
    try:
        await timer.run(duration)
    finally:
        timer.stop()


def run_gui(session: GardenSession) -> int:
    from PyQt5.QtWidgets import QApplication
    from pet_widget import GardenWidget

    app = QApplication(sys.argv)
    widget = GardenWidget(session)
    widget.show()
    return app.exec_()


def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)
    headless = args.headless or Config.get_headless()
    LogManager.setup_logging(console=headless)

    print(f"Bunny Garden v{Config.VERSION} - started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    rng = random.Random(args.seed) if args.seed is not None else None
    session = GardenSession(state_manager=RabbitStateManager(args.save_dir), rng=rng)

    exit_code = 0
    try:
        if headless:
            print("gui disabled; press Ctrl+C to stop")
            asyncio.run(run_headless(session, args.duration))
        else:
            exit_code = run_gui(session)
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        SystemLogger.error(f"Fatal error: {type(e).__name__}: {e}")
        raise
    finally:
        session.shutdown()
        print("Goodbye!")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
