"""
Central logging management for Bunny Garden.
Handles logger setup and configuration.
"""

import logging
import os
from pathlib import Path
from datetime import datetime
from dotenv import load_dotenv
from .formatters import InternalFormatter, PersistenceFormatter, EventFormatter, ConsoleFormatter
from .loggers import SafeStreamHandler


class LogManager:
    """Log management with one output stream per subsystem."""

    LOGGER_NAMES = ['bunny.internal', 'bunny.system', 'bunny.persistence', 'bunny.events']

    @staticmethod
    def setup_logging(log_base: str = 'data/logs', console: bool = False):
        """
        Initialize all loggers with appropriate handlers and configurable levels.

        Args:
            log_base (str): Root directory for the per-subsystem log folders.
            console (bool): Also echo system and persistence messages to stdout.
        """
        load_dotenv()

        LEVELS = {
            'CRITICAL': logging.CRITICAL,
            'ERROR': logging.ERROR,
            'WARNING': logging.WARNING,
            'INFO': logging.INFO,
            'DEBUG': logging.DEBUG,
        }

        log_base = Path(log_base)
        internal_dir = log_base / 'internal'
        system_dir = log_base / 'system'
        persistence_dir = log_base / 'persistence'
        event_dir = log_base / 'events'
        for directory in [internal_dir, system_dir, persistence_dir, event_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

        config = {
            'bunny.internal': (internal_dir / f"internal_{timestamp}.log", InternalFormatter()),
            'bunny.system': (system_dir / f"system_{timestamp}.log", InternalFormatter()),
            'bunny.persistence': (persistence_dir / f"persistence_{timestamp}.log", PersistenceFormatter()),
            'bunny.events': (event_dir / f"events_{timestamp}.log", EventFormatter())
        }

        for logger_name, (log_file, formatter) in config.items():
            logger = logging.getLogger(logger_name)

            # e.g., 'bunny.system' -> 'LOG_LEVEL_BUNNY_SYSTEM'
            env_var_key = f"LOG_LEVEL_{logger_name.upper().replace('.', '_')}"
            log_level_name = os.getenv(env_var_key, 'INFO')
            log_level = LEVELS.get(log_level_name.upper(), logging.INFO)
            logger.setLevel(log_level)

            # Avoid adding duplicate handlers if this function is called more than once
            if logger.hasHandlers():
                continue

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            if console and logger_name in ('bunny.system', 'bunny.persistence'):
                console_handler = SafeStreamHandler()
                console_handler.setFormatter(ConsoleFormatter())
                logger.addHandler(console_handler)
