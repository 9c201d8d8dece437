"""
Formatters for different log types in Bunny Garden.
Handles consistent formatting across different logging streams.
"""

import logging


class InternalFormatter(logging.Formatter):
    """Formatter for simulation and system events."""

    def format(self, record):
        timestamp = self.formatTime(record)
        return (
            f"[{timestamp}] {record.levelname:8} "
            f"{record.name.split('.')[-1]:10} | {record.getMessage()}"
        )


class PersistenceFormatter(logging.Formatter):
    """Formatter for save slot events."""

    def format(self, record):
        timestamp = self.formatTime(record)
        msg = record.getMessage()
        return f"[{timestamp}] {record.levelname:8} SAVE | {msg}"


class EventFormatter(logging.Formatter):
    """Formatter for event dispatcher"""

    def format(self, record):
        timestamp = self.formatTime(record)
        return f"[{timestamp}] {record.levelname:8} EVENT | {record.getMessage()}"


class ConsoleFormatter(logging.Formatter):
    """Minimal formatter for console output."""

    def format(self, record):
        if record.levelno >= logging.WARNING:
            return f"! {record.getMessage()}"
        return f"- {record.getMessage()}"
