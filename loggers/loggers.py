"""
Specialized loggers for different Bunny Garden subsystems.
Provides clean interfaces for specific logging needs.
"""

import logging
import json
import re
from typing import Dict, Any, Optional


def strip_emojis(text: str) -> str:
    emoji_pattern = re.compile("["
        u"\U0001F600-\U0001F64F"  # emoticons
        u"\U0001F300-\U0001F5FF"  # symbols & pictographs
        u"\U0001F680-\U0001F6FF"  # transport & map symbols
        u"\U0001F1E0-\U0001F1FF"  # flags (iOS)
        u"\U00002702-\U000027B0"  # additional symbols
        u"\U000024C2-\U0001F251"
        u"\U0001F900-\U0001F9FF"  # supplemental symbols and pictographs
        u"\U00002764\U0000FE0F"   # heart + variation selector
    "]+", flags=re.UNICODE)
    return emoji_pattern.sub('', text)


class SafeStreamHandler(logging.StreamHandler):
    """
    A stream handler that uses UTF-8 encoding and replaces unencodable characters.
    This prevents UnicodeEncodeError when logging emoji or other characters.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            stream.write(msg.encode('utf-8', errors='replace').decode('utf-8') + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


class SystemLogger:
    """Logger for session lifecycle and host integration."""

    @staticmethod
    def error(message: str):
        """Log error-level system events."""
        logger = logging.getLogger('bunny.system')
        logger.error(f"System Error: {strip_emojis(message)}")

    @staticmethod
    def warning(message: str):
        """Log warning-level system events."""
        logger = logging.getLogger('bunny.system')
        logger.warning(f"System Warning: {strip_emojis(message)}")

    @staticmethod
    def debug(message: str):
        logger = logging.getLogger('bunny.system')
        logger.debug(f"System Debug: {strip_emojis(message)}")

    @staticmethod
    def info(message: str):
        logger = logging.getLogger('bunny.system')
        logger.info(f"System Info: {strip_emojis(message)}")

    @staticmethod
    def log_lifecycle(old_state: str, new_state: str):
        logger = logging.getLogger('bunny.system')
        logger.info(f"Session: {old_state} -> {new_state}")


class InternalLogger:
    """Logger for simulation state changes."""

    @staticmethod
    def log_state_change(component: str, old_value: Any, new_value: Any):
        logger = logging.getLogger('bunny.internal')
        logger.debug(
            f"State Change: {component}\n"
            f"  From: {old_value}\n"
            f"  To:   {new_value}"
        )
        logger.info(f"Internal: {component} changed to {new_value}")

    @staticmethod
    def log_behavior(behavior: str, context: Optional[Dict] = None):
        logger = logging.getLogger('bunny.internal')
        if context:
            logger.debug(
                f"Behavior: {behavior}\n"
                f"Context: {json.dumps(context, indent=2, default=str)}"
            )
        else:
            logger.debug(f"Behavior: {behavior}")
        logger.info(f"Internal: Selected {behavior}")


class PersistenceLogger:
    """Logger for the save slot."""

    @staticmethod
    def error(message: str):
        logger = logging.getLogger('bunny.persistence')
        logger.error(f"Save Error: {strip_emojis(message)}")

    @staticmethod
    def warning(message: str):
        logger = logging.getLogger('bunny.persistence')
        logger.warning(f"Save Warning: {strip_emojis(message)}")

    @staticmethod
    def debug(message: str):
        logger = logging.getLogger('bunny.persistence')
        logger.debug(f"Save Debug: {strip_emojis(message)}")

    @staticmethod
    def info(message: str):
        logger = logging.getLogger('bunny.persistence')
        logger.info(f"Save Info: {strip_emojis(message)}")

    @staticmethod
    def log_save(path: str, food_count: int):
        logger = logging.getLogger('bunny.persistence')
        logger.debug(f"Saved slot {path} ({food_count} food items)")

    @staticmethod
    def log_load(path: str, success: bool, reason: Optional[str] = None):
        logger = logging.getLogger('bunny.persistence')
        if success:
            logger.info(f"Loaded slot {path}")
        elif reason:
            logger.warning(f"No usable save in {path}: {strip_emojis(reason)}")
        else:
            logger.info(f"No save in {path}")


class EventLogger:
    """Logger for event system operations."""
    @staticmethod
    def error(message: str):
        logger = logging.getLogger('bunny.events')
        logger.error(f"Event Error: {strip_emojis(message)}")

    @staticmethod
    def warning(message: str):
        logger = logging.getLogger('bunny.events')
        logger.warning(f"Event Warning: {strip_emojis(message)}")

    @staticmethod
    def debug(message: str):
        logger = logging.getLogger('bunny.events')
        logger.debug(f"Event Debug: {strip_emojis(message)}")

    @staticmethod
    def log_event_dispatch(event_type: str, data: Any = None, metadata: Optional[Dict] = None):
        logger = logging.getLogger('bunny.events')
        components = [f"Event Dispatched: {strip_emojis(event_type)}"]
        if data is not None:
            if isinstance(data, dict):
                processed_data = {k: strip_emojis(str(v)) for k, v in data.items()}
                data_str = json.dumps(processed_data, indent=2)
                components.append(f"Data:\n{data_str}")
            else:
                components.append(f"Data: {strip_emojis(str(data))}")
        if metadata:
            meta_str = json.dumps({k: strip_emojis(str(v)) for k, v in metadata.items()}, indent=2)
            components.append(f"Metadata:\n{meta_str}")
        logger.debug('\n'.join(components))
