"""
Bunny Garden logging system.
Provides structured logging for different subsystems.
"""

from .manager import LogManager
from .loggers import InternalLogger, SystemLogger, PersistenceLogger, EventLogger

__all__ = ['LogManager', 'InternalLogger', 'SystemLogger', 'PersistenceLogger', 'EventLogger']
