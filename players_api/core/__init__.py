"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings
from .database import DatabaseManager
from .exceptions import ServiceException, DatabaseError
from .health import HealthChecker, HealthReport, check_health
from .logging import setup_logging
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "DatabaseManager",
    # Exceptions
    "ServiceException",
    "DatabaseError",
    # Health
    "HealthChecker",
    "HealthReport",
    "check_health",
    # Logging
    "setup_logging",
    # Models
    "Base",
]
