"""Utilities module with unified logging system"""

from .exceptions import *  # noqa: F403, F401
from .unified_logger import (  # noqa: F401
    LogCategory,
    LogLevel,
    TraceContext,
    app_logger,
    get_app_home,
    logger,
)

__all__ = [  # noqa: F405
    # Core exceptions
    "ErrorSeverity",
    "ErrorCategory",
    "RadialWaveError",
    "AudioRecordingError",
    "AudioPermissionError",
    "AudioDeviceUnavailableError",
    "ConfigurationError",
    "PersistenceError",
    "ComponentStateError",
    # Logging
    "logger",
    "app_logger",
    "LogLevel",
    "LogCategory",
    "TraceContext",
    "get_app_home",
]
