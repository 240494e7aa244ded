"""Structured exception hierarchy for RadialWave

Provides structured error handling with context information,
error codes, and recovery suggestions.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification"""

    CONFIGURATION = "configuration"
    AUDIO = "audio"
    STORAGE = "storage"
    UI = "ui"
    LIFECYCLE = "lifecycle"
    SYSTEM = "system"


class RadialWaveError(Exception):
    """Base exception for RadialWave

    Provides structured error information including:
    - Error codes for programmatic handling
    - Context information for debugging
    - Severity levels for appropriate response
    - Recovery suggestions for user guidance
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Args:
            message: Human-readable error message
            error_code: Unique error code for programmatic handling
            category: Error category for classification
            severity: Error severity level
            context: Additional context information
            recovery_suggestions: List of suggested recovery actions
            original_exception: Original exception if this is a wrapper
        """
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.original_exception = original_exception
        self.timestamp = time.time()
        self.error_code = error_code or self._generate_error_code()

        if "component" not in self.context:
            self.context["component"] = self.__class__.__name__

    def _generate_error_code(self) -> str:
        """Generate a default error code based on class name"""
        return f"{self.__class__.__name__.upper()}_{int(self.timestamp)}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
            "original_exception": str(self.original_exception)
            if self.original_exception
            else None,
        }

    def get_user_message(self) -> str:
        """Get user-friendly error message with recovery suggestions"""
        user_msg = self.message
        if self.recovery_suggestions:
            suggestions = "\n".join(
                f"• {suggestion}" for suggestion in self.recovery_suggestions
            )
            user_msg += f"\n\nSuggested actions:\n{suggestions}"
        return user_msg


# =============================================================================
# Audio-related Exceptions
# =============================================================================


class AudioRecordingError(RadialWaveError):
    """音频采集相关异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.AUDIO,
            severity=kwargs.pop("severity", ErrorSeverity.HIGH),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Check microphone connection and permissions",
                    "Verify audio device is not in use by another application",
                ],
            ),
            **kwargs,
        )


class AudioPermissionError(AudioRecordingError):
    """麦克风权限被拒绝"""

    def __init__(self, message: str = "Could not access your microphone.", **kwargs):
        kwargs.setdefault(
            "recovery_suggestions",
            [
                "Please check your microphone permissions",
                "Allow this application to use the microphone in system settings",
            ],
        )
        super().__init__(message, **kwargs)


class AudioDeviceUnavailableError(AudioRecordingError):
    """没有可用的音频输入设备"""

    def __init__(self, message: str = "No usable audio input device.", **kwargs):
        kwargs.setdefault(
            "recovery_suggestions",
            [
                "Connect a microphone and try again",
                "Select a different input device in the configuration file",
            ],
        )
        super().__init__(message, **kwargs)


# =============================================================================
# Configuration, Storage and Lifecycle Exceptions
# =============================================================================


class ConfigurationError(RadialWaveError):
    """配置相关异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Reset to default settings",
                    "Verify configuration file format",
                ],
            ),
            **kwargs,
        )


class PersistenceError(RadialWaveError):
    """轮廓持久化相关异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            recovery_suggestions=kwargs.pop(
                "recovery_suggestions",
                [
                    "Check that the storage directory is writable",
                    "Verify there is enough free disk space",
                ],
            ),
            **kwargs,
        )


class ComponentStateError(RadialWaveError):
    """组件状态异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.LIFECYCLE,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            **kwargs,
        )


__all__ = [
    "ErrorSeverity",
    "ErrorCategory",
    "RadialWaveError",
    "AudioRecordingError",
    "AudioPermissionError",
    "AudioDeviceUnavailableError",
    "ConfigurationError",
    "PersistenceError",
    "ComponentStateError",
]
