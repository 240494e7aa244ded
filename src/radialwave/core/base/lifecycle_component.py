"""Minimal lifecycle base class for components that own a native resource

Start acquires the resource, stop releases it. Both are idempotent.
"""

from abc import ABC, abstractmethod
from enum import Enum

from ...utils import LogCategory, app_logger, logger


class ComponentState(Enum):
    """Simple 3-state component lifecycle"""

    STOPPED = "stopped"  # initial state
    RUNNING = "running"
    ERROR = "error"


class LifecycleComponent(ABC):
    """Base class for lifecycle-managed components

    Usage:
        class PortAudioHost(LifecycleComponent):
            def __init__(self):
                super().__init__("PortAudioHost")
                self._host = None

            def _do_start(self) -> bool:
                self._host = open_host()
                return True

            def _do_stop(self) -> bool:
                self._host.terminate()
                return True
    """

    def __init__(self, component_name: str):
        """
        Args:
            component_name: Name for logging and identification
        """
        self._component_name = component_name
        self._state = ComponentState.STOPPED

    def start(self) -> bool:
        """Start the component

        Returns:
            True if start successful, False otherwise
        """
        if self._state == ComponentState.RUNNING:
            return True

        try:
            success = self._do_start()
        except Exception as e:
            self._state = ComponentState.ERROR
            app_logger.log_error(e, f"{self._component_name}_start")
            return False

        self._state = ComponentState.RUNNING if success else ComponentState.ERROR
        logger.info(
            f"{self._component_name} {'started' if success else 'failed to start'}",
            LogCategory.STARTUP,
            {"state": self._state.value},
            self._component_name,
        )
        return success

    def stop(self) -> bool:
        """Stop the component

        Returns:
            True if stop successful, False otherwise
        """
        if self._state == ComponentState.STOPPED:
            return True

        try:
            success = self._do_stop()
        except Exception as e:
            self._state = ComponentState.ERROR
            app_logger.log_error(e, f"{self._component_name}_stop")
            return False

        self._state = ComponentState.STOPPED if success else ComponentState.ERROR
        logger.info(
            f"{self._component_name} {'stopped' if success else 'failed to stop'}",
            LogCategory.STARTUP,
            {"state": self._state.value},
            self._component_name,
        )
        return success

    @abstractmethod
    def _do_start(self) -> bool:
        """Subclass-specific start logic"""

    @abstractmethod
    def _do_stop(self) -> bool:
        """Subclass-specific stop logic"""

    @property
    def is_running(self) -> bool:
        return self._state == ComponentState.RUNNING

    @property
    def state(self) -> ComponentState:
        return self._state

    @property
    def component_name(self) -> str:
        return self._component_name
