"""QTimer lifecycle helpers"""

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from ..core.interfaces import ICountdownTimer
from ..utils import ComponentStateError, app_logger


class TimerManager:
    """Safe QTimer start/stop with idempotent signal connection"""

    @staticmethod
    def safe_timer_connect(
        timer: QTimer, target_method: Callable, description: str = ""
    ) -> None:
        """安全地连接定时器，防止重复连接"""
        try:
            timer.timeout.disconnect(target_method)
        except (TypeError, RuntimeError):
            pass  # signal未连接, 或 C++ object已删除

        timer.timeout.connect(target_method)

        if description:
            app_logger.log_gui_operation(f"Timer connected: {description}", level="DEBUG")

    @staticmethod
    def safe_timer_start(
        timer: QTimer, interval: int, target_method: Callable, description: str = ""
    ) -> None:
        """安全地启动定时器

        Args:
            timer: QTimer instance to start
            interval: Timer interval in milliseconds
            target_method: Method to connect to timer.timeout signal
            description: Optional description for logging
        """
        if timer.isActive():
            timer.stop()

        TimerManager.safe_timer_connect(timer, target_method)
        timer.start(interval)

        if description:
            app_logger.log_gui_operation(
                f"Timer started: {description}", f"interval={interval}ms", level="DEBUG"
            )

    @staticmethod
    def safe_timer_stop(timer: QTimer, description: str = "") -> None:
        """安全地停止定时器，重复调用无副作用"""
        if not timer.isActive():
            return

        timer.stop()
        if description:
            app_logger.log_gui_operation(f"Timer stopped: {description}", level="DEBUG")


class QtCountdownTimer(ICountdownTimer):
    """把 QTimer 包装为状态机使用的倒计时定时器"""

    def __init__(self, on_tick: Optional[Callable[[], None]] = None,
                 parent: Optional[QObject] = None):
        self._timer = QTimer(parent)
        self._on_tick = on_tick

    def set_callback(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick

    def start(self, interval_ms: int) -> None:
        if self._on_tick is None:
            raise ComponentStateError("Countdown timer started without a tick callback")
        TimerManager.safe_timer_start(self._timer, interval_ms, self._on_tick, "countdown")

    def stop(self) -> None:
        TimerManager.safe_timer_stop(self._timer, "countdown")

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()
