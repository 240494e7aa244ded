"""径向波形画布"""

from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget

from ..core.recording_state_machine import RecordingStateMachine
from ..rendering.qt_surface import QPainterSurface
from ..utils import app_logger
from .timer_manager import TimerManager


class RadialWaveformWidget(QWidget):
    """固定尺寸的正方形画布，每次刷新把绘制委托给状态机"""

    def __init__(
        self,
        state_machine: RecordingStateMachine,
        parent: Optional[QWidget] = None,
        size: int = 400,
        fps: int = 60,
    ):
        super().__init__(parent)

        self.setFixedSize(size, size)
        self.canvas_size = size
        self.background_color = QColor(0, 0, 0)
        self._state_machine = state_machine

        # 显示刷新定时器，不论状态一直运行
        self.refresh_interval = max(1, round(1000 / fps))
        self.refresh_timer = QTimer(self)
        TimerManager.safe_timer_start(
            self.refresh_timer, self.refresh_interval, self.update, "render_refresh"
        )

        app_logger.log_gui_operation(
            "Radial waveform widget initialized",
            f"size={size}, refresh={self.refresh_interval}ms",
        )

    def paintEvent(self, event):
        """每帧：清屏，然后由状态机决定画进行中的环还是最终轮廓"""
        painter = QPainter(self)
        try:
            surface = QPainterSurface(painter, self.canvas_size, self.background_color)
            self._state_machine.render_tick(surface)
        finally:
            painter.end()

    @property
    def state_machine(self) -> RecordingStateMachine:
        return self._state_machine

    def stop_refresh(self) -> None:
        TimerManager.safe_timer_stop(self.refresh_timer, "render_refresh")
