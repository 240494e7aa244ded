"""录音主窗口"""

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..core.interfaces import RecordingState
from ..core.recording_state_machine import RecordingStateMachine
from ..utils import app_logger
from .radial_waveform_widget import RadialWaveformWidget

TRIGGER_STYLESHEET = """
QPushButton#triggerButton {
    color: white;
    background-color: #333;
    border: 2px solid #fff;
    border-radius: 18px;
    padding: 8px 28px;
    font-size: 15px;
}
QPushButton#triggerButton[state="recording"] {
    background-color: #b3261e;
    border-color: #ff6f61;
}
QPushButton#triggerButton[state="continue"] {
    background-color: #1e6fb3;
    border-color: #61b0ff;
}
"""


class RecorderWindow(QMainWindow):
    """画布 + 触发按钮"""

    def __init__(
        self,
        state_machine: RecordingStateMachine,
        canvas_size: int = 400,
        fps: int = 60,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle("RadialWave")
        self._state_machine = state_machine

        self.canvas = RadialWaveformWidget(state_machine, self, size=canvas_size, fps=fps)

        self.countdown_label = QLabel("", self)
        self.countdown_label.setObjectName("countdownLabel")
        self.countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.countdown_label.setStyleSheet("color: #fff; font-size: 18px;")
        self.canvas.refresh_timer.timeout.connect(self._update_countdown)

        self.trigger_button = QPushButton(state_machine.trigger_label, self)
        self.trigger_button.setObjectName("triggerButton")
        self.trigger_button.setStyleSheet(TRIGGER_STYLESHEET)
        self.trigger_button.clicked.connect(self._on_trigger_clicked)

        self.again_button = QPushButton("Record again", self)
        self.again_button.setObjectName("againButton")
        self.again_button.clicked.connect(self._on_again_clicked)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(self.trigger_button)
        buttons.addWidget(self.again_button)
        buttons.addStretch()

        layout = QVBoxLayout()
        layout.addWidget(self.canvas, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.countdown_label)
        layout.addLayout(buttons)

        central = QWidget(self)
        central.setLayout(layout)
        central.setStyleSheet("background-color: #000;")
        self.setCentralWidget(central)

        self._subscription_id = state_machine.subscribe(self._on_state_changed)
        self._sync_controls()

    def _on_trigger_clicked(self) -> None:
        app_logger.log_gui_operation("Trigger clicked", self._state_machine.trigger_label)
        self._state_machine.on_trigger()

    def _on_again_clicked(self) -> None:
        app_logger.log_gui_operation("Record again clicked")
        self._state_machine.restart()

    def _on_state_changed(self, old_state: RecordingState, new_state: RecordingState) -> None:
        self._sync_controls()

    def _sync_controls(self) -> None:
        """按钮文字和样式状态跟随会话状态"""
        self.trigger_button.setText(self._state_machine.trigger_label)
        self.trigger_button.setProperty("state", self._state_machine.trigger_style)
        self.trigger_button.style().unpolish(self.trigger_button)
        self.trigger_button.style().polish(self.trigger_button)
        self.again_button.setVisible(self._state_machine.state == RecordingState.FINALIZED)
        self._update_countdown()

    def _update_countdown(self) -> None:
        session = self._state_machine.session
        if self._state_machine.is_recording and session is not None:
            self.countdown_label.setText(str(max(session.time_left, 0)))
        else:
            self.countdown_label.setText("")

    def show_notice(self, message: str) -> None:
        """显示音频获取失败等用户提示"""
        app_logger.log_gui_operation("Notice shown", message, level="WARNING")
        QMessageBox.warning(self, "RadialWave", message)

    def closeEvent(self, event):
        self.canvas.stop_refresh()
        self._state_machine.unsubscribe(self._subscription_id)
        self._state_machine.shutdown()
        super().closeEvent(event)
