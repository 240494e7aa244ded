"""PySide6 用户界面"""

from .radial_waveform_widget import RadialWaveformWidget
from .recorder_window import RecorderWindow
from .timer_manager import QtCountdownTimer, TimerManager

__all__ = ["RadialWaveformWidget", "RecorderWindow", "QtCountdownTimer", "TimerManager"]
