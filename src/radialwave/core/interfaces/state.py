"""录音状态与定时器接口定义"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict


class RecordingState(Enum):
    """录音会话状态"""

    IDLE = "idle"
    RECORDING = "recording"
    FINALIZED = "finalized"


# 触发按钮在各状态下的文字
TRIGGER_LABELS: Dict[RecordingState, str] = {
    RecordingState.IDLE: "Record",
    RecordingState.RECORDING: "Recording...",
    RecordingState.FINALIZED: "Continue",
}

# 触发按钮的样式状态（用于 Qt 动态属性）
TRIGGER_STYLES: Dict[RecordingState, str] = {
    RecordingState.IDLE: "idle",
    RecordingState.RECORDING: "recording",
    RecordingState.FINALIZED: "continue",
}


class ICountdownTimer(ABC):
    """固定间隔的倒计时定时器

    QTimer 本身就满足这个接口；测试中使用 Mock。
    """

    @abstractmethod
    def start(self, interval_ms: int) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass
