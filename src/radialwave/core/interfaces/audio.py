"""音频输入接口定义"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class IAudioStreamHandle(ABC):
    """已打开的音频输入流

    由 IAudioInputSource.open() 返回，会话结束时关闭。
    """

    @abstractmethod
    def pull(self) -> Optional[np.ndarray]:
        """获取最新的时域缓冲区快照

        Returns:
            固定长度的 uint8 数组（静音为128），暂无数据时返回 None
        """

    @abstractmethod
    def close(self) -> None:
        """释放硬件资源，重复调用不产生任何效果"""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """流是否仍然打开"""


class IAudioInputSource(ABC):
    """音频输入源接口"""

    @abstractmethod
    def open(self) -> IAudioStreamHandle:
        """打开输入流

        Returns:
            音频流句柄

        Raises:
            AudioPermissionError: 麦克风权限被拒绝
            AudioDeviceUnavailableError: 没有可用的输入设备
        """

    @abstractmethod
    def shutdown(self) -> None:
        """关闭所有流并释放底层音频系统"""
