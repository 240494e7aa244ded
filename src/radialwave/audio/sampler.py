"""振幅采样器"""

import math
from typing import Optional

import numpy as np

# 无符号8位时域样本的中点（静音）
SILENCE_LEVEL = 128.0


def average_amplitude(buffer: np.ndarray) -> float:
    """把 uint8 时域缓冲区归约为 [-1, 1] 内的平均振幅"""
    return float(np.mean(buffer, dtype=np.float64)) / SILENCE_LEVEL - 1.0


def transform_amplitude(amplitude: float, gain: float) -> float:
    """有界非线性变换 sin(a·π)·gain

    奇对称：transform(-a) == -transform(a)；在两端有压缩缓动。
    """
    return math.sin(amplitude * math.pi) * gain


class AmplitudeSampler:
    """每帧把音频缓冲区快照归约为一个有符号半径偏移量"""

    def __init__(self, gain: float = 1400.0, smoothing_alpha: Optional[float] = None):
        """
        Args:
            gain: 非线性变换后的缩放常数
            smoothing_alpha: 保留的指数平滑系数，当前不参与计算
        """
        self.gain = float(gain)
        self.smoothing_alpha = smoothing_alpha
        self._last_value = 0.0

    @property
    def last_value(self) -> float:
        return self._last_value

    def sample(self, buffer: Optional[np.ndarray]) -> float:
        """计算当前帧的缩放振幅

        缓冲区暂不可用（None 或空）时沿用上一次的结果。
        """
        if buffer is None or len(buffer) == 0:
            return self._last_value

        self._last_value = transform_amplitude(average_amplitude(buffer), self.gain)
        return self._last_value

    def reset(self) -> None:
        self._last_value = 0.0
