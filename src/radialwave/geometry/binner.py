"""角度分箱器

把录音开始后的经过时间量化为 N 个固定角度分箱之一。同一分箱在其时间窗口内
可能被多次写入，只保留最后一次的振幅；分箱的角度只由序号决定，与帧到达时间
无关，因此帧率抖动不会影响几何结果。
"""

import math
from typing import Dict, List

from .types import AngularSample


class AngularBinner:
    """固定数量角度分箱的采样存储"""

    def __init__(self, bin_count: int, time_limit: float):
        """
        Args:
            bin_count: 分箱数量 N
            time_limit: 录音时长（秒）
        """
        if bin_count < 1:
            raise ValueError(f"bin_count must be >= 1, got {bin_count}")
        if time_limit <= 0:
            raise ValueError(f"time_limit must be > 0, got {time_limit}")

        self._bin_count = bin_count
        self._time_limit = float(time_limit)
        self._bins: Dict[int, AngularSample] = {}

    @property
    def bin_count(self) -> int:
        return self._bin_count

    @property
    def time_limit(self) -> float:
        return self._time_limit

    def bin_index(self, elapsed: float) -> int:
        """经过时间对应的分箱序号，结果限制在 [0, N-1]"""
        index = math.floor((elapsed / self._time_limit) * self._bin_count)
        return min(max(index, 0), self._bin_count - 1)

    def bin_angle(self, index: int) -> float:
        """分箱序号对应的角度（弧度）"""
        return index * 2 * math.pi / self._bin_count

    def record(self, elapsed: float, amplitude: float) -> int:
        """写入一次采样，已有的分箱被覆盖

        Returns:
            写入的分箱序号
        """
        index = self.bin_index(elapsed)
        self._bins[index] = AngularSample(angle=self.bin_angle(index), amplitude=amplitude)
        return index

    def samples(self) -> List[AngularSample]:
        """已填充的分箱，按序号排列"""
        return [self._bins[i] for i in sorted(self._bins)]

    def populated_indices(self) -> List[int]:
        return sorted(self._bins)

    def reset(self) -> None:
        self._bins.clear()

    def __len__(self) -> int:
        return len(self._bins)
