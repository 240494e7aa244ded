"""极坐标到画布坐标的投影"""

import math
from typing import Iterable, List

from .types import AngularSample, Point


class PointProjector:
    """把 (角度, 振幅) 映射到以画布中心为圆心的点

    半径 base_radius + amplitude 不做下限截断：为负时点会穿过圆心落到
    对侧，这是允许的几何形状。
    """

    def __init__(self, center_x: float, center_y: float, base_radius: float):
        self.center_x = float(center_x)
        self.center_y = float(center_y)
        self.base_radius = float(base_radius)

    @classmethod
    def for_canvas(cls, canvas_size: int, base_radius: float) -> "PointProjector":
        """以正方形画布中心为圆心"""
        return cls(canvas_size / 2, canvas_size / 2, base_radius)

    def project(self, sample: AngularSample) -> Point:
        radius = self.base_radius + sample.amplitude
        return Point(
            self.center_x + math.cos(sample.angle) * radius,
            self.center_y + math.sin(sample.angle) * radius,
        )

    def project_all(self, samples: Iterable[AngularSample]) -> List[Point]:
        return [self.project(sample) for sample in samples]
