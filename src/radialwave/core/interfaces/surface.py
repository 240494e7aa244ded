"""绘图表面接口定义"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from ...geometry.types import Point


@dataclass(frozen=True)
class StrokeStyle:
    """描边样式

    Attributes:
        width: 线宽
        color: RGB 颜色
        alpha: 发光层不透明度 (0.0 - 1.0)
        glow: 发光半径，0 表示不发光
    """

    width: float = 3.0
    color: Tuple[int, int, int] = (255, 255, 255)
    alpha: float = 0.8
    glow: float = 12.0


class IDrawingSurface(ABC):
    """正方形画布的路径/描边/填充原语"""

    @property
    @abstractmethod
    def size(self) -> int:
        """画布边长"""

    @abstractmethod
    def clear(self) -> None:
        """清空画布"""

    @abstractmethod
    def begin_path(self) -> None:
        """开始新路径"""

    @abstractmethod
    def move_to(self, point: Point) -> None:
        pass

    @abstractmethod
    def line_to(self, point: Point) -> None:
        pass

    @abstractmethod
    def cubic_to(self, cp1: Point, cp2: Point, end: Point) -> None:
        """三次贝塞尔曲线段"""

    @abstractmethod
    def stroke(self, style: StrokeStyle) -> None:
        """按样式描边当前路径"""

    @abstractmethod
    def fill_marker(self, center: Point, radius: float, style: StrokeStyle) -> None:
        """绘制实心圆点"""
