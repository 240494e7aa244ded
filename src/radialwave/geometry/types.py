"""几何数据类型"""

from dataclasses import dataclass
from typing import Dict, NamedTuple


class Point(NamedTuple):
    """画布坐标系中的点"""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y)}


@dataclass(frozen=True)
class AngularSample:
    """单个角度分箱的采样

    angle 由分箱序号决定（index * 2π / N），amplitude 是相对基准半径的
    有符号偏移量。
    """

    angle: float
    amplitude: float
