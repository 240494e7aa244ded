"""最终轮廓构建"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..utils import app_logger
from .projector import PointProjector
from .types import AngularSample, Point


@dataclass(frozen=True)
class WaveformContour:
    """按角度升序排列的闭合点序列

    非空时最后一个点等于第一个点。构建完成后不可变。
    """

    points: Tuple[Point, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 0 and self.points[-1] == self.points[0]

    def to_json_list(self) -> List[Dict[str, float]]:
        """序列化为 [{"x": .., "y": ..}, ...]"""
        return [point.to_dict() for point in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


class ContourBuilder:
    """把全部分箱采样一次性转换为闭合轮廓"""

    def __init__(self, projector: PointProjector):
        self._projector = projector

    def build(self, samples: Iterable[AngularSample]) -> WaveformContour:
        """排序、投影并闭合

        Args:
            samples: 会话中累积的全部角度采样

        Returns:
            完整构建好的轮廓；没有采样时为空轮廓
        """
        ordered = sorted(samples, key=lambda sample: sample.angle)
        points = self._projector.project_all(ordered)
        if points:
            points.append(Point(points[0].x, points[0].y))

        contour = WaveformContour(tuple(points))
        app_logger.log_geometry_event(
            "Contour built",
            {"samples": len(ordered), "points": len(contour), "closed": contour.is_closed},
        )
        return contour
