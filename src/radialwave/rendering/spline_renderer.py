"""Catmull-Rom 样条渲染器

把有序点列转换为一串三次贝塞尔曲线段后交给绘图表面描边。曲线经过每一个输入
点，切线由相邻点决定：

    cp1 = p1 + (p2 - p0) * (tension / 6)
    cp2 = p2 - (p3 - p1) * (tension / 6)

首段的 p0 取 p1 本身，末段的 p3 取 p2 本身。
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Sequence

import numpy as np

from ..core.interfaces import IDrawingSurface, StrokeStyle
from ..geometry.types import Point


class BezierSegment(NamedTuple):
    """从 start 到 end 的三次贝塞尔段"""

    start: Point
    cp1: Point
    cp2: Point
    end: Point


@dataclass(frozen=True)
class SplineStyle:
    """一种渲染模式的全部参数"""

    tension: float
    closed: bool
    stroke: StrokeStyle
    marker_radius: float = 3.0


# 进行中的环：开放曲线，张力较大，更贴合原始采样
PROGRESS_STYLE = SplineStyle(
    tension=2.0,
    closed=False,
    stroke=StrokeStyle(width=3.0, alpha=0.8, glow=12.0),
)

# 最终轮廓：闭合曲线，张力较小，更圆润；线宽和发光更强
FINAL_STYLE = SplineStyle(
    tension=0.5,
    closed=True,
    stroke=StrokeStyle(width=4.0, alpha=0.9, glow=15.0),
)


def catmull_rom_segments(
    points: Sequence[Point], tension: float, closed: bool = False
) -> List[BezierSegment]:
    """计算经过全部点的贝塞尔段

    Args:
        points: 有序点列
        tension: 张力
        closed: 是否闭合；点数大于2时追加首点

    Returns:
        贝塞尔段列表，点数少于2时为空
    """
    pts = [Point(float(p[0]), float(p[1])) for p in points]
    if closed and len(pts) > 2:
        pts.append(pts[0])
    if len(pts) < 2:
        return []

    arr = np.asarray(pts, dtype=np.float64)
    p1 = arr[:-1]
    p2 = arr[1:]
    p0 = np.vstack([arr[:1], arr[:-2]])
    p3 = np.vstack([arr[2:], arr[-1:]])

    k = tension / 6.0
    cp1 = p1 + (p2 - p0) * k
    cp2 = p2 - (p3 - p1) * k

    return [
        BezierSegment(pts[i], Point(*cp1[i]), Point(*cp2[i]), pts[i + 1])
        for i in range(len(pts) - 1)
    ]


class SplineRenderer:
    """在绘图表面上绘制平滑曲线"""

    def __init__(self, progress_style: SplineStyle = PROGRESS_STYLE,
                 final_style: SplineStyle = FINAL_STYLE):
        self.progress_style = progress_style
        self.final_style = final_style

    def draw(self, surface: IDrawingSurface, points: Sequence[Point],
             style: SplineStyle) -> None:
        """按样式绘制点列

        0 个点不绘制；1 个点绘制实心圆点；2 个点绘制直线段；
        3 个及以上使用 Catmull-Rom 样条。
        """
        count = len(points)
        if count == 0:
            return

        if count == 1:
            surface.fill_marker(points[0], style.marker_radius, style.stroke)
            return

        surface.begin_path()
        surface.move_to(points[0])
        if count == 2:
            surface.line_to(points[1])
        else:
            for segment in catmull_rom_segments(points, style.tension, style.closed):
                surface.cubic_to(segment.cp1, segment.cp2, segment.end)
        surface.stroke(style.stroke)

    def draw_progress(self, surface: IDrawingSurface, points: Sequence[Point]) -> None:
        self.draw(surface, points, self.progress_style)

    def draw_final(self, surface: IDrawingSurface, points: Sequence[Point]) -> None:
        self.draw(surface, points, self.final_style)
