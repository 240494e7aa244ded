"""渲染模块

QPainter 绘图表面位于 radialwave.rendering.qt_surface。
"""

from .spline_renderer import (
    FINAL_STYLE,
    PROGRESS_STYLE,
    BezierSegment,
    SplineRenderer,
    SplineStyle,
    catmull_rom_segments,
)

__all__ = [
    "BezierSegment",
    "SplineRenderer",
    "SplineStyle",
    "PROGRESS_STYLE",
    "FINAL_STYLE",
    "catmull_rom_segments",
]
