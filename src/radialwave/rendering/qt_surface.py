"""基于 QPainter 的绘图表面"""

from typing import Optional

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen

from ..core.interfaces import IDrawingSurface, StrokeStyle
from ..geometry.types import Point

# 发光效果的叠加层数
GLOW_LAYERS = 4


class QPainterSurface(IDrawingSurface):
    """把路径原语转发给 QPainter

    QPainter 没有 canvas 的 shadowBlur，发光用若干层半透明宽描边近似。
    """

    def __init__(self, painter: QPainter, size: int,
                 background: Optional[QColor] = None):
        self._painter = painter
        self._size = size
        self._background = background or QColor(0, 0, 0)
        self._path = QPainterPath()
        self._painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    @property
    def size(self) -> int:
        return self._size

    def clear(self) -> None:
        self._painter.fillRect(0, 0, self._size, self._size, self._background)

    def begin_path(self) -> None:
        self._path = QPainterPath()

    def move_to(self, point: Point) -> None:
        self._path.moveTo(QPointF(point.x, point.y))

    def line_to(self, point: Point) -> None:
        self._path.lineTo(QPointF(point.x, point.y))

    def cubic_to(self, cp1: Point, cp2: Point, end: Point) -> None:
        self._path.cubicTo(
            QPointF(cp1.x, cp1.y), QPointF(cp2.x, cp2.y), QPointF(end.x, end.y)
        )

    def stroke(self, style: StrokeStyle) -> None:
        self._painter.setBrush(Qt.BrushStyle.NoBrush)
        self._draw_glow(style, lambda: self._painter.drawPath(self._path))

        self._painter.setPen(self._make_pen(style.width, self._color(style, 255)))
        self._painter.drawPath(self._path)

    def fill_marker(self, center: Point, radius: float, style: StrokeStyle) -> None:
        origin = QPointF(center.x, center.y)
        self._draw_glow(style, lambda: self._painter.drawEllipse(origin, radius, radius))

        color = self._color(style, 255)
        self._painter.setPen(Qt.PenStyle.NoPen)
        self._painter.setBrush(QBrush(color))
        self._painter.drawEllipse(origin, radius, radius)
        self._painter.setBrush(Qt.BrushStyle.NoBrush)

    def _draw_glow(self, style: StrokeStyle, draw) -> None:
        """由外到内叠加半透明描边"""
        if style.glow <= 0:
            return

        for layer in range(GLOW_LAYERS, 0, -1):
            spread = style.glow * layer / GLOW_LAYERS
            alpha = int(min(255, max(0, 255 * style.alpha / (GLOW_LAYERS * 2))))
            self._painter.setPen(self._make_pen(style.width + spread, self._color(style, alpha)))
            draw()

    @staticmethod
    def _color(style: StrokeStyle, alpha: int) -> QColor:
        r, g, b = style.color
        return QColor(r, g, b, alpha)

    @staticmethod
    def _make_pen(width: float, color: QColor) -> QPen:
        pen = QPen(color)
        pen.setWidthF(width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        return pen
