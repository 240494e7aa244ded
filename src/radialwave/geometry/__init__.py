"""几何模块：分箱、投影、轮廓"""

from .binner import AngularBinner
from .contour import ContourBuilder, WaveformContour
from .projector import PointProjector
from .types import AngularSample, Point

__all__ = [
    "AngularBinner",
    "AngularSample",
    "ContourBuilder",
    "Point",
    "PointProjector",
    "WaveformContour",
]
