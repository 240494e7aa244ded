"""接口定义模块"""

from .audio import IAudioInputSource, IAudioStreamHandle
from .state import TRIGGER_LABELS, TRIGGER_STYLES, ICountdownTimer, RecordingState
from .storage import INavigationAdapter, IPersistenceAdapter
from .surface import IDrawingSurface, StrokeStyle

__all__ = [
    "IAudioInputSource",
    "IAudioStreamHandle",
    "ICountdownTimer",
    "RecordingState",
    "TRIGGER_LABELS",
    "TRIGGER_STYLES",
    "IPersistenceAdapter",
    "INavigationAdapter",
    "IDrawingSurface",
    "StrokeStyle",
]
