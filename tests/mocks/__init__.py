"""Mock 对象库"""
from .audio_mock import MockAudioSource, MockStreamHandle, constant_buffer
from .clock_mock import FakeClock
from .surface_mock import RecordingSurface
from .timer_mock import MockCountdownTimer

__all__ = [
    'MockAudioSource',
    'MockStreamHandle',
    'constant_buffer',
    'FakeClock',
    'RecordingSurface',
    'MockCountdownTimer',
]
