"""音频模块初始化

PyAudio 输入源位于 radialwave.audio.pyaudio_source，由应用入口按需导入。
"""

from .sampler import AmplitudeSampler, average_amplitude, transform_amplitude

__all__ = ["AmplitudeSampler", "average_amplitude", "transform_amplitude"]
