"""PyAudio 音频输入源"""

import threading
from typing import Optional

import numpy as np
import pyaudio

from ..core.base.lifecycle_component import LifecycleComponent
from ..core.interfaces import IAudioInputSource, IAudioStreamHandle
from ..utils import AudioDeviceUnavailableError, AudioPermissionError, app_logger

# PortAudio 的 paUnanticipatedHostError，macOS 拒绝麦克风权限时返回
_PA_UNANTICIPATED_HOST_ERROR = -9999
_PERMISSION_MARKERS = ("permission", "denied", "not authorized")


def classify_open_error(error: Exception) -> Exception:
    """把 PortAudio 打开失败映射为权限错误或设备不可用"""
    text = str(error).lower()
    errno = getattr(error, "errno", None)
    if (
        isinstance(error, PermissionError)
        or errno == _PA_UNANTICIPATED_HOST_ERROR
        or _PA_UNANTICIPATED_HOST_ERROR in error.args
        or any(marker in text for marker in _PERMISSION_MARKERS)
    ):
        return AudioPermissionError(
            "Could not access your microphone. Please check your permissions.",
            original_exception=error,
        )
    return AudioDeviceUnavailableError(
        f"Audio input device unavailable: {error}", original_exception=error
    )


class PyAudioStreamHandle(IAudioStreamHandle):
    """回调模式的 PyAudio 输入流

    PortAudio 线程在回调中替换最新快照，渲染线程同步拉取副本。
    """

    def __init__(self, buffer_size: int):
        self._buffer_size = buffer_size
        self._stream = None
        self._latest: Optional[np.ndarray] = None
        self._lock = threading.Lock()
        self._closed = False

    def attach(self, stream) -> None:
        self._stream = stream

    def on_audio(self, in_data, frame_count, time_info, status):
        """PyAudio 回调"""
        snapshot = np.frombuffer(in_data, dtype=np.uint8).copy()
        with self._lock:
            self._latest = snapshot
        return (None, pyaudio.paContinue)

    def pull(self) -> Optional[np.ndarray]:
        with self._lock:
            if self._latest is None:
                return None
            return self._latest.copy()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            try:
                stream.stop_stream()
            finally:
                stream.close()
            app_logger.log_audio_event("Input stream closed", {})
        except OSError as e:
            # 设备已被系统回收，释放视为完成
            app_logger.log_audio_event("Input stream already released", {"error": str(e)})

    @property
    def is_open(self) -> bool:
        return not self._closed


class PyAudioInputSource(LifecycleComponent, IAudioInputSource):
    """基于 PyAudio 的麦克风输入源"""

    def __init__(
        self,
        sample_rate: int = 44100,
        buffer_size: int = 1024,
        device_id: Optional[int] = None,
    ):
        super().__init__("PyAudioInputSource")
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self.device_id = device_id
        self._audio = None

    def _do_start(self) -> bool:
        """Initialize PyAudio resources"""
        self._audio = pyaudio.PyAudio()
        app_logger.log_audio_event(
            "Audio system initialized",
            {"sample_rate": self.sample_rate, "buffer_size": self.buffer_size},
        )
        return True

    def _do_stop(self) -> bool:
        """Terminate PyAudio"""
        if self._audio is not None:
            try:
                self._audio.terminate()
            finally:
                self._audio = None
        return True

    def open(self) -> IAudioStreamHandle:
        if not self.start():
            raise AudioDeviceUnavailableError("Failed to initialize the audio system")

        handle = PyAudioStreamHandle(self.buffer_size)
        try:
            stream = self._audio.open(
                format=pyaudio.paUInt8,
                channels=1,
                rate=self.sample_rate,
                input=True,
                input_device_index=self.device_id,
                frames_per_buffer=self.buffer_size,
                stream_callback=handle.on_audio,
            )
        except (OSError, ValueError) as e:
            app_logger.log_error(e, "pyaudio_open", {"device_id": self.device_id})
            raise classify_open_error(e) from e

        handle.attach(stream)
        try:
            stream.start_stream()
        except (OSError, ValueError) as e:
            handle.close()
            app_logger.log_error(e, "pyaudio_start_stream", {"device_id": self.device_id})
            raise classify_open_error(e) from e
        app_logger.log_audio_event(
            "Input stream opened",
            {"device_id": self.device_id, "buffer_size": self.buffer_size},
        )
        return handle

    def shutdown(self) -> None:
        self.stop()
