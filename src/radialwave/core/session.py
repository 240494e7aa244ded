"""录音会话"""

import math
from dataclasses import dataclass
from typing import Optional

from ..geometry.binner import AngularBinner
from .interfaces import IAudioStreamHandle


@dataclass
class Session:
    """一次录音会话的全部可变状态，只由状态机持有"""

    start_time: float
    time_limit: float
    bin_count: int
    binner: AngularBinner
    time_left: int
    stream: Optional[IAudioStreamHandle] = None

    @classmethod
    def begin(cls, start_time: float, time_limit: float, bin_count: int) -> "Session":
        return cls(
            start_time=start_time,
            time_limit=time_limit,
            bin_count=bin_count,
            binner=AngularBinner(bin_count, time_limit),
            time_left=max(1, math.ceil(time_limit)),
        )

    @property
    def deadline(self) -> float:
        return self.start_time + self.time_limit

    def elapsed(self, now: float) -> float:
        return now - self.start_time

    def expired(self, now: float) -> bool:
        return self.elapsed(now) >= self.time_limit

    def release_stream(self) -> None:
        """关闭音频流，可重复调用"""
        stream, self.stream = self.stream, None
        if stream is not None:
            stream.close()
