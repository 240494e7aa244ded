"""录音状态机

管理 IDLE → RECORDING → FINALIZED 的会话生命周期。

会话只有一个权威截止时间（start_time + time_limit）。1 秒倒计时和每帧的渲染
回调都只向状态机询问会话是否仍然有效，由状态机自己决定何时收尾；收尾是幂等的，
第二个到达的信号不会产生任何效果。

收尾顺序：停止倒计时 → 构建轮廓 → 释放音频流 → 发布状态变更 → 持久化。
轮廓完整构建后才赋值，渲染回调不会读到构建中的轮廓。
"""

import time
import uuid
from typing import Callable, Dict, Optional

from ..audio.sampler import AmplitudeSampler
from ..geometry.contour import ContourBuilder, WaveformContour
from ..geometry.projector import PointProjector
from ..rendering.spline_renderer import SplineRenderer
from ..utils import (
    AudioDeviceUnavailableError,
    AudioRecordingError,
    PersistenceError,
    app_logger,
    logger,
)
from .interfaces import (
    TRIGGER_LABELS,
    TRIGGER_STYLES,
    IAudioInputSource,
    ICountdownTimer,
    IDrawingSurface,
    INavigationAdapter,
    IPersistenceAdapter,
    RecordingState,
)
from .session import Session

StateCallback = Callable[[RecordingState, RecordingState], None]


class RecordingStateMachine:
    """录音会话状态机"""

    def __init__(
        self,
        audio_source: IAudioInputSource,
        sampler: Optional[AmplitudeSampler] = None,
        projector: Optional[PointProjector] = None,
        renderer: Optional[SplineRenderer] = None,
        persistence: Optional[IPersistenceAdapter] = None,
        navigation: Optional[INavigationAdapter] = None,
        countdown_timer: Optional[ICountdownTimer] = None,
        notice_callback: Optional[Callable[[str], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        time_limit: float = 5.0,
        bin_count: int = 60,
        countdown_interval_ms: int = 1000,
        continue_target: str = "mesh",
    ):
        """
        Args:
            audio_source: 音频输入源
            sampler: 振幅采样器
            projector: 点投影器，进行中和最终渲染共用
            renderer: 样条渲染器
            persistence: 轮廓持久化适配器
            navigation: Continue 时使用的导航适配器
            countdown_timer: 1 秒间隔的倒计时定时器
            notice_callback: 向用户显示提示的回调
            clock: 单调时钟（秒）
            time_limit: 录音时长（秒）
            bin_count: 角度分箱数量
            countdown_interval_ms: 倒计时间隔
            continue_target: Continue 的下游目标
        """
        if bin_count < 1:
            raise ValueError(f"bin_count must be >= 1, got {bin_count}")
        if time_limit <= 0:
            raise ValueError(f"time_limit must be > 0, got {time_limit}")

        self._audio_source = audio_source
        self._sampler = sampler or AmplitudeSampler()
        self._projector = projector or PointProjector.for_canvas(400, 100.0)
        self._renderer = renderer or SplineRenderer()
        self._builder = ContourBuilder(self._projector)
        self._persistence = persistence
        self._navigation = navigation
        self._countdown_timer = countdown_timer
        self._notice_callback = notice_callback
        self._clock = clock

        self.time_limit = float(time_limit)
        self.bin_count = bin_count
        self.countdown_interval_ms = countdown_interval_ms
        self.continue_target = continue_target

        self._state = RecordingState.IDLE
        self._session: Optional[Session] = None
        self._contour: Optional[WaveformContour] = None
        self._finalizing = False
        self._subscribers: Dict[str, StateCallback] = {}

    # ============ 状态查询 ============

    @property
    def state(self) -> RecordingState:
        return self._state

    @property
    def trigger_label(self) -> str:
        return TRIGGER_LABELS[self._state]

    @property
    def trigger_style(self) -> str:
        return TRIGGER_STYLES[self._state]

    @property
    def contour(self) -> Optional[WaveformContour]:
        return self._contour

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_recording(self) -> bool:
        return self._state == RecordingState.RECORDING

    # ============ 订阅 ============

    def subscribe(self, callback: StateCallback) -> str:
        """订阅状态变更，回调参数为 (旧状态, 新状态)

        Returns:
            订阅ID
        """
        subscription_id = uuid.uuid4().hex
        self._subscribers[subscription_id] = callback
        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        return self._subscribers.pop(subscription_id, None) is not None

    def _set_state(self, new_state: RecordingState) -> None:
        old_state = self._state
        if old_state == new_state:
            return

        self._state = new_state
        app_logger.log_state_change(old_state.value, new_state.value)

        for subscription_id, callback in list(self._subscribers.items()):
            try:
                callback(old_state, new_state)
            except Exception as e:
                app_logger.log_error(e, f"state_subscriber_{subscription_id}")

    # ============ 用户操作 ============

    def on_trigger(self) -> None:
        """触发按钮：FINALIZED 时跳转下游，RECORDING 时停止，IDLE 时开始"""
        if self._state == RecordingState.FINALIZED:
            self.continue_downstream()
        elif self._state == RecordingState.RECORDING:
            self.stop()
        else:
            self.start()

    def start(self) -> bool:
        """开始新会话（FINALIZED 时等同于 restart）

        Returns:
            是否进入 RECORDING
        """
        if self._state == RecordingState.RECORDING:
            return False

        self._reset()
        self._session = Session.begin(self._clock(), self.time_limit, self.bin_count)
        self._set_state(RecordingState.RECORDING)

        try:
            self._session.stream = self._audio_source.open()
        except AudioRecordingError as e:
            self._abort(e)
            return False
        except Exception as e:
            self._abort(AudioDeviceUnavailableError(
                f"Audio input failed to start: {e}", original_exception=e
            ))
            return False

        if self._countdown_timer is not None:
            self._countdown_timer.start(self.countdown_interval_ms)

        app_logger.log_audio_event(
            "Recording session started",
            {"time_limit": self.time_limit, "bin_count": self.bin_count},
        )
        return True

    def restart(self) -> bool:
        """清除上一次的轮廓并重新录音"""
        if self._state != RecordingState.FINALIZED:
            return False
        return self.start()

    def stop(self) -> bool:
        """用户主动停止"""
        return self.finalize("stop")

    def continue_downstream(self) -> None:
        """把控制权交给下游消费者"""
        if self._state != RecordingState.FINALIZED:
            return
        if self._navigation is None:
            app_logger.log_warning("Continue requested without navigation adapter")
            return
        self._navigation.navigate(self.continue_target)

    # ============ 定时信号 ============

    def on_countdown_tick(self) -> None:
        """每个倒计时间隔调用一次"""
        if self._state != RecordingState.RECORDING or self._session is None:
            return

        self._session.time_left -= 1
        if self._session.time_left <= 0:
            self.finalize("countdown")
        else:
            self.is_live()

    def is_live(self) -> bool:
        """会话是否仍在录音；截止时间已过时在这里收尾"""
        if self._state != RecordingState.RECORDING or self._session is None:
            return False

        if self._session.expired(self._clock()):
            self.finalize("deadline")
            return False
        return True

    def render_tick(self, surface: IDrawingSurface) -> None:
        """每次显示刷新调用一次，不论当前状态"""
        surface.clear()

        if self.is_live():
            session = self._session
            elapsed = session.elapsed(self._clock())
            amplitude = self._sampler.sample(session.stream.pull())
            session.binner.record(elapsed, amplitude)
            points = self._projector.project_all(session.binner.samples())
            self._renderer.draw_progress(surface, points)
            return

        if self._contour is not None and not self._contour.is_empty:
            self._renderer.draw_final(surface, self._contour.points)

    # ============ 收尾 ============

    def finalize(self, reason: str = "stop") -> bool:
        """结束录音并发布轮廓

        Returns:
            本次调用是否执行了收尾；重复调用返回 False
        """
        if self._state != RecordingState.RECORDING or self._finalizing:
            return False

        self._finalizing = True
        try:
            with logger.trace(
                "finalize_session", "RecordingStateMachine", {"reason": reason}
            ) as trace:
                self._stop_countdown()
                session = self._session
                contour = self._builder.build(session.binner.samples())
                trace.checkpoint("contour_built", {"points": len(contour)})

                session.release_stream()
                self._contour = contour
                self._set_state(RecordingState.FINALIZED)
                self._persist(contour)
        finally:
            self._finalizing = False

        app_logger.log_audio_event(
            "Recording session finalized",
            {"reason": reason, "bins": len(self._session.binner), "points": len(self._contour)},
        )
        return True

    def _persist(self, contour: WaveformContour) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save_contour(contour)
        except PersistenceError as e:
            app_logger.log_error(e, "persist_contour")

    def _abort(self, error: AudioRecordingError) -> None:
        """音频获取失败：回到 IDLE 并提示用户，不自动重试"""
        app_logger.log_error(error, "audio_acquisition")
        self._stop_countdown()
        if self._session is not None:
            self._session.release_stream()
        self._session = None
        self._contour = None
        self._set_state(RecordingState.IDLE)

        if self._notice_callback is not None:
            try:
                self._notice_callback(error.get_user_message())
            except Exception as e:
                app_logger.log_error(e, "notice_callback")

    def _reset(self) -> None:
        self._stop_countdown()
        if self._session is not None:
            self._session.release_stream()
        self._session = None
        self._contour = None
        self._sampler.reset()

    def _stop_countdown(self) -> None:
        if self._countdown_timer is not None:
            self._countdown_timer.stop()

    def shutdown(self) -> None:
        """窗口关闭时释放全部资源"""
        self._stop_countdown()
        if self._session is not None:
            self._session.release_stream()
        self._audio_source.shutdown()
        app_logger.log_shutdown()
