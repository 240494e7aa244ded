"""RadialWave - Application Entry Point

Usage:
  radialwave                       # 默认配置启动
  radialwave --config my.json      # 指定配置文件
  radialwave --time-limit 8 --bins 90
  radialwave --dev                 # DEBUG 日志 + 控制台输出
"""

import argparse
import signal
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger as service_logger

from .core.interfaces import StrokeStyle
from .core.services import (
    CallbackNavigationAdapter,
    ConfigKeys,
    ConfigReader,
    ConfigValidator,
    JsonFilePersistenceAdapter,
)
from .rendering.spline_renderer import SplineRenderer, SplineStyle
from .utils import ConfigurationError, app_logger, logger
from .utils.unified_logger import get_app_home

DEFAULT_STORE_FILENAME = "waveform_store.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RadialWave - radial audio waveform recorder")
    parser.add_argument("--config", type=Path, help="Path to a JSON configuration file")
    parser.add_argument("--time-limit", type=float, help="Recording duration in seconds")
    parser.add_argument("--bins", type=int, help="Number of angular bins")
    parser.add_argument("--dev", action="store_true", help="Verbose logging to the console")
    return parser


def load_settings(args: argparse.Namespace) -> ConfigReader:
    """读取配置文件，应用命令行覆盖并校验

    Raises:
        ConfigurationError: 配置不合法
    """
    config = ConfigReader(args.config)
    config.load_config()

    if args.time_limit is not None:
        config.set_override(ConfigKeys.RECORDING_TIME_LIMIT, args.time_limit)
    if args.bins is not None:
        config.set_override(ConfigKeys.RECORDING_BIN_COUNT, args.bins)
    if args.dev:
        config.set_override(ConfigKeys.LOGGING_LEVEL, "DEBUG")
        config.set_override(ConfigKeys.LOGGING_CONSOLE_OUTPUT, True)

    ConfigValidator().ensure_valid(config.get_all_settings())
    return config


def resolve_store_path(config: ConfigReader) -> Path:
    """storage.path 为 "auto" 时使用应用数据目录"""
    raw_path = config.get_setting(ConfigKeys.STORAGE_PATH, "auto")
    if not raw_path or raw_path == "auto":
        return get_app_home() / DEFAULT_STORE_FILENAME
    return Path(raw_path).expanduser()


def build_renderer(config: ConfigReader) -> SplineRenderer:
    """按配置构建进行中和最终两种样条样式"""
    marker_radius = float(config.get_setting(ConfigKeys.RENDERING_MARKER_RADIUS, 3.0))

    progress = SplineStyle(
        tension=float(config.get_setting(ConfigKeys.RENDERING_PROGRESS_TENSION, 2.0)),
        closed=False,
        stroke=StrokeStyle(
            width=float(config.get_setting(ConfigKeys.RENDERING_PROGRESS_WIDTH, 3)),
            alpha=float(config.get_setting(ConfigKeys.RENDERING_PROGRESS_ALPHA, 0.8)),
            glow=float(config.get_setting(ConfigKeys.RENDERING_PROGRESS_GLOW, 12)),
        ),
        marker_radius=marker_radius,
    )
    final = SplineStyle(
        tension=float(config.get_setting(ConfigKeys.RENDERING_FINAL_TENSION, 0.5)),
        closed=True,
        stroke=StrokeStyle(
            width=float(config.get_setting(ConfigKeys.RENDERING_FINAL_WIDTH, 4)),
            alpha=float(config.get_setting(ConfigKeys.RENDERING_FINAL_ALPHA, 0.9)),
            glow=float(config.get_setting(ConfigKeys.RENDERING_FINAL_GLOW, 15)),
        ),
        marker_radius=marker_radius,
    )
    return SplineRenderer(progress, final)


def run_gui(config: ConfigReader) -> int:
    """组装组件并运行 Qt 事件循环"""
    from PySide6.QtCore import QTimer
    from PySide6.QtWidgets import QApplication, QMessageBox

    from .audio import AmplitudeSampler
    from .audio.pyaudio_source import PyAudioInputSource
    from .core.recording_state_machine import RecordingStateMachine
    from .geometry import PointProjector
    from .ui import QtCountdownTimer, RecorderWindow

    qt_app = QApplication.instance()
    if qt_app is None:
        qt_app = QApplication(sys.argv)

    canvas_size = int(config.get_setting(ConfigKeys.CANVAS_SIZE, 400))
    store_path = resolve_store_path(config)
    window: Optional[RecorderWindow] = None

    def hand_off(target: str) -> None:
        # 下游消费者从存储中读取轮廓
        QMessageBox.information(
            window,
            "RadialWave",
            f"Contour saved to {store_path}.\nContinuing to '{target}'.",
        )
        window.close()

    audio_source = PyAudioInputSource(
        sample_rate=int(config.get_setting(ConfigKeys.AUDIO_SAMPLE_RATE, 44100)),
        buffer_size=int(config.get_setting(ConfigKeys.AUDIO_BUFFER_SIZE, 1024)),
        device_id=config.get_setting(ConfigKeys.AUDIO_DEVICE_ID),
    )
    countdown = QtCountdownTimer()
    state_machine = RecordingStateMachine(
        audio_source,
        sampler=AmplitudeSampler(
            gain=float(config.get_setting(ConfigKeys.AMPLITUDE_GAIN, 1400.0)),
            smoothing_alpha=config.get_setting(ConfigKeys.AMPLITUDE_SMOOTHING_ALPHA),
        ),
        projector=PointProjector.for_canvas(
            canvas_size, float(config.get_setting(ConfigKeys.CANVAS_BASE_RADIUS, 100.0))
        ),
        renderer=build_renderer(config),
        persistence=JsonFilePersistenceAdapter(
            store_path, config.get_setting(ConfigKeys.STORAGE_KEY, "waveformPoints")
        ),
        navigation=CallbackNavigationAdapter(hand_off),
        countdown_timer=countdown,
        notice_callback=lambda message: window.show_notice(message),
        time_limit=float(config.get_setting(ConfigKeys.RECORDING_TIME_LIMIT, 5.0)),
        bin_count=int(config.get_setting(ConfigKeys.RECORDING_BIN_COUNT, 60)),
        countdown_interval_ms=int(
            config.get_setting(ConfigKeys.RECORDING_COUNTDOWN_INTERVAL_MS, 1000)
        ),
        continue_target=config.get_setting(ConfigKeys.NAVIGATION_CONTINUE_TARGET, "mesh"),
    )
    countdown.set_callback(state_machine.on_countdown_tick)

    window = RecorderWindow(
        state_machine,
        canvas_size=canvas_size,
        fps=int(config.get_setting(ConfigKeys.RENDERING_FPS, 60)),
    )
    window.show()

    # Qt 事件循环会阻塞 Python 信号处理，定期唤醒解释器
    signal_timer = QTimer()
    signal_timer.timeout.connect(lambda: None)
    signal_timer.start(100)
    signal.signal(signal.SIGINT, lambda signum, frame: qt_app.quit())

    def on_about_to_quit():
        signal_timer.stop()
        state_machine.shutdown()

    qt_app.aboutToQuit.connect(on_about_to_quit)

    service_logger.info(f"RadialWave running, contour store: {store_path}, log: {logger.get_log_file()}")
    return qt_app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = load_settings(args)
    except ConfigurationError as e:
        print(f"ERROR: {e.get_user_message()}", file=sys.stderr)
        for suggestion in e.recovery_suggestions:
            print(f"  - {suggestion}", file=sys.stderr)
        return 2

    logger.configure(
        level=config.get_setting(ConfigKeys.LOGGING_LEVEL, "INFO"),
        console_output=config.get_setting(ConfigKeys.LOGGING_CONSOLE_OUTPUT, False),
    )
    app_logger.log_startup()

    try:
        return run_gui(config)
    except Exception as e:
        app_logger.log_error(e, "run_gui")
        service_logger.exception("Failed to start GUI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
