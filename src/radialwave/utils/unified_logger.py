"""统一日志系统 - 单一接口，按类别路由

RadialWave 的统一日志系统，提供：
- 单一清晰的API接口
- 控制台 + 文件双路输出
- 性能追踪上下文

使用示例:
    from radialwave.utils import logger

    logger.info("Application started")

    with logger.trace("finalize_session") as trace:
        # ... processing code ...
        trace.checkpoint("contour_built")
"""

import json
import os
import sys
import threading
import time
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import RadialWaveError


class LogLevel(Enum):
    """日志级别"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """日志类别（用于过滤和路由）"""
    AUDIO = "audio"
    STATE = "state"
    GEOMETRY = "geometry"
    STORAGE = "storage"
    UI = "ui"
    STARTUP = "startup"
    ERROR = "error"
    PERFORMANCE = "performance"


def get_app_home() -> Path:
    """应用数据目录（可通过 RADIALWAVE_HOME 覆盖）"""
    override = os.getenv("RADIALWAVE_HOME")
    if override:
        return Path(override)
    return Path.home() / ".radialwave"


@dataclass
class TraceContext:
    """性能追踪上下文"""
    trace_id: str
    operation: str
    component: str = ""
    start_time: float = field(default_factory=time.time)
    parameters: Dict[str, Any] = field(default_factory=dict)
    checkpoints: List[Dict[str, Any]] = field(default_factory=list)

    def checkpoint(self, name: str, data: Dict[str, Any] = None) -> None:
        """添加检查点"""
        self.checkpoints.append({
            'name': name,
            'elapsed': time.time() - self.start_time,
            'data': data or {}
        })

    def duration(self) -> float:
        """获取总耗时"""
        return time.time() - self.start_time


class UnifiedLogger:
    """统一日志系统 - 单例模式"""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._min_level = LogLevel.DEBUG if self._is_dev_mode() else LogLevel.INFO
        self._console_output_enabled = False
        self._lock = threading.RLock()
        self._trace_counter = 0

        # 日志文件；目录不可写时只保留控制台输出
        self._log_file: Optional[Path] = None
        try:
            log_dir = get_app_home() / 'logs'
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_file = log_dir / 'radialwave.log'
        except OSError as e:
            print(f"[LOG WARNING] File logging disabled: {e}", file=sys.stderr)

    @staticmethod
    def _is_dev_mode() -> bool:
        """检查是否为开发模式"""
        return "--dev" in sys.argv or bool(os.getenv("RADIALWAVE_DEV"))

    def configure(self, level: Union[str, LogLevel] = None,
                  console_output: bool = None) -> None:
        """从配置中应用日志设置

        Args:
            level: 日志级别，字符串或 LogLevel
            console_output: 是否启用控制台输出
        """
        with self._lock:
            if level is not None:
                self._min_level = (self._string_to_log_level(level)
                                   if isinstance(level, str) else level)
            if console_output is not None:
                self._console_output_enabled = bool(console_output)

    def _string_to_log_level(self, level_str: str) -> LogLevel:
        """将字符串转换为 LogLevel 枚举"""
        try:
            return LogLevel[level_str.upper()]
        except KeyError:
            return LogLevel.INFO

    def get_log_file(self) -> Optional[Path]:
        return self._log_file

    def _should_log(self, level: LogLevel) -> bool:
        return level.value >= self._min_level.value

    def _format_console_message(self, level: LogLevel, category: LogCategory,
                                message: str, context: Dict[str, Any] = None) -> str:
        """格式化控制台消息"""
        timestamp = time.strftime('%H:%M:%S')

        colors = {
            LogLevel.DEBUG: '\033[36m',    # Cyan
            LogLevel.INFO: '\033[32m',     # Green
            LogLevel.WARNING: '\033[33m',  # Yellow
            LogLevel.ERROR: '\033[31m',    # Red
            LogLevel.CRITICAL: '\033[35m'  # Magenta
        }
        reset = '\033[0m'
        color = colors.get(level, '')

        parts = [f"[{timestamp}] {color}{level.name}{reset} | {category.value} | {message}"]

        if context and category in [LogCategory.PERFORMANCE, LogCategory.STATE]:
            context_str = " | ".join(f"{k}: {v}" for k, v in context.items())
            if context_str:
                parts.append(f"\n  {context_str}")

        return "".join(parts)

    @staticmethod
    def _safe_json_serialize(obj):
        """安全的 JSON 序列化，处理枚举和其他特殊类型"""
        if hasattr(obj, 'value') and hasattr(obj, 'name'):
            return f"{type(obj).__name__}.{obj.name}"
        if hasattr(obj, '__name__'):
            return obj.__name__
        return str(obj)

    def _format_file_message(self, level: LogLevel, category: LogCategory,
                             message: str, context: Dict[str, Any] = None,
                             component: str = None) -> str:
        """格式化文件日志消息（JSON context）"""
        timestamp = time.strftime('%Y-%m-%d %H:%M:%S')

        parts = [timestamp, level.name.ljust(8), category.value.ljust(10)]
        if component:
            parts.append(f"[{component}]")
        parts.append(message)

        if context:
            context_json = json.dumps(context, ensure_ascii=False,
                                      separators=(',', ':'),
                                      default=self._safe_json_serialize)
            parts.append(f"| {context_json}")

        return " | ".join(parts)

    def _write_log(self, level: LogLevel, category: LogCategory, message: str,
                   context: Dict[str, Any] = None, component: str = None) -> None:
        """写入日志（控制台 + 文件）"""
        if category != LogCategory.PERFORMANCE and not self._should_log(level):
            return

        with self._lock:
            if self._console_output_enabled or level.value >= LogLevel.WARNING.value:
                console_msg = self._format_console_message(level, category, message, context)
                output_stream = sys.stderr if level.value >= LogLevel.ERROR.value else sys.stdout
                print(console_msg, file=output_stream, flush=True)

            if self._log_file is None:
                return

            try:
                file_msg = self._format_file_message(level, category, message, context, component)
                with open(self._log_file, 'a', encoding='utf-8') as f:
                    f.write(file_msg + '\n')
            except OSError as e:
                print(f"[LOG ERROR] Failed to write to log file: {e}", file=sys.stderr)

    # ============ 公开API ============

    def debug(self, message: str, category: LogCategory = LogCategory.STARTUP,
              context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.DEBUG, category, message, context, component)

    def info(self, message: str, category: LogCategory = LogCategory.STARTUP,
             context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.INFO, category, message, context, component)

    def warning(self, message: str, category: LogCategory = LogCategory.ERROR,
                context: Dict[str, Any] = None, component: str = None) -> None:
        self._write_log(LogLevel.WARNING, category, message, context, component)

    def error(self, message: str, exception: Exception = None,
              category: LogCategory = LogCategory.ERROR,
              context: Dict[str, Any] = None, component: str = None) -> None:
        ctx = context or {}
        if exception:
            ctx['exception'] = str(exception)
            ctx['exception_type'] = type(exception).__name__
        self._write_log(LogLevel.ERROR, category, message, ctx, component)

    @contextmanager
    def trace(self, operation: str, component: str = "",
              parameters: Dict[str, Any] = None):
        """性能追踪上下文管理器"""
        with self._lock:
            self._trace_counter += 1
            trace_id = f"trace_{self._trace_counter:04d}"

        trace_ctx = TraceContext(
            trace_id=trace_id,
            operation=operation,
            component=component,
            parameters=parameters or {}
        )

        try:
            yield trace_ctx
        except Exception as e:
            trace_ctx.checkpoint("error", {'error': str(e), 'type': type(e).__name__})
            self.error(f"Operation {operation} failed", e, LogCategory.ERROR,
                       {'trace_id': trace_id}, component)
            raise
        finally:
            duration = trace_ctx.duration()
            self.info(f"Completed {operation} in {duration:.3f}s", LogCategory.PERFORMANCE,
                      {'trace_id': trace_id, 'duration': f"{duration:.3f}s",
                       'checkpoints': [c['name'] for c in trace_ctx.checkpoints]},
                      component)


# ============ 全局单例和兼容接口 ============

logger = UnifiedLogger()


class AppLoggerAdapter:
    """按领域事件封装的便捷日志接口"""

    def __init__(self, logger_instance: UnifiedLogger):
        self._logger = logger_instance

    def log_audio_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Audio: {event}", LogCategory.AUDIO, details, "audio")

    def log_state_change(self, old_state: Any, new_state: Any,
                         details: Dict[str, Any] = None) -> None:
        ctx = {'old_state': str(old_state), 'new_state': str(new_state)}
        if details:
            ctx.update(details)
        self._logger.info("State changed", LogCategory.STATE, ctx, "state")

    def log_geometry_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.debug(f"Geometry: {event}", LogCategory.GEOMETRY, details, "geometry")

    def log_storage_event(self, event: str, details: Dict[str, Any] = None) -> None:
        self._logger.info(f"Storage: {event}", LogCategory.STORAGE, details, "storage")

    def log_gui_operation(self, operation: str, details: str = "", level: str = "INFO") -> None:
        message = f"GUI Operation: {operation}"
        if details:
            message += f" - {details}"

        log_func = getattr(self._logger, level.lower(), self._logger.info)
        log_func(message, LogCategory.UI, component="gui")

    def log_warning(self, message: str, details: Dict[str, Any] = None) -> None:
        self._logger.warning(message, LogCategory.ERROR, details)

    def log_error(self, error: Exception, context: str,
                  details: Dict[str, Any] = None) -> None:
        tb_str = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        ctx = {'traceback': tb_str, 'error_details': str(error)}
        if isinstance(error, RadialWaveError):
            ctx["error"] = error.to_dict()
        if details:
            ctx.update(details)
        self._logger.error(f"Error in {context}", error, LogCategory.ERROR, ctx, context)

    def log_startup(self) -> None:
        self._logger.info("RadialWave starting up", LogCategory.STARTUP, component="startup")

    def log_shutdown(self) -> None:
        self._logger.info("RadialWave shutting down", LogCategory.STARTUP, component="shutdown")


app_logger = AppLoggerAdapter(logger)


__all__ = [
    'logger',
    'app_logger',
    'AppLoggerAdapter',
    'UnifiedLogger',
    'LogLevel',
    'LogCategory',
    'TraceContext',
    'get_app_home',
]
