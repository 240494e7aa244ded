"""配置验证服务 - 单一职责：配置验证"""

import math
from typing import Any, Dict, List

from ....utils import ConfigurationError, app_logger
from .config_keys import ConfigKeys


class ConfigValidator:
    """配置验证器 - 只负责验证配置"""

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """验证配置

        Args:
            config: 要验证的配置字典

        Returns:
            问题列表，为空表示配置有效
        """
        issues = []

        time_limit = self._get_nested(config, ConfigKeys.RECORDING_TIME_LIMIT)
        if not self._is_number(time_limit) or time_limit <= 0:
            issues.append(f"recording.time_limit must be a positive number, got {time_limit!r}")

        for key in (
            ConfigKeys.RECORDING_BIN_COUNT,
            ConfigKeys.AUDIO_BUFFER_SIZE,
            ConfigKeys.RENDERING_FPS,
            ConfigKeys.RECORDING_COUNTDOWN_INTERVAL_MS,
            ConfigKeys.CANVAS_SIZE,
        ):
            value = self._get_nested(config, key)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                issues.append(f"{key} must be an integer >= 1, got {value!r}")

        for key in (
            ConfigKeys.AMPLITUDE_GAIN,
            ConfigKeys.CANVAS_BASE_RADIUS,
            ConfigKeys.RENDERING_PROGRESS_TENSION,
            ConfigKeys.RENDERING_FINAL_TENSION,
        ):
            value = self._get_nested(config, key)
            if not self._is_number(value):
                issues.append(f"{key} must be a finite number, got {value!r}")

        device_id = self._get_nested(config, ConfigKeys.AUDIO_DEVICE_ID)
        if device_id is not None and not isinstance(device_id, int):
            issues.append(f"audio.device_id must be an integer or null, got {device_id!r}")

        if issues:
            app_logger.log_warning("Configuration validation failed", {"issues": issues})
        return issues

    def ensure_valid(self, config: Dict[str, Any]) -> None:
        """验证配置，无效时抛出 ConfigurationError"""
        issues = self.validate_config(config)
        if issues:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(issues),
                context={"issues": issues},
            )

    @staticmethod
    def _is_number(value: Any) -> bool:
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and math.isfinite(value)
        )

    @staticmethod
    def _get_nested(config: Dict[str, Any], key: str, default: Any = None) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
