"""配置读取服务 - 单一职责：配置读取和查询"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar

from ....utils import app_logger
from .config_defaults import get_default_config

T = TypeVar("T")

_MISSING = object()


class ConfigReader:
    """配置读取器 - 只负责读取配置"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: 配置文件路径，None 表示只使用默认配置
        """
        self.config_path = Path(config_path) if config_path else None
        self._default_config = get_default_config()
        self._config: Dict[str, Any] = copy.deepcopy(self._default_config)

    def load_config(self) -> bool:
        """从文件加载配置

        Returns:
            是否加载成功；文件不存在时使用默认配置并返回 True
        """
        if self.config_path is None or not self.config_path.exists():
            self._config = copy.deepcopy(self._default_config)
            app_logger.log_storage_event(
                "Using default configuration",
                {"config_path": str(self.config_path)},
            )
            return True

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            app_logger.log_error(e, "config_reader_load")
            self._config = copy.deepcopy(self._default_config)
            return False

        self._config = self._merge_configs(self._default_config, loaded_config)
        app_logger.log_storage_event(
            "Configuration loaded",
            {"config_path": str(self.config_path), "keys_loaded": len(loaded_config)},
        )
        return True

    def get_setting(self, key: str, default: Optional[T] = None) -> T:
        """获取配置项

        Args:
            key: 配置项键名，支持嵌套路径 (例如: "recording.bin_count")
            default: 默认值

        Returns:
            配置项的值，如果不存在则返回默认值
        """
        value = self._lookup(self._config, key)
        return default if value is _MISSING else value

    def set_override(self, key: str, value: Any) -> None:
        """仅在内存中覆盖配置项（命令行参数）"""
        keys = key.split(".")
        node = self._config
        for k in keys[:-1]:
            if not isinstance(node.get(k), dict):
                node[k] = {}
            node = node[k]
        node[keys[-1]] = value

    def get_all_settings(self) -> Dict[str, Any]:
        """获取所有配置的深拷贝"""
        return copy.deepcopy(self._config)

    @staticmethod
    def _lookup(config: Dict[str, Any], key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return _MISSING
        return value

    def _merge_configs(
        self, default: Dict[str, Any], loaded: Dict[str, Any]
    ) -> Dict[str, Any]:
        """合并默认配置和加载的配置"""
        result = copy.deepcopy(default)

        def merge_recursive(base: Dict[str, Any], update: Dict[str, Any]) -> None:
            for key, value in update.items():
                if (
                    key in base
                    and isinstance(base[key], dict)
                    and isinstance(value, dict)
                ):
                    merge_recursive(base[key], value)
                else:
                    base[key] = value

        merge_recursive(result, loaded)
        return result
