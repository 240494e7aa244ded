"""配置服务模块"""

from .config_defaults import get_default_config
from .config_keys import ConfigKeys
from .config_reader import ConfigReader
from .config_validator import ConfigValidator

__all__ = [
    "ConfigReader",
    "ConfigValidator",
    "ConfigKeys",
    "get_default_config",
]
