"""服务模块：配置、存储、导航"""

from .config import ConfigKeys, ConfigReader, ConfigValidator
from .navigation import CallbackNavigationAdapter
from .storage import DEFAULT_STORAGE_KEY, JsonFilePersistenceAdapter

__all__ = [
    "ConfigKeys",
    "ConfigReader",
    "ConfigValidator",
    "CallbackNavigationAdapter",
    "JsonFilePersistenceAdapter",
    "DEFAULT_STORAGE_KEY",
]
