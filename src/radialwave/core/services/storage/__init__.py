"""存储服务"""

from .json_persistence import DEFAULT_STORAGE_KEY, JsonFilePersistenceAdapter

__all__ = ["JsonFilePersistenceAdapter", "DEFAULT_STORAGE_KEY"]
