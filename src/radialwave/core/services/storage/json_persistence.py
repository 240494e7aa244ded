"""JSON 键值文件持久化

整个存储是一个 JSON 对象，轮廓保存在固定键下：

    {"waveformPoints": [{"x": 300.0, "y": 200.0}, ...]}

写入先落到同目录的临时文件再原子替换，避免中途失败留下损坏的文件。
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from ....geometry.contour import WaveformContour
from ....utils import PersistenceError
from ...interfaces import IPersistenceAdapter

DEFAULT_STORAGE_KEY = "waveformPoints"


class JsonFilePersistenceAdapter(IPersistenceAdapter):
    """把最终轮廓写入 JSON 键值文件"""

    def __init__(self, store_path: Path, key: str = DEFAULT_STORAGE_KEY):
        self.store_path = Path(store_path)
        self.key = key

    def save_contour(self, contour: WaveformContour) -> None:
        try:
            store = self._read_store()
        except PersistenceError as e:
            # 损坏的存储直接覆盖
            logger.warning("Discarding corrupt store {}: {}", self.store_path, e.message)
            store = {}
        store[self.key] = contour.to_json_list()
        self._write_store(store)
        logger.info(
            "Contour persisted: {} points -> {} [{}]",
            len(contour), self.store_path, self.key,
        )

    def load_contour(self) -> List[Dict[str, float]]:
        points = self._read_store().get(self.key, [])
        if not isinstance(points, list):
            raise PersistenceError(
                f"Stored value under '{self.key}' is not a list",
                context={"store_path": str(self.store_path)},
            )
        return points

    def _read_store(self) -> Dict[str, Any]:
        if not self.store_path.exists():
            return {}
        try:
            with open(self.store_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable store {}: {}", self.store_path, e)
            raise PersistenceError(
                f"Failed to read store: {e}",
                context={"store_path": str(self.store_path)},
                original_exception=e,
            ) from e
        if not isinstance(data, dict):
            raise PersistenceError(
                "Store root must be a JSON object",
                context={"store_path": str(self.store_path)},
            )
        return data

    def _write_store(self, store: Dict[str, Any]) -> None:
        tmp_name = None
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.store_path.parent,
                prefix=f".{self.store_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(store, tmp, ensure_ascii=False)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.store_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("Failed to write store {}: {}", self.store_path, e)
            raise PersistenceError(
                f"Failed to write store: {e}",
                context={"store_path": str(self.store_path)},
                original_exception=e,
            ) from e
