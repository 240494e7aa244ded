"""持久化与导航接口定义"""

from abc import ABC, abstractmethod
from typing import Dict, List

from ...geometry.contour import WaveformContour


class IPersistenceAdapter(ABC):
    """轮廓持久化接口

    轮廓以 [{"x": .., "y": ..}, ...] 的 JSON 数组形式保存在固定键下，
    供下游的网格生成工具读取。
    """

    @abstractmethod
    def save_contour(self, contour: WaveformContour) -> None:
        """保存最终轮廓

        Raises:
            PersistenceError: 写入失败
        """

    @abstractmethod
    def load_contour(self) -> List[Dict[str, float]]:
        """读取已保存的轮廓点，不存在时返回空列表"""


class INavigationAdapter(ABC):
    """把控制权交给下游消费者"""

    @abstractmethod
    def navigate(self, target: str) -> None:
        """跳转到下游目标

        Args:
            target: 下游目标名称，例如 "mesh"
        """
