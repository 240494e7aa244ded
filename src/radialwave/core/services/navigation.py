"""导航适配器"""

from typing import Callable

from loguru import logger

from ..interfaces import INavigationAdapter


class CallbackNavigationAdapter(INavigationAdapter):
    """把导航请求转交给回调（例如关闭窗口并启动下游工具）"""

    def __init__(self, callback: Callable[[str], None]):
        self._callback = callback

    def navigate(self, target: str) -> None:
        logger.info("Navigating to downstream target: {}", target)
        self._callback(target)
