"""RadialWave - 把一段实时音频转换为闭合的径向波形轮廓

录音期间按时间把振幅量化到固定角度分箱，结束后输出平滑闭合的二维轮廓，
供下游的三维挤出工具使用。
"""

__version__ = "0.1.0"
__description__ = "RadialWave"

from .utils import app_logger, logger

__all__ = ["app_logger", "logger", "__version__"]
