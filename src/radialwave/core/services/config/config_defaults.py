"""配置默认值定义"""

from typing import Any, Dict


def get_default_config() -> Dict[str, Any]:
    """获取默认配置

    Returns:
        默认配置字典（每次调用返回新副本）
    """
    return {
        "recording": {
            "time_limit": 5.0,
            "bin_count": 60,
            "countdown_interval_ms": 1000,
        },
        "audio": {
            "buffer_size": 1024,
            "sample_rate": 44100,
            "device_id": None,
        },
        "amplitude": {
            "gain": 1400.0,
            "scale": 100.0,
            "smoothing_alpha": 0.25,
        },
        "canvas": {
            "size": 400,
            "base_radius": 100.0,
        },
        "rendering": {
            "fps": 60,
            "marker_radius": 3.0,
            "progress": {"tension": 2.0, "width": 3.0, "glow": 12.0, "alpha": 0.8},
            "final": {"tension": 0.5, "width": 4.0, "glow": 15.0, "alpha": 0.9},
        },
        "storage": {
            "path": "auto",
            "key": "waveformPoints",
        },
        "navigation": {
            "continue_target": "mesh",
        },
        "logging": {
            "level": "INFO",
            "console_output": False,
        },
    }
