"""配置键常量定义

使用示例:
    config.get_setting(ConfigKeys.RECORDING_BIN_COUNT)
"""


class ConfigKeys:
    """配置键常量类 - 所有配置路径的中央定义"""

    # ==================== Recording (录音会话) ====================
    RECORDING_TIME_LIMIT = "recording.time_limit"
    """录音时长 (float): 秒"""

    RECORDING_BIN_COUNT = "recording.bin_count"
    """角度分箱数量 (int)"""

    RECORDING_COUNTDOWN_INTERVAL_MS = "recording.countdown_interval_ms"
    """倒计时间隔 (int): 毫秒"""

    # ==================== Audio (音频输入) ====================
    AUDIO_BUFFER_SIZE = "audio.buffer_size"
    """时域缓冲区长度 (int)"""

    AUDIO_SAMPLE_RATE = "audio.sample_rate"
    """采样率 (int)"""

    AUDIO_DEVICE_ID = "audio.device_id"
    """输入设备ID (Optional[int]): None 表示系统默认设备"""

    # ==================== Amplitude (振幅变换) ====================
    AMPLITUDE_GAIN = "amplitude.gain"
    """sin 变换后的缩放常数 (float)"""

    AMPLITUDE_SCALE = "amplitude.scale"
    """旧版尖峰高度参数 (float)，不参与计算"""

    AMPLITUDE_SMOOTHING_ALPHA = "amplitude.smoothing_alpha"
    """指数平滑系数 (float)，不参与计算"""

    # ==================== Canvas (画布几何) ====================
    CANVAS_SIZE = "canvas.size"
    """正方形画布边长 (int)"""

    CANVAS_BASE_RADIUS = "canvas.base_radius"
    """基准圆半径 (float)"""

    # ==================== Rendering (渲染) ====================
    RENDERING_FPS = "rendering.fps"
    """渲染帧率 (int)"""

    RENDERING_MARKER_RADIUS = "rendering.marker_radius"
    """单点标记半径 (float)"""

    RENDERING_PROGRESS_TENSION = "rendering.progress.tension"
    RENDERING_PROGRESS_WIDTH = "rendering.progress.width"
    RENDERING_PROGRESS_GLOW = "rendering.progress.glow"
    RENDERING_PROGRESS_ALPHA = "rendering.progress.alpha"

    RENDERING_FINAL_TENSION = "rendering.final.tension"
    RENDERING_FINAL_WIDTH = "rendering.final.width"
    RENDERING_FINAL_GLOW = "rendering.final.glow"
    RENDERING_FINAL_ALPHA = "rendering.final.alpha"

    # ==================== Storage / Navigation ====================
    STORAGE_PATH = "storage.path"
    """键值存储文件路径 (str): "auto" 表示应用数据目录"""

    STORAGE_KEY = "storage.key"
    """轮廓保存的键名 (str)"""

    NAVIGATION_CONTINUE_TARGET = "navigation.continue_target"
    """Continue 跳转目标 (str)"""

    # ==================== Logging (日志) ====================
    LOGGING_LEVEL = "logging.level"
    LOGGING_CONSOLE_OUTPUT = "logging.console_output"
