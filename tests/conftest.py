"""pytest 配置和全局 fixtures"""
import os
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# 添加 src 到 path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# 日志写到临时目录，不触碰用户的 ~/.radialwave；必须在导入 radialwave 之前设置
os.environ.setdefault("RADIALWAVE_HOME", tempfile.mkdtemp(prefix="radialwave-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from radialwave.core.recording_state_machine import RecordingStateMachine  # noqa: E402
from radialwave.core.services import JsonFilePersistenceAdapter  # noqa: E402
from radialwave.geometry import PointProjector  # noqa: E402

from mocks import FakeClock, MockAudioSource, MockCountdownTimer, RecordingSurface  # noqa: E402


# ============= Mock Fixtures =============

@pytest.fixture
def fake_clock():
    """手动推进的时钟"""
    return FakeClock()


@pytest.fixture
def audio_source():
    """静音输入源"""
    return MockAudioSource()


@pytest.fixture
def countdown_timer():
    return MockCountdownTimer()


@pytest.fixture
def surface():
    """记录所有绘图调用的 400x400 表面"""
    return RecordingSurface()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "waveform_store.json"


@pytest.fixture
def persistence(store_path):
    """临时目录中的 JSON 存储"""
    return JsonFilePersistenceAdapter(store_path)


@pytest.fixture
def navigation():
    nav = MagicMock()
    nav.navigate.return_value = None
    return nav


@pytest.fixture
def notices():
    """收集向用户显示的提示"""
    return []


# ============= 状态机 Fixtures =============

@pytest.fixture
def make_state_machine(audio_source, countdown_timer, persistence, navigation,
                       notices, fake_clock):
    """用 Mock 依赖创建状态机，关键字参数覆盖默认依赖"""
    def _make(**overrides):
        kwargs = dict(
            audio_source=audio_source,
            projector=PointProjector.for_canvas(400, 100.0),
            persistence=persistence,
            navigation=navigation,
            countdown_timer=countdown_timer,
            notice_callback=notices.append,
            clock=fake_clock,
            time_limit=5.0,
            bin_count=60,
        )
        kwargs.update(overrides)
        return RecordingStateMachine(**kwargs)

    return _make


@pytest.fixture
def state_machine(make_state_machine):
    return make_state_machine()
