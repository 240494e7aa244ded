"""UI测试的配置和fixtures"""
import pytest

from radialwave.ui import RecorderWindow


@pytest.fixture
def recorder_window(qtbot, make_state_machine):
    """创建 RecorderWindow 实例，状态机使用 Mock 音频源"""
    holder = {}

    def _make(**overrides):
        overrides.setdefault("notice_callback", lambda message: holder["window"].show_notice(message))
        state_machine = make_state_machine(**overrides)
        window = RecorderWindow(state_machine)
        holder["window"] = window
        qtbot.addWidget(window)  # 确保测试结束后自动清理
        with qtbot.waitExposed(window):
            window.show()
        return window

    return _make


@pytest.fixture
def warnings_shown(monkeypatch):
    """拦截模态 QMessageBox，记录提示文本"""
    shown = []

    def fake_warning(parent, title, text, *args, **kwargs):
        shown.append(text)

    monkeypatch.setattr("radialwave.ui.recorder_window.QMessageBox.warning", fake_warning)
    return shown
