"""RecordingStateMachine Tests

Session lifecycle IDLE -> RECORDING -> FINALIZED driven by the trigger,
the countdown timer and the per-frame render tick.
"""

import json
from unittest.mock import MagicMock

import pytest

from radialwave.core.interfaces import RecordingState
from radialwave.core.recording_state_machine import RecordingStateMachine
from radialwave.utils import (
    AudioDeviceUnavailableError,
    AudioPermissionError,
    PersistenceError,
)
from mocks import MockAudioSource, RecordingSurface

BIN_SECONDS = 5.0 / 60


def record_frames(state_machine, fake_clock, bins, surface=None):
    """在连续的分箱中各渲染一帧"""
    surface = surface or RecordingSurface()
    session = state_machine.session
    for i in bins:
        fake_clock.now = session.start_time + (i + 0.5) * BIN_SECONDS
        state_machine.render_tick(surface)
    return surface


class TestInitialState:
    def test_starts_idle(self, state_machine):
        assert state_machine.state == RecordingState.IDLE
        assert state_machine.trigger_label == "Record"
        assert state_machine.trigger_style == "idle"
        assert state_machine.contour is None
        assert state_machine.session is None

    def test_invalid_parameters(self, audio_source):
        with pytest.raises(ValueError):
            RecordingStateMachine(audio_source, bin_count=0)
        with pytest.raises(ValueError):
            RecordingStateMachine(audio_source, time_limit=0)

    def test_idle_render_only_clears(self, state_machine, surface):
        state_machine.render_tick(surface)
        assert surface.names() == ["clear"]


class TestStartRecording:
    def test_trigger_starts_recording(self, state_machine, audio_source, countdown_timer):
        state_machine.on_trigger()

        assert state_machine.state == RecordingState.RECORDING
        assert state_machine.trigger_label == "Recording..."
        assert state_machine.trigger_style == "recording"
        assert len(audio_source.handles) == 1
        assert state_machine.session.stream is audio_source.current
        assert countdown_timer.active
        assert countdown_timer.intervals == [1000]

    def test_session_countdown_starts_at_time_limit(self, state_machine):
        state_machine.start()
        assert state_machine.session.time_left == 5

    def test_fractional_time_limit_rounds_up(self, make_state_machine):
        state_machine = make_state_machine(time_limit=2.5)
        state_machine.start()
        assert state_machine.session.time_left == 3

    def test_start_while_recording_is_ignored(self, state_machine, audio_source):
        state_machine.start()
        assert state_machine.start() is False
        assert len(audio_source.handles) == 1


class TestRenderTick:
    def test_first_frame_draws_marker(self, state_machine, fake_clock):
        state_machine.start()
        surface = record_frames(state_machine, fake_clock, [0])

        assert surface.names() == ["clear", "fill_marker"]

    def test_second_bin_draws_line(self, state_machine, fake_clock):
        state_machine.start()
        surface = record_frames(state_machine, fake_clock, [0])
        surface.reset()
        record_frames(state_machine, fake_clock, [1], surface)

        assert surface.names() == ["clear", "begin_path", "move_to", "line_to", "stroke"]

    def test_three_bins_draw_open_spline(self, state_machine, fake_clock):
        state_machine.start()
        record_frames(state_machine, fake_clock, [0, 1])
        surface = record_frames(state_machine, fake_clock, [2])

        assert surface.names().count("cubic_to") == 2

    def test_frames_in_same_bin_overwrite(self, state_machine, fake_clock, audio_source):
        state_machine.start()
        session = state_machine.session

        fake_clock.now = session.start_time + 0.01
        state_machine.render_tick(RecordingSurface())
        audio_source.current.level = 192
        fake_clock.now = session.start_time + 0.05
        state_machine.render_tick(RecordingSurface())

        samples = session.binner.samples()
        assert len(samples) == 1
        assert samples[0].amplitude == pytest.approx(1400)

    def test_missing_buffer_reuses_last_amplitude(self, state_machine, fake_clock, audio_source):
        state_machine.start()
        audio_source.current.level = 192
        record_frames(state_machine, fake_clock, [0])
        audio_source.current.level = None
        record_frames(state_machine, fake_clock, [1])

        amplitudes = [s.amplitude for s in state_machine.session.binner.samples()]
        assert amplitudes == [pytest.approx(1400), pytest.approx(1400)]

    def test_pulls_audio_each_live_frame(self, state_machine, fake_clock, audio_source):
        state_machine.start()
        record_frames(state_machine, fake_clock, [0, 1, 2])
        assert audio_source.current.pull_count == 3


class TestFinalize:
    def test_stop_finalizes(self, state_machine, fake_clock, audio_source, countdown_timer):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(10))
        stream = audio_source.current

        assert state_machine.on_trigger() is None
        assert state_machine.state == RecordingState.FINALIZED
        assert state_machine.trigger_label == "Continue"
        assert state_machine.trigger_style == "continue"
        assert len(state_machine.contour) == 11
        assert state_machine.contour.is_closed
        assert stream.close_count == 1
        assert not countdown_timer.active

    def test_finalize_is_idempotent(self, state_machine, fake_clock, audio_source):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(4))

        assert state_machine.finalize("stop") is True
        contour = state_machine.contour
        assert state_machine.finalize("deadline") is False
        assert state_machine.stop() is False

        assert state_machine.contour is contour
        assert len(contour) == 5
        assert audio_source.current.close_count == 1

    def test_finalize_from_idle_does_nothing(self, state_machine):
        assert state_machine.finalize() is False
        assert state_machine.state == RecordingState.IDLE

    def test_empty_session_gives_empty_contour(self, state_machine, surface):
        state_machine.start()
        state_machine.stop()

        assert state_machine.state == RecordingState.FINALIZED
        assert state_machine.contour.is_empty

        state_machine.render_tick(surface)
        assert surface.names() == ["clear"]

    def test_finalized_render_draws_closed_contour(self, state_machine, fake_clock):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(6))
        state_machine.stop()

        surface = RecordingSurface()
        state_machine.render_tick(surface)

        assert surface.names()[0] == "clear"
        assert surface.names().count("cubic_to") == 7
        assert surface.calls[-1][1].width == 4.0

    def test_contour_persisted(self, state_machine, fake_clock, store_path):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(3))
        state_machine.stop()

        stored = json.loads(store_path.read_text(encoding="utf-8"))
        assert stored["waveformPoints"] == state_machine.contour.to_json_list()
        assert stored["waveformPoints"][0] == stored["waveformPoints"][-1]

    def test_persistence_failure_keeps_finalized(self, make_state_machine, fake_clock):
        persistence = MagicMock()
        persistence.save_contour.side_effect = PersistenceError("disk full")
        state_machine = make_state_machine(persistence=persistence)

        state_machine.start()
        record_frames(state_machine, fake_clock, range(2))
        assert state_machine.stop() is True

        assert state_machine.state == RecordingState.FINALIZED
        persistence.save_contour.assert_called_once_with(state_machine.contour)

    def test_contour_assigned_before_state_published(self, state_machine, fake_clock):
        seen = []
        state_machine.subscribe(lambda old, new: seen.append((new, state_machine.contour)))

        state_machine.start()
        record_frames(state_machine, fake_clock, range(3))
        state_machine.stop()

        new_state, contour = seen[-1]
        assert new_state == RecordingState.FINALIZED
        assert contour is not None and len(contour) == 4

    def test_reentrant_finalize_from_subscriber(self, state_machine, fake_clock):
        calls = []

        def on_change(old, new):
            if new == RecordingState.FINALIZED:
                calls.append(state_machine.finalize("subscriber"))

        state_machine.subscribe(on_change)
        state_machine.start()
        record_frames(state_machine, fake_clock, range(2))
        state_machine.stop()

        assert calls == [False]
        assert len(state_machine.contour) == 3


class TestDeadline:
    def test_countdown_reaching_zero_finalizes(self, state_machine, countdown_timer):
        state_machine.start()
        for _ in range(4):
            state_machine.on_countdown_tick()
        assert state_machine.state == RecordingState.RECORDING
        assert state_machine.session.time_left == 1

        state_machine.on_countdown_tick()
        assert state_machine.state == RecordingState.FINALIZED
        assert not countdown_timer.active

    def test_render_tick_past_deadline_finalizes(self, state_machine, fake_clock):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(60))
        fake_clock.advance(1.0)

        surface = RecordingSurface()
        state_machine.render_tick(surface)

        assert state_machine.state == RecordingState.FINALIZED
        assert len(state_machine.contour) == 61
        assert surface.names().count("cubic_to") == 61

    def test_is_live_checks_deadline(self, state_machine, fake_clock):
        state_machine.start()
        assert state_machine.is_live() is True

        fake_clock.advance(5.0)
        assert state_machine.is_live() is False
        assert state_machine.state == RecordingState.FINALIZED

    def test_countdown_tick_after_deadline_finalizes_early(self, state_machine, fake_clock):
        state_machine.start()
        fake_clock.advance(5.2)
        state_machine.on_countdown_tick()

        assert state_machine.state == RecordingState.FINALIZED

    def test_late_countdown_tick_is_ignored(self, state_machine, fake_clock):
        state_machine.start()
        fake_clock.advance(6.0)
        state_machine.render_tick(RecordingSurface())
        contour = state_machine.contour

        state_machine.on_countdown_tick()
        assert state_machine.contour is contour


class TestAudioFailure:
    @pytest.mark.parametrize("error", [AudioPermissionError(), AudioDeviceUnavailableError()])
    def test_open_failure_reverts_to_idle(self, make_state_machine, countdown_timer, notices, error):
        state_machine = make_state_machine(audio_source=MockAudioSource(fail_with=error))

        assert state_machine.start() is False
        assert state_machine.state == RecordingState.IDLE
        assert state_machine.trigger_label == "Record"
        assert state_machine.contour is None
        assert state_machine.session is None
        assert countdown_timer.intervals == []
        assert len(notices) == 1

    def test_permission_notice_text(self, make_state_machine, notices):
        state_machine = make_state_machine(
            audio_source=MockAudioSource(fail_with=AudioPermissionError())
        )
        state_machine.on_trigger()

        assert notices[0].startswith("Could not access your microphone.")
        assert "microphone permissions" in notices[0]

    def test_unclassified_open_error_reverts_to_idle(self, make_state_machine, countdown_timer,
                                                     notices):
        source = MockAudioSource(fail_with=OSError("Invalid input device"))
        state_machine = make_state_machine(audio_source=source)

        assert state_machine.start() is False
        assert state_machine.state == RecordingState.IDLE
        assert state_machine.session is None
        assert countdown_timer.intervals == []
        assert "Invalid input device" in notices[0]

        surface = RecordingSurface()
        state_machine.render_tick(surface)
        assert surface.names() == ["clear"]

    def test_no_retry(self, make_state_machine):
        source = MockAudioSource(fail_with=AudioPermissionError())
        state_machine = make_state_machine(audio_source=source)

        state_machine.start()
        surface = RecordingSurface()
        state_machine.render_tick(surface)

        assert surface.names() == ["clear"]
        assert state_machine.state == RecordingState.IDLE


class TestRestartAndContinue:
    def test_restart_clears_previous_contour(self, state_machine, fake_clock, audio_source):
        state_machine.start()
        record_frames(state_machine, fake_clock, range(5))
        state_machine.stop()

        assert state_machine.restart() is True
        assert state_machine.state == RecordingState.RECORDING
        assert state_machine.contour is None
        assert len(state_machine.session.binner) == 0
        assert len(audio_source.handles) == 2
        assert audio_source.handles[0].close_count == 1

    def test_restart_only_from_finalized(self, state_machine):
        assert state_machine.restart() is False
        state_machine.start()
        assert state_machine.restart() is False

    def test_continue_navigates(self, state_machine, navigation):
        state_machine.start()
        state_machine.stop()
        state_machine.on_trigger()

        navigation.navigate.assert_called_once_with("mesh")
        assert state_machine.state == RecordingState.FINALIZED

    def test_continue_target_configurable(self, make_state_machine, navigation):
        state_machine = make_state_machine(continue_target="preview")
        state_machine.start()
        state_machine.stop()
        state_machine.continue_downstream()

        navigation.navigate.assert_called_once_with("preview")

    def test_continue_requires_finalized(self, state_machine, navigation):
        state_machine.continue_downstream()
        navigation.navigate.assert_not_called()

    def test_continue_without_navigation(self, make_state_machine):
        state_machine = make_state_machine(navigation=None)
        state_machine.start()
        state_machine.stop()
        state_machine.on_trigger()
        assert state_machine.state == RecordingState.FINALIZED


class TestSubscriptions:
    def test_subscribers_receive_transitions(self, state_machine):
        seen = []
        state_machine.subscribe(lambda old, new: seen.append((old, new)))

        state_machine.start()
        state_machine.stop()

        assert seen == [
            (RecordingState.IDLE, RecordingState.RECORDING),
            (RecordingState.RECORDING, RecordingState.FINALIZED),
        ]

    def test_unsubscribe(self, state_machine):
        seen = []
        subscription_id = state_machine.subscribe(lambda old, new: seen.append(new))

        assert state_machine.unsubscribe(subscription_id) is True
        assert state_machine.unsubscribe(subscription_id) is False
        state_machine.start()
        assert seen == []

    def test_failing_subscriber_does_not_break_transition(self, state_machine):
        def broken(old, new):
            raise RuntimeError("subscriber failure")

        seen = []
        state_machine.subscribe(broken)
        state_machine.subscribe(lambda old, new: seen.append(new))

        state_machine.start()
        assert state_machine.state == RecordingState.RECORDING
        assert seen == [RecordingState.RECORDING]


class TestShutdown:
    def test_shutdown_releases_everything(self, state_machine, audio_source, countdown_timer):
        state_machine.start()
        state_machine.shutdown()

        assert audio_source.current.close_count == 1
        assert audio_source.shutdown_called
        assert not countdown_timer.active

    def test_shutdown_twice(self, state_machine, audio_source):
        state_machine.start()
        state_machine.shutdown()
        state_machine.shutdown()
        assert audio_source.current.close_count == 1

    def test_shutdown_when_idle(self, state_machine, audio_source):
        state_machine.shutdown()
        assert audio_source.shutdown_called
