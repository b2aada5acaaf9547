"""
Tests for Transport looping, seeking and tempo
"""

import pytest
from padseq_core.editing import PatternStore
from padseq_loop.engine import Transport, split_position
from padseq_loop.state import PlaybackState


class TestSplitPosition:
    """Test position -> (step, remainder) helper"""

    def test_aligned(self):
        assert split_position(0.375, 0.125) == (3, 0.0)

    def test_between_steps(self):
        index, remainder = split_position(0.3, 0.125)
        assert index == 2
        assert remainder == pytest.approx(0.05)

    def test_float_noise_snaps_to_boundary(self):
        assert split_position(3 * (60 / 140 / 4) - 1e-12, 60 / 140 / 4) == (3, 0.0)


class TestLooping:
    """Test loop on/off"""

    def test_looping_on_by_default(self, transport):
        assert transport.state.looping

    def test_no_loop_stops_after_last_step(self, transport, store, clock, audio):
        store.toggle_step(16, 0)
        store.toggle_step(16, 15)
        transport.set_looping(False)
        transport.play()

        clock.advance(15 * 0.125)  # last step fires
        assert audio.pads() == ["kick", "kick"]
        assert transport.has_pending_stop
        assert clock.repeat_count == 0
        assert transport.is_playing

        clock.advance(0.125)
        assert transport.state.playback_state == PlaybackState.STOPPED
        assert audio.pads() == ["kick", "kick"]  # no wrap to step 0
        assert clock.pending == 0

    def test_reenable_loop_before_end_stop(self, transport, store, clock, audio):
        store.toggle_step(16, 0)
        transport.set_looping(False)
        transport.play()
        clock.advance(15 * 0.125)
        transport.set_looping(True)
        assert not transport.has_pending_stop

        audio.reset()
        clock.advance(0.125)
        assert transport.is_playing
        assert audio.pads() == ["kick"]

    def test_toggle_loop(self, transport):
        transport.toggle_loop()
        assert not transport.state.looping
        transport.toggle_loop()
        assert transport.state.looping

    def test_set_same_looping_ignored(self, transport):
        assert not transport.set_looping(True).applied


class TestSeek:
    """Test playhead positioning"""

    def test_seek_ignored_while_playing(self, transport, clock):
        transport.play()
        clock.advance(0.2)
        result = transport.set_playhead(8)
        assert not result.applied
        assert clock.position == pytest.approx(0.2)

    def test_seek_without_pattern_ignored(self, clock, frames, audio):
        transport = Transport(PatternStore(), clock, frames, audio)
        assert not transport.seek_forward().applied

    def test_seek_while_stopped_cues_play(self, transport, store, clock, audio):
        store.toggle_step(16, 4)
        transport.set_playhead(4)
        assert transport.state.current_step == 4
        transport.play()
        clock.advance(0)
        assert audio.pads() == ["kick"]

    def test_seek_clamped(self, transport):
        transport.set_playhead(99)
        assert transport.state.current_step == 15
        transport.set_playhead(-3)
        assert transport.state.current_step == 0

    def test_seek_forward_backward(self, transport, clock):
        transport.seek_forward(3)
        assert transport.state.current_step == 3
        transport.seek_backward()
        assert transport.state.current_step == 2
        assert clock.position == pytest.approx(0.25)
        transport.seek_backward(10)
        assert transport.state.current_step == 0

    def test_seek_while_paused_moves_resume_position(self, transport, clock):
        transport.play()
        clock.advance(0.3)
        transport.pause()
        transport.seek_forward()
        assert transport.state.current_step == 3
        assert transport.state.paused_position == pytest.approx(0.375)


class TestTempo:
    """Test BPM changes"""

    @pytest.mark.parametrize("value,expected", [(300, 200), (10, 40), (99.5, 100)])
    def test_set_bpm_clamps_and_rounds(self, transport, value, expected):
        transport.set_bpm(value)
        assert transport.state.bpm == expected

    def test_set_bpm_mirrors_into_pattern(self, transport, store, clock):
        transport.set_bpm(90)
        assert store.current.bpm == 90
        assert clock.bpm == 90

    def test_set_bpm_without_pattern(self, clock, frames, audio):
        transport = Transport(PatternStore(), clock, frames, audio)
        result = transport.set_bpm(100)
        assert result.applied
        assert transport.state.bpm == 100
        assert transport.step_duration == pytest.approx(0.15)

    def test_adjust_bpm(self, transport):
        transport.adjust_bpm(-5)
        assert transport.state.bpm == 115

    def test_tempo_change_while_playing_keeps_step_sequence(
        self, transport, kick_every_step, clock, frames, audio
    ):
        transport.play()
        clock.advance(0.2)  # steps 0 and 1 played, step 2 due at 0.25
        transport.set_bpm(60)  # step duration doubles

        assert clock.repeat_count == 1
        audio.reset()
        clock.advance(0.1)  # step 2 now due 0.1s later
        assert len(audio.hits) == 1
        frames.flush()
        assert transport.state.current_step == 2

    def test_tempo_change_while_paused_keeps_step(self, transport, clock):
        transport.play()
        clock.advance(0.3)
        transport.pause()
        transport.set_bpm(60)
        assert transport.state.current_step == 2
        assert transport.state.paused_position == pytest.approx(0.6)

    def test_reset_restores_default_tempo(self, transport, clock):
        transport.set_bpm(150)
        transport.play()
        transport.reset()
        assert transport.state.bpm == 120
        assert transport.state.playback_state == PlaybackState.STOPPED


class TestStatus:
    """Test published status"""

    def test_status_published_on_transitions(self, transport, sink):
        transport.play()
        transport.pause()
        transport.stop()
        states = [s["playback_state"] for s in sink.statuses]
        assert states[-3:] == ["playing", "paused", "stopped"]

    def test_get_status(self, transport):
        status = transport.get_status()
        assert status["total_steps"] == 16
        assert status["bpm"] == 120
        assert status["is_playing"] is False
