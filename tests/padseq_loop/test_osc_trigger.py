"""Tests for OscPadTrigger"""

from unittest.mock import MagicMock, patch

import pytest
from padseq_core.constants import PAD_IDS
from padseq_loop.output import PAD_VOICES, OscPadTrigger, PadVoice
from pythonosc.osc_bundle import OscBundle


@pytest.fixture
def udp_client():
    with patch("padseq_loop.output.osc_trigger.udp_client.SimpleUDPClient") as cls:
        yield cls.return_value


class TestVoices:
    """Tests for the pad voice table."""

    def test_every_pad_has_a_voice(self):
        assert set(PAD_VOICES) == set(PAD_IDS)

    def test_gain_from_decibels(self):
        assert PadVoice("kick", 0).gain == pytest.approx(1.0)
        assert PadVoice("snare", -6).gain == pytest.approx(0.501, abs=1e-3)

    def test_right_toms_pitched_up(self):
        assert PAD_VOICES["tom_low_r"].sample == PAD_VOICES["tom_low_l"].sample
        assert PAD_VOICES["tom_low_r"].rate > PAD_VOICES["tom_low_l"].rate


class TestOscPadTrigger:
    """Tests for sending hits."""

    def test_default_address(self):
        trigger = OscPadTrigger()
        assert trigger._address == "/dirt/play"

    def test_not_ready_until_connected(self, udp_client):
        trigger = OscPadTrigger()
        assert not trigger.is_ready
        trigger.connect()
        assert trigger.is_ready
        trigger.disconnect()
        assert not trigger.is_ready

    def test_trigger_without_connection_sends_nothing(self, udp_client):
        trigger = OscPadTrigger()
        trigger.trigger("kick")
        udp_client.send_message.assert_not_called()

    def test_immediate_hit_sends_message(self, udp_client):
        trigger = OscPadTrigger()
        trigger.connect()
        trigger.trigger("kick")
        udp_client.send_message.assert_called_once_with(
            "/dirt/play", ["s", "kick", "gain", 1.0, "speed", 1.0]
        )

    def test_timed_hit_sends_timetagged_bundle(self, udp_client):
        trigger = OscPadTrigger(clock_now=lambda: 10.0)
        trigger.connect()

        with patch("padseq_loop.output.osc_trigger.time.time", return_value=1000.0):
            trigger.trigger("snare", 10.25)

        udp_client.send_message.assert_not_called()
        bundle = udp_client.send.call_args[0][0]
        assert isinstance(bundle, OscBundle)
        assert bundle.timestamp == pytest.approx(1000.25, abs=1e-3)
        message = next(iter(bundle))
        assert message.address == "/dirt/play"
        assert message.params[:2] == ["s", "snare"]

    def test_bundles_can_be_disabled(self, udp_client):
        trigger = OscPadTrigger(use_bundle=False)
        trigger.connect()
        trigger.trigger("splash", 1.0)
        udp_client.send_message.assert_called_once()

    def test_unknown_pad_ignored(self, udp_client):
        trigger = OscPadTrigger()
        trigger.connect()
        trigger.trigger("cowbell")
        udp_client.send_message.assert_not_called()

    def test_send_error_logged_not_raised(self, udp_client):
        udp_client.send_message.side_effect = OSError("network down")
        trigger = OscPadTrigger()
        trigger.connect()
        trigger.trigger("kick")

    def test_satisfies_protocol(self):
        from padseq_loop.protocols import AudioTrigger

        assert isinstance(OscPadTrigger(), AudioTrigger)


class TestStateSink:
    """Tests for InProcessStateSink drop-oldest queue."""

    def test_events_queued(self):
        from padseq_loop.ipc import InProcessStateSink

        sink = InProcessStateSink()
        sink.send_status({"bpm": 120})
        sink.send_position({"step": 3})
        assert sink.queue.get_nowait() == {"type": "status", "data": {"bpm": 120}}
        assert sink.queue.get_nowait()["type"] == "position"

    def test_drop_oldest_when_full(self):
        from padseq_loop.ipc import InProcessStateSink

        sink = InProcessStateSink(maxsize=2)
        for step in range(3):
            sink.send_position({"step": step})
        assert sink.dropped == 1
        assert sink.queue.get_nowait()["data"]["step"] == 1
