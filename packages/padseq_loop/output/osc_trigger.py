"""
padseq OSC Pad Trigger

Plays pads on a SuperDirt-style sampler. Hits that carry a clock
timestamp are sent as OSC bundles timetagged to that moment, so the
sampler places them exactly even though ticks run ahead of time.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from pythonosc import osc_bundle_builder, osc_message_builder, udp_client

from .voices import PAD_VOICES, PadVoice

logger = logging.getLogger(__name__)


class OscPadTrigger:
    """AudioTrigger over OSC."""

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 57120  # SuperDirt default port
    DEFAULT_ADDRESS = "/dirt/play"  # SuperDirt default address

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        address: str = DEFAULT_ADDRESS,
        voices: dict[str, PadVoice] | None = None,
        use_bundle: bool = True,
        clock_now: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize OSC trigger.

        Args:
            host: OSC server host
            port: OSC server port
            address: OSC address pattern
            voices: Pad voice table (defaults to PAD_VOICES)
            use_bundle: Send timestamped hits as timetagged bundles
            clock_now: Timeline of the timestamps passed to ``trigger``
        """
        self._host = host
        self._port = port
        self._address = address
        self._voices = voices if voices is not None else PAD_VOICES
        self._use_bundle = use_bundle
        self._clock_now = clock_now
        self._client: udp_client.SimpleUDPClient | None = None

    def connect(self) -> None:
        """Initialize OSC client"""
        self._client = udp_client.SimpleUDPClient(self._host, self._port)
        logger.info(f"OSC client connected to {self._host}:{self._port}")

    def disconnect(self) -> None:
        """Close OSC client"""
        self._client = None
        logger.info("OSC client disconnected")

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    def to_wall_time(self, timestamp: float) -> float:
        """Convert a clock timestamp to seconds since the epoch for a timetag."""
        return time.time() + (timestamp - self._clock_now())

    def build_args(self, pad_id: str) -> list[Any]:
        """OSC args for a pad: [key, value, key, value, ...]"""
        voice = self._voices[pad_id]
        args: list[Any] = []
        for key, value in voice.to_params().items():
            args.extend([key, value])
        return args

    def trigger(self, pad_id: str, time: float | None = None) -> None:
        if not self._client:
            logger.warning("OSC client not connected")
            return
        if pad_id not in self._voices:
            logger.warning(f"No voice for pad {pad_id!r}")
            return

        args = self.build_args(pad_id)
        try:
            if time is None or not self._use_bundle:
                self._client.send_message(self._address, args)
                return

            message = osc_message_builder.OscMessageBuilder(address=self._address)
            for arg in args:
                message.add_arg(arg)
            bundle = osc_bundle_builder.OscBundleBuilder(self.to_wall_time(time))
            bundle.add_content(message.build())
            self._client.send(bundle.build())
        except OSError as e:
            logger.error(f"OSC send error: {e}")

    def __repr__(self) -> str:
        return (
            f"OscPadTrigger(host={self._host!r}, port={self._port}, "
            f"address={self._address!r})"
        )
