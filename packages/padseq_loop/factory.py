"""
padseq Loop Factory

Factory functions for creating production Transport instances.
Separates object creation from business logic (DI pattern).
"""

from __future__ import annotations

from dataclasses import dataclass

from padseq_core.editing import PatternStore

from .engine import FrameSync, PlayheadSampler, Transport, TransportClock
from .ipc import InProcessStateSink
from .output import OscPadTrigger


@dataclass
class TransportRuntime:
    """A transport together with the runtime pieces it was built from."""

    transport: Transport
    clock: TransportClock
    frames: FrameSync
    audio: OscPadTrigger
    playhead: PlayheadSampler
    state_sink: InProcessStateSink


def create_transport(
    store: PatternStore | None = None,
    osc_host: str = OscPadTrigger.DEFAULT_HOST,
    osc_port: int = OscPadTrigger.DEFAULT_PORT,
    osc_address: str = OscPadTrigger.DEFAULT_ADDRESS,
    lookahead: float = TransportClock.DEFAULT_LOOKAHEAD,
    frame_rate: float = FrameSync.DEFAULT_FPS,
    state_sink: InProcessStateSink | None = None,
) -> TransportRuntime:
    """
    Create a production Transport with real I/O dependencies.

    Must be called with a running event loop when playback starts, since
    the clock schedules asyncio tasks.

    Args:
        store: Pattern holder (default: a new empty store)
        osc_host: OSC destination host
        osc_port: OSC destination port
        osc_address: OSC message address (default: "/dirt/play" for SuperDirt)
        lookahead: Seconds ticks run ahead of their timestamp
        frame_rate: Render loop frames per second
        state_sink: State publisher (default: InProcessStateSink)

    Returns:
        TransportRuntime bundling the transport and its collaborators
    """
    clock = TransportClock(lookahead=lookahead)
    frames = FrameSync(now=clock.now, fps=frame_rate)
    audio = OscPadTrigger(osc_host, osc_port, osc_address, clock_now=clock.now)
    sink = state_sink if state_sink is not None else InProcessStateSink()

    transport = Transport(
        store=store if store is not None else PatternStore(),
        clock=clock,
        frames=frames,
        audio=audio,
        state_sink=sink,
    )
    playhead = PlayheadSampler(transport)
    frames.add_frame_listener(playhead.on_frame)

    return TransportRuntime(
        transport=transport,
        clock=clock,
        frames=frames,
        audio=audio,
        playhead=playhead,
        state_sink=sink,
    )
