"""Play command - run the transport for a shared pattern over OSC"""

import asyncio
import logging

import click

from padseq_core.editing import PatternStore
from padseq_core.ir import DrumPattern
from padseq_loop.factory import create_transport
from padseq_loop.output import OscPadTrigger

from ._links import load_link

logger = logging.getLogger(__name__)

# How often the --once wait checks for the end-of-pattern stop
_POLL_INTERVAL = 0.05


@click.command()
@click.argument("link")
@click.option("--host", default=OscPadTrigger.DEFAULT_HOST, help="Sampler OSC host")
@click.option("--port", type=int, default=OscPadTrigger.DEFAULT_PORT, help="Sampler OSC port")
@click.option("--address", default=OscPadTrigger.DEFAULT_ADDRESS, help="OSC message address")
@click.option("--bpm", type=int, default=None, help="Override the pattern tempo")
@click.option("--once", is_flag=True, help="Play the pattern once instead of looping")
@click.option("--duration", type=float, default=None, help="Stop after this many seconds")
@click.pass_context
def play(
    ctx,
    link: str,
    host: str,
    port: int,
    address: str,
    bpm: int | None,
    once: bool,
    duration: float | None,
):
    """Play a shared pattern on a SuperDirt-style sampler

    Loops until interrupted unless --once or --duration is given.

    Example:
        padseq play --once LINK
        padseq play --duration 30 --port 57120 LINK
    """
    formatter = ctx.obj["formatter"]
    pattern = load_link(ctx, link)
    formatter.info(f"Playing {pattern.name!r} on {host}:{port}{address}")

    try:
        summary = asyncio.run(_play_async(pattern, host, port, address, bpm, once, duration))
    except KeyboardInterrupt:
        formatter.info("Interrupted")
        return

    formatter.success("Playback finished", summary)


async def _play_async(
    pattern: DrumPattern,
    host: str,
    port: int,
    address: str,
    bpm: int | None,
    once: bool,
    duration: float | None,
) -> dict:
    """Run the transport until the pattern ends, the duration passes or cancellation"""
    store = PatternStore(pattern)
    runtime = create_transport(store=store, osc_host=host, osc_port=port, osc_address=address)
    transport = runtime.transport

    loop = asyncio.get_running_loop()
    started = loop.time()
    runtime.audio.connect()
    frame_task = asyncio.create_task(runtime.frames.run())
    try:
        if bpm is not None:
            transport.set_bpm(bpm)
        if once:
            transport.set_looping(False)
        transport.play()

        if once:
            while not transport.state.is_stopped:
                await asyncio.sleep(_POLL_INTERVAL)
        elif duration is not None:
            await asyncio.sleep(duration)
        else:
            await asyncio.Event().wait()
        return {
            "bpm": transport.state.bpm,
            "elapsed": round(loop.time() - started, 3),
            "late_ticks": runtime.clock.get_drift_stats()["late_count"],
        }
    finally:
        transport.close()
        runtime.frames.stop()
        frame_task.cancel()
        try:
            await frame_task
        except asyncio.CancelledError:
            pass
        runtime.audio.disconnect()
        logger.debug("Playback runtime shut down")
