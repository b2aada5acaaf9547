"""Pattern commands - create, inspect and convert share links"""

import click

from padseq_core.codec import encode_pattern, share_url
from padseq_core.constants import PAD_IDS, get_pad, pad_index
from padseq_core.editing import convert_subdivision, create_empty_pattern, resize_bars, toggle_step
from padseq_core.ir import DrumPattern, Subdivision

from ._links import SUBDIVISION_CHOICE, load_link


def _parse_hit(value: str) -> tuple[int, list[int]]:
    """Parse ``PAD:STEP[,STEP...]`` with 1-based steps."""
    pad, _, steps = value.partition(":")
    try:
        info = get_pad(pad)
    except KeyError:
        raise click.BadParameter(f"unknown pad {pad!r} (choose from {', '.join(PAD_IDS)})")
    try:
        indices = [int(s) - 1 for s in steps.split(",") if s]
    except ValueError:
        raise click.BadParameter(f"steps must be integers: {value!r}")
    if not indices:
        raise click.BadParameter(f"no steps given: {value!r}")
    return pad_index(info.pad_id), indices


def _emit_link(ctx: click.Context, message: str, pattern: DrumPattern, **extra) -> None:
    formatter = ctx.obj["formatter"]
    encoded = encode_pattern(pattern)
    if encoded is None:
        formatter.error("Failed to encode pattern", "share string exceeds the length limit")
        raise click.Abort()
    formatter.success(
        message,
        {
            "name": pattern.name,
            "url": share_url(ctx.obj["base_url"], encoded),
            "length": len(encoded),
            **extra,
        },
    )


@click.command()
@click.option("--name", default=None, help="Pattern name (default: 'New Pattern')")
@click.option("--bars", type=click.IntRange(1, 4), default=1, help="Length in bars")
@click.option("--subdivision", type=SUBDIVISION_CHOICE, default="16n", help="Grid resolution")
@click.option("--bpm", type=int, default=120, help="Tempo (clamped to 40-200)")
@click.option(
    "--hit",
    "hits",
    multiple=True,
    metavar="PAD:STEP[,STEP...]",
    help="Activate steps (1-based) on a pad, e.g. kick:1,9",
)
@click.pass_context
def new(ctx, name: str | None, bars: int, subdivision: str, bpm: int, hits: tuple[str, ...]):
    """Create a pattern and print its share link

    Example:
        padseq new --name Basic --hit kick:1,9 --hit snare:5,13
    """
    pattern = create_empty_pattern(
        name=name, bars=bars, subdivision=Subdivision(subdivision), bpm=bpm
    )
    for value in hits:
        track, steps = _parse_hit(value)
        for step in steps:
            if not 0 <= step < pattern.total_steps:
                raise click.BadParameter(
                    f"step {step + 1} outside 1-{pattern.total_steps}", param_hint="--hit"
                )
            if not pattern.tracks[track].steps[step].active:
                pattern = toggle_step(pattern, track, step)

    _emit_link(ctx, "Pattern created", pattern, steps=pattern.total_steps)


@click.command()
@click.argument("link")
@click.pass_context
def inspect(ctx, link: str):
    """Show the pattern carried by a share link

    Example:
        padseq inspect "http://localhost:8000/?pattern=eNpj..."
        padseq --json inspect eNpj...
    """
    ctx.obj["formatter"].pattern(load_link(ctx, link))


@click.command()
@click.argument("link")
@click.option("--bars", type=click.IntRange(1, 4), default=None, help="New length in bars")
@click.option("--subdivision", type=SUBDIVISION_CHOICE, default=None, help="New grid resolution")
@click.pass_context
def convert(ctx, link: str, bars: int | None, subdivision: str | None):
    """Resize or re-grid a shared pattern and print the new link

    Example:
        padseq convert --subdivision 8t LINK
    """
    pattern = load_link(ctx, link)
    dropped = 0
    if subdivision is not None:
        conversion = convert_subdivision(pattern, Subdivision(subdivision))
        pattern = conversion.pattern
        dropped += conversion.dropped
    if bars is not None:
        before = pattern.active_count
        pattern = resize_bars(pattern, bars)
        dropped += before - pattern.active_count

    if dropped:
        ctx.obj["formatter"].info(f"{dropped} active step(s) did not survive the conversion")
    _emit_link(ctx, "Pattern converted", pattern, dropped=dropped)
