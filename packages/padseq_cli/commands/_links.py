"""Helpers shared by commands that read share links"""

import click

from padseq_core.codec import decode_pattern, extract_encoded
from padseq_core.ir import DrumPattern, Subdivision

SUBDIVISION_CHOICE = click.Choice([s.value for s in Subdivision])


def load_link(ctx: click.Context, link: str) -> DrumPattern:
    """Decode a share link (or bare share string), aborting on failure."""
    pattern = decode_pattern(extract_encoded(link))
    if pattern is None:
        ctx.obj["formatter"].error("Invalid pattern URL", link)
        raise click.Abort()
    return pattern
