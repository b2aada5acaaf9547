"""Main CLI entry point"""

import logging

import click
from rich.console import Console

from padseq_api.config import settings
from padseq_cli.commands.pattern import convert, inspect, new
from padseq_cli.commands.play import play
from padseq_cli.commands.serve import serve
from padseq_cli.utils.output import OutputFormatter


def setup_logging(verbose: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("--base-url", default=settings.public_url, help="Address share links point at")
@click.option("--json", "json_mode", is_flag=True, help="Output as JSON")
@click.option("--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, base_url: str, json_mode: bool, verbose: bool):
    """padseq CLI - finger drum patterns from the command line

    Examples:
        padseq new --hit kick:1,9 --hit snare:5,13
        padseq inspect LINK
        padseq play --once LINK
        padseq --json inspect LINK
    """
    setup_logging(verbose or settings.debug)

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["verbose"] = verbose

    console = Console()
    ctx.obj["console"] = console
    ctx.obj["formatter"] = OutputFormatter(json_mode=json_mode, console=console)


# Register commands
cli.add_command(new)
cli.add_command(inspect)
cli.add_command(convert)
cli.add_command(play)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
