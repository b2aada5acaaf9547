"""Serve command - run the HTTP API"""

import click
import uvicorn

from padseq_api.config import settings


@click.command()
@click.option("--host", default=None, help=f"Bind address (default: {settings.api_host})")
@click.option("--port", type=int, default=None, help=f"Bind port (default: {settings.api_port})")
@click.option("--reload", is_flag=True, help="Reload on code changes")
@click.pass_context
def serve(ctx, host: str | None, port: int | None, reload: bool):
    """Start the padseq HTTP API server

    Example:
        padseq serve --port 8000
    """
    ctx.obj["formatter"].info("Starting padseq API")
    uvicorn.run(
        "padseq_api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level="debug" if ctx.obj["verbose"] else "info",
    )
