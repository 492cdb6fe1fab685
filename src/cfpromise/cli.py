"""Command-line entry point for serving promise modules."""

from __future__ import annotations

import typer
from loguru import logger

from cfpromise.config import load_settings
from cfpromise.errors import CfPromiseError, ModuleLoadError
from cfpromise.loader import load_promise_module
from cfpromise.logging_utils import configure_logging
from cfpromise.module import PromiseModule
from cfpromise.session import serve

app = typer.Typer(name="cfpromise", help="Serve custom promise modules for the CFEngine agent", add_completion=False)


@app.command("run")
def run(
    target: str = typer.Argument(..., help="Promise module as package.module[:attr] or file.py[:attr]"),
) -> None:
    """Serve one agent session over stdin/stdout."""

    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)
    module = _load_or_exit(target)
    try:
        serve(module, malformed_lines=settings.malformed_lines)
    except CfPromiseError as exc:
        logger.error("session.aborted module={} error={}", module.name, exc)
        raise typer.Exit(1) from exc


@app.command("info")
def info(
    target: str = typer.Argument(..., help="Promise module as package.module[:attr] or file.py[:attr]"),
) -> None:
    """Print the handshake line the module answers with."""

    module = _load_or_exit(target)
    typer.echo(module.handshake_response())


def _load_or_exit(target: str) -> PromiseModule:
    try:
        return load_promise_module(target)
    except ModuleLoadError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(2) from exc
