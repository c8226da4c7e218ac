"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import Any

import typer

from lifxctl.clients.base import DeviceClient
from lifxctl.clients.lan import LanDeviceClient
from lifxctl.core.context import SessionContext
from lifxctl.core.errors import LifxctlError
from lifxctl.core.session import SessionController
from lifxctl.ui.base import Prompter, Renderer
from lifxctl.ui.prompts import PromptToolkitPrompter
from lifxctl.ui.render import PlainRenderer, RichRenderer

app = typer.Typer(help="Interactive control of LIFX lights on the local network")
LOGGER = logging.getLogger(__name__)

READINESS_TIMEOUT_S = 15.0


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_client() -> DeviceClient:
    return LanDeviceClient()


def _build_prompter() -> Prompter:
    return PromptToolkitPrompter()


def _build_renderer() -> Renderer:
    # Rich tables only when a terminal is attached; pipes get aligned plain text.
    if sys.stdout.isatty():
        return RichRenderer()
    return PlainRenderer()


def _build_context() -> SessionContext:
    return SessionContext(
        client=_build_client(),
        prompter=_build_prompter(),
        renderer=_build_renderer(),
    )


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    LOGGER.error(
        "Unhandled error in background task: %s",
        context.get("message"),
        exc_info=context.get("exception"),
    )


def _cancel_on_sigterm(loop: asyncio.AbstractEventLoop, task: asyncio.Task[Any]) -> None:
    try:
        loop.add_signal_handler(signal.SIGTERM, task.cancel)
    except (NotImplementedError, RuntimeError):  # pragma: no cover - platform specific
        LOGGER.debug("SIGTERM handler not available on this platform")


async def _session_main(ctx: SessionContext) -> int:
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(_log_loop_exception)
    task = asyncio.current_task()
    if task is not None:
        _cancel_on_sigterm(loop, task)

    controller = SessionController(ctx, readiness_timeout_s=READINESS_TIMEOUT_S)
    try:
        return await controller.run()
    finally:
        await ctx.client.close()


def _run_session(ctx: SessionContext) -> int:
    try:
        return asyncio.run(_session_main(ctx))
    except (KeyboardInterrupt, EOFError, asyncio.CancelledError):
        LOGGER.debug("Session terminated")
        return 0


@app.command()
def main() -> None:
    """Start an interactive session with the lights on the local network."""
    _configure_logging()
    try:
        code = _run_session(_build_context())
    except LifxctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    raise typer.Exit(code=code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
