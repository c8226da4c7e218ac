"""Interactive session loop."""

from __future__ import annotations

import asyncio
import logging

from lifxctl.core.context import SessionContext
from lifxctl.core.errors import DiscoveryError
from lifxctl.core.handlers import COLLECTORS, execute
from lifxctl.core.model import Action, ActionRequest, Exit, ReadyInfo

LOGGER = logging.getLogger(__name__)

ACTION_CHOICES = tuple(action.value for action in Action)


class SessionController:
    """Presents the action menu until the user exits.

    Every action runs through `run_isolated`, so a failing action is reported
    and the menu comes back. Only Exit, cancellation, end of input, or a fatal
    discovery error end the session.
    """

    def __init__(self, ctx: SessionContext, *, readiness_timeout_s: float = 15.0) -> None:
        self.ctx = ctx
        self.readiness_timeout_s = readiness_timeout_s
        self.exited = False

    async def start(self) -> ReadyInfo:
        client = self.ctx.client
        await client.start()
        try:
            ready = await asyncio.wait_for(client.wait_ready(), timeout=self.readiness_timeout_s)
        except TimeoutError as exc:
            await client.close()
            raise DiscoveryError(
                f"Device discovery was not ready after {self.readiness_timeout_s:g}s"
            ) from exc
        except DiscoveryError:
            await client.close()
            raise

        LOGGER.info("Client ready on %s:%s", ready.address, ready.port)
        self.ctx.renderer.info(f"Started LIFX listening on {ready.address}:{ready.port}")
        return ready

    async def run(self) -> int:
        await self.start()
        while not self.exited:
            await self._check_client()
            answer = await self.ctx.prompter.select("What to do?", ACTION_CHOICES)
            try:
                action = Action(answer)
            except ValueError:
                self.ctx.renderer.error("Unknown option")
                continue

            request = await self.run_isolated(action)
            if isinstance(request, Exit):
                self.exited = True
        return 0

    async def run_isolated(self, action: Action) -> ActionRequest | None:
        """Run one action, reporting any failure instead of raising it."""
        try:
            request = await COLLECTORS[action](self.ctx)
            # Discovery may have died while the user was answering prompts.
            await self._check_client()
            await execute(self.ctx, request)
            return request
        except (DiscoveryError, EOFError):
            raise
        except Exception as exc:
            LOGGER.debug("Action %s failed", action.value, exc_info=True)
            self.ctx.renderer.error(str(exc) or type(exc).__name__)
            return None

    async def _check_client(self) -> None:
        error = self.ctx.client.fatal_error
        if error is not None:
            await self.ctx.client.close()
            raise error
