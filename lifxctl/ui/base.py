"""Terminal interaction interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class Prompter(Protocol):
    async def select(self, message: str, choices: Sequence[str], default: str | None = None) -> str:
        """Ask for exactly one of `choices`."""

    async def text(self, message: str, default: str = "") -> str:
        ...

    async def number(self, message: str, default: float) -> float:
        """Ask for a number. Range checks are the caller's job."""


class Renderer(Protocol):
    def table(self, title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
