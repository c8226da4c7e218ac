"""prompt_toolkit based prompter."""

from __future__ import annotations

import math
from collections.abc import Sequence

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import DummyCompleter, WordCompleter
from prompt_toolkit.validation import DummyValidator, Validator

from lifxctl.core.errors import InvalidField


def match_choice(answer: str, choices: Sequence[str]) -> str | None:
    """Resolve a typed answer to a choice by name (any case) or 1-based index."""
    typed = answer.strip()
    if not typed:
        return None
    for choice in choices:
        if choice.lower() == typed.lower():
            return choice
    if typed.isdigit():
        index = int(typed)
        if 1 <= index <= len(choices):
            return choices[index - 1]
    return None


def parse_number(answer: str) -> float | None:
    try:
        value = float(answer.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class PromptToolkitPrompter:
    def __init__(self, session: PromptSession[str] | None = None) -> None:
        self._prompt_session = session

    @property
    def _session(self) -> PromptSession[str]:
        # Created on first use so non-interactive commands never touch the terminal.
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        return self._prompt_session

    async def select(self, message: str, choices: Sequence[str], default: str | None = None) -> str:
        options = list(choices)
        for index, choice in enumerate(options, start=1):
            print_formatted_text(f"  {index}) {choice}")
        answer = await self._session.prompt_async(
            f"{message} ",
            default=default or "",
            completer=WordCompleter(options, ignore_case=True),
            validator=Validator.from_callable(
                lambda text: match_choice(text, options) is not None,
                error_message=f"Pick one of: {', '.join(options)}",
                move_cursor_to_end=True,
            ),
            validate_while_typing=False,
        )
        picked = match_choice(answer, options)
        if picked is None:
            raise InvalidField(f"'{answer}' is not one of: {', '.join(options)}")
        return picked

    async def text(self, message: str, default: str = "") -> str:
        return await self._session.prompt_async(
            f"{message} ",
            default=default,
            completer=DummyCompleter(),
            validator=DummyValidator(),
        )

    async def number(self, message: str, default: float) -> float:
        answer = await self._session.prompt_async(
            f"{message} ",
            default=f"{default:g}",
            completer=DummyCompleter(),
            validator=Validator.from_callable(
                lambda text: parse_number(text) is not None,
                error_message="Enter a number",
                move_cursor_to_end=True,
            ),
            validate_while_typing=False,
        )
        value = parse_number(answer)
        if value is None:
            raise InvalidField(f"'{answer}' is not a number")
        return value
