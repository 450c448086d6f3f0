"""
Pacing Controller — simulated "typing" delays around presentation calls.

Delays scale linearly with the amount of output and inversely with the
configured speed (words per minute, five characters to a word):

    seconds = unit_count / (5 * typing_speed / 60)

While a delay runs the surface shows its "working" indicator.
With typing disabled every pause is a no-op.
"""
from __future__ import annotations

import asyncio
import structlog
from typing import Awaitable, Callable

from channels.base import PresentationSurface

logger = structlog.get_logger()

CHARS_PER_WORD = 5
CHOICE_BASE_UNITS = 10      # fixed lead-in before a list of choices
INPUT_BASE_UNITS = 10       # fixed lead-in before a free-text prompt


class PacingController:

    def __init__(
        self,
        surface: PresentationSurface,
        typing: bool = True,
        typing_speed: float = 100,
        sleep: Callable[[float], Awaitable[None]] = None,
    ):
        if typing_speed <= 0:
            raise ValueError(f"typing_speed must be positive, got {typing_speed}")
        self.surface = surface
        self.typing = typing
        self.typing_speed = typing_speed
        self._sleep = sleep or asyncio.sleep

    def delay_for(self, unit_count: int) -> float:
        """Seconds of simulated typing for `unit_count` characters."""
        chars_per_second = CHARS_PER_WORD * self.typing_speed / 60
        return unit_count / chars_per_second

    async def pause(self, unit_count: int, with_indicator: bool = True):
        if not self.typing:
            return

        seconds = self.delay_for(unit_count)
        logger.debug("typing_pause", units=unit_count, seconds=round(seconds, 3))
        if not with_indicator:
            await self._sleep(seconds)
            return

        await self.surface.show_ellipsis()
        try:
            await self._sleep(seconds)
        finally:
            await self.surface.hide_ellipsis()

    async def chat(self, text: str):
        await self.pause(len(text))
        await self.surface.show_text(text)

    async def before_choices(self, labels: list[str]):
        await self.pause(CHOICE_BASE_UNITS + sum(len(label) for label in labels))

    async def before_input(self):
        await self.pause(INPUT_BASE_UNITS)
