"""
Console Surface — terminal presentation for local runs and demos.

Provides:
- Plain text output
- Numbered reply buttons with a re-asking number prompt
- Free-text prompts (the hint is printed before a retry)
- Animated ".ooo" typing indicator while the session is pacing

Input is read off the event loop (asyncio.to_thread) so the indicator keeps
animating and the loop stays responsive.
"""
from __future__ import annotations

import asyncio
import sys
import structlog
from typing import Any, Awaitable, Callable, Optional, TextIO

from channels.base import InputSanitizer, PresentationSurface
from models.schemas import EventId, InputKind, ReplyButton

logger = structlog.get_logger()

ELLIPSIS_FRAMES = [".ooo", "o.oo", "oo.o", "ooo."]
ELLIPSIS_START_DELAY = 0.5
ELLIPSIS_FRAME_INTERVAL = 0.4

LineReader = Callable[[str], Awaitable[str]]


async def _read_stdin(prompt: str) -> str:
    return await asyncio.to_thread(input, prompt)


class ConsoleSurface(PresentationSurface):

    def __init__(self, stream: TextIO = None, reader: LineReader = None):
        super().__init__()
        self._stream = stream or sys.stdout
        self._reader = reader or _read_stdin
        self._sanitizer = InputSanitizer()
        self._ellipsis_task: Optional[asyncio.Task] = None

    def _write(self, text: str = ""):
        print(text, file=self._stream, flush=True)

    def _overwrite(self, text: str):
        self._stream.write("\r" + " " * 8 + "\r" + text)
        self._stream.flush()

    # ── Output ────────────────────────────────────────────────

    async def show_text(self, text: str) -> None:
        self._write(text)

    async def show_form(self, form: Any) -> None:
        self._write(f"Unable to show form {form} - not implemented")
        logger.warning("form_not_supported", surface="console")

    # ── Input ─────────────────────────────────────────────────

    async def show_reply_buttons(self, event_id: EventId, buttons: list[ReplyButton]) -> None:
        for index, button in enumerate(buttons, start=1):
            self._write(f"{index}) {button.text}")

        selection = None
        while selection is None:
            raw = self._sanitizer.sanitize(
                await self._reader(f"Enter a number from 1 to {len(buttons)}: ")
            )
            try:
                number = int(raw)
            except ValueError:
                continue
            if 1 <= number <= len(buttons):
                selection = buttons[number - 1]

        await self.deliver(event_id, selection.result)

    async def get_user_input(
        self,
        event_id: EventId,
        kind: InputKind,
        pattern: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        if hint:
            self._write(hint)
        suffix = "" if kind is InputKind.TEXT else f" ({kind.value})"
        raw = await self._reader(f"{event_id.key}{suffix}> ")
        await self.deliver(event_id, self._sanitizer.sanitize(raw))

    # ── Typing indicator ──────────────────────────────────────

    async def show_ellipsis(self) -> None:
        if self._ellipsis_task is None:
            self._ellipsis_task = asyncio.create_task(self._animate_ellipsis())

    async def hide_ellipsis(self) -> None:
        task, self._ellipsis_task = self._ellipsis_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._overwrite("")

    async def _animate_ellipsis(self):
        frames = list(ELLIPSIS_FRAMES)
        await asyncio.sleep(ELLIPSIS_START_DELAY)
        while True:
            self._overwrite(frames[0])
            frames.append(frames.pop(0))
            await asyncio.sleep(ELLIPSIS_FRAME_INTERVAL)

    async def shutdown(self) -> None:
        await self.hide_ellipsis()
