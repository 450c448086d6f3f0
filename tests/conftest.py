"""Shared test fixtures for ScriptChat."""
import asyncio
from collections import deque
from typing import Any, Optional

import pytest

from channels.base import PresentationSurface
from context.variables import VariableStore
from core.gate import EventGate
from core.session import Session
from models.schemas import EventId, InputKind, ReplyButton


class ScriptedSurface(PresentationSurface):
    """
    Presentation surface that answers from a queue of canned replies and
    records every call it receives, in order.

    Button replies are matched against each button's `result`. With
    defer=True answers are delivered from a separate task, so the process
    really suspends on the gate before the answer arrives.
    """

    def __init__(self, replies: list[Any] = None, defer: bool = False):
        super().__init__()
        self.replies = deque(replies or [])
        self.defer = defer
        self.calls: list[tuple] = []
        self.texts: list[str] = []
        self.forms: list[Any] = []
        self._tasks: list[asyncio.Task] = []

    def _next_reply(self) -> Any:
        if not self.replies:
            raise AssertionError("ScriptedSurface ran out of replies")
        return self.replies.popleft()

    async def _answer(self, event_id: EventId, result: Any):
        if self.defer:
            self._tasks.append(asyncio.create_task(self.deliver(event_id, result)))
        else:
            await self.deliver(event_id, result)

    async def show_text(self, text: str) -> None:
        self.calls.append(("show_text", text))
        self.texts.append(text)

    async def show_reply_buttons(self, event_id: EventId, buttons: list[ReplyButton]) -> None:
        self.calls.append(("show_reply_buttons", event_id, buttons))
        await self._answer(event_id, self._next_reply())

    async def get_user_input(
        self,
        event_id: EventId,
        kind: InputKind,
        pattern: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        self.calls.append(("get_user_input", event_id, kind, pattern, hint))
        await self._answer(event_id, self._next_reply())

    async def show_ellipsis(self) -> None:
        self.calls.append(("show_ellipsis",))

    async def hide_ellipsis(self) -> None:
        self.calls.append(("hide_ellipsis",))

    async def show_form(self, form: Any) -> None:
        self.calls.append(("show_form", form))
        self.forms.append(form)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def store() -> VariableStore:
    return VariableStore()


@pytest.fixture
def gate(store) -> EventGate:
    return EventGate(store)


@pytest.fixture
def surface() -> ScriptedSurface:
    return ScriptedSurface()


@pytest.fixture
def session(surface) -> Session:
    return Session(surface, typing=False)


@pytest.fixture
def make_session():
    """Build a session over a fresh ScriptedSurface with the given replies."""
    def _make(replies: list[Any] = None, defer: bool = False, **kwargs) -> Session:
        kwargs.setdefault("typing", False)
        return Session(ScriptedSurface(replies, defer=defer), **kwargs)
    return _make
