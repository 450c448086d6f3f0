"""
Session Methods — the API a running process scripts against.

Each process invocation gets its own SessionMethods, bound to the session
and to the process's registered name. Every EventId it creates is
(process name, key), so identical keys in different processes never
collide.

    async def signup(m):
        await m.chat("Welcome!")
        plan = await m.choose("plan", ["Free", "Pro"])
        age = await m.get_input("age", "int", r"^[0-9]+$", "Digits only, please.")
        details = await m.run((collect_details, "details"))
"""
from __future__ import annotations

import re
import structlog
from typing import TYPE_CHECKING, Any, Optional, Union

from core.buttons import find_button, normalize_reply_buttons
from core.process import Process
from models.schemas import ActionReplyButton, EventId, InputKind, ReplyButton

if TYPE_CHECKING:
    from core.session import Session

logger = structlog.get_logger()

_REJECTED = object()


class SessionMethods:

    def __init__(self, session: "Session", owner: str):
        self._session = session
        self.owner = owner

    def event_id(self, key: str) -> EventId:
        return EventId(owner=self.owner, key=key)

    # ── Variables ─────────────────────────────────────────────

    def set_value(self, key: str, value: Any) -> Any:
        return self._session.store.set_value(key, value)

    def get_value(self, key: Any = None) -> Any:
        return self._session.store.get_value(key)

    # ── Output ────────────────────────────────────────────────

    async def chat(self, text: str):
        await self._session.pacing.chat(text)

    async def show_form(self, form: Any):
        await self._session.surface.show_form(form)

    # ── Choices ───────────────────────────────────────────────

    async def choose(self, choice_key: str, buttons: Any) -> Any:
        """
        Offer choices and wait for one. The picked result is stored under
        `choice_key`; if the picked button carries an action it runs next.
        Returns the picked result.
        """
        normalized = normalize_reply_buttons(buttons)
        event_id = self.event_id(choice_key)

        await self._session.pacing.before_choices([b.text for b in normalized])
        await self._present(event_id, self._session.surface.show_reply_buttons, normalized)

        return await self._session.gate.wait(
            on_resolved=lambda result: self._run_action(normalized, result),
        )

    def _run_action(self, buttons: list[ReplyButton], result: Any) -> Any:
        button = find_button(buttons, result)
        if isinstance(button, ActionReplyButton):
            logger.debug("choice_action_run", owner=self.owner, result=result)
            return button.action()
        return None

    # ── Free-text input ───────────────────────────────────────

    async def get_input(
        self,
        result_key: str,
        kind: Union[InputKind, str] = InputKind.TEXT,
        pattern: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> Any:
        """
        Ask for a value until a reply matches `pattern` (re.search) and
        converts to `kind`. Retries are prompted with `hint`. The converted
        value is stored under `result_key` and returned.
        """
        kind = InputKind(kind)
        regex = re.compile(pattern) if pattern else None
        event_id = self.event_id(result_key)

        await self._session.pacing.before_input()

        retry_hint = None
        while True:
            await self._present(
                event_id, self._session.surface.get_user_input, kind, pattern, retry_hint,
            )
            raw = await self._session.gate.wait()
            value = self._accept(raw, kind, regex)
            if value is not _REJECTED:
                break
            logger.info("input_rejected", event_id=str(event_id), kind=kind.value)
            retry_hint = hint

        return self.set_value(result_key, value)

    @staticmethod
    def _accept(raw: Any, kind: InputKind, regex: Optional[re.Pattern]) -> Any:
        text = "" if raw is None else str(raw)
        if regex is not None and not regex.search(text):
            return _REJECTED
        try:
            return kind.convert(text)
        except ValueError:
            return _REJECTED

    async def _present(self, event_id: EventId, show, *args: Any):
        """Arm the gate, then run the surface call that will answer it."""
        gate = self._session.gate
        gate.arm(event_id)
        try:
            await show(event_id, *args)
        except BaseException:
            gate.disarm()
            raise

    # ── Sub-processes & backend ───────────────────────────────

    async def run(self, process_or_pair: Union[Process, tuple], *args: Any) -> Any:
        return await self._session.run(process_or_pair, *args)

    async def fetch(self, *keys: str) -> Optional[str]:
        return await self._session.fetch(*keys)

    def __repr__(self):
        return f"<SessionMethods owner={self.owner}>"
