"""
Event Gate — Single-slot rendezvous between a running process and the user.

A process that needs an answer arms the gate with an EventId, hands the
same id to the presentation surface and awaits. The surface later posts a
result for that id; the gate wakes the process, stores the result in the
variable store under the id's key and returns it.

Rules:
  - at most ONE outstanding wait per session; arming an armed gate raises
    GateBusyError
  - a post only resolves the wait if its id equals the outstanding id and
    the wait has not been resolved yet
  - anything else (stale click, wrong id, nothing outstanding) is logged
    and dropped: never raised, never queued, never touches the active wait
  - there is no timeout; a wait lasts until a matching post arrives

Usage:
    gate = EventGate(store)
    gate.arm(EventId(owner="signup", key="plan"))
    await surface.show_reply_buttons(event_id, buttons)   # eventually posts
    result = await gate.wait()
"""
from __future__ import annotations

import asyncio
import inspect
import structlog
from typing import Any, Callable, Optional

from context.variables import VariableStore
from models.schemas import DeliveredEvent, EventId, GateBusyError, SessionError

logger = structlog.get_logger()


class EventGate:

    def __init__(self, store: VariableStore):
        self._store = store
        self._event_id: Optional[EventId] = None
        self._future: Optional[asyncio.Future] = None
        self._awaiting = False
        self.delivered: list[DeliveredEvent] = []

    @property
    def outstanding(self) -> Optional[EventId]:
        """The id currently awaiting a result, if any."""
        return self._event_id if self._awaiting else None

    @property
    def is_armed(self) -> bool:
        return self._event_id is not None

    # ── Waiting side ──────────────────────────────────────────

    def arm(self, event_id: EventId):
        if self._event_id is not None:
            raise GateBusyError(self._event_id, event_id)

        self._event_id = event_id
        self._future = asyncio.get_running_loop().create_future()
        self._awaiting = True
        logger.debug("gate_armed", event_id=str(event_id))

    async def wait(self, on_resolved: Callable[[Any], Any] = None) -> Any:
        """
        Suspend until the armed event is posted. The result is written to the
        variable store under the event key before `on_resolved` runs.
        """
        if self._event_id is None or self._future is None:
            raise SessionError("wait() called with no armed event")

        event_id = self._event_id
        try:
            result = await self._future
        finally:
            self._clear()

        self._store.set_value(event_id.key, result)
        logger.info("gate_resolved", event_id=str(event_id))

        if on_resolved is not None:
            outcome = on_resolved(result)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    async def wait_for(self, event_id: EventId, on_resolved: Callable[[Any], Any] = None) -> Any:
        self.arm(event_id)
        return await self.wait(on_resolved)

    # ── Delivery side ─────────────────────────────────────────

    def post(self, event_id: EventId, result: Any) -> bool:
        """
        Deliver a result. Returns True if it resolved the outstanding wait,
        False if it was dropped.
        """
        if not self._awaiting or self._event_id is None:
            logger.warning("event_without_wait", event_id=str(event_id))
            return False

        if event_id != self._event_id:
            logger.warning("unexpected_event",
                           event_id=str(event_id),
                           expected=str(self._event_id))
            return False

        self._awaiting = False
        self.delivered.append(DeliveredEvent(event_id=event_id, result=result))
        self._future.set_result(result)
        logger.info("event_delivered", event_id=str(event_id))
        return True

    def disarm(self):
        """Drop the armed wait without a result (the prompt never reached the user)."""
        if self._event_id is not None:
            logger.warning("gate_disarmed", event_id=str(self._event_id))
        self._clear()

    def _clear(self):
        self._event_id = None
        self._future = None
        self._awaiting = False
