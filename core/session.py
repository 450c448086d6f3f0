"""
Session — runs dialogue processes against one presentation surface.

A Session owns everything a conversation needs and shares none of it with
other sessions: the variable store, the event gate, the pacing controller
and the backend connector.

Flow:
  Session.start(process)                         root invocation
    → Session.run(process | (process, capture_key), *args)
    → SessionMethods bound to process.name
    → process awaits chat / choose / get_input / run
        → PacingController → PresentationSurface
        → surface calls Session.handle_event(event_id, result)
        → EventGate wakes the process
    → process returns; local scope restored
    → its return value, or the local scope it ran in when it returned None

Only one process runs at a time and only one event may be outstanding.
"""
from __future__ import annotations

import structlog
from collections.abc import Sequence
from typing import Any, Optional, Union

from backend.connector import BackendConnector, NullBackendConnector
from channels.base import PresentationSurface
from config.settings import Settings, get_settings
from context.variables import VariableStore
from core.gate import EventGate
from core.methods import SessionMethods
from core.pacing import PacingController
from core.process import Process
from models.schemas import DeliveredEvent, EventId, ProcessDefinitionError, SessionMode

logger = structlog.get_logger()

ProcessArg = Union[Process, tuple]


class Session:

    def __init__(
        self,
        surface: PresentationSurface,
        typing: bool = True,
        typing_speed: float = 100,
        mode: Union[SessionMode, str] = SessionMode.CHAT,
        backend: BackendConnector = None,
        store: VariableStore = None,
    ):
        self.surface = surface
        self.mode = SessionMode(mode)
        self.store = store or VariableStore()
        self.gate = EventGate(self.store)
        self.pacing = PacingController(surface, typing=typing, typing_speed=typing_speed)
        self.backend = backend or NullBackendConnector()
        surface.attach(self)

    @classmethod
    def from_settings(
        cls,
        surface: PresentationSurface,
        settings: Settings = None,
        backend: BackendConnector = None,
    ) -> "Session":
        settings = settings or get_settings()
        return cls(
            surface,
            typing=settings.session.typing,
            typing_speed=settings.session.typing_speed,
            mode=settings.session.mode,
            backend=backend,
        )

    # ── Pacing knobs ──────────────────────────────────────────

    @property
    def typing(self) -> bool:
        return self.pacing.typing

    @typing.setter
    def typing(self, enabled: bool):
        self.pacing.typing = enabled

    @property
    def typing_speed(self) -> float:
        return self.pacing.typing_speed

    # ── Process runner ────────────────────────────────────────

    async def start(self, process_or_pair: ProcessArg, *args: Any) -> Any:
        """Run a process at the root of the session."""
        logger.info("session_started", mode=self.mode.value)
        result = await self.run(process_or_pair, *args)
        logger.info("session_finished", events=len(self.gate.delivered))
        return result

    async def run(self, process_or_pair: ProcessArg, *args: Any) -> Any:
        """
        Invoke a process. With a capture key the process runs in a new empty
        local scope stored under that key in the caller's scope; otherwise it
        shares the caller's scope.
        """
        proc, capture_key = self._unpack(process_or_pair)
        methods = SessionMethods(self, proc.name)

        logger.info("process_started", process=proc.name, capture_key=capture_key,
                    depth=self.store.depth)
        with self.store.scope(capture_key) as local_vars:
            result = await proc.fn(methods, *args)

        logger.info("process_finished", process=proc.name)
        return local_vars if result is None else result

    @staticmethod
    def _unpack(process_or_pair: Any) -> tuple[Process, Optional[str]]:
        if isinstance(process_or_pair, Process):
            return process_or_pair, None

        if (
            isinstance(process_or_pair, Sequence)
            and not isinstance(process_or_pair, str)
            and len(process_or_pair) == 2
        ):
            proc, capture_key = process_or_pair
            if isinstance(proc, Process) and (capture_key is None or isinstance(capture_key, str)):
                return proc, capture_key

        raise ProcessDefinitionError(
            f"expected a Process or a (Process, capture_key) pair, got {process_or_pair!r}"
        )

    # ── Surface → session ─────────────────────────────────────

    async def handle_event(self, event_id: EventId, result: Any) -> bool:
        """Deliver a user answer. Non-matching events are logged and dropped."""
        return self.gate.post(event_id, result)

    @property
    def user_events(self) -> list[DeliveredEvent]:
        """Every event that resolved a wait, in delivery order."""
        return self.gate.delivered

    # ── Backend ───────────────────────────────────────────────

    async def fetch(self, *keys: str) -> Optional[str]:
        try:
            return await self.backend.fetch(*keys)
        except NotImplementedError:
            logger.warning("backend_fetch_not_implemented", keys=list(keys))
            return None

    def __repr__(self):
        return f"<Session mode={self.mode.value} armed={self.gate.is_armed}>"
