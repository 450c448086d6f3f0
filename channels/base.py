"""
Presentation Surfaces — the abstract UI a session talks to.

Provides:
- PresentationSurface: abstract base every surface implements
- InputSanitizer: strips control characters from raw user replies

The session core never reads input itself. It arms its event gate, calls
show_reply_buttons()/get_user_input() with the EventId, and awaits. The
surface collects the answer over whatever channel it owns and hands it
back through deliver(), which routes into Session.handle_event().
"""
from __future__ import annotations

import abc
import structlog
from typing import TYPE_CHECKING, Any, Optional

from models.schemas import EventId, InputKind, ReplyButton

if TYPE_CHECKING:
    from core.session import Session

logger = structlog.get_logger()


# ══════════════════════════════════════════════════════════════
#  INPUT SANITIZER
# ══════════════════════════════════════════════════════════════

class InputSanitizer:
    def __init__(self, max_length: int = 10000):
        self.max_length = max_length

    def sanitize(self, content: str) -> str:
        if not content:
            return ""
        content = "".join(
            c for c in content if c in ("\n", "\t", "\r") or (ord(c) >= 32)
        )
        if len(content) > self.max_length:
            content = content[: self.max_length]
        return content.strip()


# ══════════════════════════════════════════════════════════════
#  PRESENTATION SURFACE — Abstract Base
# ══════════════════════════════════════════════════════════════

class PresentationSurface(abc.ABC):
    """
    Base class for all presentation surfaces.

    A surface is attached to exactly one Session; the session calls
    attach() from its constructor.
    """

    def __init__(self):
        self._session: Optional["Session"] = None

    def attach(self, session: "Session"):
        if self._session is not None and self._session is not session:
            logger.warning("surface_reattached", surface=type(self).__name__)
        self._session = session

    @property
    def session(self) -> "Session":
        if self._session is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a session")
        return self._session

    async def deliver(self, event_id: EventId, result: Any) -> bool:
        """Hand a user answer back to the waiting process."""
        return await self.session.handle_event(event_id, result)

    # ── Abstract hooks ────────────────────────────────────────

    @abc.abstractmethod
    async def show_text(self, text: str) -> None:
        ...

    @abc.abstractmethod
    async def show_reply_buttons(self, event_id: EventId, buttons: list[ReplyButton]) -> None:
        """Offer the buttons; must eventually deliver the picked button's result."""
        ...

    @abc.abstractmethod
    async def get_user_input(
        self,
        event_id: EventId,
        kind: InputKind,
        pattern: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        """Ask for a free-text value; must eventually deliver the raw reply."""
        ...

    @abc.abstractmethod
    async def show_ellipsis(self) -> None:
        ...

    @abc.abstractmethod
    async def hide_ellipsis(self) -> None:
        ...

    # ── Optional hooks ────────────────────────────────────────

    async def show_form(self, form: Any) -> None:
        logger.warning("form_not_supported", surface=type(self).__name__, form=repr(form))

    async def shutdown(self) -> None:
        pass
