"""
Core data models for the ScriptChat engine.
These are the universal types shared across the session core, the
presentation surfaces and the backend hook.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field


# ──────────────────────────────────────────────────────────────
#  Enums
# ──────────────────────────────────────────────────────────────

class SessionMode(str, Enum):
    CHAT = "chat"
    FORM = "form"


class InputKind(str, Enum):
    """Value kinds a free-text reply can be converted to."""
    TEXT = "text"
    INT = "int"
    FLOAT = "float"

    def convert(self, raw: str) -> Any:
        """Convert a raw reply. Raises ValueError if it doesn't parse."""
        if self is InputKind.INT:
            return int(raw.strip())
        if self is InputKind.FLOAT:
            return float(raw.strip())
        return raw


# ──────────────────────────────────────────────────────────────
#  Errors
# ──────────────────────────────────────────────────────────────

class SessionError(Exception):
    """Base exception for all session operations."""


class ButtonDefinitionError(SessionError, ValueError):
    """A choose() button spec matched none of the accepted shapes."""

    def __init__(self, buttons: Any):
        self.buttons = buttons
        super().__init__(f"invalid button definition: {buttons!r}")


class ProcessDefinitionError(SessionError, ValueError):
    pass


class GateBusyError(SessionError, RuntimeError):
    """Raised when a wait is armed while another one is still outstanding."""

    def __init__(self, outstanding: "EventId", requested: "EventId"):
        self.outstanding = outstanding
        self.requested = requested
        super().__init__(
            f"cannot wait for {requested}: already waiting for {outstanding}"
        )


# ──────────────────────────────────────────────────────────────
#  Events
# ──────────────────────────────────────────────────────────────

class EventId(BaseModel):
    """
    Names one outstanding request for user input.

    `owner` is the registered name of the process that asked, `key` the
    logical slot (choice key or input result key). Two ids are equal iff
    both parts are equal.
    """
    model_config = ConfigDict(frozen=True)

    owner: str
    key: str

    def __str__(self) -> str:
        return f"{self.owner}:{self.key}"


class DeliveredEvent(BaseModel):
    """Audit record of an event that actually resolved a wait."""
    event_id: EventId
    result: Any
    delivered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ──────────────────────────────────────────────────────────────
#  Reply Buttons
# ──────────────────────────────────────────────────────────────

class ReplyButton(BaseModel):
    """A choice offered to the user. `result` is what the process receives."""
    text: str
    result: str


class ActionReplyButton(ReplyButton):
    """A choice carrying a zero-argument effect, run only if it is the one picked."""
    action: Callable[[], Any]
