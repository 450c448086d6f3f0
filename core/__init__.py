"""
Session core: process runner, event gate, pacing and the method set
processes script against.
"""
from core.process import Process, ProcessRegistry, process
from core.gate import EventGate
from core.pacing import PacingController
from core.buttons import normalize_reply_buttons
from core.methods import SessionMethods
from core.session import Session

__all__ = [
    "Process", "ProcessRegistry", "process",
    "EventGate", "PacingController", "normalize_reply_buttons",
    "SessionMethods", "Session",
]
