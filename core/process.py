"""
Processes — explicitly named dialogue scripts, and the registry that holds them.

A process is an async function `fn(methods, *args)` wrapped with a stable
name. The name qualifies every EventId the process produces, so two
processes can both ask for "answer" without their events colliding. Names
are supplied at registration, never derived from the function object.

Usage:
    @process("greeting")
    async def greeting(m, who="there"):
        await m.chat(f"Hi {who}!")
        await m.choose("mood", ["Good", "Bad"])

    registry = ProcessRegistry()
    registry.register(greeting)
    await session.start(registry.get("greeting"))
"""
from __future__ import annotations

import inspect
import structlog
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from models.schemas import ProcessDefinitionError

logger = structlog.get_logger()

ProcessFn = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Process:
    name: str
    fn: ProcessFn
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ProcessDefinitionError("process name is required")
        if not inspect.iscoroutinefunction(self.fn):
            raise ProcessDefinitionError(
                f"process '{self.name}' must be an async function"
            )

    def __repr__(self):
        return f"<Process {self.name}>"


def process(name: str, description: str = "") -> Callable[[ProcessFn], Process]:
    """Decorator: turn an async script function into a named Process."""
    def wrap(fn: ProcessFn) -> Process:
        return Process(name=name, fn=fn, description=description or (inspect.getdoc(fn) or ""))
    return wrap


class ProcessRegistry:
    """Lookup of processes by their registered name."""

    def __init__(self):
        self._processes: dict[str, Process] = {}

    def register(self, proc: Process) -> Process:
        existing = self._processes.get(proc.name)
        if existing is not None and existing is not proc:
            raise ProcessDefinitionError(f"process '{proc.name}' is already registered")
        self._processes[proc.name] = proc
        logger.info("process_registered", process=proc.name)
        return proc

    def register_all(self, processes: list[Process]):
        for proc in processes:
            self.register(proc)

    def get(self, name: str) -> Optional[Process]:
        return self._processes.get(name)

    def list_all(self) -> list[Process]:
        return list(self._processes.values())

    def __contains__(self, name: str) -> bool:
        return name in self._processes

    def __len__(self) -> int:
        return len(self._processes)
