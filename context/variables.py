"""
Variable Store — Two-tier (global + local) variables read and written by processes.

Scoping is a naming convention, decided at runtime on every access:

  - a key whose first character is an ASCII uppercase letter ("Name",
    "CustomerId") lives in the GLOBAL store, shared by the whole session
  - any other key ("answer", "age", "_tmp") lives in the CURRENT LOCAL
    store, i.e. the scope of the process invocation that is running

At the root of a session the local store IS the global store (same dict),
so lowercase writes made by a root process land in the global mapping.
Running a sub-process with a capture key pushes a fresh, empty local store
that is reachable from the parent as `parent[capture_key]`; leaving the
sub-process restores the parent's store.

Empty keys are not special-cased; their behaviour is undefined.

Usage:
    store = VariableStore()
    store.set_value("Name", "Ada")        # global
    store.set_value("answer", "yes")      # local
    with store.scope("details"):
        store.set_value("x", 5)           # → store.get_value()["details"]["x"]
"""
from __future__ import annotations

import re
import structlog
from contextlib import contextmanager
from typing import Any, Iterator, Optional

logger = structlog.get_logger()

_GLOBAL_KEY = re.compile(r"[A-Z]")


class _AllGlobals:
    def __repr__(self):
        return "GLOBALS"


# Pass to get_value() to read the entire global store.
GLOBALS = _AllGlobals()


def is_global_key(key: str) -> bool:
    return bool(_GLOBAL_KEY.match(key))


class VariableStore:
    """
    Session-owned variable store. Single-threaded: only the active flow of
    control mutates it, so there is no locking.
    """

    def __init__(self, global_vars: dict[str, Any] = None):
        self.global_vars: dict[str, Any] = global_vars if global_vars is not None else {}
        self.local_vars: dict[str, Any] = self.global_vars
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of capture scopes currently pushed."""
        return self._depth

    # ── Access ────────────────────────────────────────────────

    def set_value(self, key: str, value: Any) -> Any:
        if is_global_key(key):
            self.global_vars[key] = value
        else:
            self.local_vars[key] = value
        return value

    def get_value(self, key: Any = None) -> Any:
        """
        key=None     → the whole current local store
        key=GLOBALS  → the whole global store
        key="..."    → one value, scoped by the casing rule (None if unset)
        """
        if key is None:
            return self.local_vars
        if key is GLOBALS:
            return self.global_vars
        if is_global_key(key):
            return self.global_vars.get(key)
        return self.local_vars.get(key)

    # ── Scoping ───────────────────────────────────────────────

    def push_scope(self, capture_key: str) -> dict[str, Any]:
        """
        Start a new empty local store under `capture_key` in the current one.
        Returns the store being replaced; hand it back to pop_scope().
        """
        previous = self.local_vars
        nested: dict[str, Any] = {}
        previous[capture_key] = nested
        self.local_vars = nested
        self._depth += 1
        logger.debug("variable_scope_pushed", capture_key=capture_key, depth=self._depth)
        return previous

    def pop_scope(self, previous: dict[str, Any]):
        self.local_vars = previous
        self._depth = max(0, self._depth - 1)
        logger.debug("variable_scope_popped", depth=self._depth)

    @contextmanager
    def scope(self, capture_key: Optional[str] = None) -> Iterator[dict[str, Any]]:
        """
        Run a block in a capture scope (or in the current scope when
        `capture_key` is falsy). The previous scope is always restored.
        Yields the local store the block runs in.
        """
        if not capture_key:
            yield self.local_vars
            return

        previous = self.push_scope(capture_key)
        try:
            yield self.local_vars
        finally:
            self.pop_scope(previous)

    def __repr__(self):
        return f"VariableStore(globals={len(self.global_vars)}, depth={self._depth})"
