"""Bundled dialogue processes, addressable by registered name."""
from core.process import ProcessRegistry
from processes.welcome import profile, welcome


def build_registry() -> ProcessRegistry:
    registry = ProcessRegistry()
    registry.register_all([welcome, profile])
    return registry


__all__ = ["build_registry", "welcome", "profile"]
