"""Presentation surfaces a session can render to."""
from channels.base import PresentationSurface, InputSanitizer
from channels.console_adapter import ConsoleSurface

__all__ = [
    "PresentationSurface", "InputSanitizer", "ConsoleSurface",
]
