"""
Configuration loader for the ScriptChat engine.
Reads settings from YAML file with environment variable substitution.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass
class SessionConfig:
    mode: str = "chat"                  # "chat" | "form"
    typing: bool = True                 # simulate typing delays
    typing_speed: float = 100           # words per minute


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "console"             # "console" | "json"


@dataclass
class BackendConfig:
    type: str = "null"                  # "null" | "static"
    values: dict[str, Any] = field(default_factory=dict)


@dataclass
class Settings:
    app_name: str = "ScriptChat"
    debug: bool = False
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)


_settings: Optional[Settings] = None


def _substitute_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} patterns with environment variable values."""
    pattern = re.compile(r'\$\{(\w+)\}')
    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))
    return pattern.sub(replacer, value)


def _process_values(obj: Any) -> Any:
    """Recursively substitute env vars in all string values."""
    if isinstance(obj, str):
        return _substitute_env_vars(obj)
    elif isinstance(obj, dict):
        return {k: _process_values(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_process_values(v) for v in obj]
    return obj


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_settings(config_path: str = None) -> Settings:
    """Load settings from YAML file."""
    global _settings

    if config_path is None:
        config_path = os.environ.get(
            "SCRIPTCHAT_CONFIG",
            str(Path(__file__).parent / "settings.yaml"),
        )

    settings = Settings()

    if Path(config_path).exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        raw = _process_values(raw)

        settings.app_name = raw.get("app_name", settings.app_name)
        settings.debug = _as_bool(raw.get("debug", settings.debug))

        if "session" in raw:
            s = raw["session"]
            settings.session = SessionConfig(
                mode=s.get("mode", "chat"),
                typing=_as_bool(s.get("typing", True)),
                typing_speed=float(s.get("typing_speed", 100)),
            )

        if "logging" in raw:
            lg = raw["logging"]
            settings.logging = LoggingConfig(
                level=lg.get("level", "INFO"),
                format=lg.get("format", "console"),
            )

        if "backend" in raw:
            be = raw["backend"]
            settings.backend = BackendConfig(
                type=be.get("type", "null"),
                values=be.get("values", {}),
            )

    _settings = settings
    return settings


def get_settings() -> Settings:
    """Return cached settings or load from default path."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
