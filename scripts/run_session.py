#!/usr/bin/env python3
"""
Run a bundled dialogue process in the terminal.

Usage:
    python scripts/run_session.py                  # runs "welcome"
    python scripts/run_session.py profile --no-typing
    python scripts/run_session.py --list
    python scripts/run_session.py --config my.yaml --speed 300
"""
import asyncio
import json
import os
import sys
import argparse

# Ensure app root is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


async def run_process(name: str, args: argparse.Namespace) -> int:
    from backend.connector import create_backend_connector
    from channels.console_adapter import ConsoleSurface
    from config.settings import load_settings
    from core.session import Session
    from processes import build_registry
    from utils.log_setup import setup_logging

    settings = load_settings(args.config)
    if args.no_typing:
        settings.session.typing = False
    if args.speed:
        settings.session.typing_speed = args.speed
    setup_logging(args.log_level or settings.logging.level, settings.logging.format, settings.app_name)

    registry = build_registry()
    if args.list:
        for proc in registry.list_all():
            print(f"{proc.name:12} {proc.description}")
        return 0

    proc = registry.get(name)
    if proc is None:
        print(f"Unknown process '{name}'. Known: {', '.join(p.name for p in registry.list_all())}")
        return 2

    surface = ConsoleSurface()
    session = Session.from_settings(surface, settings, backend=create_backend_connector(settings.backend))
    try:
        result = await session.start(proc)
    finally:
        await surface.shutdown()

    print()
    print(json.dumps(result, indent=2, default=str))
    return 0


def main():
    from dotenv import load_dotenv
    load_dotenv()

    parser = argparse.ArgumentParser(description="Run a scripted dialogue in the terminal")
    parser.add_argument("process", nargs="?", default="welcome", help="Registered process name")
    parser.add_argument("--config", default=None, help="Path to settings YAML")
    parser.add_argument("--no-typing", action="store_true", help="Disable simulated typing delays")
    parser.add_argument("--speed", type=float, default=None, help="Typing speed in words per minute")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    parser.add_argument("--list", action="store_true", help="List registered processes and exit")
    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run_process(args.process, args)))
    except (KeyboardInterrupt, EOFError):
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
