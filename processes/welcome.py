"""
Welcome conversation — greets the user, collects a profile in a nested
scope and lets them pick a plan.

Variables left behind (root scope is the global store):
    Started          global, set by the "ready" button actions
    Name             global, asked for by `profile`
    ready, plan      the picked choice results
    profile          {"age": int, "contact": str}, captured from `profile`
"""
from __future__ import annotations

from core.methods import SessionMethods
from core.process import process

PLANS = [
    {"text": "Free tier", "result": "free"},
    {"text": "Pro tier (30 day trial)", "result": "pro"},
]


@process("profile", "Ask for name, age and preferred contact channel.")
async def profile(m: SessionMethods):
    name = await m.get_input("Name")
    await m.chat(f"Thanks, {name}.")
    await m.get_input("age", "int", r"^[0-9]+$", "Please type your age in digits.")
    await m.choose("contact", ["Email", "Phone"])


@process("welcome", "Greet the user and walk them through sign-up.")
async def welcome(m: SessionMethods):
    greeting = await m.fetch("greeting", "default") or "Hello"
    await m.chat(f"{greeting}! I'm a scripted assistant.")

    await m.choose("ready", {
        "Let's go": lambda: m.set_value("Started", True),
        "Not now": lambda: m.set_value("Started", False),
    })
    if not m.get_value("Started"):
        await m.chat("No problem. Come back any time.")
        return

    details = await m.run((profile, "profile"))
    await m.chat(f"Got it: {details['age']} years old, best reached by {details['contact'].lower()}.")

    plan = await m.choose("plan", PLANS)
    await m.chat(f"{m.get_value('Name')}, you're all set on the {plan} plan.")
