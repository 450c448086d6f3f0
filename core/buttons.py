"""
Reply button normalization for choose().

Script authors may describe choices in three equivalent shapes:

    ["Yes", "No"]                                      labels
    [{"text": "Yes!", "result": "yes"}, ...]           explicit records
    {"Yes": on_yes, "No": on_no}                       label → action

All three become an ordered list of ReplyButton / ActionReplyButton.
Anything else raises ButtonDefinitionError before the session presents
or waits for anything.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from models.schemas import ActionReplyButton, ButtonDefinitionError, ReplyButton


def _is_record(item: Any) -> bool:
    if isinstance(item, ReplyButton):
        return True
    return (
        isinstance(item, Mapping)
        and isinstance(item.get("text"), str)
        and isinstance(item.get("result"), str)
        and ("action" not in item or callable(item["action"]))
    )


def _from_record(item: Any) -> ReplyButton:
    if isinstance(item, ReplyButton):
        return item
    if "action" in item:
        return ActionReplyButton(text=item["text"], result=item["result"], action=item["action"])
    return ReplyButton(text=item["text"], result=item["result"])


def normalize_reply_buttons(buttons: Any) -> list[ReplyButton]:
    if isinstance(buttons, Mapping):
        if buttons and all(isinstance(k, str) and callable(v) for k, v in buttons.items()):
            return [
                ActionReplyButton(text=label, result=label, action=action)
                for label, action in buttons.items()
            ]

    elif isinstance(buttons, Sequence) and not isinstance(buttons, (str, bytes)):
        if buttons and all(isinstance(b, str) for b in buttons):
            return [ReplyButton(text=label, result=label) for label in buttons]
        if buttons and all(_is_record(b) for b in buttons):
            return [_from_record(b) for b in buttons]

    raise ButtonDefinitionError(buttons)


def find_button(buttons: list[ReplyButton], result: Any) -> Optional[ReplyButton]:
    """First button whose result equals `result`."""
    return next((b for b in buttons if b.result == result), None)
