"""Tests for reply button normalization."""
import pytest

from core.buttons import find_button, normalize_reply_buttons
from models.schemas import ActionReplyButton, ButtonDefinitionError, ReplyButton


class TestAcceptedShapes:
    def test_labels(self):
        buttons = normalize_reply_buttons(["Yes", "No"])
        assert buttons == [ReplyButton(text="Yes", result="Yes"), ReplyButton(text="No", result="No")]
        assert not any(isinstance(b, ActionReplyButton) for b in buttons)

    def test_tuple_of_labels(self):
        assert [b.result for b in normalize_reply_buttons(("A", "B", "C"))] == ["A", "B", "C"]

    def test_records(self):
        buttons = normalize_reply_buttons([
            {"text": "Yes please", "result": "yes"},
            {"text": "No thanks", "result": "no"},
        ])
        assert [(b.text, b.result) for b in buttons] == [("Yes please", "yes"), ("No thanks", "no")]

    def test_record_instances_pass_through(self):
        yes = ReplyButton(text="Y", result="y")
        assert normalize_reply_buttons([yes])[0] is yes

    def test_record_with_action(self):
        def fn():
            return None
        [button] = normalize_reply_buttons([{"text": "Go", "result": "go", "action": fn}])
        assert isinstance(button, ActionReplyButton)
        assert button.action is fn

    def test_action_mapping(self):
        def fn1():
            return 1

        def fn2():
            return 2

        buttons = normalize_reply_buttons({"Yes": fn1, "No": fn2})
        assert [(b.text, b.result) for b in buttons] == [("Yes", "Yes"), ("No", "No")]
        assert all(isinstance(b, ActionReplyButton) for b in buttons)
        assert buttons[0].action is fn1
        assert buttons[1].action is fn2


class TestMalformed:
    @pytest.mark.parametrize("spec", [
        [{"text": "A"}],                          # missing result
        [{"result": "a"}],                        # missing text
        [{"text": "A", "result": 1}],             # non-string result
        ["Yes", {"text": "No", "result": "no"}],  # mixed shapes
        [],
        {},
        "Yes",
        None,
        42,
        {"Yes": "not callable"},
        [{"text": "A", "result": "a", "action": "nope"}],
    ])
    def test_rejected(self, spec):
        with pytest.raises(ButtonDefinitionError):
            normalize_reply_buttons(spec)

    def test_definition_error_is_value_error(self):
        with pytest.raises(ValueError, match="invalid button definition"):
            normalize_reply_buttons([{"text": "A"}])


class TestFindButton:
    def test_first_match(self):
        buttons = normalize_reply_buttons(["a", "b"])
        assert find_button(buttons, "b").text == "b"
        assert find_button(buttons, "z") is None
