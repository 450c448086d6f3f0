"""Tests for PacingController — delay formula and indicator sequencing."""
import pytest

from conftest import ScriptedSurface
from core.pacing import CHOICE_BASE_UNITS, INPUT_BASE_UNITS, PacingController


@pytest.fixture
def recorded():
    """A surface and a fake sleep that log into the same call list."""
    surface = ScriptedSurface()

    async def fake_sleep(seconds):
        surface.calls.append(("sleep", seconds))

    return surface, fake_sleep


class TestDelay:
    def test_formula(self):
        pacing = PacingController(ScriptedSurface(), typing_speed=100)
        # 100 wpm * 5 chars / 60 s = 8.33 chars per second
        assert pacing.delay_for(25) == pytest.approx(3.0)
        assert pacing.delay_for(0) == 0

    def test_scales_inversely_with_speed(self):
        slow = PacingController(ScriptedSurface(), typing_speed=60)
        fast = PacingController(ScriptedSurface(), typing_speed=120)
        assert slow.delay_for(50) == pytest.approx(2 * fast.delay_for(50))

    def test_rejects_non_positive_speed(self):
        with pytest.raises(ValueError):
            PacingController(ScriptedSurface(), typing_speed=0)


class TestPause:
    @pytest.mark.asyncio
    async def test_indicator_wraps_delay(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, typing_speed=60, sleep=fake_sleep)
        await pacing.pause(10)
        assert surface.calls == [("show_ellipsis",), ("sleep", pytest.approx(2.0)), ("hide_ellipsis",)]

    @pytest.mark.asyncio
    async def test_without_indicator(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, sleep=fake_sleep)
        await pacing.pause(10, with_indicator=False)
        assert surface.call_names() == ["sleep"]

    @pytest.mark.asyncio
    async def test_typing_disabled_is_noop(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, typing=False, sleep=fake_sleep)
        await pacing.pause(1000)
        assert surface.calls == []

    @pytest.mark.asyncio
    async def test_indicator_hidden_when_sleep_interrupted(self):
        surface = ScriptedSurface()

        async def failing_sleep(seconds):
            raise RuntimeError("interrupted")

        pacing = PacingController(surface, sleep=failing_sleep)
        with pytest.raises(RuntimeError):
            await pacing.pause(5)
        assert surface.call_names() == ["show_ellipsis", "hide_ellipsis"]


class TestPresentationPacing:
    @pytest.mark.asyncio
    async def test_chat_paces_then_shows(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, typing_speed=60, sleep=fake_sleep)
        await pacing.chat("Hello")
        assert surface.call_names() == ["show_ellipsis", "sleep", "hide_ellipsis", "show_text"]
        assert surface.calls[1][1] == pytest.approx(1.0)
        assert surface.texts == ["Hello"]

    @pytest.mark.asyncio
    async def test_chat_without_typing_just_shows(self):
        surface = ScriptedSurface()
        await PacingController(surface, typing=False).chat("Hi")
        assert surface.calls == [("show_text", "Hi")]

    @pytest.mark.asyncio
    async def test_choice_pacing_counts_labels(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, typing_speed=60, sleep=fake_sleep)
        await pacing.before_choices(["Yes", "No"])
        assert surface.calls[1][1] == pytest.approx(pacing.delay_for(CHOICE_BASE_UNITS + 5))

    @pytest.mark.asyncio
    async def test_input_pacing(self, recorded):
        surface, fake_sleep = recorded
        pacing = PacingController(surface, sleep=fake_sleep)
        await pacing.before_input()
        assert surface.calls[1][1] == pytest.approx(pacing.delay_for(INPUT_BASE_UNITS))
