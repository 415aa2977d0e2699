"""Tests for facecue.steps."""

import pytest

from facecue.steps import ProcessingStep, get_processing_steps, processing_step


class Chain:
    def __init__(self):
        self._step_timings = None

    @processing_step("second", follows="first")
    def _second(self, value):
        return value * 2

    @processing_step("first", "Add one")
    def _first(self, value):
        return value + 1

    @processing_step("third", follows="second")
    def _third(self, value):
        """Fail on purpose."""
        raise RuntimeError(value)


class TestGetProcessingSteps:
    def test_chain_order_ignores_declaration_order(self):
        assert [s.name for s in get_processing_steps(Chain)] == ["first", "second", "third"]

    def test_instance_and_class_agree(self):
        assert get_processing_steps(Chain()) == get_processing_steps(Chain)

    def test_description_falls_back_to_docstring(self):
        steps = {s.name: s for s in get_processing_steps(Chain)}
        assert steps["first"].description == "Add one"
        assert steps["third"].description == "Fail on purpose."

    def test_no_steps(self):
        assert get_processing_steps(object) == []

    def test_branching_rejected(self):
        class Branching:
            @processing_step("a")
            def _a(self):
                pass

            @processing_step("b", follows="a")
            def _b(self):
                pass

            @processing_step("c", follows="a")
            def _c(self):
                pass

        with pytest.raises(ValueError, match="branch"):
            get_processing_steps(Branching)

    def test_two_heads_rejected(self):
        class TwoHeads:
            @processing_step("a")
            def _a(self):
                pass

            @processing_step("b")
            def _b(self):
                pass

        with pytest.raises(ValueError, match="head"):
            get_processing_steps(TwoHeads)

    def test_str(self):
        assert str(ProcessingStep("scan", "Find windows", follows="luminance")) == (
            "luminance -> scan: Find windows"
        )


class TestTiming:
    def test_untimed_by_default(self):
        chain = Chain()
        assert chain._first(1) == 2
        assert chain._step_timings is None

    def test_records_milliseconds(self):
        chain = Chain()
        chain._step_timings = {}
        chain._second(chain._first(1))
        assert set(chain._step_timings) == {"first", "second"}
        assert all(ms >= 0 for ms in chain._step_timings.values())

    def test_records_failing_stage(self):
        chain = Chain()
        chain._step_timings = {}
        with pytest.raises(RuntimeError):
            chain._third(3)
        assert "third" in chain._step_timings
