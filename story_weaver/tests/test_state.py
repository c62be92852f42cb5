import pytest
from pydantic import ValidationError

from story_weaver.core.graph.state import (
    StoryInputs,
    ChapterOutline,
    GenerationState,
    GENERATING_STATES,
    clamp_count,
    initial_work_state,
)


class TestClampCount:
    """Numeric form fields are clamped, never rejected."""

    def test_value_in_range_is_kept(self):
        assert clamp_count(42, 1, 200) == 42

    def test_value_above_range_is_capped(self):
        assert clamp_count(500, 1, 200) == 200

    def test_negative_value_goes_to_minimum(self):
        assert clamp_count(-3, 1, 100) == 1

    def test_zero_goes_to_minimum(self):
        assert clamp_count(0, 1, 100) == 1

    def test_garbage_goes_to_minimum(self):
        assert clamp_count("abc", 1, 100) == 1
        assert clamp_count(None, 1, 100) == 1
        assert clamp_count("", 1, 100) == 1

    def test_numeric_strings_are_parsed(self):
        assert clamp_count("12", 1, 100) == 12
        assert clamp_count("12.7", 1, 100) == 12


class TestStoryInputs:

    def test_defaults(self):
        inputs = StoryInputs(characters="Alex", style="Noir")
        assert inputs.page_count == 100
        assert inputs.chapter_count == 20

    def test_counts_are_clamped_on_creation(self):
        inputs = StoryInputs(characters="Alex", style="Noir", page_count=999, chapter_count=0)
        assert inputs.page_count == 200
        assert inputs.chapter_count == 1

    def test_chapter_count_upper_bound(self):
        inputs = StoryInputs(characters="Alex", style="Noir", chapter_count="250")
        assert inputs.chapter_count == 100

    def test_inputs_are_frozen(self):
        inputs = StoryInputs(characters="Alex", style="Noir")
        with pytest.raises(ValidationError):
            inputs.chapter_count = 5


def test_outline_entry_requires_positive_number():
    with pytest.raises(ValidationError):
        ChapterOutline(chapter_number=0, chapter_summary="Nothing happens")


def test_generating_states():
    assert set(GENERATING_STATES) == {GenerationState.GENERATING_OUTLINE, GenerationState.GENERATING_CHAPTERS}
    assert GenerationState.COMPLETE not in GENERATING_STATES


def test_initial_work_state(inputs):
    state = initial_work_state(inputs)

    assert state["inputs"] is inputs
    assert state["outline"] == []
    assert state["chapters"] == []
    assert state["current_chapter_index"] == 0
    assert state["error"] is None
    assert state["cancelled"] is False
    assert state["is_complete"] is False
