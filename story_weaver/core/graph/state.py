from enum import Enum
from typing import TypedDict, List, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_PAGES, MAX_PAGES = 1, 200
MIN_CHAPTERS, MAX_CHAPTERS = 1, 100
DEFAULT_PAGE_COUNT = 100
DEFAULT_CHAPTER_COUNT = 20


class GenerationState(str, Enum):
    IDLE = "idle"
    GENERATING_OUTLINE = "generating_outline"
    GENERATING_CHAPTERS = "generating_chapters"
    COMPLETE = "complete"
    ERROR = "error"


GENERATING_STATES = (GenerationState.GENERATING_OUTLINE, GenerationState.GENERATING_CHAPTERS)


def clamp_count(value: Any, low: int, high: int) -> int:
    """Clamp a numeric form value into [low, high].

    Anything that does not parse as a number, or parses to zero, becomes `low`
    so a cleared input field never blocks the form.
    """
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return low
    if number == 0:
        return low
    return max(low, min(high, number))


class StoryInputs(BaseModel):
    """Parameters of one generation run. Frozen once submitted."""

    model_config = ConfigDict(frozen=True)

    characters: str
    style: str
    page_count: int = DEFAULT_PAGE_COUNT
    chapter_count: int = DEFAULT_CHAPTER_COUNT

    @field_validator("page_count", mode="before")
    @classmethod
    def _clamp_pages(cls, value):
        return clamp_count(value, MIN_PAGES, MAX_PAGES)

    @field_validator("chapter_count", mode="before")
    @classmethod
    def _clamp_chapters(cls, value):
        return clamp_count(value, MIN_CHAPTERS, MAX_CHAPTERS)


class ChapterOutline(BaseModel):
    chapter_number: int = Field(..., ge=1)
    chapter_summary: str


class GeneratedChapter(BaseModel):
    chapter_number: int = Field(..., ge=1)
    content: str


class ChapterContext(BaseModel):
    characters: str
    style: str
    chapter_summary: str
    previous_chapters: str = ""


class StoryWorkState(TypedDict):
    # Inputs
    inputs: StoryInputs

    # Plan
    outline: List[ChapterOutline]

    # Generation Loop
    current_chapter_index: int
    chapters: List[GeneratedChapter]

    # Errors
    error: Optional[str]
    cancelled: bool

    # Status
    is_complete: bool


def initial_work_state(inputs: StoryInputs) -> StoryWorkState:
    return {
        "inputs": inputs,
        "outline": [],
        "current_chapter_index": 0,
        "chapters": [],
        "error": None,
        "cancelled": False,
        "is_complete": False,
    }
