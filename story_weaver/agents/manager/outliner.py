import json
from typing import List

from pydantic import TypeAdapter, ValidationError

from story_weaver.core.config import settings
from story_weaver.core.errors import MalformedOutlineError
from story_weaver.core.graph.state import StoryInputs, ChapterOutline
from story_weaver.core.logger import get_logger
from story_weaver.agents.context_loader import load_context, wrap_user_input

logger = get_logger("agent.outliner")

# Load hardened system prompt from context file
SYSTEM_PROMPT = load_context("outliner")

OUTLINE_ADAPTER = TypeAdapter(List[ChapterOutline])

# JSON-schema mode needs an object at the root, so the array travels under "chapters"
OUTLINE_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "story_outline",
        "schema": {
            "type": "object",
            "properties": {
                "chapters": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "chapter_number": {
                                "type": "integer",
                                "description": "The sequential number of the chapter.",
                            },
                            "chapter_summary": {
                                "type": "string",
                                "description": "A detailed summary of the plot points and events in this chapter.",
                            },
                        },
                        "required": ["chapter_number", "chapter_summary"],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["chapters"],
            "additionalProperties": False,
        },
    },
}


def get_outline_prompt(inputs: StoryInputs) -> str:
    """Build the outline prompt with input isolation (XML wrapped)."""
    raw_input = f"""
Characters: {inputs.characters}
Style/Genre: {inputs.style}
"""
    wrapped_input = wrap_user_input(raw_input)

    return f"""
Create a detailed, chapter-by-chapter story outline for a fictional story.
The story should be approximately {inputs.page_count} pages long and must be divided into exactly {inputs.chapter_count} chapters.

Story Details:
{wrapped_input}

Generate a JSON object with a single key "chapters" holding an array of exactly {inputs.chapter_count} objects, one per chapter.
Each object must have two keys: "chapter_number" (an integer, starting from 1) and "chapter_summary" (a string).
The summary should be a concise but descriptive paragraph outlining the key events, character developments, and plot points of that chapter.
The summaries must logically flow from one chapter to the next, building a coherent narrative.
"""


def parse_outline(raw: str) -> List[ChapterOutline]:
    """
    Parse the outline returned by the model.

    Accepts a bare JSON array or the {"chapters": [...]} wrapper requested by
    the response schema.

    Raises:
        MalformedOutlineError: when the text is not JSON or not the expected shape
    """
    try:
        data = json.loads((raw or "").strip())
    except json.JSONDecodeError as exc:
        raise MalformedOutlineError(f"Outline is not valid JSON: {exc}", raw_response=raw or "") from exc

    if isinstance(data, dict) and "chapters" in data:
        data = data["chapters"]

    try:
        return OUTLINE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise MalformedOutlineError(
            f"Outline does not match the expected shape: {exc.error_count()} error(s)",
            raw_response=raw,
        ) from exc


async def request_outline(client, inputs: StoryInputs, model: str = None) -> str:
    """Send the outline request and return the raw response text."""
    completion = await client.chat.completions.create(
        model=model or settings.GROQ_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": get_outline_prompt(inputs)},
        ],
        temperature=settings.OUTLINE_TEMPERATURE,
        response_format=OUTLINE_RESPONSE_FORMAT,
    )
    content = completion.choices[0].message.content or ""
    logger.debug(f"Outline response: {content[:100]}...")  # Log first 100 chars
    return content
