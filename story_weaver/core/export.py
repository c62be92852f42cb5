import re
from typing import Iterable

from story_weaver.core.graph.state import GeneratedChapter

CHAPTER_SEPARATOR = "\n\n---\n\n"
EXPORT_EXTENSION = ".md"
EXPORT_MEDIA_TYPE = "text/markdown; charset=utf-8"


def format_story(chapters: Iterable[GeneratedChapter], heading: str = "Chapter") -> str:
    """Markdown document: one `## {heading} {n}` section per chapter, separated by rules."""
    return CHAPTER_SEPARATOR.join(
        f"## {heading} {chapter.chapter_number}\n\n{chapter.content}"
        for chapter in chapters
    )


def story_basename(style: str, default: str = "story") -> str:
    """
    Export basename derived from the style field.

    First whitespace-delimited token, lowercased, stripped of everything
    outside [a-z0-9]; `default` when nothing survives.
    """
    tokens = (style or "").split()
    if not tokens:
        return default
    return re.sub(r"[^a-z0-9]", "", tokens[0].lower()) or default


def story_filename(style: str, default: str = "story") -> str:
    return f"{story_basename(style, default)}{EXPORT_EXTENSION}"
