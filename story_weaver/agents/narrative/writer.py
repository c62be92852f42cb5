from typing import Iterable

from story_weaver.core.config import settings
from story_weaver.core.graph.state import ChapterContext, GeneratedChapter
from story_weaver.agents.context_loader import load_context, wrap_chapter_instructions


# Load hardened system prompt from context file
SYSTEM_PROMPT = load_context("writer")

FIRST_CHAPTER_NOTE = "This is the first chapter."


def build_digest(chapters: Iterable[GeneratedChapter], limit: int = None) -> str:
    """
    Continuity digest of the chapters written so far.

    Every chapter contributes only its first `limit` characters so the prompt
    stays bounded however long the story gets.
    """
    limit = settings.DIGEST_CHARS if limit is None else limit
    return "\n".join(
        f"Chapter {chapter.chapter_number}: {chapter.content[:limit]}..."
        for chapter in chapters
    )


def get_chapter_prompt(context: ChapterContext) -> str:
    instructions = f"Chapter Summary: {context.chapter_summary}"
    story_context = f"""
Style/Genre: {context.style}
Main Characters: {context.characters}

Summary of Previous Chapters:
{context.previous_chapters or FIRST_CHAPTER_NOTE}
"""
    wrapped_instructions, wrapped_context = wrap_chapter_instructions(instructions, story_context)

    return f"""
You are writing a chapter for a novel in the '{context.style}' genre.

{wrapped_context}

Your Current Task:
Write a complete and engaging chapter based on the following summary.
{wrapped_instructions}

Return ONLY the narrative text of the chapter (no title, no JSON, no markdown headings).
"""


async def generate_chapter_content(client, context: ChapterContext, model: str = None) -> str:
    """
    Generates the text content for a chapter.

    Args:
        client: AsyncGroq client
        context: Characters, style, chapter summary and digest of prior chapters

    Returns:
        Raw chapter text, unvalidated
    """
    completion = await client.chat.completions.create(
        model=model or settings.GROQ_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": get_chapter_prompt(context)},
        ],
        temperature=settings.CHAPTER_TEMPERATURE,
        max_tokens=settings.CHAPTER_MAX_TOKENS,
    )
    return completion.choices[0].message.content or ""
