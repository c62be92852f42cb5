"""
Story Weaver - Generation service.

Wraps the two LLM operations (outline, chapter) behind one object so the
workflow never touches the Groq SDK directly. Tests swap it for a scripted
fake with the same two coroutines.
"""

import asyncio
from typing import List

from groq import AsyncGroq, GroqError

from story_weaver.core.cancellation import CancellationToken
from story_weaver.core.config import settings
from story_weaver.core.errors import GenerationCancelled, StoryServiceError
from story_weaver.core.graph.state import StoryInputs, ChapterOutline, ChapterContext
from story_weaver.core.logger import log_agent_action
from story_weaver.agents.manager.outliner import request_outline, parse_outline
from story_weaver.agents.narrative.writer import generate_chapter_content


async def run_cancellable(coro, token: CancellationToken = None):
    """
    Await `coro` unless `token` fires first.

    The request runs as its own task; when the token is flipped mid-flight the
    task is cancelled, which aborts the underlying HTTP request.

    Raises:
        GenerationCancelled: the token fired before the request finished
    """
    if token is None:
        return await coro
    if token.cancelled:
        coro.close()
        token.raise_if_cancelled()

    request = asyncio.ensure_future(coro)
    watcher = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({request, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not request.done():
            request.cancel()

    if request in done:
        return request.result()
    raise GenerationCancelled()


class GroqStoryService:
    """Outline and chapter generation on Groq chat completions."""

    def __init__(self, client, model: str = None):
        self.client = client
        self.model = model or settings.GROQ_MODEL

    @classmethod
    def from_settings(cls) -> "GroqStoryService":
        """Build the service from process configuration; fails without an API key."""
        return cls(AsyncGroq(api_key=settings.require_api_key()), model=settings.GROQ_MODEL)

    async def generate_outline(self, inputs: StoryInputs, token: CancellationToken = None) -> List[ChapterOutline]:
        try:
            raw = await run_cancellable(request_outline(self.client, inputs, model=self.model), token)
        except GroqError as exc:
            log_agent_action("outliner", "Outline request failed", str(exc), success=False)
            raise StoryServiceError(f"Outline request failed: {exc}") from exc

        outline = parse_outline(raw)
        log_agent_action("outliner", "Outline generated", f"{len(outline)} chapters requested={inputs.chapter_count}")
        return outline

    async def generate_chapter(self, context: ChapterContext, token: CancellationToken = None) -> str:
        try:
            content = await run_cancellable(generate_chapter_content(self.client, context, model=self.model), token)
        except GroqError as exc:
            log_agent_action("writer", "Chapter request failed", str(exc), success=False)
            raise StoryServiceError(f"Chapter request failed: {exc}") from exc

        log_agent_action("writer", "Chapter generated", f"{len(content)} chars")
        return content
