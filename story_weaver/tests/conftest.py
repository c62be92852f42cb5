import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from story_weaver.main import app
from story_weaver.web.routes import get_workbench
from story_weaver.core.errors import StoryServiceError
from story_weaver.core.graph.state import StoryInputs, ChapterOutline
from story_weaver.core.session import StoryWorkbench
from story_weaver.agents.manager.outliner import parse_outline


class FakeStoryService:
    """
    Scripted stand-in for GroqStoryService.

    Produces a well-formed outline of `chapter_count` entries unless told
    otherwise; hooks let a test act (e.g. reset the workbench) mid-run.
    """

    def __init__(self, outline_raw=None, outline_error=None, chapter_error_at=None,
                 on_outline=None, on_chapter=None):
        self.outline_raw = outline_raw
        self.outline_error = outline_error
        self.chapter_error_at = chapter_error_at
        self.on_outline = on_outline
        self.on_chapter = on_chapter
        self.outline_calls = []
        self.chapter_calls = []

    async def generate_outline(self, inputs, token=None):
        self.outline_calls.append(inputs)
        if self.on_outline:
            self.on_outline()
        if self.outline_error:
            raise self.outline_error
        if self.outline_raw is not None:
            return parse_outline(self.outline_raw)
        return [
            ChapterOutline(chapter_number=i, chapter_summary=f"Summary of chapter {i}")
            for i in range(1, inputs.chapter_count + 1)
        ]

    async def generate_chapter(self, context, token=None):
        self.chapter_calls.append(context)
        number = len(self.chapter_calls)
        if self.on_chapter:
            self.on_chapter(number)
        if self.chapter_error_at == number:
            raise StoryServiceError("Chapter request failed: 503 Service Unavailable")
        return f"Rain hammered the city on night {number}. " * 20


class FakeCompletions:
    """Mimics `AsyncGroq().chat.completions`."""

    def __init__(self, content="", error=None, block=False):
        self.content = content
        self.error = error
        self.block = block
        self.aborted = False
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        if self.block:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.aborted = True
                raise
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def make_client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture(name="inputs")
def inputs_fixture():
    return StoryInputs(
        characters="A skeptical detective named Alex and an enigmatic medium named Luna.",
        style="Mystery noir, 1940s",
        page_count=30,
        chapter_count=3,
    )


@pytest.fixture(name="fake_service")
def fake_service_fixture():
    return FakeStoryService()


@pytest.fixture(name="workbench")
def workbench_fixture(fake_service: FakeStoryService):
    return StoryWorkbench(fake_service, language="en")


@pytest.fixture(name="client")
def client_fixture(workbench: StoryWorkbench):

    def get_workbench_override():
        return workbench

    app.dependency_overrides[get_workbench] = get_workbench_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
