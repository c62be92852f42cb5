from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from story_weaver.core.config import settings
from story_weaver.core.logger import logger
from story_weaver.core.session import StoryWorkbench
from story_weaver.agents.service import GroqStoryService
from story_weaver.web import routes as web_routes


def create_workbench() -> StoryWorkbench:
    """Workbench backed by Groq. Raises ConfigurationError without GROQ_API_KEY."""
    return StoryWorkbench(GroqStoryService.from_settings(), language=settings.LANGUAGE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.workbench = create_workbench()
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} ready (model={settings.GROQ_MODEL}, language={settings.LANGUAGE})")
    yield
    app.state.workbench.reset()


app = FastAPI(title="Story Weaver", version=settings.VERSION, lifespan=lifespan)


#Mount Static Files
BASE_DIR = Path(__file__).resolve().parent
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

#Include Routers
app.include_router(web_routes.router)


def run():
    uvicorn.run("story_weaver.main:app", host="127.0.0.1", port=8000)
