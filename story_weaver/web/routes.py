from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, BackgroundTasks, HTTPException, Depends
from fastapi.responses import JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from story_weaver.core.errors import WorkbenchStateError
from story_weaver.core.export import EXPORT_MEDIA_TYPE
from story_weaver.core.graph.state import (
    StoryInputs,
    MIN_PAGES,
    MAX_PAGES,
    MIN_CHAPTERS,
    MAX_CHAPTERS,
    DEFAULT_PAGE_COUNT,
    DEFAULT_CHAPTER_COUNT,
)
from story_weaver.core.session import StoryWorkbench
from story_weaver.core.logger import get_logger

# Setup Templates
# This points to the 'story_weaver/templates' folder
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

logger = get_logger("web")
router = APIRouter()


class EditedStory(BaseModel):
    content: str


def get_workbench(request: Request) -> StoryWorkbench:
    """The single in-memory workbench created at startup."""
    return request.app.state.workbench


@router.get("/")
async def home(request: Request, workbench: StoryWorkbench = Depends(get_workbench)):
    messages = workbench.messages
    return templates.TemplateResponse(request, "index.html", {
        "t": messages,
        "language": workbench.language,
        "limits": {
            "min_pages": MIN_PAGES,
            "max_pages": MAX_PAGES,
            "min_chapters": MIN_CHAPTERS,
            "max_chapters": MAX_CHAPTERS,
        },
        "defaults": {
            "characters": messages["characters_default"],
            "style": messages["style_default"],
            "page_count": DEFAULT_PAGE_COUNT,
            "chapter_count": DEFAULT_CHAPTER_COUNT,
        },
    })


@router.post("/api/story/generate", status_code=202)
async def generate_story_api(
    inputs: StoryInputs,
    background_tasks: BackgroundTasks,
    workbench: StoryWorkbench = Depends(get_workbench),
):
    """
    Start a run. A submit while a run is generating changes nothing (409).
    """
    run = workbench.submit(inputs)
    if run is None:
        raise HTTPException(status_code=409, detail="A story is already being generated.")

    background_tasks.add_task(workbench.generate, run)
    return {"run_id": run.run_id, "status": "started"}


@router.post("/api/story/reset")
async def reset_story(workbench: StoryWorkbench = Depends(get_workbench)):
    workbench.reset()
    return workbench.snapshot()


@router.get("/api/story/status")
async def get_story_status(workbench: StoryWorkbench = Depends(get_workbench)):
    return workbench.snapshot()


@router.post("/api/story/edit/toggle")
async def toggle_edit(
    edited: Optional[EditedStory] = None,
    workbench: StoryWorkbench = Depends(get_workbench),
):
    """Leaving edit mode may carry the editor's final text."""
    try:
        workbench.toggle_edit(edited.content if edited else None)
    except WorkbenchStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workbench.snapshot()


@router.put("/api/story/edit")
async def update_edit(edited: EditedStory, workbench: StoryWorkbench = Depends(get_workbench)):
    try:
        workbench.update_edited_text(edited.content)
    except WorkbenchStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return JSONResponse({"status": "saved", "length": len(edited.content)})


@router.get("/api/story/export")
async def export_story(workbench: StoryWorkbench = Depends(get_workbench)):
    try:
        filename, content = workbench.export()
    except WorkbenchStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return Response(
        content=content.encode("utf-8"),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
