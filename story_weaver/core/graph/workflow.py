from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from story_weaver.core.errors import GenerationCancelled
from story_weaver.core.graph.state import (
    StoryWorkState,
    ChapterContext,
    GeneratedChapter,
    MAX_CHAPTERS,
)
from story_weaver.core.logger import get_logger, log_error
from story_weaver.agents.narrative.writer import build_digest

logger = get_logger("workflow")

# One outline step plus one step per chapter, with headroom for a model that
# returns more entries than requested.
RECURSION_LIMIT = 2 * MAX_CHAPTERS + 10


def _runtime(config: RunnableConfig):
    """The service, cancellation token and progress callback travel in the run config, not in the state."""
    configurable = config.get("configurable", {})
    return configurable["service"], configurable["token"], configurable.get("on_progress")


def _report(on_progress, state: StoryWorkState, update: dict) -> None:
    if on_progress:
        on_progress({**state, **update})


# --- NODES ---

async def outline_node(state: StoryWorkState, config: RunnableConfig) -> dict:
    """
    Requests the chapter outline.
    """
    service, token, on_progress = _runtime(config)
    if token.cancelled:
        return {"cancelled": True}

    try:
        outline = await service.generate_outline(state["inputs"], token)
    except GenerationCancelled:
        return {"cancelled": True}
    except Exception as e:
        log_error("Outline generation failed", e)
        return {"error": str(e)}

    if token.cancelled:
        return {"cancelled": True}

    update = {
        "outline": outline,
        "current_chapter_index": 0,
        "chapters": [],
        "is_complete": len(outline) == 0,
    }
    _report(on_progress, state, update)
    return update


async def chapter_node(state: StoryWorkState, config: RunnableConfig) -> dict:
    """
    Writes the chapter at the current index and advances the index.
    """
    service, token, on_progress = _runtime(config)
    outline = state["outline"]
    index = state["current_chapter_index"]
    entry = outline[index]

    if token.cancelled:
        logger.info(f"Chapter generation aborted before chapter {entry.chapter_number}")
        return {"cancelled": True}

    inputs = state["inputs"]
    context = ChapterContext(
        characters=inputs.characters,
        style=inputs.style,
        chapter_summary=entry.chapter_summary,
        previous_chapters=build_digest(state["chapters"]),
    )

    try:
        content = await service.generate_chapter(context, token)
    except GenerationCancelled:
        return {"cancelled": True}
    except Exception as e:
        log_error("Chapter generation failed", e, {"chapter": entry.chapter_number})
        return {"error": str(e)}

    if token.cancelled:
        return {"cancelled": True}

    next_index = index + 1
    update = {
        "chapters": state["chapters"] + [GeneratedChapter(chapter_number=entry.chapter_number, content=content)],
        "current_chapter_index": next_index,
        "is_complete": next_index >= len(outline),
    }
    _report(on_progress, state, update)
    return update


# --- EDGES ---

def check_progress(state: StoryWorkState):
    if state.get("error") or state.get("cancelled"):
        return END
    if state["is_complete"]:
        return END
    return "chapter"


# --- GRAPH ---

workflow = StateGraph(StoryWorkState)

workflow.add_node("outline", outline_node)
workflow.add_node("chapter", chapter_node)

workflow.set_entry_point("outline")

workflow.add_conditional_edges(
    "outline",
    check_progress,
    {
        "chapter": "chapter",
        END: END
    }
)

workflow.add_conditional_edges(
    "chapter",
    check_progress,
    {
        "chapter": "chapter",
        END: END
    }
)

story_graph = workflow.compile()


def build_run_config(service, token, on_progress=None) -> RunnableConfig:
    return {
        "configurable": {"service": service, "token": token, "on_progress": on_progress},
        "recursion_limit": RECURSION_LIMIT,
    }
