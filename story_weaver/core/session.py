"""
Story Weaver - Generation session.

`GenerationRun` is the transient state of one run; `StoryWorkbench` owns the
single active run and exposes the user actions (submit, reset, edit, export).
`run_generation` drives the workflow graph and mirrors every intermediate
state into the run so partial progress is visible while chapters arrive.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from story_weaver.core.cancellation import CancellationToken
from story_weaver.core.errors import WorkbenchStateError
from story_weaver.core.export import format_story, story_filename
from story_weaver.core.graph.state import (
    GenerationState,
    GENERATING_STATES,
    StoryInputs,
    ChapterOutline,
    GeneratedChapter,
    StoryWorkState,
    initial_work_state,
)
from story_weaver.core.graph.workflow import story_graph, build_run_config
from story_weaver.core.i18n import get_messages
from story_weaver.core.logger import get_logger, log_generation_event, log_error

logger = get_logger("workbench")


@dataclass
class GenerationRun:
    inputs: Optional[StoryInputs] = None
    phase: GenerationState = GenerationState.IDLE
    status_message: str = ""
    outline: List[ChapterOutline] = field(default_factory=list)
    chapters: List[GeneratedChapter] = field(default_factory=list)
    error: Optional[str] = None
    token: CancellationToken = field(default_factory=CancellationToken)
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    # Presentation-local edit mode
    is_editing: bool = False
    edited_text: Optional[str] = None

    @property
    def is_generating(self) -> bool:
        return self.phase in GENERATING_STATES

    def clear(self) -> None:
        """Back to Idle with empty accumulators."""
        self.phase = GenerationState.IDLE
        self.status_message = ""
        self.outline = []
        self.chapters = []
        self.error = None
        self.is_editing = False
        self.edited_text = None

    def mirror(self, state: StoryWorkState, messages: dict) -> None:
        """Copy a workflow state snapshot into the run."""
        self.outline = list(state.get("outline") or [])
        self.chapters = list(state.get("chapters") or [])
        if not self.outline:
            return

        self.phase = GenerationState.GENERATING_CHAPTERS
        index = state.get("current_chapter_index", 0)
        if index < len(self.outline):
            self.status_message = messages["chapter_status"].format(
                number=self.outline[index].chapter_number,
                total=len(self.outline),
            )


async def run_generation(run: GenerationRun, service, language: str = "en") -> GenerationRun:
    """
    Drive one run from outline to last chapter.

    Every failure is caught here: cancellation resets the run to Idle, anything
    else moves it to Error with a generic message. Nothing propagates.
    """
    messages = get_messages(language)

    def on_progress(state: StoryWorkState) -> None:
        if not run.token.cancelled:
            run.mirror(state, messages)

    config = build_run_config(service, run.token, on_progress)

    try:
        final_state = await story_graph.ainvoke(initial_work_state(run.inputs), config=config)
    except Exception as e:
        log_error("Workflow crashed", e, {"run": run.run_id})
        final_state = {"error": str(e)}

    if run.token.cancelled or final_state.get("cancelled"):
        log_generation_event(run.run_id, "Cancelled", f"{len(run.chapters)} chapters discarded")
        run.clear()
    elif final_state.get("error"):
        log_generation_event(run.run_id, "Failed", final_state["error"])
        run.phase = GenerationState.ERROR
        run.error = messages["generic_error"]
        run.status_message = ""
    else:
        run.phase = GenerationState.COMPLETE
        run.status_message = messages["complete_status"]
        log_generation_event(run.run_id, "Complete", f"{len(run.chapters)} chapters")

    return run


class StoryWorkbench:
    """
    Single-user holder of the active GenerationRun.

    At most one run is generating at any time: `submit` while generating is a
    no-op, and any other submit first tears the previous run down.
    """

    def __init__(self, service, language: str = "en"):
        self.service = service
        self.language = language
        self.messages = get_messages(language)
        self.run = GenerationRun()

    @property
    def is_generating(self) -> bool:
        return self.run.is_generating

    def submit(self, inputs: StoryInputs) -> Optional[GenerationRun]:
        """Start a new run, or return None when one is already generating."""
        if self.is_generating:
            logger.info(f"Submit ignored, run {self.run.run_id} is still generating")
            return None

        self.reset()
        run = GenerationRun(
            inputs=inputs,
            phase=GenerationState.GENERATING_OUTLINE,
            status_message=self.messages["outline_status"],
        )
        self.run = run
        log_generation_event(
            run.run_id,
            "Submitted",
            f"pages={inputs.page_count} chapters={inputs.chapter_count}",
        )
        return run

    async def generate(self, run: GenerationRun) -> GenerationRun:
        return await run_generation(run, self.service, self.language)

    def reset(self) -> None:
        """Cancel whatever is in flight and go back to Idle."""
        previous = self.run
        if previous.is_generating:
            log_generation_event(previous.run_id, "Reset requested while generating")
        previous.token.cancel()
        self.run = GenerationRun()

    # --- Edit / export (only once the story is complete) ---

    def _require_complete(self, action: str) -> None:
        if self.run.phase != GenerationState.COMPLETE:
            raise WorkbenchStateError(f"Cannot {action} while the story is {self.run.phase.value}")

    def formatted_story(self) -> str:
        return format_story(self.run.chapters, self.messages["chapter_heading"])

    def toggle_edit(self, final_text: Optional[str] = None) -> bool:
        """
        Switch between view and edit mode.

        Entering edit mode snapshots the chapters. Leaving it stores
        `final_text` when given, so keystrokes not yet saved are kept.
        """
        self._require_complete("edit")
        if not self.run.is_editing:
            self.run.edited_text = self.formatted_story()
        elif final_text is not None:
            self.run.edited_text = final_text
        self.run.is_editing = not self.run.is_editing
        return self.run.is_editing

    def update_edited_text(self, text: str) -> None:
        self._require_complete("edit")
        if not self.run.is_editing:
            raise WorkbenchStateError("Edit mode is not active")
        self.run.edited_text = text

    def export(self) -> Tuple[str, str]:
        """Return (filename, markdown) for the download."""
        self._require_complete("export")
        content = self.run.edited_text if self.run.edited_text is not None else self.formatted_story()
        filename = story_filename(self.run.inputs.style, self.messages["default_basename"])
        log_generation_event(self.run.run_id, "Exported", filename)
        return filename, content

    def snapshot(self) -> dict:
        run = self.run
        return {
            "run_id": run.run_id,
            "state": run.phase.value,
            "status_message": run.status_message,
            "error": run.error,
            "is_generating": run.is_generating,
            "can_submit": not run.is_generating,
            "total_chapters": len(run.outline),
            "outline": [entry.model_dump() for entry in run.outline],
            "chapters": [chapter.model_dump() for chapter in run.chapters],
            "is_editing": run.is_editing,
            "edited_text": run.edited_text,
            "inputs": run.inputs.model_dump() if run.inputs else None,
        }
