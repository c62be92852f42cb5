"""
Context Loader Utility for Story Weaver Agents

This module loads the system prompts of the AI agents and wraps user supplied
text in XML tags so the model can tell instructions apart from story data.
"""

from pathlib import Path
from functools import lru_cache


# Base directory for agents
AGENTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=10)
def load_context(agent_name: str) -> str:
    """
    Load context file for a specific agent.

    Args:
        agent_name: Name of the agent (outliner, writer)

    Returns:
        Content of the context file as string

    Raises:
        ValueError: If the agent is unknown
        FileNotFoundError: If context file doesn't exist
    """
    context_paths = {
        "outliner": AGENTS_DIR / "manager" / "context_outliner.txt",
        "writer": AGENTS_DIR / "narrative" / "context_writer.txt",
    }

    if agent_name not in context_paths:
        raise ValueError(f"Unknown agent: {agent_name}. Available: {list(context_paths.keys())}")

    context_path = context_paths[agent_name]

    if not context_path.exists():
        raise FileNotFoundError(f"Context file not found: {context_path}")

    return context_path.read_text(encoding="utf-8")


def _escape(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


def wrap_user_input(user_input: str) -> str:
    """
    Wrap user input in XML tags for input isolation.

    Args:
        user_input: Raw user input string

    Returns:
        Wrapped input with XML tags
    """
    return f"<user_input>\n{_escape(user_input)}\n</user_input>"


def wrap_chapter_instructions(instructions: str, context: str) -> tuple[str, str]:
    """
    Wrap chapter instructions for writer agent.

    Args:
        instructions: Chapter writing instructions
        context: Story context (characters, digest of previous chapters)

    Returns:
        Tuple of (wrapped_instructions, wrapped_context)
    """
    wrapped_inst = f"<chapter_instructions>\n{_escape(instructions)}\n</chapter_instructions>"
    wrapped_ctx = f"<story_context>\n{_escape(context)}\n</story_context>"

    return wrapped_inst, wrapped_ctx
