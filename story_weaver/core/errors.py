"""
Story Weaver - Error taxonomy.

GenerationCancelled is not a StoryWeaverError: the orchestrator
treats it as a silent reset, never as a failure.
"""


class StoryWeaverError(Exception):
    """Base class for every failure surfaced by Story Weaver."""


class ConfigurationError(StoryWeaverError):
    """Required configuration (e.g. the API key) is missing. Fatal at startup."""


class StoryServiceError(StoryWeaverError):
    """The generation service failed (transport, authentication, rate limit...)."""


class MalformedOutlineError(StoryServiceError):
    """The outline response was not valid JSON or did not match the expected shape."""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response


class WorkbenchStateError(StoryWeaverError):
    """An action was requested in a phase that does not allow it."""


class GenerationCancelled(Exception):
    """The user reset the run (or started a new one) while it was in flight."""

    def __init__(self, message: str = "Generation cancelled"):
        super().__init__(message)
