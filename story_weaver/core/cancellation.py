import asyncio

from story_weaver.core.errors import GenerationCancelled


class CancellationToken:
    """Cooperative cancellation flag shared by every step of one run.

    Flipped once by the workbench (reset, or a new submit); polled by the
    workflow between calls and awaited by the service while a request is in
    flight.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise GenerationCancelled()
