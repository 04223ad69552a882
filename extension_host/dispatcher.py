"""
Activation dispatcher.

Hands activation events to the extension service without waiting for the
extensions to finish activating.
"""

import asyncio
import inspect
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Set

from .api import ExtensionService

logger = logging.getLogger(__name__)


class ActivationDispatcher:
    """
    Fires activation events at the extension service.

    Each dispatch runs as its own task. A failing activation is logged and
    never affects other dispatches or the caller.
    """

    def __init__(self, extension_service: ExtensionService, max_workers: int = 4):
        """
        Initialize ActivationDispatcher.

        Args:
            extension_service: Service exposing activate_by_event()
            max_workers: Thread pool size for synchronous activate_by_event
        """
        self.extension_service = extension_service
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._pending: Set[asyncio.Task] = set()
        self.dispatched: List[str] = []

    def dispatch(self, activation_event: str) -> asyncio.Task:
        """
        Schedule activation for an event. Must be called from a running loop.

        Args:
            activation_event: Event name, e.g. "*" or "workspaceContains:pom.xml"

        Returns:
            The task running the activation (already guarded against errors)
        """
        self.dispatched.append(activation_event)
        task = asyncio.get_running_loop().create_task(self._activate(activation_event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _activate(self, activation_event: str) -> None:
        try:
            activate = self.extension_service.activate_by_event
            if inspect.iscoroutinefunction(activate):
                await activate(activation_event)
            else:
                # Run sync service in executor
                loop = asyncio.get_running_loop()
                result = await loop.run_in_executor(self._executor, activate, activation_event)
                if inspect.isawaitable(result):
                    await result
            logger.debug(f"Activated extensions for event {activation_event}")
        except Exception as e:
            logger.error(
                f"Error activating extensions for event {activation_event}: {e}",
                exc_info=True
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def join(self) -> None:
        """Wait for every outstanding activation to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def shutdown(self) -> None:
        """Shutdown the thread pool executor."""
        self._executor.shutdown(wait=True)
