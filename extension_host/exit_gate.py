"""
Exit gates.

The host owns the only gate that can terminate the process. Extension code
receives a guarded gate that logs the attempt and returns.
"""

import asyncio
import logging
import sys
import traceback
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_EXIT_DELAY = 0.5


class GuardedExitGate:
    """Exit gate handed to extensions. Never terminates the process."""

    def __init__(self):
        self.attempts = 0

    def exit(self, code: int = 0) -> None:
        self.attempts += 1
        stack = "".join(traceback.format_stack(limit=8)[:-1])
        logger.warning(f"An extension called exit({code}) and this was prevented.\n{stack}")


class HostExitGate:
    """
    Exit gate used by the host itself.

    graceful_exit() delays termination so outstanding log output can be
    flushed to the main process first.
    """

    def __init__(
        self,
        terminate: Callable[[int], None] = sys.exit,
        delay: float = DEFAULT_EXIT_DELAY,
    ):
        self._terminate = terminate
        self.delay = delay
        self.scheduled_code: Optional[int] = None

    def exit(self, code: int = 0) -> None:
        logger.info(f"Extension host exiting with code {code}")
        self._terminate(code)

    def graceful_exit(self, code: int) -> asyncio.TimerHandle:
        """
        Schedule exit on the running loop after the flush delay.

        Args:
            code: Process exit code

        Returns:
            Timer handle, cancellable by the caller
        """
        self.scheduled_code = code
        loop = asyncio.get_running_loop()
        return loop.call_later(self.delay, self.exit, code)
