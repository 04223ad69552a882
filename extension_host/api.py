"""
Capability interfaces the host depends on, and the API handed to extensions.
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional, Protocol, runtime_checkable

from .manifest import ExtensionDescriptor
from .messages import Message, MessageCollector

logger = logging.getLogger(__name__)


ExistenceProbe = Callable[[str], Awaitable[bool]]


@runtime_checkable
class ExtensionScanner(Protocol):
    """Reads extension manifests from a folder. Manifest parsing lives elsewhere."""

    async def scan_extensions(
        self,
        version: str,
        collector: MessageCollector,
        root: str,
        is_builtin: bool,
    ) -> List[ExtensionDescriptor]:
        ...

    async def scan_one_or_multiple(
        self,
        version: str,
        collector: MessageCollector,
        root: str,
        is_builtin: bool,
    ) -> List[ExtensionDescriptor]:
        ...


@runtime_checkable
class ExtensionService(Protocol):
    """Activates extensions and receives the registration diagnostics."""

    def activate_by_event(self, activation_event: str) -> Any:
        ...

    def registration_done(self, messages: List[Message]) -> None:
        ...


class ExitGate(Protocol):
    def exit(self, code: int = 0) -> None:
        ...


class ExtensionAPI:
    """
    API provided to extension code.

    Extensions get an exit gate instead of direct access to process
    termination, so a misbehaving extension cannot shut down the host.
    """

    def __init__(self, descriptor: ExtensionDescriptor, exit_gate: ExitGate, workspace_root: Optional[str] = None):
        """
        Initialize ExtensionAPI.

        Args:
            descriptor: Descriptor of the extension using this API
            exit_gate: Guarded exit capability
            workspace_root: Root of the open workspace, if any
        """
        self.descriptor = descriptor
        self.extension_id = descriptor.id
        self.workspace_root = workspace_root
        self._exit_gate = exit_gate

    @property
    def extension_path(self) -> str:
        return self.descriptor.source_path

    def exit(self, code: int = 0) -> None:
        """Ask the host to exit. The guarded gate refuses."""
        self._exit_gate.exit(code)

    def _log(self, level: int, message: str) -> None:
        # Extension output goes to the host log tagged with the extension id
        logger.log(level, f"[{self.extension_id}] {message}")

    def log_info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def log_warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def log_error(self, message: str) -> None:
        self._log(logging.ERROR, message)
