"""Runtime context passed to the extension host."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .api import ExistenceProbe, ExtensionScanner, ExtensionService
from .config import HostEnvironment
from .exit_gate import GuardedExitGate, HostExitGate
from .extension_tests import TestRunnerLoaderRegistry, default_runner_loaders
from .messages import MessageCollector


@dataclass
class HostContext:
    """
    Everything the host needs, built once by the process entry point.

    The thread, telemetry and model services belong to the RPC layer; the
    host only carries them through to extension-facing code.
    """

    environment: HostEnvironment
    scanner: ExtensionScanner
    extension_service: ExtensionService
    workspace_root: Optional[str] = None
    collector: MessageCollector = field(default_factory=MessageCollector)
    host_exit: Optional[HostExitGate] = None
    extension_exit: GuardedExitGate = field(default_factory=GuardedExitGate)
    runner_loaders: TestRunnerLoaderRegistry = field(default_factory=default_runner_loaders)
    exists: Optional[ExistenceProbe] = None

    thread_service: Any = None
    telemetry_service: Any = None
    model_service: Any = None

    def __post_init__(self):
        if self.host_exit is None:
            self.host_exit = HostExitGate(delay=self.environment.exit_delay)
