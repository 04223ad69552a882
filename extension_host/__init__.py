"""
Extension Host

Loads third-party editor extensions in a secondary process:
- Multi-source discovery (builtin, user-installed, development)
- Deterministic merge with overwrite diagnostics
- Eager activation ("*" and workspaceContains: triggers)
- Guarded exit capability for extension code
- Extension test runner integration
"""

from .manifest import (
    ExtensionDescriptor,
    UNIVERSAL_ACTIVATION_EVENT,
    WORKSPACE_CONTAINS_PREFIX,
)
from .messages import Severity, Message, MessageCollector
from .merger import MergeResult, merge_extensions
from .registry import ExtensionRegistry
from .api import ExtensionAPI, ExtensionScanner, ExtensionService
from .dispatcher import ActivationDispatcher
from .activation import (
    ActivationPlan,
    ActivationTriggerResolver,
    collect_workspace_triggers,
    path_exists,
    workspace_path,
)
from .exit_gate import GuardedExitGate, HostExitGate
from .extension_tests import (
    ExtensionTestOutcome,
    TestRunnerLoaderRegistry,
    default_runner_loaders,
    load_python_runner,
)
from .config import HostEnvironment, load_host_environment
from .context import HostContext
from .host import ExtensionHostMain
from .errors import ExtensionHostError, ConfigError, ExtensionTestRunnerError

__all__ = [
    "ExtensionDescriptor",
    "UNIVERSAL_ACTIVATION_EVENT",
    "WORKSPACE_CONTAINS_PREFIX",
    "Severity",
    "Message",
    "MessageCollector",
    "MergeResult",
    "merge_extensions",
    "ExtensionRegistry",
    "ExtensionAPI",
    "ExtensionScanner",
    "ExtensionService",
    "ActivationDispatcher",
    "ActivationPlan",
    "ActivationTriggerResolver",
    "collect_workspace_triggers",
    "path_exists",
    "workspace_path",
    "GuardedExitGate",
    "HostExitGate",
    "ExtensionTestOutcome",
    "TestRunnerLoaderRegistry",
    "default_runner_loaders",
    "load_python_runner",
    "HostEnvironment",
    "load_host_environment",
    "HostContext",
    "ExtensionHostMain",
    "ExtensionHostError",
    "ConfigError",
    "ExtensionTestRunnerError",
]
