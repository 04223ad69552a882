"""
Extension host startup.

Startup sequence:
1. Scan builtin, user and development locations concurrently
2. Merge (builtin < user < development) and register
3. Report registration diagnostics to the extension service
4. Fire eager activation events ("*" and workspaceContains:)
5. Run extension tests when a tests path is configured
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from .activation import ActivationPlan, ActivationTriggerResolver
from .api import ExtensionAPI
from .context import HostContext
from .dispatcher import ActivationDispatcher
from .errors import ExtensionTestRunnerError
from .extension_tests import ExtensionTestOutcome, run_extension_tests
from .manifest import ExtensionDescriptor
from .merger import MergeResult, merge_extensions
from .registry import ExtensionRegistry

logger = logging.getLogger(__name__)


async def _no_extensions() -> List[ExtensionDescriptor]:
    return []


class ExtensionHostMain:
    """
    Drives extension discovery and eager activation for one host process.
    """

    def __init__(
        self,
        context: HostContext,
        registry: Optional[ExtensionRegistry] = None,
        dispatcher: Optional[ActivationDispatcher] = None,
    ):
        """
        Initialize ExtensionHostMain.

        Args:
            context: Injected services and environment
            registry: Registry to fill (a new one by default)
            dispatcher: Activation dispatcher (built from the extension service by default)
        """
        self.context = context
        self.registry = registry or ExtensionRegistry()
        self.dispatcher = dispatcher or ActivationDispatcher(context.extension_service)
        self.resolver = ActivationTriggerResolver(self.dispatcher, exists=context.exists)
        self.activation_plan: Optional[ActivationPlan] = None

    async def start(self) -> ActivationPlan:
        """
        Run the startup sequence.

        Returns:
            The eager activation plan

        Raises:
            ExtensionTestRunnerError: A tests path is configured but the runner
                is invalid or failed (the host exit is already scheduled)
        """
        await self.read_extensions()
        plan = await self.handle_eager_extensions()
        await self.handle_extension_tests()
        return plan

    async def _scan_source(
        self,
        label: str,
        scan: Callable[..., Awaitable[List[ExtensionDescriptor]]],
        root: str,
        is_builtin: bool,
    ) -> List[ExtensionDescriptor]:
        env = self.context.environment
        try:
            descriptors = await scan(env.version, self.context.collector, root, is_builtin)
        except Exception as e:
            self.context.collector.error(root, f"Failed to scan {label} extensions: {e}")
            return []

        descriptors = list(descriptors or [])
        logger.info(f"Found {len(descriptors)} {label} extensions in {root}")
        return descriptors

    async def scan_extensions(self) -> MergeResult:
        """
        Scan all configured locations concurrently and merge the results.

        A location that fails to scan contributes no extensions and an error
        diagnostic; the other locations are unaffected.
        """
        env = self.context.environment
        scanner = self.context.scanner

        builtin = self._scan_source("builtin", scanner.scan_extensions, env.builtin_extensions_path, True)
        user = (
            self._scan_source("user", scanner.scan_extensions, env.user_extensions_home, False)
            if env.user_extensions_home else _no_extensions()
        )
        developed = (
            self._scan_source("development", scanner.scan_one_or_multiple, env.extension_development_path, False)
            if env.extension_development_path else _no_extensions()
        )

        builtin_list, user_list, developed_list = await asyncio.gather(builtin, user, developed)
        return merge_extensions(builtin_list, user_list, developed_list)

    async def read_extensions(self) -> MergeResult:
        """Scan, merge, register, then signal registration done."""
        result = await self.scan_extensions()
        self.context.collector.extend(result.messages)

        self.registry.register_extensions(result.descriptors())
        self.context.extension_service.registration_done(self.context.collector.get_messages())
        return result

    async def handle_eager_extensions(self) -> ActivationPlan:
        self.activation_plan = await self.resolver.handle_eager_extensions(
            self.registry.get_all_extensions(),
            self.context.workspace_root,
        )
        return self.activation_plan

    async def handle_extension_tests(self) -> Optional[ExtensionTestOutcome]:
        """
        Run the extension tests, then exit the host with their result.

        Returns:
            The outcome, or None when no tests are configured
        """
        env = self.context.environment
        if not env.extension_tests_path or not env.extension_development_path:
            return None

        try:
            runner = self.context.runner_loaders.load(env.test_runner_kind, env.extension_tests_path)
        except ExtensionTestRunnerError:
            self.context.host_exit.graceful_exit(1)
            raise
        except Exception as e:
            self.context.host_exit.graceful_exit(1)
            raise ExtensionTestRunnerError(
                f"Path {env.extension_tests_path} does not point to a valid extension test runner."
            ) from e

        outcome = await run_extension_tests(runner, env.extension_tests_path)

        # Exit after tests regardless of outcome
        self.context.host_exit.graceful_exit(outcome.exit_code)
        if outcome.error:
            raise ExtensionTestRunnerError(outcome.error)
        return outcome

    def create_extension_api(self, extension_id: str) -> ExtensionAPI:
        """
        Build the API object handed to an extension on activation.

        Raises:
            KeyError: The extension is not registered
        """
        descriptor = self.registry.get_extension(extension_id)
        if descriptor is None:
            raise KeyError(extension_id)
        return ExtensionAPI(descriptor, self.context.extension_exit, self.context.workspace_root)

    async def shutdown(self) -> None:
        """Wait for outstanding activations and release both thread pools."""
        await self.dispatcher.join()
        self.dispatcher.shutdown()
        self.resolver.shutdown()
