"""
Activation trigger resolution.

Works out which activation events fire eagerly at startup: the universal
"*" event always, plus every workspaceContains:<name> rule whose <name>
exists under the workspace root.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Set

from .dispatcher import ActivationDispatcher
from .manifest import ExtensionDescriptor, UNIVERSAL_ACTIVATION_EVENT, WORKSPACE_CONTAINS_PREFIX
from .api import ExistenceProbe

logger = logging.getLogger(__name__)


def workspace_path(workspace_root: str, name: str) -> str:
    """
    Path of a workspaceContains: name under the workspace root.

    Leading separators are stripped so an absolute-looking name still
    resolves inside the root; an empty name is the root itself.
    """
    return os.path.join(workspace_root, name.lstrip("/\\"))


def path_exists_sync(path: str) -> bool:
    """True for files, directories and symlinks (even dangling ones)."""
    try:
        return os.path.lexists(path)
    except (OSError, ValueError):
        return False


async def path_exists(path: str, executor: Optional[ThreadPoolExecutor] = None) -> bool:
    """
    Check whether a path exists without blocking the loop.

    Args:
        path: Absolute path to check
        executor: Thread pool for the blocking check (loop default if None)

    Returns:
        True if anything exists at the path, False on absence or access errors
    """
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(executor, path_exists_sync, path)
    except Exception as e:
        logger.debug(f"Existence check failed for {path}: {e}")
        return False


@dataclass(frozen=True)
class ActivationPlan:
    """Activation events fired eagerly at startup."""
    events: FrozenSet[str]

    def __contains__(self, activation_event: object) -> bool:
        return activation_event in self.events

    def __len__(self) -> int:
        return len(self.events)


def collect_workspace_triggers(descriptors: Iterable[ExtensionDescriptor]) -> Set[str]:
    """
    Collect the distinct file names named by workspaceContains: rules.

    The name is taken verbatim after the prefix; no glob expansion is done.
    """
    names: Set[str] = set()
    for descriptor in descriptors:
        names.update(descriptor.workspace_triggers())
    return names


class ActivationTriggerResolver:
    """
    Resolves eager activation events and hands them to the dispatcher.
    """

    def __init__(
        self,
        dispatcher: ActivationDispatcher,
        exists: Optional[ExistenceProbe] = None,
        max_workers: int = 4,
    ):
        """
        Initialize ActivationTriggerResolver.

        Args:
            dispatcher: Dispatcher that forwards events to the extension service
            exists: Async existence probe (defaults to path_exists on this
                resolver's thread pool)
            max_workers: Thread pool size for the default probe
        """
        self.dispatcher = dispatcher
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._exists = exists or self._path_exists

    async def _path_exists(self, path: str) -> bool:
        return await path_exists(path, self._executor)

    async def _probe(self, path: str) -> bool:
        try:
            return bool(await self._exists(path))
        except Exception as e:
            logger.warning(f"Existence probe raised for {path}: {e}")
            return False

    async def resolve(
        self,
        descriptors: Iterable[ExtensionDescriptor],
        workspace_root: Optional[str],
    ) -> Set[str]:
        """
        Probe the workspace for every distinct workspaceContains: name.

        Args:
            descriptors: Registered extension descriptors
            workspace_root: Workspace folder, or None when no workspace is open

        Returns:
            Names that exist under the workspace root
        """
        if not workspace_root:
            return set()

        names = sorted(collect_workspace_triggers(descriptors))
        if not names:
            return set()

        logger.debug(f"Probing {len(names)} workspaceContains triggers under {workspace_root}")
        results = await asyncio.gather(
            *(self._probe(workspace_path(workspace_root, name)) for name in names)
        )
        return {name for name, found in zip(names, results) if found}

    async def handle_eager_extensions(
        self,
        descriptors: Iterable[ExtensionDescriptor],
        workspace_root: Optional[str],
    ) -> ActivationPlan:
        """
        Dispatch "*" and the matching workspaceContains: events.

        Dispatches are not awaited; use dispatcher.join() to wait for them.

        Returns:
            The plan that was dispatched
        """
        self.dispatcher.dispatch(UNIVERSAL_ACTIVATION_EVENT)

        events: List[str] = [UNIVERSAL_ACTIVATION_EVENT]
        if workspace_root:
            for name in sorted(await self.resolve(descriptors, workspace_root)):
                activation_event = WORKSPACE_CONTAINS_PREFIX + name
                self.dispatcher.dispatch(activation_event)
                events.append(activation_event)

        logger.info(f"Eager activation dispatched {len(events)} events")
        return ActivationPlan(events=frozenset(events))

    def shutdown(self) -> None:
        """Shutdown the probe thread pool."""
        self._executor.shutdown(wait=True)
