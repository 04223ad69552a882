"""
Extension registry.

Holds the winning descriptor for every extension id. The registry is filled
exactly once at host startup and is read-only afterwards.
"""

import logging
from typing import List, Dict, Iterable, Iterator, Optional

from .manifest import ExtensionDescriptor

logger = logging.getLogger(__name__)


class ExtensionRegistry:
    """
    Registry of merged extension descriptors.
    """

    def __init__(self):
        self._extensions: Dict[str, ExtensionDescriptor] = {}
        self._registered = False

    @property
    def is_registered(self) -> bool:
        return self._registered

    def register_extensions(self, descriptors: Iterable[ExtensionDescriptor]) -> bool:
        """
        Register the merged descriptors.

        Args:
            descriptors: Descriptors with unique ids, usually the output of
                merge_extensions()

        Returns:
            True if registered, False if the registry was already filled
        """
        if self._registered:
            logger.warning("Extensions are already registered; ignoring second registration")
            return False

        for descriptor in descriptors:
            if descriptor.id in self._extensions:
                logger.warning(f"Extension '{descriptor.id}' is listed twice; keeping the last one")
            self._extensions[descriptor.id] = descriptor

        self._registered = True
        logger.info(f"Registered {len(self._extensions)} extensions")
        return True

    def get_extension(self, extension_id: str) -> Optional[ExtensionDescriptor]:
        """Get extension descriptor by id."""
        return self._extensions.get(extension_id)

    def get_all_extensions(self) -> List[ExtensionDescriptor]:
        """Get all registered extension descriptors."""
        return list(self._extensions.values())

    def get_extensions_for_event(self, activation_event: str) -> List[ExtensionDescriptor]:
        """
        Get the extensions that declare an activation event.

        Args:
            activation_event: Exact event string, e.g. "workspaceContains:package.json"

        Returns:
            Matching descriptors in registration order
        """
        return [
            descriptor for descriptor in self._extensions.values()
            if activation_event in descriptor.activation_events
        ]

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._extensions

    def __len__(self) -> int:
        return len(self._extensions)

    def __iter__(self) -> Iterator[ExtensionDescriptor]:
        return iter(list(self._extensions.values()))
