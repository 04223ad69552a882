"""
Merge descriptors scanned from builtin, user and development locations.

Precedence is builtin < user-installed < development. Each later source
replaces an earlier descriptor with the same id and records a warning.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .manifest import ExtensionDescriptor
from .messages import Message, MessageCollector

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Winning descriptor per id plus the diagnostics emitted while merging."""
    extensions: Dict[str, ExtensionDescriptor] = field(default_factory=dict)
    messages: List[Message] = field(default_factory=list)

    def descriptors(self) -> List[ExtensionDescriptor]:
        return list(self.extensions.values())


def _overwrite_message(old: ExtensionDescriptor, new: ExtensionDescriptor) -> str:
    return f"Overwriting extension {old.source_path} with {new.source_path}"


def merge_extensions(
    builtin: Iterable[ExtensionDescriptor],
    user_installed: Iterable[ExtensionDescriptor] = (),
    developed: Iterable[ExtensionDescriptor] = (),
) -> MergeResult:
    """
    Merge the three descriptor sources into one mapping keyed by id.

    Args:
        builtin: Descriptors shipped with the host
        user_installed: Descriptors from the user extensions folder
        developed: Descriptors from the extension development path

    Returns:
        MergeResult with the winning descriptors (first-seen key order) and
        the diagnostics in builtin -> user -> development order
    """
    collector = MessageCollector()
    extensions: Dict[str, ExtensionDescriptor] = {}

    # Duplicates inside the builtin list are not reported; the last one wins
    for descriptor in builtin:
        extensions[descriptor.id] = descriptor

    for descriptor in user_installed:
        if descriptor.id in extensions:
            collector.warn("", _overwrite_message(extensions[descriptor.id], descriptor))
        extensions[descriptor.id] = descriptor

    for descriptor in developed:
        collector.info("", f"Loading development extension at {descriptor.source_path}")
        if descriptor.id in extensions:
            collector.warn("", _overwrite_message(extensions[descriptor.id], descriptor))
        extensions[descriptor.id] = descriptor

    logger.debug(f"Merged {len(extensions)} extensions")
    return MergeResult(extensions=extensions, messages=collector.get_messages())
