"""
Extension descriptor definitions and dataclasses.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, Optional


UNIVERSAL_ACTIVATION_EVENT = "*"
WORKSPACE_CONTAINS_PREFIX = "workspaceContains:"


@dataclass(frozen=True)
class ExtensionDescriptor:
    """
    Scanned extension manifest.

    Descriptors are immutable once scanned; merging only decides which
    descriptor wins for a given id.
    """
    id: str
    source_path: str  # Folder the manifest was read from
    activation_events: Tuple[str, ...] = ()

    # Manifest metadata, carried verbatim
    name: Optional[str] = None
    publisher: Optional[str] = None
    version: str = "0.0.0"
    description: str = ""
    main: Optional[str] = None  # Entry point relative to source_path
    is_builtin: bool = False
    contributes: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        # Accept any sequence for activation events but store a tuple
        if not isinstance(self.activation_events, tuple):
            object.__setattr__(self, "activation_events", tuple(self.activation_events or ()))

    def workspace_triggers(self) -> Tuple[str, ...]:
        """Return the file names named by workspaceContains: rules."""
        return tuple(
            event[len(WORKSPACE_CONTAINS_PREFIX):]
            for event in self.activation_events
            if event.startswith(WORKSPACE_CONTAINS_PREFIX)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "publisher": self.publisher,
            "version": self.version,
            "description": self.description,
            "main": self.main,
            "isBuiltin": self.is_builtin,
            "extensionFolderPath": self.source_path,
            "activationEvents": list(self.activation_events),
            "contributes": self.contributes,
        }
