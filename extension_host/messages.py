"""
Diagnostic messages collected while scanning and merging extensions.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Severity of a diagnostic message."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Message:
    """A single diagnostic entry."""
    severity: Severity
    source: str  # Path the message is about, may be empty
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.severity.value,
            "source": self.source,
            "message": self.message,
        }


class MessageCollector:
    """
    Collects diagnostics in the order they are reported.

    Every entry is also logged at the matching level so that nothing is lost
    before the host forwards the messages to its error-reporting channel.
    """

    def __init__(self):
        self._messages: List[Message] = []

    def _add(self, severity: Severity, source: str, message: str) -> None:
        entry = Message(severity=severity, source=source or "", message=str(message))
        self._messages.append(entry)
        if entry.source:
            logger.log(_LOG_LEVELS[severity], f"[{entry.source}] {entry.message}")
        else:
            logger.log(_LOG_LEVELS[severity], entry.message)

    def info(self, source: str, message: str) -> None:
        self._add(Severity.INFO, source, message)

    def warn(self, source: str, message: str) -> None:
        self._add(Severity.WARNING, source, message)

    def error(self, source: str, message: str) -> None:
        self._add(Severity.ERROR, source, message)

    def extend(self, messages: List[Message]) -> None:
        """Append already-built messages without logging them again."""
        self._messages.extend(messages)

    def get_messages(self) -> List[Message]:
        """Get a copy of all collected messages."""
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
