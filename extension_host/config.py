from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

ENV_PREFIX = "EXTENSION_HOST_"
PROJECT_ROOT = Path(__file__).resolve().parents[1]


@dataclass
class HostEnvironment:
    """Locations and settings the extension host starts with."""

    version: str = "0.1.0"
    builtin_extensions_path: str = str(PROJECT_ROOT / "extensions")
    user_extensions_home: Optional[str] = None
    extension_development_path: Optional[str] = None
    extension_tests_path: Optional[str] = None
    test_runner_kind: str = "python"
    exit_delay: float = 0.5


def _config_path(path: Optional[str] = None) -> Path:
    if path:
        return Path(path)
    configured = os.getenv("EXTENSION_HOST_CONFIG")
    if configured:
        return Path(configured)
    return PROJECT_ROOT / "config" / "extension_host.yaml"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    # Either nested under extension_host: or flat
    section = parsed.get("extension_host", parsed)
    if not isinstance(section, dict):
        raise ConfigError(f"'extension_host' in {path} must be a mapping")
    return section


def _coerce(name: str, value: Any) -> Any:
    if value is None or value == "":
        return None
    if name == "exit_delay":
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"exit_delay must be a number, got {value!r}") from e
    return str(value)


def load_host_environment(path: Optional[str] = None) -> HostEnvironment:
    """Load host settings from .env, YAML and EXTENSION_HOST_* variables.

    Later sources win: YAML overrides the defaults and environment variables
    override YAML. Unknown YAML keys are rejected.
    """
    load_dotenv()

    values: Dict[str, Any] = {}
    known = {f.name for f in fields(HostEnvironment)}

    for key, value in _read_yaml(_config_path(path)).items():
        if key not in known:
            raise ConfigError(f"Unknown extension host setting: {key}")
        values[key] = _coerce(key, value)

    for name in known:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = _coerce(name, raw)

    # Empty values fall back to defaults for the required fields
    for required in ("version", "builtin_extensions_path", "test_runner_kind", "exit_delay"):
        if values.get(required) is None:
            values.pop(required, None)

    return HostEnvironment(**values)
