"""Client configuration: defaults, optional YAML file, and environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from porter_client import __version__

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean, got {value!r}."
    raise ValueError(msg)


@dataclass(frozen=True)
class ClientConfig:
    """Settings for the HTTP transport shared by all endpoint functions."""

    base_url: str = field(default_factory=lambda: os.environ.get("PORTER_API_URL", DEFAULT_BASE_URL))
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("PORTER_API_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS)))
    )
    verify_tls: bool = field(
        default_factory=lambda: _parse_bool("PORTER_API_VERIFY_TLS", os.environ.get("PORTER_API_VERIFY_TLS", "true"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("PORTER_API_USER_AGENT", f"porter-client/{__version__}")
    )


# Maps YAML keys to (field name, environment variable that overrides the file value).
_FILE_FIELDS = {
    "base_url": "PORTER_API_URL",
    "timeout_seconds": "PORTER_API_TIMEOUT",
    "verify_tls": "PORTER_API_VERIFY_TLS",
    "user_agent": "PORTER_API_USER_AGENT",
}


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML client configuration file and return its ``client`` section.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The raw ``client`` mapping.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If the file content is malformed or has unknown keys.
    """
    if not path.exists():
        msg = f"Client configuration file not found: {path}."
        raise FileNotFoundError(msg)

    raw = yaml.safe_load(path.read_text())

    if not isinstance(raw, dict) or "client" not in raw:
        msg = f"Client config file {path} must contain a top-level 'client' key."
        raise ValueError(msg)

    section: Any = raw["client"]
    if not isinstance(section, dict):
        msg = f"Client config file {path} has an invalid 'client' section, got {type(section).__name__}."
        raise ValueError(msg)

    unknown = sorted(set(section) - set(_FILE_FIELDS))
    if unknown:
        msg = f"Client config file {path} has unknown keys: {', '.join(unknown)}."
        raise ValueError(msg)

    return section


def load_client_config(path: Path | str | None = None) -> ClientConfig:
    """Build a ClientConfig from an optional YAML file, with environment overrides applied.

    The file is taken from ``path`` or, when omitted, the ``PORTER_CLIENT_CONFIG``
    environment variable. Without either, defaults and environment variables alone
    are used.
    """
    if path is None:
        env_path = os.environ.get("PORTER_CLIENT_CONFIG")
        path = Path(env_path) if env_path else None

    if path is None:
        return ClientConfig()

    section = _read_config_file(Path(path))
    values: dict[str, Any] = {}
    for key, env_var in _FILE_FIELDS.items():
        if key not in section or env_var in os.environ:
            continue
        value = section[key]
        if key == "timeout_seconds":
            value = float(value)
        elif key == "verify_tls":
            value = _parse_bool(key, value)
        else:
            value = str(value)
        values[key] = value
    return ClientConfig(**values)


def validate_client_config(config: ClientConfig) -> None:
    """Validate a ClientConfig before it is used to open connections.

    Raises ValueError listing every problem found.
    """
    errors: list[str] = []
    if not config.base_url.startswith(("http://", "https://")):
        errors.append(f"base_url must start with http:// or https://, got {config.base_url!r}")
    if config.timeout_seconds <= 0:
        errors.append(f"timeout_seconds must be positive, got {config.timeout_seconds}")
    if not config.user_agent:
        errors.append("user_agent is empty")

    if errors:
        detail = "; ".join(errors)
        msg = f"Client configuration errors: {detail}."
        raise ValueError(msg)
