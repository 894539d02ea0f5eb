"""Config file loading and auto-discovery for Llumos.

Searches for ``llumos.yaml`` in the current directory and parent
directories and parses it. Secrets may also come from the environment;
see :func:`resolve_encryption_key`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_FILENAME = "llumos.yaml"
ENCRYPTION_KEY_ENV = "LLUMOS_CMS_ENCRYPTION_KEY"


@dataclass(frozen=True)
class LlumosConfig:
    """Parsed Llumos project configuration."""

    config_path: Path | None = None
    cms_encryption_key: str | None = None
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    supabase_jwt_secret: str | None = None
    internal_secret: str | None = None
    log_level: str = "INFO"


def find_config(start: Path | None = None) -> Path | None:
    """Walk from *start* (default ``cwd()``) up to the filesystem root.

    Returns the first ``llumos.yaml`` found, or ``None``.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(
    path: str | Path | None = None,
    *,
    auto_discover: bool = True,
) -> LlumosConfig:
    """Load a Llumos config file.

    Resolution order:

    1. Explicit *path* (error if it doesn't exist).
    2. Auto-discover by walking parent directories.
    3. Return an empty ``LlumosConfig`` (all defaults).
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).resolve()
        if not config_path.is_file():
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
    elif auto_discover:
        config_path = find_config()

    if config_path is None:
        return LlumosConfig()

    return _parse_config(config_path)


def _parse_config(config_path: Path) -> LlumosConfig:
    text = config_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}

    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {config_path}, got {type(data).__name__}"
        raise ValueError(msg)

    def _str(key: str) -> str | None:
        val = data.get(key)
        return None if val is None else str(val)

    return LlumosConfig(
        config_path=config_path,
        cms_encryption_key=_str("cms_encryption_key"),
        supabase_url=_str("supabase_url"),
        supabase_service_role_key=_str("supabase_service_role_key"),
        supabase_jwt_secret=_str("supabase_jwt_secret"),
        internal_secret=_str("internal_secret"),
        log_level=str(data.get("log_level", "INFO")).upper(),
    )


def resolve_encryption_key(
    explicit: str | None,
    config: LlumosConfig,
) -> str | None:
    """Return the first key found: explicit > environment > config file."""
    return explicit or os.environ.get(ENCRYPTION_KEY_ENV) or config.cms_encryption_key
