"""Edge function configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_PREFIX = "LLUMOS_EDGE_"


@dataclass
class EdgeConfig:
    """Settings for the edge function app.

    All fields can be overridden via environment variables prefixed with
    ``LLUMOS_EDGE_`` (e.g., ``LLUMOS_EDGE_CMS_ENCRYPTION_KEY=...``).
    """

    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    cms_encryption_key: str = ""
    internal_secret: str = ""
    log_level: str = "INFO"
    dev_mode: bool = False

    @classmethod
    def from_env(cls) -> EdgeConfig:
        """Create config from environment variables."""
        kwargs: dict[str, str | bool] = {}
        for fld in cls.__dataclass_fields__:
            env_key = f"{ENV_PREFIX}{fld.upper()}"
            val = os.environ.get(env_key)
            if val is None:
                continue
            fld_type = cls.__dataclass_fields__[fld].type
            if fld_type == "bool":
                kwargs[fld] = val.lower() in ("1", "true", "yes")
            else:
                kwargs[fld] = val
        return cls(**kwargs)
