"""Memory plugin configuration."""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.lanonasis.com"
DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class MemoryPluginConfig:
    """Connection settings for the memory service."""

    api_url: str = DEFAULT_API_URL
    auth_token: Optional[str] = None
    user_id: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "MemoryPluginConfig":
        """Build config from LANONASIS_* environment variables."""
        timeout_raw = os.getenv("LANONASIS_TIMEOUT_MS", "")
        try:
            timeout_ms = int(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_MS
        except ValueError:
            logger.warning(f"Invalid LANONASIS_TIMEOUT_MS '{timeout_raw}', using {DEFAULT_TIMEOUT_MS}")
            timeout_ms = DEFAULT_TIMEOUT_MS

        return cls(
            api_url=os.getenv("LANONASIS_API_URL") or DEFAULT_API_URL,
            auth_token=os.getenv("LANONASIS_API_KEY") or None,
            user_id=os.getenv("LANONASIS_USER_ID") or None,
            timeout_ms=timeout_ms,
        )

    def with_overrides(self, overrides: Dict[str, Any]) -> "MemoryPluginConfig":
        """Return a copy with known keys replaced; unknown keys are ignored."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(overrides) - known
        if unknown:
            logger.warning(f"Ignoring unknown memory plugin config keys: {sorted(unknown)}")
        values = {k: v for k, v in overrides.items() if k in known}
        if "timeout_ms" in values and not isinstance(values["timeout_ms"], int):
            try:
                values["timeout_ms"] = int(values["timeout_ms"])
            except (TypeError, ValueError):
                logger.warning(f"Invalid timeout_ms override {values['timeout_ms']!r}")
        return dataclasses.replace(self, **values)

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validate configuration.

        Returns:
            (is_valid, error_message)
        """
        if not isinstance(self.api_url, str) or not self.api_url.startswith(("http://", "https://")):
            return False, f"Invalid api_url format: {self.api_url}"
        for name in ("auth_token", "user_id"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                return False, f"{name} must be a string, got {type(value).__name__}"
        if not isinstance(self.timeout_ms, int) or isinstance(self.timeout_ms, bool):
            return False, f"timeout_ms must be an integer, got {self.timeout_ms!r}"
        if self.timeout_ms <= 0:
            return False, f"timeout_ms must be positive, got {self.timeout_ms}"
        return True, None
