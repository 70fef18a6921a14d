"""Configuration management for the WebP MCP backend."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

MIB = 1024 * 1024


@dataclass(frozen=True)
class Config:
    """Backend configuration loaded from environment variables."""

    host: str = "0.0.0.0"
    port: int = 10000
    max_port_attempts: int = 100
    workers: int = 4
    max_upload_bytes: int = 10 * MIB
    max_request_bytes: int = 50 * MIB
    cors_origins: str = "*"

    @classmethod
    def load(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("WEBP_MCP_HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "10000")),
            max_port_attempts=int(os.getenv("WEBP_MCP_MAX_PORT_ATTEMPTS", "100")),
            workers=int(os.getenv("WEBP_MCP_WORKERS", "4")),
            max_upload_bytes=int(os.getenv("WEBP_MCP_MAX_UPLOAD_BYTES", str(10 * MIB))),
            max_request_bytes=int(os.getenv("WEBP_MCP_MAX_REQUEST_BYTES", str(50 * MIB))),
            cors_origins=os.getenv("WEBP_MCP_CORS_ORIGINS", "*"),
        )

    def replace(self, **changes: Any) -> Config:
        """Return a copy with the given non-None fields overridden."""
        return dataclasses.replace(
            self, **{k: v for k, v in changes.items() if v is not None}
        )
