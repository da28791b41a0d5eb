from __future__ import annotations

import os
from typing import List


class ConfigError(Exception):
    """Raised when the environment does not describe a runnable service."""


def _split_origins(raw: str) -> List[str]:
    if raw.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings:
    """Centralized configuration for the Cal Track backend."""

    def __init__(
        self,
        *,
        imagga_api_key: str | None,
        imagga_api_secret: str | None,
        usda_api_key: str | None,
        imagga_tags_url: str = "https://api.imagga.com/v2/tags",
        usda_search_url: str = "https://api.nal.usda.gov/fdc/v1/foods/search",
        upstream_timeout: float = 15.0,
        max_upload_mb: int = 10,
        cors_origins: List[str] | None = None,
        host: str = "0.0.0.0",
        port: int = 3000,
        log_level: str = "INFO",
    ) -> None:
        self.imagga_api_key = imagga_api_key
        self.imagga_api_secret = imagga_api_secret
        self.usda_api_key = usda_api_key
        self.imagga_tags_url: str = imagga_tags_url
        self.usda_search_url: str = usda_search_url
        self.upstream_timeout: float = upstream_timeout
        self.max_upload_mb: int = max_upload_mb
        self.cors_origins: List[str] = (
            cors_origins if cors_origins is not None else ["https://cal-track.vercel.app"]
        )
        self.host: str = host
        self.port: int = port
        self.log_level: str = log_level

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb) * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment and validate them."""
        env = os.environ
        try:
            upstream_timeout = float(env.get("CALTRACK_UPSTREAM_TIMEOUT") or "15")
        except ValueError as exc:
            raise ConfigError("CALTRACK_UPSTREAM_TIMEOUT must be a number") from exc
        try:
            max_upload_mb = int(env.get("CALTRACK_MAX_UPLOAD_MB") or "10")
        except ValueError as exc:
            raise ConfigError("CALTRACK_MAX_UPLOAD_MB must be an integer") from exc
        port_raw = env.get("CALTRACK_PORT") or env.get("PORT") or "3000"
        try:
            port = int(port_raw)
        except ValueError as exc:
            raise ConfigError(f"Invalid port: {port_raw!r}") from exc

        settings = cls(
            imagga_api_key=env.get("IMAGGA_API_KEY"),
            imagga_api_secret=env.get("IMAGGA_API_SECRET"),
            usda_api_key=env.get("USDA_API_KEY"),
            imagga_tags_url=env.get("IMAGGA_TAGS_URL") or "https://api.imagga.com/v2/tags",
            usda_search_url=(
                env.get("USDA_SEARCH_URL") or "https://api.nal.usda.gov/fdc/v1/foods/search"
            ),
            upstream_timeout=upstream_timeout,
            max_upload_mb=max_upload_mb,
            cors_origins=_split_origins(
                env.get("CALTRACK_CORS_ORIGINS") or "https://cal-track.vercel.app"
            ),
            host=env.get("CALTRACK_HOST") or env.get("HOST") or "0.0.0.0",
            port=port,
            log_level=(env.get("CALTRACK_LOG_LEVEL") or "INFO").upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        problems: List[str] = []
        for env_name, value in (
            ("IMAGGA_API_KEY", self.imagga_api_key),
            ("IMAGGA_API_SECRET", self.imagga_api_secret),
            ("USDA_API_KEY", self.usda_api_key),
        ):
            if not (value or "").strip():
                problems.append(f"{env_name} is not set")
        if self.upstream_timeout <= 0:
            problems.append("upstream timeout must be greater than 0")
        if self.max_upload_mb <= 0:
            problems.append("max upload size must be greater than 0")
        if problems:
            raise ConfigError("; ".join(problems))
