"""Configuration for casefind."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    base_url: str = "http://127.0.0.1:3000"
    role: str = "admin"
    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "casefind")
    debounce_ms: int = 300
    result_limit: int = 5
    recent_limit: int = 5
    recent_days: int = 7
    request_timeout: float = 10.0

    @property
    def store_path(self) -> Path:
        return self.cache_dir / "local-store.json"

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000
