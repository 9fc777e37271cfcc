"""Configuration for the reading core."""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class ReaderConfig:
    """Main configuration for progress tracking, storage and recommendations."""

    # "development" makes invalid reader positions raise instead of clamping
    environment: str = "production"

    # Storage settings
    store_backend: str = "json"  # json/sqlite
    store_path: str = "data/reader_store.json"

    # Progress settings
    progress_debounce_ms: int = 500

    # Browse settings
    recommendation_limit: int = 10

    log_level: str = "INFO"

    @property
    def strict_positions(self) -> bool:
        """Whether out-of-range positions should fail loudly."""
        return self.environment.lower() in ("development", "dev", "test")

    @property
    def debounce_seconds(self) -> float:
        return self.progress_debounce_ms / 1000

    @classmethod
    def from_env(cls) -> "ReaderConfig":
        """Load configuration from environment variables."""
        backend = os.getenv("STORE_BACKEND", "json").lower()
        default_path = "data/reader_store.db" if backend == "sqlite" else "data/reader_store.json"

        return cls(
            environment=os.getenv("READER_ENV", "production"),
            store_backend=backend,
            store_path=os.getenv("STORE_PATH", default_path),
            progress_debounce_ms=int(os.getenv("PROGRESS_DEBOUNCE_MS", "500")),
            recommendation_limit=int(os.getenv("RECOMMENDATION_LIMIT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def get_config() -> ReaderConfig:
    """Get the current configuration."""
    return ReaderConfig.from_env()
