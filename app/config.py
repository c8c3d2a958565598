from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Engine thresholds
    min_likelihood_threshold: float = 40.0
    max_gas_budget_fraction: float = 0.3
    enforce_gas_budget: bool = False

    # Catalog (empty = bundled data/protocols)
    protocols_dir: str = ""

    # Cache
    cache_ttl_seconds: int = 900
    cache_max_entries: int = 1024

    # Request defaults
    default_budget: float = 100.0
    default_time_hours: float = 10.0

    # Server
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


class EngineConfig(BaseModel):
    """Thresholds the engine reads. Passed into each operation, never mutated."""

    min_likelihood: float = 40.0
    max_gas_budget_fraction: float = 0.3
    enforce_gas_budget: bool = False

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> EngineConfig:
        source = source or settings
        return cls(
            min_likelihood=source.min_likelihood_threshold,
            max_gas_budget_fraction=source.max_gas_budget_fraction,
            enforce_gas_budget=source.enforce_gas_budget,
        )
