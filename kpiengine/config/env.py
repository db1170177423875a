from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class StatusThresholds:
    on_target: float = 100.0  # attainment % at or above which a KPI is on target
    attention: float = 80.0   # below this it is critical


def get_status_thresholds() -> StatusThresholds:
    return StatusThresholds(
        on_target=float(os.getenv("KPI_ON_TARGET_PCT", "100")),
        attention=float(os.getenv("KPI_ATTENTION_PCT", "80")),
    )


@dataclass(frozen=True)
class CacheConfig:
    max_entries: int = 256  # 0 disables result caching


def get_cache_config() -> CacheConfig:
    return CacheConfig(max_entries=int(os.getenv("KPI_CACHE_SIZE", "256")))


@dataclass(frozen=True)
class ApiConfig:
    api_key: str | None = None


def get_api_config() -> ApiConfig:
    return ApiConfig(api_key=os.getenv("API_KEY") or None)
