"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL
from .exceptions import ConfigError
from .finder import DEFAULT_FETCH_TIMEOUT

ENV_PREFIX = "EVFINDER_"
DEFAULT_PROVIDER = "synthetic"
DEFAULT_OWNER_ID = 1


@dataclass(frozen=True, slots=True)
class FinderConfig:
    provider: str = DEFAULT_PROVIDER
    api_key: str | None = None
    base_url: str | None = None
    cache_ttl: float = DEFAULT_TTL
    cache_max_entries: int = DEFAULT_MAX_ENTRIES
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    retry_count: int = 0
    seed: int | None = None
    owner_id: int = DEFAULT_OWNER_ID

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FinderConfig:
        env = os.environ if environ is None else environ
        provider = env.get(f"{ENV_PREFIX}PROVIDER", "").strip() or DEFAULT_PROVIDER
        return cls(
            provider=provider,
            api_key=env.get("OPEN_CHARGE_MAP_API_KEY", "").strip() or None,
            base_url=env.get(f"{ENV_PREFIX}BASE_URL", "").strip() or None,
            cache_ttl=_read_float(env, "CACHE_TTL", DEFAULT_TTL),
            cache_max_entries=_read_int(env, "CACHE_MAX_ENTRIES", DEFAULT_MAX_ENTRIES, minimum=1),
            fetch_timeout=_read_float(env, "FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            retry_count=_read_int(env, "RETRY_COUNT", 0, minimum=0),
            seed=_read_optional_int(env, "SEED"),
            owner_id=_read_int(env, "OWNER_ID", DEFAULT_OWNER_ID, minimum=1),
        )


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(f"{ENV_PREFIX}{name}", "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number.") from exc
    if value <= 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must be greater than zero.")
    return value


def _read_int(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    value = _read_optional_int(env, name)
    if value is None:
        return default
    if value < minimum:
        raise ConfigError(f"{ENV_PREFIX}{name} must be at least {minimum}.")
    return value


def _read_optional_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(f"{ENV_PREFIX}{name}", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer.") from exc
