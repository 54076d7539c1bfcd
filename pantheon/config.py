"""
pantheon/config.py

Environment-driven settings for sources, aggregation timeouts, and sync.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

_LATENCY_BASE_URL = "https://my-json-server.typicode.com/jabrena/latency-problems"

_DEFAULT_MYTHOLOGIES: tuple[str, ...] = ("greek", "roman", "nordic", "indian", "celtiberian")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list, dropping blank tokens.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    tokens = tuple(token.strip() for token in raw_value.split(",") if token.strip())
    return tokens or default


def parse_source_pairs(raw: str) -> dict[str, str]:
    """
    Parse ``name=url,name=url`` into an ordered mapping.

    Malformed tokens (missing ``=``, blank name or url) are skipped.
    """

    pairs: dict[str, str] = {}
    for token in raw.split(","):
        token = token.strip()
        if "=" not in token:
            continue
        name, url = token.split("=", 1)
        name, url = name.strip(), url.strip()
        if name and url:
            pairs[name] = url
    return pairs


@dataclass(frozen=True)
class SourceHTTPSettings:
    """
    Transport behavior shared by all source clients.
    """

    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class LatencySettings:
    """
    Sources and deadline for the prefix-sum aggregation.
    """

    timeout_seconds: float = 5.0
    sources: dict[str, str] = field(
        default_factory=lambda: {
            "Greek API": f"{_LATENCY_BASE_URL}/greek",
            "Roman API": f"{_LATENCY_BASE_URL}/roman",
            "Nordic API": f"{_LATENCY_BASE_URL}/nordic",
        }
    )


@dataclass(frozen=True)
class MythologySettings:
    """
    Mythology gateway settings: one endpoint per mythology under a base URL.
    """

    base_url: str = _LATENCY_BASE_URL
    timeout_seconds: float = 5.0
    mythologies: tuple[str, ...] = _DEFAULT_MYTHOLOGIES

    def url_for(self, mythology: str) -> str:
        if not self.base_url or not self.base_url.strip():
            raise RuntimeError("MYTHOLOGY_BASE_URL is not configured.")
        base = self.base_url.strip()
        return f"{base}{mythology}" if base.endswith("/") else f"{base}/{mythology}"


@dataclass(frozen=True)
class LiteratureSettings:
    """
    Greek gods list plus the per-god page template used for ranking.
    """

    gods_url: str = f"{_LATENCY_BASE_URL}/greek"
    page_url_template: str = "https://en.wikipedia.org/wiki/{god}"
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class SyncSettings:
    """
    Background god catalog synchronization settings.
    """

    enabled: bool = True
    source_url: str = f"{_LATENCY_BASE_URL}/greek"
    interval_seconds: float = 1800.0
    initial_delay_seconds: float = 60.0
    timeout_seconds: float = 30.0


@lru_cache(maxsize=1)
def get_source_http_settings() -> SourceHTTPSettings:
    """
    Return transport settings from environment variables.
    """

    return SourceHTTPSettings(
        timeout_seconds=max(0.1, _get_float_env("PANTHEON_HTTP_TIMEOUT_SECONDS", 10.0)),
    )


@lru_cache(maxsize=1)
def get_latency_settings() -> LatencySettings:
    """
    Return prefix-sum aggregation settings from environment variables.
    """

    _load_env_once()
    raw_sources = os.getenv("LATENCY_SOURCES")
    sources = parse_source_pairs(raw_sources) if raw_sources else {}
    timeout_seconds = max(0.1, _get_float_env("LATENCY_TIMEOUT_SECONDS", 5.0))
    if not sources:
        return LatencySettings(timeout_seconds=timeout_seconds)
    return LatencySettings(timeout_seconds=timeout_seconds, sources=sources)


@lru_cache(maxsize=1)
def get_mythology_settings() -> MythologySettings:
    """
    Return mythology gateway settings from environment variables.
    """

    return MythologySettings(
        base_url=_get_str_env("MYTHOLOGY_BASE_URL", _LATENCY_BASE_URL),
        timeout_seconds=max(0.1, _get_float_env("MYTHOLOGY_TIMEOUT_SECONDS", 5.0)),
        mythologies=tuple(
            name.lower() for name in _get_list_env("MYTHOLOGY_NAMES", _DEFAULT_MYTHOLOGIES)
        ),
    )


@lru_cache(maxsize=1)
def get_literature_settings() -> LiteratureSettings:
    """
    Return literature ranking settings from environment variables.
    """

    return LiteratureSettings(
        gods_url=_get_str_env("LITERATURE_GODS_URL", f"{_LATENCY_BASE_URL}/greek"),
        page_url_template=_get_str_env(
            "LITERATURE_PAGE_URL_TEMPLATE", "https://en.wikipedia.org/wiki/{god}"
        ),
        timeout_seconds=max(0.1, _get_float_env("LITERATURE_TIMEOUT_SECONDS", 10.0)),
    )


@lru_cache(maxsize=1)
def get_sync_settings() -> SyncSettings:
    """
    Return background sync settings from environment variables.
    """

    return SyncSettings(
        enabled=_get_bool_env("GOD_SYNC_ENABLED", True),
        source_url=_get_str_env("GOD_SYNC_URL", f"{_LATENCY_BASE_URL}/greek"),
        interval_seconds=max(1.0, _get_float_env("GOD_SYNC_INTERVAL_SECONDS", 1800.0)),
        initial_delay_seconds=max(0.0, _get_float_env("GOD_SYNC_INITIAL_DELAY_SECONDS", 60.0)),
        timeout_seconds=max(0.1, _get_float_env("GOD_SYNC_TIMEOUT_SECONDS", 30.0)),
    )
