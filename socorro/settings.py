"""Configurações compartilhadas carregadas a partir de variáveis de ambiente."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_API_BIND_HOST = "0.0.0.0"
_DEFAULT_API_PORT = 8000
_DEFAULT_CACHE_TTL_MINUTES = 60
_DEFAULT_HTTP_TIMEOUT = 10.0
_DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
_DEFAULT_GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"
_DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"
_DEFAULT_NOMINATIM_USER_AGENT = "SocorroPlatform/1.0"

_TRUE_VALUES = {"1", "true", "yes", "on", "sim"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _json_env(name: str) -> Any:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"JSON inválido na variável de ambiente {name!r}: {raw}") from exc


@lru_cache(maxsize=None)
def get_api_port() -> int:
    """Retorna a porta configurada para expor a API."""

    return int(os.getenv("SOCORRO_API_PORT", os.getenv("PORT", _DEFAULT_API_PORT)))


@lru_cache(maxsize=None)
def get_api_bind_host() -> str:
    """Retorna o host utilizado pelo Uvicorn para escutar conexões."""

    return os.getenv("SOCORRO_API_BIND_HOST", _DEFAULT_API_BIND_HOST)


@lru_cache(maxsize=None)
def get_log_level() -> str:
    return os.getenv("SOCORRO_LOG_LEVEL", "INFO")


@dataclass
class SocorroSettings:
    """Agrupa as opções de execução dos serviços de enriquecimento."""

    cache_backend: str = "mongo"
    cache_ttl: timedelta = field(
        default_factory=lambda: timedelta(minutes=_DEFAULT_CACHE_TTL_MINUTES)
    )
    http_timeout: float = _DEFAULT_HTTP_TIMEOUT
    gemini_api_key: str | None = None
    gemini_model: str = _DEFAULT_GEMINI_MODEL
    gemini_api_url: str = _DEFAULT_GEMINI_API_URL
    nominatim_url: str = _DEFAULT_NOMINATIM_URL
    nominatim_user_agent: str = _DEFAULT_NOMINATIM_USER_AGENT
    cache_degraded_verifications: bool = True
    bulletin_pages: list[dict[str, Any]] = field(default_factory=list)
    default_owner_id: str = "netrunnerX"
    default_reporter_id: str = "citizen1"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "SocorroSettings":
        """Constrói as configurações a partir das variáveis de ambiente."""

        ttl_minutes = float(
            os.getenv("SOCORRO_CACHE_TTL_MINUTES", _DEFAULT_CACHE_TTL_MINUTES)
        )
        pages = _json_env("SOCORRO_BULLETIN_PAGES") or []
        if not isinstance(pages, list):
            raise RuntimeError("SOCORRO_BULLETIN_PAGES deve ser uma lista JSON")
        origins = [
            origin.strip()
            for origin in os.getenv("SOCORRO_CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        return cls(
            cache_backend=os.getenv("SOCORRO_CACHE_BACKEND", "mongo"),
            cache_ttl=timedelta(minutes=ttl_minutes),
            http_timeout=float(os.getenv("SOCORRO_HTTP_TIMEOUT", _DEFAULT_HTTP_TIMEOUT)),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", _DEFAULT_GEMINI_MODEL),
            gemini_api_url=os.getenv("GEMINI_API_URL", _DEFAULT_GEMINI_API_URL),
            nominatim_url=os.getenv("NOMINATIM_URL", _DEFAULT_NOMINATIM_URL),
            nominatim_user_agent=os.getenv(
                "NOMINATIM_USER_AGENT", _DEFAULT_NOMINATIM_USER_AGENT
            ),
            cache_degraded_verifications=_env_flag(
                "SOCORRO_VERIFY_CACHE_DEGRADED", True
            ),
            bulletin_pages=pages,
            default_owner_id=os.getenv("SOCORRO_DEFAULT_OWNER", "netrunnerX"),
            default_reporter_id=os.getenv("SOCORRO_DEFAULT_REPORTER", "citizen1"),
            cors_origins=origins or ["*"],
        )


__all__ = [
    "SocorroSettings",
    "get_api_bind_host",
    "get_api_port",
    "get_log_level",
]
