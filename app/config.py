# app/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7


def normalize_base_url(base_url: Optional[str]) -> str:
    """
    Accept either https://api.openai.com or https://api.openai.com/v1,
    with or without scheme / trailing slash.
    """
    if not base_url or not base_url.strip():
        return DEFAULT_BASE_URL
    base_url = base_url.strip().rstrip("/")
    if not base_url.startswith("http"):
        # someone set 'api.openai.com' without scheme
        base_url = f"https://{base_url}"
    if not base_url.endswith("/v1"):
        base_url = f"{base_url}/v1"
    return base_url


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    request_timeout: Optional[float] = None  # None = transport default
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "DEBUG"

    @property
    def generative_enabled(self) -> bool:
        return bool(self.openai_api_key)


def load_settings() -> Settings:
    """Read process env once at startup; handlers only ever see the Settings."""
    origins_env = os.getenv("ALLOWED_ORIGINS", "*")
    origins = [o.strip() for o in origins_env.split(",") if o.strip()] or ["*"]
    return Settings(
        openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
        openai_base_url=normalize_base_url(os.getenv("OPENAI_BASE_URL")),
        model=(os.getenv("OPENAI_MODEL") or "").strip() or DEFAULT_MODEL,
        temperature=_float_env("OPENAI_TEMPERATURE", DEFAULT_TEMPERATURE),
        request_timeout=_float_env("OPENAI_TIMEOUT", None),
        allowed_origins=origins,
        log_level=(os.getenv("LOG_LEVEL") or "DEBUG").strip().upper(),
    )
