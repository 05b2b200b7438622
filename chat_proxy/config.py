from __future__ import annotations

from dataclasses import dataclass
import os


DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly assistant on a personal portfolio website. "
    "Answer questions about the site owner's experience, skills and projects "
    "briefly and professionally. If you do not know something, say so."
)


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    return value if value is not None else default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value is not None else default


@dataclass(frozen=True)
class Settings:
    upstream_url: str
    upstream_api_key: str | None
    model: str
    request_timeout: float
    allowed_origin: str
    system_prompt: str

    def __repr__(self) -> str:
        key = "***" if self.upstream_api_key else None
        return (
            f"Settings(upstream_url={self.upstream_url!r}, upstream_api_key={key!r}, "
            f"model={self.model!r}, request_timeout={self.request_timeout!r}, "
            f"allowed_origin={self.allowed_origin!r})"
        )


def get_settings() -> Settings:
    return Settings(
        upstream_url=_get_env("UPSTREAM_URL", "https://api.openai.com/v1/responses"),
        upstream_api_key=_get_env("OPENAI_API_KEY"),
        model=_get_env("UPSTREAM_MODEL", "gpt-4.1-mini"),
        request_timeout=_get_float("REQUEST_TIMEOUT", 8.0),
        allowed_origin=_get_env("ALLOWED_ORIGIN", "https://example.com"),
        system_prompt=_get_env("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT),
    )
