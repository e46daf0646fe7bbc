import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    rate_limit: str = "30/minute"

    # Semantic (LLM-backed) ATS scoring
    semantic_ats_enabled: bool = True
    semantic_ats_model: str = "gemini-2.5-flash"
    semantic_ats_timeout_seconds: float = 20.0
    semantic_ats_max_chars: int = 4000  # per-text truncation before the LLM call

    # Deterministic keyword engine
    keyword_limit: int = 50
    matched_keywords_limit: int = 30
    missing_keywords_limit: int = 20
    ats_vocabulary_path: str = ""  # optional YAML extending the built-in tables

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
