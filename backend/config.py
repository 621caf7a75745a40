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
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Readiness aggregation
    history_max_entries: int = 90
    default_days_active: int = 30  # used when the caller does not report active days
    recent_activity_days: int = 30

    # Questionnaire / ES analysis
    assessment_scale_max: int = 7  # N for scale questions not found in the question bank
    max_es_text_chars: int = 10000

    # Key-value store
    store_backend: str = "memory"  # "memory" | "json"
    store_path: str = "data/store.json"

    rate_limit: str = "30/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
