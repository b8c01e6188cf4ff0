import os
from dataclasses import dataclass, field
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_STATE_FILE = PROJECT_ROOT / ".safespace" / "state.json"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _to_bool(value: str, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _resolve_path(value: str, default_path: Path) -> str:
    raw = (value or "").strip()
    if not raw:
        return str(default_path)

    p = Path(raw)
    if p.is_absolute():
        return str(p)
    return str(PROJECT_ROOT / raw)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


@dataclass(slots=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "SafeSpace API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    default_language: str = os.getenv("DEFAULT_LANGUAGE", "en")

    state_file: str = _resolve_path(os.getenv("STATE_FILE", ""), DEFAULT_STATE_FILE)
    # Only language and the onboarding flag are ever written to this file.
    state_persist: bool = _to_bool(os.getenv("STATE_PERSIST"), True)

    cors_origins: list[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))
    )


settings = Settings()
