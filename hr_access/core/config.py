from dataclasses import dataclass, field
from pathlib import Path
import os


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _data_dir() -> Path:
    default = Path(__file__).resolve().parents[2] / "data"
    return Path(os.getenv("HR_ACCESS_DATA_DIR", str(default)))


@dataclass(frozen=True)
class Settings:
    app_name: str = "HR Portal Access Control"
    api_version: str = "v1"
    secret_key: str = _env("HR_ACCESS_SECRET_KEY", "change-me-for-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 120)
    log_level: str = _env("HR_ACCESS_LOG_LEVEL", "INFO")
    log_max_bytes: int = 1_000_000
    log_backup_count: int = 3
    audit_retention_days: int = _env_int("HR_ACCESS_AUDIT_RETENTION_DAYS", 365)
    data_dir: Path = field(default_factory=_data_dir)

    @property
    def event_log_path(self) -> Path:
        return self.data_dir / "events.jsonl"

    @property
    def log_path(self) -> Path:
        return self.data_dir / "app.log"


settings = Settings()
settings.data_dir.mkdir(parents=True, exist_ok=True)
