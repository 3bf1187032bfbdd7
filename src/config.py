from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache

def _env(name: str, default=None, cast=str):
    val = os.getenv(name, default)
    if val is None:
        return None
    if cast is bool:
        return str(val).strip().lower() in {"1", "true", "yes", "on"}
    if cast in (int, float):
        try:
            return cast(val)
        except (TypeError, ValueError):
            return cast(default) if default is not None else None
    return str(val)

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(_env("MT_DATA_DIR", str(BASE_DIR / "data")))
SAMPLE_PATH = DATA_DIR / "sample_mt103.txt"

@dataclass(frozen=True)
class ApiConfig:
    host: str = _env("MT_API_HOST", "0.0.0.0")
    port: int = _env("MT_API_PORT", 8000, int)
    debug: bool = _env("MT_DEBUG", False, bool)
    #largest accepted request body; SWIFT MT messages are at most a few KB
    max_request_kb: int = _env("MT_MAX_REQUEST_KB", 64, int)

@dataclass(frozen=True)
class LoggingConfig:
    level: str = _env("MT_LOG_LEVEL", "INFO")

@dataclass(frozen=True)
class PathsConfig:
    BASE_DIR: Path = BASE_DIR
    DATA_DIR: Path = DATA_DIR
    SAMPLE_PATH: Path = SAMPLE_PATH

@dataclass(frozen=True)
class AppConfig:
    api: "ApiConfig" = field(default_factory=lambda: ApiConfig())
    logging: "LoggingConfig" = field(default_factory=lambda: LoggingConfig())
    paths: "PathsConfig" = field(default_factory=lambda: PathsConfig())

@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
