import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass(frozen=True)
class Settings:
    data_dir: str
    gemini_api_key: Optional[str]
    gemini_model: str
    gemini_api_url: str
    chat_timeout: float
    chat_recent_limit: int
    log_level: str


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def get_settings() -> Settings:
    return Settings(
        data_dir=os.getenv("CATTY_DATA_DIR", "data"),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-pro"),
        gemini_api_url=os.getenv("GEMINI_API_URL", GEMINI_BASE_URL),
        chat_timeout=_float_env("CHAT_TIMEOUT_SECONDS", 20.0),
        chat_recent_limit=min(15, max(10, _int_env("CHAT_RECENT_LIMIT", 10))),
        log_level=os.getenv("CATTY_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
