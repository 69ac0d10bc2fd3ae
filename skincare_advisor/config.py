from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

APP_DIR = Path(__file__).parent
DATA_DIR = APP_DIR / "data"

DEFAULT_CHAT_ENDPOINT = "https://314159265.nchlsschfr.workers.dev"
DEFAULT_CATALOG_SOURCE = str(DATA_DIR / "products.json")


@dataclass(frozen=True)
class Settings:
    chat_endpoint: str
    catalog_source: str
    chat_timeout: float
    catalog_timeout: float
    log_level: str


def load_settings() -> Settings:
    """Read settings from the environment (and a .env file, if present).

    Invalid CHAT_TIMEOUT or CATALOG_TIMEOUT values raise ValueError.
    """
    load_dotenv(override=False)
    return Settings(
        chat_endpoint=os.getenv("CHAT_ENDPOINT", DEFAULT_CHAT_ENDPOINT),
        catalog_source=os.getenv("CATALOG_SOURCE", DEFAULT_CATALOG_SOURCE),
        chat_timeout=float(os.getenv("CHAT_TIMEOUT", "60")),
        catalog_timeout=float(os.getenv("CATALOG_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
