# config.py
# Settings object built once from env (.env supported) and injected into the app

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import List
from dotenv import load_dotenv

STRATEGIES = ("inferred", "tikmate", "ytdlp")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_TIMEOUT_S = 60.0
DEFAULT_LOG_LEVEL = "INFO"

log = logging.getLogger("cliptotrip.config")


def _timeout_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if not 0 < value < float("inf"):
        log.warning("ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def _level_env(name: str, default: str) -> str:
    raw = os.getenv(name, "").strip().upper()
    if not raw:
        return default
    if raw not in LOG_LEVELS:
        log.warning("ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    OPENAI_API_KEY: str = ""
    CONTENT_STRATEGY: str = "inferred"
    OPENAI_CHAT_MODEL: str = "gpt-4o-mini"
    OPENAI_ITINERARY_MODEL: str = "gpt-4"
    OPENAI_VISION_MODEL: str = "gpt-4o"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    TIKMATE_API_URL: str = "https://api.tikmate.app"
    YTDLP_BIN: str = "yt-dlp"
    HTTP_TIMEOUT_S: float = DEFAULT_TIMEOUT_S
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            SUPABASE_URL=os.getenv("SUPABASE_URL", "").rstrip("/"),
            SUPABASE_ANON_KEY=os.getenv("SUPABASE_ANON_KEY", ""),
            OPENAI_API_KEY=os.getenv("OPENAI_API_KEY", ""),
            CONTENT_STRATEGY=os.getenv("CONTENT_STRATEGY", "inferred").strip().lower(),
            OPENAI_CHAT_MODEL=os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini"),
            OPENAI_ITINERARY_MODEL=os.getenv("OPENAI_ITINERARY_MODEL", "gpt-4"),
            OPENAI_VISION_MODEL=os.getenv("OPENAI_VISION_MODEL", "gpt-4o"),
            OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
            TIKMATE_API_URL=os.getenv("TIKMATE_API_URL", "https://api.tikmate.app").rstrip("/"),
            YTDLP_BIN=os.getenv("YTDLP_BIN", "yt-dlp"),
            HTTP_TIMEOUT_S=_timeout_env("HTTP_TIMEOUT_S", DEFAULT_TIMEOUT_S),
            LOG_LEVEL=_level_env("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

    def missing(self) -> List[str]:
        """Names of required settings that are empty or invalid."""
        out = [
            name for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "OPENAI_API_KEY")
            if not getattr(self, name)
        ]
        if self.CONTENT_STRATEGY not in STRATEGIES:
            out.append("CONTENT_STRATEGY")
        return out
