# settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"[DEBUG] settings: bad float for {name}={raw!r}, using {default}")
        return default


# OpenAI (checked lazily by ai/client.py so the app can boot without it)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TEMPERATURE = _float("OPENAI_TEMPERATURE", 0.7)

# Remote generation endpoint. Empty means "generate in-process".
GENERATION_GATEWAY_URL = os.getenv("GENERATION_GATEWAY_URL", "").strip()
GENERATION_TIMEOUT = _float("GENERATION_TIMEOUT", 30.0)

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./career_chat.db")
SESSION_SLOT_NAME = os.getenv("SESSION_SLOT_NAME", "careerChatSessions")
TELEMETRY_DB = os.getenv("TELEMETRY_DB", "telemetry.sqlite3")

# Conversation pacing
PACING_MIN_SECONDS = _float("PACING_MIN_SECONDS", 1.0)
PACING_MAX_SECONDS = _float("PACING_MAX_SECONDS", 2.0)
OPENING_DELAY_SECONDS = _float("OPENING_DELAY_SECONDS", 0.5)

# App
DEBUG = os.getenv("DEBUG", "0").strip() == "1"
