"""Application-wide configuration loaded from environment variables."""

import os

from dotenv import load_dotenv

load_dotenv()

# Redis
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

# ── Text Generation (mentor replies, mood detection, insights) ──────────

# Any OpenAI-compatible chat-completions endpoint works here.
LLM_API_KEY: str = os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", ""))
LLM_API_URL: str = os.getenv(
    "LLM_API_URL", "https://api.openai.com/v1/chat/completions"
)
LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "15"))

# ── Journal / Progress ───────────────────────────────────────────────────

# No auth layer: requests without X-User-Id act as this user.
DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "emotiwise-user-001")

PROGRESS_ENTRY_LIMIT: int = int(os.getenv("PROGRESS_ENTRY_LIMIT", "100"))
INSIGHTS_ENTRY_LIMIT: int = int(os.getenv("INSIGHTS_ENTRY_LIMIT", "20"))
MENTOR_CONTEXT_ENTRIES: int = int(os.getenv("MENTOR_CONTEXT_ENTRIES", "5"))
ENTRY_CONTENT_MAX: int = 10000

# ── Server Configuration ─────────────────────────────────────────────────

SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
