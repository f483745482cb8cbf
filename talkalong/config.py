import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

PEPPA_PIG_CHANNEL_ID = "UC9coUxZloJ7PGesv1aJwPNg"


class Config:
    VERSION = "0.1.0"
    DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
    HOST = os.environ.get("HOST", "127.0.0.1")
    PORT = int(os.environ.get("PORT", 4000))
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    # JSON bodies and uploaded audio slices
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", 2 * 1024 * 1024))

    # Video metadata
    YOUTUBE_API_KEY = os.environ.get("YOUTUBE_API_KEY")
    YOUTUBE_CHANNEL_ID = os.environ.get("YOUTUBE_CHANNEL_ID", PEPPA_PIG_CHANNEL_ID)

    # Speech-to-text and highlight analysis
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY")
    LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "openai").lower()
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4.1-mini")
    ANTHROPIC_MODEL = os.environ.get("ANTHROPIC_MODEL", "claude-haiku-4-5-20251001")
    WHISPER_MODEL = os.environ.get("WHISPER_MODEL", "gpt-4o-mini-transcribe")
    LLM_TRANSCRIPT_LIMIT = int(os.environ.get("LLM_TRANSCRIPT_LIMIT", 24))

    # Capture
    SLICE_MS = int(os.environ.get("SLICE_MS", 8000))

    @classmethod
    def get_cors_origins(cls):
        """Get CORS origins as a list or wildcard.

        Returns '*' for wildcard (all origins allowed), or a list of
        specific origins from comma-separated CORS_ORIGINS env var.

        Examples:
            CORS_ORIGINS='*' -> '*'
            CORS_ORIGINS='http://localhost:5173' -> ['http://localhost:5173']
            CORS_ORIGINS='http://localhost:5173,https://talkalong.app' -> ['http://localhost:5173', 'https://talkalong.app']
        """
        if cls.CORS_ORIGINS == "*":
            return "*"
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]


def configure_logging(level=None):
    """Set up root logging for the server and CLI entry points."""
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
