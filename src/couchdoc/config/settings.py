import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/couchdoc/config/settings.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()

class Settings(BaseModel):
    """Global Library Settings"""

    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Attachments
    DEFAULT_CONTENT_TYPE: str = Field(
        default="application/octet-stream",
        description="Content type used by put_attachment when none is given",
    )

    # Serialization
    JSON_INDENT: int = Field(default=2, ge=0, description="Indent width for pretty output")

    model_config = {
        "frozen": True,
    }

def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        DEFAULT_CONTENT_TYPE=os.getenv("DEFAULT_CONTENT_TYPE", "application/octet-stream"),
        JSON_INDENT=int(os.getenv("JSON_INDENT", "2")),
    )

def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the given (or configured) level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.LOG_LEVEL).upper())

# Global settings instance
settings = load_settings()
