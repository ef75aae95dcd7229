"""Configuration and environment loading."""

import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SINCE = "2023-05-01"
DEFAULT_PORT = 3000
DEFAULT_BATCH_SIZE = 20
DEFAULT_BATCH_DELAY = 1.0


def load_env() -> None:
    """Load environment variables from .env file in the working directory."""
    load_dotenv()


def get_anthropic_api_key() -> str:
    """Get Anthropic API key from environment."""
    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "ANTHROPIC_API_KEY is not set. "
            "Copy .env.example to .env and add your key."
        )
    return api_key


def get_default_model() -> str:
    """Get default Claude model from environment or return default."""
    return os.environ.get("RESUMEBOT_MODEL", "claude-haiku-4-5-20251001")


def _env_int(name: str, default: int) -> int:
    try:
        value = int(os.environ.get(name, default))
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: float) -> float:
    try:
        value = float(os.environ.get(name, default))
    except ValueError:
        return default
    return value if value >= 0 else default


class Config:
    """Configuration accessor for the CLI, the analyzer and the web server."""

    @staticmethod
    def batch_size() -> int:
        """Commits sent to the model per request."""
        return _env_int("RESUMEBOT_BATCH_SIZE", DEFAULT_BATCH_SIZE)

    @staticmethod
    def batch_delay() -> float:
        """Seconds to wait between two batch requests."""
        return _env_float("RESUMEBOT_BATCH_DELAY", DEFAULT_BATCH_DELAY)

    @staticmethod
    def default_since() -> str:
        return DEFAULT_SINCE

    @staticmethod
    def default_port() -> int:
        return DEFAULT_PORT

    @staticmethod
    def static_dir() -> Path:
        """Directory holding the browser UI."""
        override = os.environ.get("RESUMEBOT_STATIC_DIR")
        if override:
            return Path(override).expanduser()
        return Path(__file__).resolve().parent / "static"
