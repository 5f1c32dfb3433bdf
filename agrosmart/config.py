import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_DATA_PATH = os.path.join("data", "agrosmart.json")
DEFAULT_REQUEST_TIMEOUT = 20.0
DEFAULT_DEBOUNCE_SECONDS = 0.5
DEFAULT_LOCATION = "India"


@dataclass(frozen=True)
class Settings:
    google_api_key: str | None = None
    model: str = DEFAULT_MODEL
    data_path: str = DEFAULT_DATA_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    default_location: str = DEFAULT_LOCATION
    log_level: str = "INFO"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.google_api_key)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r (negative), using %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """
    Read settings from the environment, after loading a local .env file.
    """
    load_dotenv()

    return Settings(
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        model=os.getenv("AGROSMART_MODEL", DEFAULT_MODEL),
        data_path=os.getenv("AGROSMART_DATA_PATH", DEFAULT_DATA_PATH),
        request_timeout=_float_env("AGROSMART_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        debounce_seconds=_float_env("AGROSMART_DEBOUNCE_SECONDS", DEFAULT_DEBOUNCE_SECONDS),
        default_location=os.getenv("AGROSMART_DEFAULT_LOCATION", DEFAULT_LOCATION),
        log_level=os.getenv("AGROSMART_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once; later calls are no-ops (basicConfig semantics)."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
