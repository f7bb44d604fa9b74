import logging
import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Error-severity graph violations block assembly when strict
STRICT_GRAPH = _env_flag("CONTEXTDOC_STRICT_GRAPH", True)

# Keep sections when the diagram text cannot be parsed
ALLOW_PARTIAL = _env_flag("CONTEXTDOC_ALLOW_PARTIAL", False)

LOG_LEVEL = os.getenv("CONTEXTDOC_LOG_LEVEL", "WARNING")


def configure_logging(level: str | None = None) -> None:
    """Attach a stream handler to the package logger."""
    logger = logging.getLogger("contextdoc")
    logger.setLevel((level or LOG_LEVEL).upper())

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(handler)
