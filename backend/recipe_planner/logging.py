import logging
import sys
from typing import Optional

LOGGER_NAME = "recipe_planner"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# LiteLLM (under DSPy) and httpx log every request at INFO
NOISY_LOGGERS = ("LiteLLM", "LiteLLM Router", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stdout handler to the root logger and cap chatty client libraries at WARNING.

    Calling again only adjusts the level; handlers are never duplicated.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or LOGGER_NAME)
