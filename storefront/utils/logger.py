"""Package logger: one "storefront" logger shared by every module."""
import logging

from ..app.config import Config

logger = logging.getLogger("storefront")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(h)
    logger.setLevel(Config.LOG_LEVEL)
    logger.propagate = False


def get_logger(component: str = None) -> logging.Logger:
    """Return the package logger, or a child of it for ``component``."""
    if component:
        return logger.getChild(component)
    return logger
