
"""Logger setup for the host"""
import logging

from rich.logging import RichHandler


def setup_logger(name: str = "", level: str = "info", use_rich: bool = True) -> logging.Logger:
    """Give logger ``name`` a single handler. An empty name configures the
    root logger, which the engine modules propagate to."""
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if use_rich:
        handler: logging.Handler = RichHandler(show_time=True, show_level=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    return logger
