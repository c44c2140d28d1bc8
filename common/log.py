from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

STAGE_LOGGERS = ("edges", "nms", "hysteresis", "edge_dispatch", "pipeline")


def setup_logger(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """Return a configured logger for a pipeline stage."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def configure_logging(cfg: dict) -> None:
    """
    Apply the `logging.level` config value to every stage logger.
    """
    level = str(cfg.get("logging", {}).get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown logging level: {level}")
    for name in STAGE_LOGGERS:
        setup_logger(name, level)
