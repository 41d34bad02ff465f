from __future__ import annotations

import logging

PACKAGE_LOGGER = "well_log_analyzer"


def setup_logger(name: str = PACKAGE_LOGGER, level: int = logging.WARNING) -> logging.Logger:
    """
    Attach a console handler to the package logger.

    Library modules only call logging.getLogger(__name__); handlers are
    configured here, once, by the CLI. Repeated calls only adjust the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
