"""
Logging Configuration
Sets up the 'hanoivisualizer' logger for the application.

The animation sequencer and the move executor log every move at DEBUG; during
auto-play that is a line every few frames, so it stays at INFO unless asked for.
"""
import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers kept at INFO or above unless `verbose_modules` names them
QUIET_LOGGERS = (
    "hanoivisualizer.model.animation",
    "hanoivisualizer.model.executor",
)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    verbose_modules: Iterable[str] = (),
) -> logging.Logger:
    """
    Configures the 'hanoivisualizer' namespace and returns its logger.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        verbose_modules: Quiet loggers that should follow `level` anyway.
    """
    logger = logging.getLogger("hanoivisualizer")
    logger.setLevel(level)

    # Avoid duplicate handlers when setup runs again (tests, re-created window)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    verbose = set(verbose_modules)
    for name in QUIET_LOGGERS:
        if name in verbose:
            logging.getLogger(name).setLevel(logging.NOTSET)
        else:
            logging.getLogger(name).setLevel(max(level, logging.INFO))

    logger.info(f"Logging initialized (level: {logging.getLevelName(level)}).")
    return logger
