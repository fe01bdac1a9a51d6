# src/geofx/shared/logging_conf.py
"""
Logging Configuration - Root Logger Setup for the CLI

Library modules only create named loggers (``logging.getLogger(__name__)``);
the composition root calls setup_logging() once to attach handlers.

Files that USE this module:
- geofx.app (main() configures logging from Settings)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_to_stdout: bool = True,
) -> List[logging.Handler]:
    """
    Install stdout and/or rotating-file handlers on the root logger.

    Replaces handlers from any earlier call. With stdout disabled and no
    file, logging is silenced.

    Returns:
        The handlers now attached to the root logger
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"))

    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    logging.getLogger(__name__).info(
        "Logging configured: stdout=%s file=%s level=%s", log_to_stdout, log_file, logging.getLevelName(level)
    )
    return handlers
