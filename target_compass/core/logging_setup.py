"""
Logging Setup
=============

Configures the package logger from LoggingConfig: console output plus an
optional size-rotated log file.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PACKAGE_LOGGER = "target_compass"


def setup_logging(
    config: Optional[LoggingConfig] = None,
    level: Optional[str] = None,
    force: bool = False
) -> logging.Logger:
    """
    Configure the package logger once.

    Args:
        config: LoggingConfig section (defaults used if None)
        level: Explicit level name, overrides config.level
        force: Reconfigure even if already configured

    Returns:
        The configured package logger
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if getattr(root, "_tc_configured", False) and not force:
        return root

    config = config or LoggingConfig()
    level_name = (level or config.level or "INFO").upper()
    lvl = getattr(logging, level_name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if config.console_enabled:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        root.addHandler(console)

    if config.file_enabled:
        path = Path(config.file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                path,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.warning(f"File logging disabled, cannot open {path}: {e}")

    root.setLevel(lvl)
    root._tc_configured = True  # type: ignore[attr-defined]
    return root
