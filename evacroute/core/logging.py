"""
@file logging.py
@brief Centralized logging configuration
@details
Configures application logging with support for file and stdout output.
Falls back to stdout when no writable log directory exists.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

import logging
import os
import sys
from typing import Optional

## @brief Production log directory, used when present and writable
CONTAINER_LOG_DIR = "/app/logs"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def resolve_log_dir() -> Optional[str]:
    """
    @brief Pick the directory for app.log
    @details
    LOG_DIR wins when set. Otherwise /app/logs (container volume) is used if
    writable, then a local logs/ directory next to the package. Returns None
    when nothing can be created.
    """
    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        return log_dir

    try:
        if not os.path.exists(CONTAINER_LOG_DIR) and os.access(os.path.dirname(CONTAINER_LOG_DIR), os.W_OK):
            os.makedirs(CONTAINER_LOG_DIR, exist_ok=True)
        if os.path.exists(CONTAINER_LOG_DIR) and os.access(CONTAINER_LOG_DIR, os.W_OK):
            return CONTAINER_LOG_DIR
    except OSError:
        pass

    # evacroute/core/ -> project root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    local_dir = os.path.join(base_dir, "logs")
    try:
        os.makedirs(local_dir, exist_ok=True)
    except OSError:
        return None
    return local_dir


def setup_logging() -> logging.Logger:
    """
    @brief Configure and return the application logger
    @details
    Sets up logging based on LOG_OUTPUT env var:
    - 'file': Write to <LOG_DIR>/app.log
    - 'stdout': Write to console
    - 'both': Write to both (default)
    """
    log_output = os.getenv("LOG_OUTPUT", "both").lower()
    log_dir = resolve_log_dir() if log_output in ("file", "both") else None

    handlers = []
    if log_output in ("stdout", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_dir:
        try:
            handlers.append(logging.FileHandler(os.path.join(log_dir, "app.log")))
        except OSError:
            if not handlers:
                handlers.append(logging.StreamHandler(sys.stdout))

    if not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=handlers)

    return logging.getLogger("evacroute")
