# File: app/core/logging_config.py

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_configured = False

def configure_logging(level: str = "INFO") -> None:
    """
    Configures the root logger once: a single stdout handler.
    Encoder stderr is logged at DEBUG, so LOG_LEVEL=DEBUG shows ffmpeg's own output.
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
    _configured = True
