# smart_tremolo/utils/logging_config.py

"""
Configures the logging system for SmartTremolo based on loaded settings.
Uses Rich for enhanced console logging.
"""

import logging
from datetime import datetime
from typing import Optional

from rich.logging import RichHandler

from smart_tremolo.config import TremoloConfig
from smart_tremolo.version import __version__

# --- Constants ---
# Map verbosity levels (from CLI flags) to logging levels
VERBOSITY_MAP = {
    0: logging.WARNING,  # Default (normal)
    1: logging.INFO,     # -v (verbose)
    2: logging.DEBUG,    # -vv (debug)
    -1: logging.CRITICAL + 10 # -q (quiet/silent)
}

PACKAGE_LOGGER = "smart_tremolo"

# --- Setup Function ---

def setup_logging(config: TremoloConfig, verbosity: int = 0) -> Optional[logging.FileHandler]:
    """
    Configures the package logger based on the configuration and verbosity level.

    Args:
        config: The loaded TremoloConfig object.
        verbosity: -1 quiet, 0 normal, 1 verbose, 2 debug. Values above 2
                   are treated as debug.

    Returns:
        The file handler if file logging was enabled, else None.
    """
    log_cfg = config.logging
    console_level = VERBOSITY_MAP.get(min(verbosity, 2), logging.INFO)

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(logging.DEBUG) # Handlers filter by their own levels
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # --- Console Handler (Rich) ---
    if console_level <= logging.CRITICAL:
        console_handler = RichHandler(
            level=console_level,
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    # --- File Handler ---
    file_handler = None
    if log_cfg.log_file_enabled:
        log_dir = config.paths.log_directory
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filepath = log_dir / log_cfg.log_filename_template.format(timestamp=datetime.now())
            file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
            file_handler.setLevel(log_cfg.log_level_file)
            file_handler.setFormatter(logging.Formatter(log_cfg.log_format))
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.error(f"Failed to configure file logging in {log_dir}: {e}")
            file_handler = None
        else:
            init_logger = logging.getLogger(f"{PACKAGE_LOGGER}.init")
            init_logger.info(f"--- SmartTremolo v{__version__} Log Start ---")
            init_logger.info(f"Console logging level set to: {logging.getLevelName(console_level)}")
            init_logger.debug(f"Full configuration loaded: {config.model_dump()}")
            init_logger.info(f"Logging to file: {log_filepath}")

    return file_handler
