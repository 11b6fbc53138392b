import logging
from pathlib import Path
from typing import Optional

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("memmet")


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """Attach console and error-file handlers to the memmet logger."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler - INFO and above, everything with --debug
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Error file handler - only ERROR and above (includes tracebacks)
    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            error_file_handler = logging.FileHandler(log_dir / "errors.log")
        except OSError as e:
            logger.warning("Cannot write error log in %s: %s", log_dir, e)
        else:
            error_file_handler.setLevel(logging.ERROR)
            error_file_handler.setFormatter(formatter)
            logger.addHandler(error_file_handler)

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return logger
