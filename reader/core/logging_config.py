"""Logging setup: one console handler on the root logger, quieter third-party loggers."""
import logging

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

MODULE_LOG_LEVELS = {
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "aiosqlite": "WARNING",
    "passlib": "ERROR",  # bcrypt version probe warning
    "httpx": "WARNING",
    "uvicorn.access": "INFO",
}


def setup_logging(level: str = "INFO", fmt: str = "simple") -> None:
    """Configure the root logger. Safe to call more than once."""
    format_str = DETAILED_FORMAT if fmt == "detailed" else SIMPLE_FORMAT
    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.debug("Logging configured: level=%s, format=%s", level.upper(), fmt)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
