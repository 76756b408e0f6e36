"""
Logging Configuration for the Front Office engine

Engines never configure logging themselves; they only call
``logging.getLogger(__name__)`` and log negotiation, cap and draft decisions
at DEBUG, committed league writes at INFO and failures at ERROR. The
embedding application calls ``setup_logging`` (or ``setup_preset``) once at
startup.

Usage Example:
    from front_office.logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs", enable_console=True)

    logger = get_logger(__name__)
    logger.info("Free agency opened")

Log Files Created:
- logs/front_office.log: Signings, releases, draft picks (INFO+)
- logs/front_office_debug.log: Engine decisions (DEBUG+)
- logs/front_office_error.log: Rejected operations (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict, Optional


PACKAGE_LOGGER = "front_office"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FORMATS = {
    "detailed": "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d %(funcName)s] %(message)s",
    "simple": "%(asctime)s %(levelname)-8s %(name)s %(message)s",
    "console": "%(levelname)s %(name)s: %(message)s",
}

# (file name, minimum level, format); None means the level/format chosen in setup_logging
LOG_FILES = [
    ("front_office.log", None, None),
    ("front_office_debug.log", logging.DEBUG, "detailed"),
    ("front_office_error.log", logging.ERROR, "detailed"),
]

# Loggers that are noisy at DEBUG during a full offseason simulation
AI_LOGGERS = [
    "front_office.offseason",
    "front_office.offseason.draft_ai",
    "front_office.offseason.free_agency_ai",
]


def _level(name: str) -> int:
    return getattr(logging, name.upper())


class ColoredFormatter(logging.Formatter):
    """Console formatter with ANSI-colored level names."""

    RESET = "\033[0m"
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }

    def format(self, record):
        # Color a copy; file handlers format the same record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure the ``front_office`` logger hierarchy.

    Handlers go on the package logger rather than the root logger, so the
    embedding application keeps control of its own logging. Calling this
    again replaces the handlers from the previous call.

    Args:
        level: Minimum level for the package and the console
        log_dir: Directory for the rotating log files
        enable_console: Log to stderr with colored level names
        enable_file: Log to the three rotating files
        max_bytes: Size at which a log file rotates
        backup_count: Rotated files kept per log
        format_style: "detailed" or "simple" for the main log file
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level(level))

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if enable_console:
        console = logging.StreamHandler()
        console.setLevel(_level(level))
        console.setFormatter(ColoredFormatter(FORMATS["console"], datefmt=DATE_FORMAT))
        package_logger.addHandler(console)

    if enable_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        for filename, file_level, style in LOG_FILES:
            handler = logging.handlers.RotatingFileHandler(
                directory / filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setLevel(file_level if file_level is not None else logging.INFO)
            handler.setFormatter(logging.Formatter(FORMATS[style or format_style], datefmt=DATE_FORMAT))
            package_logger.addHandler(handler)

    package_logger.info(f"Logging initialized: level={level} console={enable_console} files={enable_file}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with its traceback.

    Engine exceptions contribute their error code and context dict; extra
    ``context`` entries are appended.

    Example:
        >>> try:
        ...     service.submit_offer(player_id=12, team_id=1, offer=offer)
        ... except ValidationError as e:
        ...     log_exception(logger, e, context={"player_id": 12})
        ...     raise
    """
    details = dict(getattr(exception, "context_dict", None) or {})
    details.update(context or {})

    error_code = getattr(exception, "error_code", None)
    prefix = f"{type(exception).__name__}" + (f" {error_code}" if error_code else "")
    suffix = f" [{', '.join(f'{k}={v}' for k, v in details.items())}]" if details else ""

    message = getattr(exception, "message", None) or str(exception)
    logger.log(_level(level), f"{prefix}: {message}{suffix}", exc_info=True)


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set a level for one module, e.g. DEBUG for ``front_office.negotiation``
    while everything else stays at INFO.
    """
    logger = logging.getLogger(module_name)
    if level:
        logger.setLevel(_level(level))
    logger.propagate = propagate
    return logger


class LogContext:
    """
    Temporarily change a logger's level.

    Example:
        >>> with LogContext(get_logger("front_office.offseason"), "DEBUG"):
        ...     draft_ai.process_ai_picks(draft_year=2025)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.level = _level(level)
        self.previous_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.previous_level)


def setup_ai_logging(level: str = "INFO") -> None:
    for name in AI_LOGGERS:
        configure_module_logger(name, level=level)


PRESETS = {
    # INFO to rotating files only
    "production": dict(level="INFO", enable_console=False, enable_file=True, format_style="simple"),
    # DEBUG everywhere
    "development": dict(level="DEBUG", enable_console=True, enable_file=True, format_style="detailed"),
    # Warnings on the console, no files
    "testing": dict(level="WARNING", enable_console=True, enable_file=False, format_style="simple"),
}


def setup_preset(name: str, log_dir: str = "logs") -> None:
    """
    Apply a named configuration: "production", "development" or "testing".

    Raises:
        ValueError: For an unknown preset name
    """
    if name not in PRESETS:
        raise ValueError(f"Unknown logging preset {name!r}; expected one of {', '.join(PRESETS)}")
    setup_logging(log_dir=log_dir, **PRESETS[name])
