"""Centralized logging configuration for clubify-checkout.

Provides consistent, configurable logging with environment-based control
over verbosity and format.
"""

import logging
import logging.config
import os
from enum import Enum


class LogLevel(str, Enum):
    """Levels accepted by CLUBIFY_LOG_LEVEL."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    """Values of CLUBIFY_LOG_VERBOSITY."""
    QUIET = "QUIET"      # ERROR and up
    NORMAL = "NORMAL"    # WARNING and up
    VERBOSE = "VERBOSE"  # INFO and up
    DEBUG = "DEBUG"      # everything


class LogFormat(str, Enum):
    """Values of CLUBIFY_LOG_FORMAT."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE.value: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED.value: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON.value: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


def level_for_verbosity(verbosity: str) -> str:
    """Log level for a verbosity name; unknown names fall back to WARNING."""
    levels = {
        LogVerbosity.QUIET: LogLevel.ERROR.value,
        LogVerbosity.NORMAL: LogLevel.WARNING.value,
        LogVerbosity.VERBOSE: LogLevel.INFO.value,
        LogVerbosity.DEBUG: LogLevel.DEBUG.value,
    }
    try:
        return levels[LogVerbosity(verbosity.upper())]
    except ValueError:
        return LogLevel.WARNING.value


class LoggingConfig:
    """Logging configuration for the SDK's own logger namespace."""

    ROOT_LOGGER = "clubify_checkout"

    # Transport libraries only log errors
    QUIET_LIBRARIES = [
        "httpx",
        "httpcore",
    ]

    @classmethod
    def build(cls) -> dict:
        """Build a dictConfig mapping from environment variables."""
        log_level = os.getenv("CLUBIFY_LOG_LEVEL", "").upper()
        log_verbosity = os.getenv("CLUBIFY_LOG_VERBOSITY", "NORMAL")
        log_format = os.getenv("CLUBIFY_LOG_FORMAT", LogFormat.SIMPLE.value).lower()

        # An explicit level wins over verbosity
        if log_level in LogLevel.__members__:
            effective_log_level = log_level
        else:
            effective_log_level = level_for_verbosity(log_verbosity)
        format_string = FORMAT_STRINGS.get(log_format, FORMAT_STRINGS[LogFormat.SIMPLE.value])

        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": effective_log_level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                cls.ROOT_LOGGER: {
                    "level": effective_log_level,
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        for library in cls.QUIET_LIBRARIES:
            config["loggers"][library] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return config

    @classmethod
    def configure(cls) -> None:
        """Apply :meth:`build` with dictConfig."""
        config = cls.build()
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        level = config["loggers"][cls.ROOT_LOGGER]["level"]
        if level == LogLevel.DEBUG.value:
            logger.debug(f"Logging configured: level={level}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Override the level of one logger, e.g. ``clubify_checkout.features.cart``."""
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        """Keep only CRITICAL records from ``module_name``."""
        cls.set_module_level(module_name, LogLevel.CRITICAL.value)


def setup_logging() -> None:
    """Configure the SDK loggers from the CLUBIFY_LOG_* variables.

    Called once when the package is imported.
    """
    LoggingConfig.configure()


def get_logger(name: str) -> logging.Logger:
    """Shorthand for ``logging.getLogger``."""
    return logging.getLogger(name)
