"""
Unified logging system for LocalAuth.

Every module logs through the standard ``logging`` tree; this package only
decides where records go and how they look.

Usage:
    from LocalAuth.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("User registered: %s", email)

Configuration:
    from LocalAuth.core.logging import configure_logging, LogConfig

    configure_logging(LogConfig(level="DEBUG", file_output=False))
"""

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

LOG_FILE_NAME = "localauth.log"
ERROR_LOG_FILE_NAME = "localauth_errors.log"


@dataclass
class LogConfig:
    """
    Configuration for the logging system.

    Attributes:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        console_output: Whether to output to console
        file_output: Whether to output to file
        max_bytes: Maximum size of log file before rotation (bytes)
        backup_count: Number of backup files to keep
        format_string: Custom format string for log messages
        date_format: Custom date format string
        component_levels: Dict mapping logger names to log levels
    """
    level: str = "INFO"
    log_dir: str = "./logs"
    console_output: bool = True
    file_output: bool = True
    max_bytes: int = 5 * 1024 * 1024  # 5MB
    backup_count: int = 3
    format_string: Optional[str] = None
    date_format: str = "%Y-%m-%d %H:%M:%S"
    component_levels: Dict[str, str] = field(default_factory=dict)


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name on terminals."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def __init__(self, fmt: str, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.platform != 'win32'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_default_format() -> str:
    """Get the default log format string."""
    return "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_detailed_format() -> str:
    """Get a detailed log format string with source location."""
    return (
        "%(asctime)s - %(name)s - %(levelname)s - "
        "[%(filename)s:%(lineno)d - %(funcName)s] - %(message)s"
    )


class LoggingManager:
    """
    Process-wide logging manager.

    Owns the handlers it installs on the root logger so that reconfiguring
    (e.g. from tests) replaces them instead of stacking duplicates.
    """

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config: Optional[LogConfig] = None
        self._handlers: List[logging.Handler] = []
        self._initialized = True

    @property
    def config(self) -> Optional[LogConfig]:
        return self._config

    def configure(self, config: LogConfig) -> None:
        """
        Configure the logging system.

        Args:
            config: Logging configuration
        """
        self._config = config
        level = getattr(logging, config.level.upper())

        if config.file_output:
            Path(config.log_dir).mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        if config.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            fmt = config.format_string or get_default_format()
            console_handler.setFormatter(ColoredFormatter(fmt, config.date_format))
            self.add_handler(console_handler)

        if config.file_output:
            fmt = config.format_string or get_detailed_format()
            formatter = logging.Formatter(fmt, config.date_format)

            file_handler = logging.handlers.RotatingFileHandler(
                os.path.join(config.log_dir, LOG_FILE_NAME),
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.add_handler(file_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                os.path.join(config.log_dir, ERROR_LOG_FILE_NAME),
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            self.add_handler(error_handler)

        for component, component_level in config.component_levels.items():
            logging.getLogger(component).setLevel(getattr(logging, component_level.upper()))

        logging.getLogger(__name__).debug("Logging configured with level: %s", config.level)

    def add_handler(self, handler: logging.Handler) -> None:
        """Attach a handler to the root logger and track it."""
        logging.getLogger().addHandler(handler)
        self._handlers.append(handler)


_logging_manager = LoggingManager()


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for ``__name__``)."""
    return logging.getLogger(name)


def configure_logging(config: LogConfig) -> None:
    """Configure the logging system."""
    _logging_manager.configure(config)


def get_logging_manager() -> LoggingManager:
    """Get the global logging manager instance."""
    return _logging_manager


def create_development_config() -> LogConfig:
    """Verbose console and file logging under ./logs/dev."""
    return LogConfig(
        level="DEBUG",
        log_dir="./logs/dev",
        console_output=True,
        file_output=True,
        format_string=get_detailed_format(),
        component_levels={
            "asyncio": "WARNING",
        }
    )


def create_production_config() -> LogConfig:
    """File-only logging; the console belongs to the interactive front end."""
    return LogConfig(
        level="INFO",
        log_dir="./logs/prod",
        console_output=False,
        file_output=True,
        max_bytes=20 * 1024 * 1024,  # 20MB
        backup_count=10,
        format_string=get_detailed_format(),
        component_levels={
            "asyncio": "ERROR",
        }
    )


def create_testing_config() -> LogConfig:
    """Console-only debug logging with a compact format."""
    return LogConfig(
        level="DEBUG",
        console_output=True,
        file_output=False,
        format_string="%(levelname)s - %(name)s - %(message)s",
    )


def auto_configure(env: Optional[str] = None) -> LogConfig:
    """
    Configure logging for the named environment.

    Args:
        env: development, production or testing. Defaults to LOCALAUTH_ENV.

    Returns:
        The configuration that was applied.
    """
    if env is None:
        env = os.environ.get("LOCALAUTH_ENV", "development")
    env = env.lower()

    factories = {
        "development": create_development_config,
        "dev": create_development_config,
        "production": create_production_config,
        "prod": create_production_config,
        "testing": create_testing_config,
        "test": create_testing_config,
    }

    config = factories.get(env, create_development_config)()
    configure_logging(config)

    get_logger(__name__).info("Logging auto-configured for environment: %s", env)
    return config


__all__ = [
    'LogConfig',
    'LoggingManager',
    'ColoredFormatter',
    'get_logger',
    'configure_logging',
    'get_logging_manager',
    'create_development_config',
    'create_production_config',
    'create_testing_config',
    'auto_configure',
    'get_default_format',
    'get_detailed_format',
]
