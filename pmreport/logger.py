"""
Logging Configuration for pmreport

Every module gets its own named logger. All of them write to stderr, so stdout
carries only the report, and to one shared dated run log when a log directory
is configured.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from .config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """Registry of configured module loggers and their shared file handlers."""

    _loggers: Dict[str, logging.Logger] = {}
    _file_handlers: Dict[Path, logging.Handler] = {}

    @staticmethod
    def log_file(log_dir: Path) -> Path:
        """Path of today's run log in a directory."""
        return Path(log_dir) / f"pmreport_{datetime.now():%Y%m%d}.log"

    @classmethod
    def _file_handler(cls, log_dir: Path) -> logging.Handler:
        path = cls.log_file(log_dir)
        if path not in cls._file_handlers:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
            cls._file_handlers[path] = handler
        return cls._file_handlers[path]

    @classmethod
    def setup(
        cls,
        name: str,
        log_dir: Optional[Path] = None,
        level: Union[int, str] = logging.INFO,
        console: bool = True,
    ) -> logging.Logger:
        """
        Configure a module logger once and return it.

        Args:
            name: Logger name (usually module name)
            log_dir: Directory for the run log (console only if None)
            level: Logging level, as a number or a name such as "DEBUG"
            console: Write to stderr

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False

        if not logger.handlers:
            if console:
                stream = logging.StreamHandler(sys.stderr)
                stream.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
                logger.addHandler(stream)
            if log_dir:
                logger.addHandler(cls._file_handler(log_dir))

        cls._loggers[name] = logger
        return logger

    @classmethod
    def set_level(cls, level: Union[int, str]) -> None:
        """Change the level of every logger configured so far."""
        for logger in cls._loggers.values():
            logger.setLevel(level)


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Module logger at the configured PMREPORT_LOG_LEVEL."""
    return Logger.setup(name, log_dir=log_dir, level=Config.LOG_LEVEL)
