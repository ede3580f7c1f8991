import logging
import os
import re
import sys
from typing import Optional


class FileHandleFilter(logging.Filter):
    """Filter to mask NFS file handles in log records.

    A file handle is enough to address a file on the data server directly,
    so handle bytes never reach a log sink in clear.
    """

    PATTERNS = [
        (re.compile(r'(fh["\']?\s*[:=]\s*["\']?)([0-9a-fA-F]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(file[_-]?handle["\']?\s*[:=]\s*["\']?)([0-9a-fA-F]+)', re.IGNORECASE), r'\1***MASKED***'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask file handle bytes in the message and its string arguments."""
        record.msg = self._mask(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self._mask(arg) for arg in record.args)
        return True

    def _mask(self, value):
        if isinstance(value, str):
            for pattern, replacement in self.PATTERNS:
                value = pattern.sub(replacement, value)
        return value


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Records go to stderr; stdout is reserved for the tool's own output.

    Args:
        component_name: Name of the component (e.g., 'pnfsdsfile')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or WARNING

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'WARNING')
    log_level = log_level.upper()

    level = getattr(logging, log_level, logging.WARNING)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    handler.setFormatter(formatter)
    handler.addFilter(FileHandleFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Module loggers are children of a component logger set up by
    setup_logging, e.g. 'pnfsdsfile.commands' under 'pnfsdsfile'.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
