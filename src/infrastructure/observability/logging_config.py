"""
Logging setup for the HTTP app and the CLI.

Every module logs through logging.getLogger(__name__); this installs a single
console handler on the ``src`` logger so those records share one format that
includes the symbol being processed.
"""

import logging

from src.application.services.log_context import current_symbol

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(symbol)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SymbolContextFilter(logging.Filter):
    """Injects the symbol bound to the current asyncio task into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.symbol = current_symbol.get()
        return True


def configure_logging(level: str = "INFO") -> logging.Logger:
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.addFilter(SymbolContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger("src")
    # Clear existing handlers so repeated app construction does not duplicate output.
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)
    root.propagate = False
    return root
