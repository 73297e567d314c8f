"""
Per-task logging context.

The aggregator binds the symbol it is working on; the logging filter installed
by the entrypoints reads it back so every record carries its symbol, including
records emitted from provider adapters running in the same asyncio task.
"""

from contextvars import ContextVar

current_symbol: ContextVar[str] = ContextVar("current_symbol", default="-")
