"""
Port (interface) for the read-only list of known exchange symbols.
Infrastructure adapters (e.g. CsvSymbolCatalog) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISymbolCatalog(ABC):
    @abstractmethod
    def list_symbols(self) -> list[str]:
        """Return every known symbol, upper-cased.

        Raises:
            OSError: if the backing reference data cannot be read.
        """
        ...
