"""
Use-case: list known exchange symbols for autocomplete.
Depends only on Domain ports; no infrastructure imports.
"""

from src.domain.ports.symbol_catalog_port import ISymbolCatalog


class ListKnownSymbolsUseCase:
    def __init__(self, catalog: ISymbolCatalog) -> None:
        self._catalog = catalog

    def execute(self) -> list[str]:
        """Return the catalog's symbols upper-cased, in file order.

        Raises:
            OSError: propagated from the catalog when its data is unreadable.
        """
        return [symbol.upper() for symbol in self._catalog.list_symbols()]
