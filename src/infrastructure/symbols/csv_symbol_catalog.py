"""
Infrastructure adapter: bundled CSV file → ISymbolCatalog.

The file holds one symbol per line under a single header row. It is re-read
on every call; the list is small and the endpoint is only hit by autocomplete.
"""

from pathlib import Path

from src.domain.ports.symbol_catalog_port import ISymbolCatalog


class CsvSymbolCatalog(ISymbolCatalog):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def list_symbols(self) -> list[str]:
        lines = self._path.read_text(encoding="utf-8").strip().splitlines()
        return [line.strip().upper() for line in lines[1:] if line.strip()]
