"""Unit tests for the CSV symbol catalog and the list-symbols use-case."""

from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeSymbolCatalog
from src.application.use_cases.list_symbols import ListKnownSymbolsUseCase
from src.infrastructure.symbols.csv_symbol_catalog import CsvSymbolCatalog

BUNDLED_CSV = Path(__file__).resolve().parents[2] / "data" / "nse_stock_symbols.csv"


def test_reads_symbols_skipping_header_and_blanks(tmp_path) -> None:
    path = tmp_path / "symbols.csv"
    path.write_text("SYMBOL\nreliance\n\n  tcs \nInfy\n", encoding="utf-8")

    assert CsvSymbolCatalog(path).list_symbols() == ["RELIANCE", "TCS", "INFY"]


def test_missing_file_raises_os_error(tmp_path) -> None:
    with pytest.raises(OSError):
        CsvSymbolCatalog(tmp_path / "missing.csv").list_symbols()


def test_bundled_file_is_non_empty_and_upper_case() -> None:
    symbols = CsvSymbolCatalog(BUNDLED_CSV).list_symbols()

    assert "RELIANCE" in symbols
    assert "SYMBOL" not in symbols
    assert all(symbol == symbol.upper() for symbol in symbols)


def test_use_case_upper_cases_catalog_output() -> None:
    use_case = ListKnownSymbolsUseCase(FakeSymbolCatalog(["tcs", "Infy"]))

    assert use_case.execute() == ["TCS", "INFY"]
