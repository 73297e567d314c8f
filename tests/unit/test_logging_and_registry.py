"""Unit tests for logging setup, the bulk-deal stub and provider wiring."""

from __future__ import annotations

import asyncio
import contextvars
import logging

import pytest

from fakes import FakeSymbolCatalog
from src.application.services.log_context import current_symbol
from src.domain.errors import ConfigurationError
from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.provider_registry import (
    create_insights_use_case,
    load_domestic_symbols,
)
from src.infrastructure.observability.logging_config import SymbolContextFilter, configure_logging
from src.infrastructure.stock_data.alpha_vantage_adapter import AlphaVantageClient
from src.infrastructure.stock_data.bulk_deals_stub import NullBulkDealProvider
from src.infrastructure.stock_data.yfinance_adapter import YFinanceProvider


def _record() -> logging.LogRecord:
    return logging.LogRecord("src.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_uses_placeholder_without_bound_symbol() -> None:
    record = _record()
    ctx = contextvars.Context()

    assert ctx.run(SymbolContextFilter().filter, record) is True
    assert record.symbol == "-"


def test_filter_reads_symbol_from_context() -> None:
    def bound() -> logging.LogRecord:
        current_symbol.set("TCS.NS")
        record = _record()
        SymbolContextFilter().filter(record)
        return record

    assert contextvars.Context().run(bound).symbol == "TCS.NS"


def test_configure_logging_installs_single_handler() -> None:
    configure_logging("debug")
    logger = configure_logging("warning")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_bulk_deal_stub_is_always_empty() -> None:
    assert asyncio.run(NullBulkDealProvider().fetch_bulk_deals_for_symbol("RELIANCE.NS")) == []


def test_registry_wires_alpha_vantage_by_default() -> None:
    use_case = create_insights_use_case(Settings(alpha_vantage_api_key="k"))
    build = use_case._build_insight

    assert isinstance(build._price_provider, AlphaVantageClient)
    assert build._news_provider is build._price_provider
    assert isinstance(build._bulk_deal_provider, NullBulkDealProvider)


def test_registry_can_mix_providers() -> None:
    use_case = create_insights_use_case(Settings(price_provider="yfinance", news_provider="alphavantage"))
    build = use_case._build_insight

    assert isinstance(build._price_provider, YFinanceProvider)
    assert isinstance(build._news_provider, AlphaVantageClient)


def test_registry_rejects_unknown_provider() -> None:
    with pytest.raises(ConfigurationError, match="Unknown provider"):
        create_insights_use_case(Settings(price_provider="bloomberg"))


def test_domestic_symbols_fall_back_to_empty_on_read_error() -> None:
    assert load_domestic_symbols(FakeSymbolCatalog(error=FileNotFoundError("gone"))) == frozenset()
    assert load_domestic_symbols(FakeSymbolCatalog(["TCS"])) == frozenset({"TCS"})
