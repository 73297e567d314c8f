"""Unit tests for the batch use-case: normalization, fan-out and ordering."""

from __future__ import annotations

import asyncio
import time

import pytest

from fakes import SAMPLE_RANGE, FakeBulkDealProvider, FakeNewsProvider, FakePriceProvider
from src.application.use_cases.build_stock_insight import BuildStockInsightUseCase
from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.domain.entities.stock_insight import Market
from src.domain.errors import ProviderError, ValidationError


def _batch(price: FakePriceProvider, domestic=frozenset()) -> GetStockInsightsUseCase:
    build = BuildStockInsightUseCase(price, FakeNewsProvider(), FakeBulkDealProvider())
    return GetStockInsightsUseCase(build, domestic_symbols=domestic)


def test_results_follow_first_seen_order() -> None:
    price = FakePriceProvider({"RELIANCE.NS": SAMPLE_RANGE, "TCS.NS": SAMPLE_RANGE})

    response = asyncio.run(_batch(price).execute("RELIANCE.NS, TCS.NS, reliance.ns"))

    assert [r.symbol for r in response.results] == ["RELIANCE.NS", "TCS.NS"]
    assert [r.market for r in response.results] == [Market.NSE, Market.NSE]


def test_one_failing_symbol_does_not_abort_the_batch() -> None:
    price = FakePriceProvider(
        {"GOOD": SAMPLE_RANGE},
        failures={"BAD": ProviderError("BAD", "Unknown symbol BAD")},
    )

    response = asyncio.run(_batch(price).execute(["BAD", "GOOD"]))

    bad, good = response.results
    assert bad.symbol == "BAD"
    assert bad.error == "Unknown symbol BAD"
    assert bad.current_price is None
    assert good.symbol == "GOOD"
    assert good.error is None
    assert good.current_price == 1234.56


def test_empty_input_raises_before_any_provider_call() -> None:
    price = FakePriceProvider()

    with pytest.raises(ValidationError):
        asyncio.run(_batch(price).execute("  ,  "))

    assert price.calls == []


def test_domestic_symbols_are_classified_as_nse() -> None:
    price = FakePriceProvider({"TCS": SAMPLE_RANGE, "AAPL": SAMPLE_RANGE})

    response = asyncio.run(_batch(price, domestic=frozenset({"TCS"})).execute("tcs, aapl"))

    assert [r.market for r in response.results] == [Market.NSE, Market.US]
    assert price.calls == [("TCS", Market.NSE), ("AAPL", Market.US)]


def test_symbols_are_fetched_concurrently() -> None:
    symbols = ["A", "B", "C", "D"]
    price = FakePriceProvider({s: SAMPLE_RANGE for s in symbols}, delay=0.2)

    started = time.perf_counter()
    response = asyncio.run(_batch(price).execute(symbols))
    elapsed = time.perf_counter() - started

    assert len(response.results) == 4
    assert elapsed < 0.6


def test_display_symbol_uses_configured_suffix_table() -> None:
    price = FakePriceProvider({"RELIANCE.NSE": SAMPLE_RANGE})
    build = BuildStockInsightUseCase(price, FakeNewsProvider(), FakeBulkDealProvider())
    use_case = GetStockInsightsUseCase(
        build, suffix_markets={".NSE": Market.NSE, ".NS": Market.NSE}
    )

    (insight,) = asyncio.run(use_case.execute("reliance.nse")).results

    assert insight.symbol == "RELIANCE.NSE"
    assert insight.market is Market.NSE
    assert insight.display_symbol == "RELIANCE"


def test_display_symbol_defaults_strip_known_suffixes() -> None:
    price = FakePriceProvider({"TCS.NS": SAMPLE_RANGE, "AAPL": SAMPLE_RANGE})

    response = asyncio.run(_batch(price).execute("tcs.ns, aapl"))

    assert [r.display_symbol for r in response.results] == ["TCS", "AAPL"]
