"""
Application service: turn raw user input into normalized ticker symbols.

Market classification is a best-effort display / dispatch hint driven by a
suffix table; it is never validated against an exchange registry.
"""

from collections.abc import Iterable, Mapping
from typing import Union

from src.domain.entities.stock_insight import Market
from src.domain.errors import ValidationError

DEFAULT_SUFFIX_MARKETS: Mapping[str, Market] = {
    ".NS": Market.NSE,
    ".BSE": Market.BSE,
    ".BO": Market.BSE,
}

RawSymbols = Union[str, Iterable, None]


def normalize_symbols(raw: RawSymbols) -> list[str]:
    """Split, trim, upper-case and deduplicate *raw* in first-seen order.

    *raw* may be a single comma-delimited string or an iterable of strings
    (each of which may itself contain commas).

    Raises:
        ValidationError: if no non-empty symbol remains.
    """
    if raw is None:
        joined = ""
    elif isinstance(raw, str):
        joined = raw
    else:
        joined = ",".join(str(item) for item in raw if item is not None)

    symbols: list[str] = []
    seen: set[str] = set()
    for token in joined.split(","):
        symbol = token.strip().upper()
        if symbol and symbol not in seen:
            seen.add(symbol)
            symbols.append(symbol)

    if not symbols:
        raise ValidationError("No symbols provided.")
    return symbols


def _matching_suffix(symbol: str, suffix_markets: Mapping[str, Market]) -> str | None:
    upper = symbol.upper()
    # Longest suffix first so ".BSE" is never shadowed by a shorter entry.
    for suffix in sorted(suffix_markets, key=len, reverse=True):
        if upper.endswith(suffix.upper()):
            return suffix
    return None


def classify_market(
    symbol: str,
    suffix_markets: Mapping[str, Market] = DEFAULT_SUFFIX_MARKETS,
    domestic_symbols: frozenset[str] = frozenset(),
) -> Market:
    suffix = _matching_suffix(symbol, suffix_markets)
    if suffix is not None:
        return suffix_markets[suffix]
    if "." in symbol:
        return Market.UNKNOWN
    if symbol.upper() in domestic_symbols:
        return Market.NSE
    return Market.US


def strip_exchange_suffix(
    symbol: str,
    suffix_markets: Mapping[str, Market] = DEFAULT_SUFFIX_MARKETS,
) -> str:
    """Return *symbol* upper-cased without a recognized exchange suffix."""
    upper = symbol.upper()
    suffix = _matching_suffix(upper, suffix_markets)
    if suffix is None:
        return upper
    return upper[: -len(suffix)]
