"""
CLI entry point for one-off insight lookups.

This script is the Composition Root for terminal use: it wires the same
adapters as the HTTP app and prints the JSON response body.

    export ALPHA_VANTAGE_API_KEY=<your-key>
    python -m src.infrastructure.entrypoints.cli "RELIANCE.NS, TCS.NS"
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from src.domain.errors import ConfigurationError, ValidationError
from src.infrastructure.config.settings import load_settings
from src.infrastructure.entrypoints.provider_registry import create_insights_use_case
from src.infrastructure.entrypoints.schemas import StockInsightsResponseSchema
from src.infrastructure.observability.logging_config import configure_logging
from src.infrastructure.symbols.csv_symbol_catalog import CsvSymbolCatalog


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Print stock insights as JSON.")
    parser.add_argument("symbols", nargs="*", help="Ticker symbols, space or comma separated.")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        use_case = create_insights_use_case(
            settings, catalog=CsvSymbolCatalog(settings.symbols_file)
        )
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 1

    try:
        response = asyncio.run(use_case.execute(args.symbols))
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = StockInsightsResponseSchema.from_domain(response).model_dump(by_alias=True)
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
