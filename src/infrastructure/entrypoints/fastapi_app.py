"""
FastAPI entry point.

This module is the Composition Root for the HTTP service: it loads Settings,
wires the infrastructure adapters and passes them to the application layer.
create_app() accepts pre-built use-cases so tests can inject fakes.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.application.use_cases.list_symbols import ListKnownSymbolsUseCase
from src.domain.errors import ValidationError
from src.infrastructure.config.settings import Settings, load_settings
from src.infrastructure.entrypoints.provider_registry import create_insights_use_case
from src.infrastructure.entrypoints.schemas import StockInsightsResponseSchema, SymbolsResponse
from src.infrastructure.observability.logging_config import configure_logging
from src.infrastructure.symbols.csv_symbol_catalog import CsvSymbolCatalog

logger = logging.getLogger(__name__)

INSIGHTS_ERROR_MESSAGE = "Unexpected server error while fetching stock insights."
SYMBOLS_ERROR_MESSAGE = "Failed to load stock symbols"


def _extract_symbols(body: object) -> object:
    """Pull ``symbols`` out of a decoded JSON body; anything unusable counts as empty."""
    if not isinstance(body, dict):
        return None
    raw = body.get("symbols")
    return raw if isinstance(raw, (str, list)) else None


def create_app(
    settings: Optional[Settings] = None,
    insights_use_case: Optional[GetStockInsightsUseCase] = None,
    symbols_use_case: Optional[ListKnownSymbolsUseCase] = None,
) -> FastAPI:
    # ---------------------------------------------------------------------------
    # Composition Root: wire all dependencies once at startup
    # ---------------------------------------------------------------------------
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    catalog = CsvSymbolCatalog(settings.symbols_file)
    insights_use_case = insights_use_case or create_insights_use_case(settings, catalog=catalog)
    symbols_use_case = symbols_use_case or ListKnownSymbolsUseCase(catalog)

    app = FastAPI(title="Stock Insights API")

    @app.post("/insights", response_model=StockInsightsResponseSchema)
    async def stock_insights(request: Request):
        """Build price range, drift, headlines and deals for each requested symbol."""
        try:
            body = await request.json()
        except ValueError:
            body = None

        try:
            response = await insights_use_case.execute(_extract_symbols(body))
        except ValidationError as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        except Exception:
            logger.exception("stock-insights route error")
            return JSONResponse(status_code=500, content={"error": INSIGHTS_ERROR_MESSAGE})

        return StockInsightsResponseSchema.from_domain(response)

    @app.get("/symbols", response_model=SymbolsResponse)
    def known_symbols():
        """Return the autocomplete symbol list."""
        try:
            return SymbolsResponse(symbols=symbols_use_case.execute())
        except OSError:
            logger.exception("Error reading symbols file %s", settings.symbols_file)
            return JSONResponse(
                status_code=500,
                content={"error": SYMBOLS_ERROR_MESSAGE, "symbols": []},
            )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
