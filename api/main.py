from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from api.pages import render_html
from config import load_settings
from fetchers import filter_daily_prices, get_current_price
from gift_page import build_page_view, data_source_from_settings
from logging_config import configure_logging
from render import render_error, render_recipient_selector

APP_VERSION = "1.0.0"

settings = load_settings()
configure_logging(level=settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(title="Silver Gift Tracker", version=APP_VERSION)

# Same-origin copies of the static documents
if not settings.data_location.startswith(("http://", "https://")):
    app.mount("/data", StaticFiles(directory=Path(settings.data_location), check_dir=False), name="data")


@app.get("/", response_class=HTMLResponse)
def read_index(request: Request) -> HTMLResponse:
    try:
        view = build_page_view(dict(request.query_params), settings=load_settings())
    except Exception:
        logger.exception("Critical error while building the gift page")
        view = render_error()
    return HTMLResponse(render_html(view))


@app.get("/v1/gift")
def gift(request: Request) -> dict:
    try:
        view = build_page_view(dict(request.query_params), settings=load_settings())
    except Exception:
        logger.exception("Critical error while building the gift view")
        view = render_error()
    return view.model_dump(mode="json")


@app.get("/v1/price/current")
def price_current(request: Request) -> dict:
    current = load_settings()
    source = data_source_from_settings(current)
    sample = get_current_price(
        source,
        dict(request.query_params),
        max_attempts=current.max_attempts,
        retry_delay=current.retry_delay_seconds,
        endpoint_gap=current.endpoint_gap_seconds,
    )
    if sample is None:
        raise HTTPException(status_code=404, detail="No price data available.")
    return asdict(sample)


@app.get("/v1/prices/history")
def prices_history(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
) -> dict:
    source = data_source_from_settings(load_settings())
    items = filter_daily_prices(source.load_daily_prices(), start=start, end=end)
    return {"items": [item.model_dump(mode="json") for item in items]}


@app.get("/v1/recipients")
def recipients() -> dict:
    source = data_source_from_settings(load_settings())
    view = render_recipient_selector(source.load_recipients())
    return {"items": [option.model_dump() for option in view.options]}
