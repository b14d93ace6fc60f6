from typing import Any, Dict, Optional

import structlog
from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config_store import ConfigStore, get_store
from .currency import BASE_CURRENCY, DISPLAY_CURRENCIES, resolve_currency, to_display
from .errors import ConfigLoadError, FieldIssue, QuoteValidationError, UnsupportedCurrency, field_issues
from .eta import estimate_eta
from .logging_config import setup_logging
from .models import ColorConfig
from .quote import create_quote
from .schemas import EtaOut, ErrorOut, PricingOut, QuoteResultOut, TierOut
from .settings import get_settings

_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_json)
logger = structlog.get_logger(__name__)

app = FastAPI(title="Bonfilet Quote API")


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
	issues = field_issues(exc.errors())
	error = QuoteValidationError(message=issues[0].message if issues else "Invalid request", field_issues=issues)
	logger.info("quote.rejected", path=request.url.path, reason=error.message)
	return JSONResponse(status_code=error.status, content=error.body)


@app.exception_handler(ConfigLoadError)
async def config_load_error(request: Request, exc: ConfigLoadError) -> JSONResponse:
	logger.error("config.load_failed", path=request.url.path, resource=exc.resource, reason=exc.reason)
	return JSONResponse(status_code=500, content={"message": "Internal Server Error", "needsReview": False})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
	logger.error("quote.failed", path=request.url.path, exc_info=exc)
	return JSONResponse(status_code=500, content={"message": "Internal Server Error", "needsReview": False})


@app.post(
	"/quote",
	response_model=QuoteResultOut,
	responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def quote(payload: Any = Body(...), store: ConfigStore = Depends(get_store)):
	result = await create_quote(payload, store)
	if result.is_err():
		error = result.unwrap_err()
		return JSONResponse(status_code=error.status, content=error.body)

	q = result.unwrap()
	return QuoteResultOut(
		currency=q.currency,
		subtotal=float(q.subtotal),
		shipping=float(q.shipping),
		tax=float(q.tax),
		duties=float(q.duties),
		total=float(q.total),
		eta_days=list(q.eta_days),
		needs_review=q.needs_review,
		errors=q.errors,
	)


@app.get("/pricing", response_model=PricingOut)
async def get_pricing(
	currency: Optional[str] = None,
	locale: Optional[str] = None,
	store: ConfigStore = Depends(get_store),
):
	if currency is None:
		currency = resolve_currency(locale) if locale else BASE_CURRENCY
	currency = currency.strip().upper()
	config = await store.pricing()
	try:
		tiers = [TierOut(min=t.min, max=t.max, unit=float(to_display(t.unit, currency))) for t in config.tiers]
	except UnsupportedCurrency as exc:
		error = QuoteValidationError(message=str(exc), field_issues=[FieldIssue(field="currency", message=str(exc))])
		return JSONResponse(status_code=error.status, content=error.body)
	coeff: Dict[str, Dict[str, float]] = {
		"finish": {k: float(v) for k, v in config.coeff.finish.items()},
		"size": {k: float(v) for k, v in config.coeff.size.items()},
	}
	return PricingOut(
		currency=currency,
		currencies=list(DISPLAY_CURRENCIES),
		tiers=tiers,
		coeff=coeff,
		options={k: float(to_display(v, currency)) for k, v in config.options.items()},
	)


@app.get("/colors", response_model=ColorConfig)
async def get_colors(store: ConfigStore = Depends(get_store)):
	return await store.colors()


@app.get("/eta/{country}", response_model=EtaOut)
async def get_eta(country: str, store: ConfigStore = Depends(get_store)):
	config = await store.lead_times()
	return EtaOut(country=country.upper(), eta_days=list(estimate_eta(country, config)))
