import asyncio
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Tuple

import structlog

from .config_store import ConfigStore
from .errors import QuoteValidationError
from .eta import estimate_eta
from .parser import ParsedQuoteRequest, parse_quote_request
from .pricing_engine import PricingEngine, QuoteBreakdown
from .result import Ok, Result

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QuoteResult:
	currency: str
	subtotal: Decimal
	shipping: Decimal
	tax: Decimal
	duties: Decimal
	total: Decimal
	eta_days: Tuple[int, int]
	needs_review: bool = False
	errors: List[str] = field(default_factory=list)


async def price_request(parsed: ParsedQuoteRequest, store: ConfigStore) -> QuoteBreakdown:
	config = await store.pricing()
	return PricingEngine(config).price(parsed)


async def estimate_request(parsed: ParsedQuoteRequest, store: ConfigStore) -> Tuple[int, int]:
	config = await store.lead_times()
	return estimate_eta(parsed.country, config)


async def create_quote(raw: Any, store: ConfigStore) -> Result[QuoteResult, QuoteValidationError]:
	"""Parse a raw request, then price it and estimate delivery side by side."""
	colors, forbidden = await asyncio.gather(store.colors(), store.forbidden_words())
	parsed = parse_quote_request(raw, colors, forbidden)
	if parsed.is_err():
		error = parsed.unwrap_err()
		logger.info("quote.rejected", reason=error.message, issues=len(error.field_issues))
		return parsed

	request = parsed.unwrap()
	breakdown, eta_days = await asyncio.gather(
		price_request(request, store),
		estimate_request(request, store),
	)
	result = QuoteResult(
		currency=breakdown.currency,
		subtotal=breakdown.subtotal,
		shipping=breakdown.shipping,
		tax=breakdown.tax,
		duties=breakdown.duties,
		total=breakdown.total,
		eta_days=eta_days,
		needs_review=request.needs_review,
		errors=list(request.errors),
	)
	logger.info(
		"quote.created",
		items=len(request.items),
		country=request.country,
		currency=result.currency,
		total=str(result.total),
		needs_review=result.needs_review,
	)
	return Ok(result)
