from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

import structlog
from pydantic import ValidationError

from .catalog import Color, make_color, resolve_color_hex
from .currency import BASE_CURRENCY
from .errors import QuoteValidationError, field_issues
from .message import MessageCheck, MessageValidator
from .models import ColorConfig
from .result import Err, Ok, Result
from .schemas import QuoteRequestIn

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ParsedQuoteItem:
	product_type: str
	message_text: str
	body_color: Color
	text_color: Color
	body_hex: str
	text_hex: str
	finish: str
	size: str
	qty: int
	options: Tuple[str, ...] = ()


@dataclass
class ParsedQuoteRequest:
	items: List[ParsedQuoteItem]
	country: str
	currency: str = BASE_CURRENCY
	needs_review: bool = False
	errors: List[str] = field(default_factory=list)


def parse_quote_request(
	raw: Any,
	colors: ColorConfig,
	forbidden_words: Iterable[str] = (),
) -> Result[ParsedQuoteRequest, QuoteValidationError]:
	"""Validate a raw quote payload and normalize it for pricing.

	Structural problems come back as ``Err`` with every field issue listed
	and the first one as the headline message. Message length and content
	findings are not structural: they are collected per item into
	``errors`` / ``needs_review`` of the parsed request.
	"""
	try:
		req = QuoteRequestIn.model_validate(raw)
	except ValidationError as exc:
		issues = field_issues(exc.errors())
		return Err(QuoteValidationError(message=issues[0].message, field_issues=issues))

	validator = MessageValidator(forbidden_words)
	body_palette = colors.palette("body")
	text_palette = colors.palette("text")

	items: List[ParsedQuoteItem] = []
	checks: List[MessageCheck] = []
	needs_review = False
	for index, item in enumerate(req.items):
		check = validator.validate(item.message_text)
		checks.append(check)
		body = make_color(item.body_color, item.body_color_hex)
		text = make_color(item.text_color, item.text_color_hex)
		if colors.is_incompatible(item.body_color, item.text_color):
			logger.info("quote.color_incompatible", item=index, body=item.body_color, text=item.text_color)
			needs_review = True
		items.append(
			ParsedQuoteItem(
				product_type=item.product_type,
				message_text=check.normalized,
				body_color=body,
				text_color=text,
				body_hex=resolve_color_hex(body, body_palette),
				text_hex=resolve_color_hex(text, text_palette),
				finish=item.finish,
				size=item.size,
				qty=item.qty,
				options=tuple(item.options),
			)
		)

	errors = [err for check in checks for err in check.errors]
	needs_review = needs_review or any(check.needs_review for check in checks)
	return Ok(
		ParsedQuoteRequest(
			items=items,
			country=req.ship_to.country.strip().upper(),
			currency=req.currency or BASE_CURRENCY,
			needs_review=needs_review,
			errors=errors,
		)
	)
