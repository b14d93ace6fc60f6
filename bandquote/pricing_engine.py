from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

import structlog

from .currency import BASE_CURRENCY, round_base, to_display
from .models import PricingConfig, PricingTier
from .parser import ParsedQuoteItem, ParsedQuoteRequest

logger = structlog.get_logger(__name__)

_ONE = Decimal("1")
_ZERO = Decimal("0")


@dataclass(frozen=True)
class PricedLine:
	qty: int
	tier: PricingTier
	unit_price: Decimal
	options_total: Decimal
	line_total: Decimal


@dataclass(frozen=True)
class QuoteBreakdown:
	currency: str
	subtotal: Decimal
	shipping: Decimal
	tax: Decimal
	duties: Decimal
	total: Decimal


def find_tier(tiers: Iterable[PricingTier], qty: int) -> PricingTier:
	"""Tier whose inclusive range holds ``qty``; the widest-reaching tier otherwise."""
	tiers = list(tiers)
	for tier in tiers:
		if tier.contains(qty):
			return tier
	return max(tiers, key=lambda t: t.max)


class PricingEngine:
	def __init__(self, config: PricingConfig):
		self.config = config

	def unit_price(self, qty: int, finish: str, size: str) -> Decimal:
		return self.tier_unit_price(find_tier(self.config.tiers, qty), finish, size)

	def tier_unit_price(self, tier: PricingTier, finish: str, size: str) -> Decimal:
		finish_coeff = self.config.coeff.finish.get(finish, _ONE)
		size_coeff = self.config.coeff.size.get(size, _ONE)
		return tier.unit * finish_coeff * size_coeff

	def option_price(self, option_id: str) -> Decimal:
		return self.config.options.get(option_id, _ZERO)

	def price_line(self, item: ParsedQuoteItem) -> PricedLine:
		tier = find_tier(self.config.tiers, item.qty)
		unit = self.tier_unit_price(tier, item.finish, item.size)
		options_total = sum((self.option_price(o) * item.qty for o in item.options), _ZERO)
		return PricedLine(
			qty=item.qty,
			tier=tier,
			unit_price=unit,
			options_total=options_total,
			line_total=unit * item.qty + options_total,
		)

	def shipping(self, subtotal: Decimal) -> Decimal:
		fees = self.config.fees
		return max(fees.shipping_minimum, round_base(subtotal * fees.shipping_rate))

	def tax(self, subtotal: Decimal) -> Decimal:
		return round_base(subtotal * self.config.fees.tax_rate)

	def duties(self, subtotal: Decimal, country: str) -> Decimal:
		fees = self.config.fees
		if country.upper() == fees.home_country:
			return _ZERO
		return round_base(subtotal * fees.duties_rate)

	def price_lines(self, items: Iterable[ParsedQuoteItem]) -> List[PricedLine]:
		return [self.price_line(item) for item in items]

	def price(self, request: ParsedQuoteRequest) -> QuoteBreakdown:
		lines = self.price_lines(request.items)
		subtotal = sum((line.line_total for line in lines), _ZERO)
		shipping = self.shipping(subtotal)
		tax = self.tax(subtotal)
		duties = self.duties(subtotal, request.country)
		total = subtotal + shipping + tax + duties

		currency = request.currency or BASE_CURRENCY
		logger.debug(
			"quote.priced",
			lines=len(lines),
			subtotal=str(subtotal),
			total=str(total),
			currency=currency,
		)
		# Each displayed amount is converted from its own base value; total is
		# not re-derived from the rounded parts.
		return QuoteBreakdown(
			currency=currency,
			subtotal=to_display(subtotal, currency),
			shipping=to_display(shipping, currency),
			tax=to_display(tax, currency),
			duties=to_display(duties, currency),
			total=to_display(total, currency),
		)
