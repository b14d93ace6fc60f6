from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from .errors import UnsupportedCurrency

BASE_CURRENCY = "JPY"

FX_RATES: Dict[str, Decimal] = {
	"JPY": Decimal("1"),
	"USD": Decimal("0.0064"),
	"EUR": Decimal("0.0059"),
	"GBP": Decimal("0.0049"),
	"AUD": Decimal("0.0098"),
}

DISPLAY_CURRENCIES = tuple(FX_RATES)

_WHOLE = Decimal("1")
_CENTS = Decimal("0.01")

_CURRENCY_BY_LOCALE = {
	"ja": "JPY",
	"ja-jp": "JPY",
	"jp": "JPY",
	"jpn": "JPY",
	"en": "USD",
	"en-us": "USD",
	"us": "USD",
	"usa": "USD",
}


def _rate(currency: str) -> Decimal:
	try:
		return FX_RATES[currency]
	except KeyError:
		raise UnsupportedCurrency(currency) from None


def round_for_currency(amount: Decimal, currency: str) -> Decimal:
	_rate(currency)
	step = _WHOLE if currency == BASE_CURRENCY else _CENTS
	return amount.quantize(step, rounding=ROUND_HALF_UP)


def round_base(amount: Decimal) -> Decimal:
	return amount.quantize(_WHOLE, rounding=ROUND_HALF_UP)


def to_display(amount_base: Decimal, currency: str) -> Decimal:
	"""Convert a base-currency amount and round it for display."""
	return round_for_currency(Decimal(amount_base) * _rate(currency), currency)


def to_base(amount: Decimal, currency: str) -> Decimal:
	"""Convert a display amount back to base currency, unrounded."""
	rate = _rate(currency)
	if currency == BASE_CURRENCY:
		return Decimal(amount)
	return Decimal(amount) / rate


def resolve_currency(value: str) -> str:
	"""Pick a display currency from a locale or market code; unknown values get the base."""
	return _CURRENCY_BY_LOCALE.get(value.strip().lower(), BASE_CURRENCY)
