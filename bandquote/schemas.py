from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .catalog import COLOR_IDS, CUSTOM_COLOR, FINISH_IDS, HEX_COLOR_RE, PRODUCT_TYPE, SIZE_IDS
from .currency import DISPLAY_CURRENCIES

MAX_QTY = 99999
MAX_MESSAGE_CHARS = 40


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuoteItemIn(CamelModel):
	product_type: Literal[PRODUCT_TYPE]
	message_text: str = Field(min_length=1, max_length=MAX_MESSAGE_CHARS)
	body_color: Literal[COLOR_IDS]
	text_color: Literal[COLOR_IDS]
	body_color_hex: Optional[str] = Field(default=None, validate_default=True)
	text_color_hex: Optional[str] = Field(default=None, validate_default=True)
	finish: Literal[FINISH_IDS]
	size: Literal[SIZE_IDS]
	qty: int = Field(strict=True, ge=1, le=MAX_QTY)
	options: List[str] = Field(default_factory=list)

	@field_validator("body_color_hex", "text_color_hex")
	@classmethod
	def validate_custom_hex(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
		side = info.field_name.split("_", 1)[0]
		if info.data.get(f"{side}_color") != CUSTOM_COLOR:
			return v
		if v is None:
			raise PydanticCustomError(
				"custom_color_missing",
				"{side}ColorHex is required when {side}Color is custom",
				{"side": side},
			)
		if not HEX_COLOR_RE.match(v):
			raise PydanticCustomError(
				"custom_color_invalid",
				"{side}ColorHex must be a 6-digit hex color like #1A2B3C",
				{"side": side},
			)
		return v.upper()


class ShipTo(CamelModel):
	country: str = Field(min_length=2)


class QuoteRequestIn(CamelModel):
	items: List[QuoteItemIn] = Field(default_factory=list, validate_default=True)
	ship_to: ShipTo
	currency: Optional[Literal[DISPLAY_CURRENCIES]] = None

	@field_validator("currency", mode="before")
	@classmethod
	def upper_currency(cls, v: Any) -> Any:
		return v.strip().upper() if isinstance(v, str) else v

	@field_validator("items")
	@classmethod
	def validate_items(cls, v: List[QuoteItemIn]) -> List[QuoteItemIn]:
		if not v:
			raise PydanticCustomError("no_items", "No item provided")
		return v


class QuoteResultOut(CamelModel):
	currency: str
	subtotal: float
	shipping: float
	tax: float
	duties: float
	total: float
	eta_days: List[int]
	needs_review: bool
	errors: List[str]


class FieldIssueOut(BaseModel):
	field: str
	message: str


class ErrorOut(CamelModel):
	message: str
	errors: List[FieldIssueOut] = Field(default_factory=list)
	needs_review: bool = False


class TierOut(BaseModel):
	min: int
	max: int
	unit: float


class PricingOut(CamelModel):
	currency: str
	currencies: List[str]
	tiers: List[TierOut]
	coeff: Dict[str, Dict[str, float]]
	options: Dict[str, float]


class EtaOut(CamelModel):
	country: str
	eta_days: List[int]
