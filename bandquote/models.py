from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .catalog import PRESET_COLOR_IDS


class _Frozen(BaseModel):
	model_config = ConfigDict(frozen=True, extra="ignore")


class PricingTier(_Frozen):
	min: int = Field(ge=1)
	max: int = Field(ge=1)
	unit: Decimal = Field(ge=0)

	@model_validator(mode="after")
	def check_range(self) -> "PricingTier":
		if self.min > self.max:
			raise ValueError(f"tier min {self.min} is greater than max {self.max}")
		return self

	def contains(self, qty: int) -> bool:
		return self.min <= qty <= self.max


class Coefficients(_Frozen):
	finish: Dict[str, Decimal] = Field(default_factory=dict)
	size: Dict[str, Decimal] = Field(default_factory=dict)


class FeeConfig(_Frozen):
	shipping_minimum: Decimal = Decimal("2500")
	shipping_rate: Decimal = Decimal("0.12")
	tax_rate: Decimal = Decimal("0.10")
	duties_rate: Decimal = Decimal("0.04")
	home_country: str = "JP"

	@field_validator("home_country")
	@classmethod
	def upper_country(cls, v: str) -> str:
		return v.upper()


class PricingConfig(_Frozen):
	tiers: List[PricingTier] = Field(min_length=1)
	coeff: Coefficients = Field(default_factory=Coefficients)
	options: Dict[str, Decimal] = Field(default_factory=dict)
	fees: FeeConfig = Field(default_factory=FeeConfig)


class ColorEntry(_Frozen):
	id: str
	label: str
	hex: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")
	effect: Optional[str] = None


class ColorPair(_Frozen):
	body: str
	text: str


class ColorRules(_Frozen):
	incompat: List[ColorPair] = Field(default_factory=list)


class ColorConfig(_Frozen):
	body: List[ColorEntry]
	text: List[ColorEntry]
	rules: ColorRules = Field(default_factory=ColorRules)

	@model_validator(mode="after")
	def check_presets(self) -> "ColorConfig":
		for side in ("body", "text"):
			ids = {entry.id for entry in getattr(self, side)}
			missing = sorted(set(PRESET_COLOR_IDS) - ids)
			if missing:
				raise ValueError(f"{side} palette is missing presets: {', '.join(missing)}")
		return self

	def palette(self, side: str) -> Dict[str, str]:
		return {entry.id: entry.hex.upper() for entry in getattr(self, side)}

	def is_incompatible(self, body_id: str, text_id: str) -> bool:
		return any(rule.body == body_id and rule.text == text_id for rule in self.rules.incompat)


class LeadTimeEntry(_Frozen):
	zone: int
	days: Tuple[int, int]

	@field_validator("days")
	@classmethod
	def ordered(cls, v: Tuple[int, int]) -> Tuple[int, int]:
		if v[0] < 0 or v[0] > v[1]:
			raise ValueError(f"invalid day window {list(v)}")
		return v


class LeadTimeConfig(_Frozen):
	base_production_days: int = Field(ge=0)
	country_zone: Dict[str, LeadTimeEntry] = Field(default_factory=dict)
	eta_formula: Optional[str] = None

	@field_validator("country_zone")
	@classmethod
	def upper_keys(cls, v: Dict[str, LeadTimeEntry]) -> Dict[str, LeadTimeEntry]:
		return {k.upper(): entry for k, entry in v.items()}
