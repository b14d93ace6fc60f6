"""Fixed product catalog for the bonfilet wristband and the color variant type."""

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

PRODUCT_TYPE = "bonfilet"

PRESET_COLOR_IDS = (
	"black",
	"white",
	"red",
	"blue",
	"yellow",
	"green",
	"pink",
	"purple",
	"navy",
)
CUSTOM_COLOR = "custom"
COLOR_IDS = PRESET_COLOR_IDS + (CUSTOM_COLOR,)

FINISH_IDS = ("normal",)
SIZE_IDS = ("12mm/202mm",)

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
_LOOSE_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$")


@dataclass(frozen=True)
class PresetColor:
	id: str


@dataclass(frozen=True)
class CustomColor:
	hex: str


Color = Union[PresetColor, CustomColor]


def normalize_hex(value: str) -> Optional[str]:
	"""Return ``#RRGGBB`` for ``abc``, ``#abc``, ``#aabbcc`` and friends, else None."""
	if not isinstance(value, str):
		return None
	v = value.strip().lower()
	if not v:
		return None
	if not v.startswith("#"):
		v = f"#{v}"
	if not _LOOSE_HEX_RE.match(v):
		return None
	if len(v) == 4:
		v = f"#{v[1] * 2}{v[2] * 2}{v[3] * 2}"
	return v.upper()


def make_color(color_id: str, custom_hex: Optional[str] = None) -> Color:
	if color_id == CUSTOM_COLOR:
		if custom_hex is None:
			raise ValueError("custom color requires a hex value")
		return CustomColor(custom_hex)
	return PresetColor(color_id)


def resolve_color_hex(color: Color, palette: Mapping[str, str]) -> str:
	if isinstance(color, CustomColor):
		return normalize_hex(color.hex) or color.hex.upper()
	return palette[color.id]
