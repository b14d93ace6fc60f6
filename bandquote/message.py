"""Message text normalization, display-unit counting and content checks.

Narrow characters count as one unit and wide East Asian characters (Han,
Hiragana, Katakana, fullwidth forms) count as two. A band fits 46 units,
i.e. 46 half-width or 23 full-width characters.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, List

MAX_UNITS = 46

EMPTY_MESSAGE = "Message cannot be empty."
TOO_LONG_CJK = "Message exceeds {} full-width characters."
TOO_LONG = "Message exceeds {} characters."

_WHITESPACE_RE = re.compile(r"\s+")
_CJK_RANGES = (
	(0x3040, 0x309F),  # Hiragana
	(0x30A0, 0x30FF),  # Katakana
	(0x31F0, 0x31FF),  # Katakana phonetic extensions
	(0x3400, 0x4DBF),  # Han extension A
	(0x4E00, 0x9FFF),  # Han
	(0xF900, 0xFAFF),  # Han compatibility
	(0xFF00, 0xFFEF),  # Halfwidth and fullwidth forms
	(0x20000, 0x2FA1F),  # Han supplementary planes
)


@dataclass
class MessageCheck:
	normalized: str
	units: int
	max_units: int = MAX_UNITS
	is_cjk: bool = False
	needs_review: bool = False
	errors: List[str] = field(default_factory=list)

	@property
	def is_valid(self) -> bool:
		return not self.errors


def sanitize_message(text: str) -> str:
	if not isinstance(text, str):
		return ""
	s = unicodedata.normalize("NFKC", text)
	s = "".join(ch for ch in s if ch.isspace() or unicodedata.category(ch) != "Cc")
	s = _WHITESPACE_RE.sub(" ", s)
	return s.strip()


def char_units(ch: str) -> int:
	return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def count_units(text: str) -> int:
	return sum(char_units(ch) for ch in text)


def has_cjk(text: str) -> bool:
	return any(lo <= ord(ch) <= hi for ch in text for lo, hi in _CJK_RANGES)


class MessageValidator:
	def __init__(self, forbidden_words: Iterable[str] = (), max_units: int = MAX_UNITS):
		self.forbidden_words = tuple(w.lower() for w in forbidden_words if w)
		self.max_units = max_units

	def validate(self, message: str) -> MessageCheck:
		normalized = sanitize_message(message)
		units = count_units(normalized)
		is_cjk = has_cjk(normalized)

		errors: List[str] = []
		if not normalized:
			errors.append(EMPTY_MESSAGE)
		if units > self.max_units:
			template = TOO_LONG_CJK if is_cjk else TOO_LONG
			errors.append(template.format(self.max_units // 2 if is_cjk else self.max_units))

		lower = normalized.lower()
		needs_review = any(word in lower for word in self.forbidden_words)

		return MessageCheck(
			normalized=normalized,
			units=units,
			max_units=self.max_units,
			is_cjk=is_cjk,
			needs_review=needs_review,
			errors=errors,
		)
