from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class FieldIssue:
	field: str
	message: str


def field_path(loc: Sequence[Any]) -> str:
	# Defaulted fields are reported under their Python name; issues always use the wire name.
	parts = [to_camel(part) if isinstance(part, str) and "_" in part else str(part) for part in loc]
	return ".".join(parts) or "body"


def field_issues(errors: Iterable[Dict[str, Any]]) -> List[FieldIssue]:
	return [FieldIssue(field=field_path(err["loc"]), message=err["msg"]) for err in errors]


@dataclass
class QuoteValidationError:
	"""Client-caused rejection of a quote request, mapped to a 4xx response."""

	message: str
	field_issues: List[FieldIssue] = field(default_factory=list)
	status: int = 400

	@property
	def body(self) -> Dict[str, Any]:
		return {
			"message": self.message,
			"errors": [{"field": i.field, "message": i.message} for i in self.field_issues],
			"needsReview": False,
		}


class ConfigLoadError(RuntimeError):
	"""A static data file is missing, unreadable or does not match its schema."""

	def __init__(self, resource: str, reason: str):
		super().__init__(f"Failed to load {resource}: {reason}")
		self.resource = resource
		self.reason = reason


class UnsupportedCurrency(ValueError):
	def __init__(self, currency: str):
		super().__init__(f"Unsupported currency: {currency!r}")
		self.currency = currency
