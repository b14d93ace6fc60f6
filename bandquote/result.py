"""Ok / Err result containers used on the request-parsing path."""

from typing import Any, Generic, TypeVar, Union

from attrs import field, frozen

T = TypeVar("T")
E = TypeVar("E")


@frozen
class Ok(Generic[T]):
	"""Successful result container."""

	value: T = field()

	def is_ok(self) -> bool:
		return True

	def is_err(self) -> bool:
		return False

	def unwrap(self) -> T:
		return self.value

	def unwrap_err(self) -> Any:
		raise ValueError("Called unwrap_err on Ok value")


@frozen
class Err(Generic[E]):
	"""Error result container."""

	error: E = field()

	def is_ok(self) -> bool:
		return False

	def is_err(self) -> bool:
		return True

	def unwrap(self) -> Any:
		raise ValueError(f"Called unwrap on Err value: {self.error}")

	def unwrap_err(self) -> E:
		return self.error


Result = Union[Ok[T], Err[E]]
