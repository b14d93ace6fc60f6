import asyncio
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Tuple, TypeVar

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from .errors import ConfigLoadError
from .models import ColorConfig, LeadTimeConfig, PricingConfig
from .settings import get_settings

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

PRICING_FILE = "pricing.yaml"
COLORS_FILE = "colors.yaml"
LEADTIME_FILE = "leadtime.yaml"
FORBIDDEN_WORDS_FILE = "forbidden_words.txt"


def parse_forbidden_words(raw: str) -> Tuple[str, ...]:
	words = []
	for line in raw.splitlines():
		word = line.split("#", 1)[0].strip().lower()
		if word:
			words.append(word)
	return tuple(words)


class ConfigStore:
	"""Read-through cache over the static data files, keyed by resource name.

	With ``use_cache=False`` every call re-reads the file. Concurrent first
	reads may both load the same file; the values are identical so the last
	write simply wins.
	"""

	def __init__(self, data_dir: Path, use_cache: bool = True):
		self.data_dir = Path(data_dir)
		self.use_cache = use_cache
		self._cache: Dict[str, Any] = {}

	async def pricing(self) -> PricingConfig:
		return await self._get(PRICING_FILE, lambda raw: self._yaml_model(PRICING_FILE, raw, PricingConfig))

	async def colors(self) -> ColorConfig:
		return await self._get(COLORS_FILE, lambda raw: self._yaml_model(COLORS_FILE, raw, ColorConfig))

	async def lead_times(self) -> LeadTimeConfig:
		return await self._get(LEADTIME_FILE, lambda raw: self._yaml_model(LEADTIME_FILE, raw, LeadTimeConfig))

	async def forbidden_words(self) -> Tuple[str, ...]:
		return await self._get(FORBIDDEN_WORDS_FILE, parse_forbidden_words)

	def clear(self) -> None:
		self._cache.clear()

	async def _get(self, name: str, build: Callable[[str], Any]) -> Any:
		if self.use_cache and name in self._cache:
			return self._cache[name]
		path = self.data_dir / name
		try:
			raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
		except OSError as exc:
			raise ConfigLoadError(name, str(exc)) from exc
		value = build(raw)
		if self.use_cache:
			self._cache[name] = value
		logger.debug("config.loaded", resource=name, cached=self.use_cache)
		return value

	@staticmethod
	def _yaml_model(name: str, raw: str, model: type[M]) -> M:
		try:
			data = yaml.safe_load(raw)
		except yaml.YAMLError as exc:
			raise ConfigLoadError(name, f"invalid YAML: {exc}") from exc
		if not isinstance(data, dict):
			raise ConfigLoadError(name, "top level must be a mapping")
		try:
			return model.model_validate(data)
		except ValidationError as exc:
			raise ConfigLoadError(name, str(exc)) from exc


@lru_cache(maxsize=1)
def get_store() -> ConfigStore:
	settings = get_settings()
	return ConfigStore(settings.data_dir, use_cache=settings.use_config_cache)
