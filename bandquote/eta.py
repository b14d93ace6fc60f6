from typing import Tuple

from .models import LeadTimeConfig

# Window added to production time for countries missing from the zone table.
FALLBACK_DAYS = (5, 10)


def estimate_eta(country: str, config: LeadTimeConfig) -> Tuple[int, int]:
	base = config.base_production_days
	entry = config.country_zone.get(country.strip().upper())
	if entry is None:
		return base + FALLBACK_DAYS[0], base + FALLBACK_DAYS[1]
	return base + entry.days[0], base + entry.days[1]
