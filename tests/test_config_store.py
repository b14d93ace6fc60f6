import asyncio

import pytest

from bandquote.config_store import ConfigStore
from bandquote.errors import ConfigLoadError


def _replace_tiers(data_dir, unit):
	path = data_dir / "pricing.yaml"
	text = path.read_text(encoding="utf-8")
	path.write_text(text.replace("{min: 1, max: 9, unit: 400}", f"{{min: 1, max: 9, unit: {unit}}}"), encoding="utf-8")


def test_packaged_data_loads(store):
	pricing = asyncio.run(store.pricing())
	colors = asyncio.run(store.colors())
	lead_times = asyncio.run(store.lead_times())
	words = asyncio.run(store.forbidden_words())

	assert pricing.tiers[0].min == 1
	assert pricing.fees.home_country == "JP"
	assert colors.palette("body")["navy"] == "#1E3A8A"
	assert lead_times.country_zone["US"].days == (3, 6)
	assert "NO" in lead_times.country_zone
	assert "nazi" in words
	assert not any(w.startswith("#") for w in words)


def test_cached_store_keeps_first_read(data_dir):
	store = ConfigStore(data_dir, use_cache=True)
	first = asyncio.run(store.pricing())
	_replace_tiers(data_dir, 999)
	assert asyncio.run(store.pricing()) is first
	store.clear()
	assert asyncio.run(store.pricing()).tiers[0].unit == 999


def test_uncached_store_sees_edits(data_dir):
	store = ConfigStore(data_dir, use_cache=False)
	assert asyncio.run(store.pricing()).tiers[0].unit == 400
	_replace_tiers(data_dir, 999)
	assert asyncio.run(store.pricing()).tiers[0].unit == 999


def test_missing_file(data_dir):
	(data_dir / "leadtime.yaml").unlink()
	store = ConfigStore(data_dir)
	with pytest.raises(ConfigLoadError) as exc_info:
		asyncio.run(store.lead_times())
	assert exc_info.value.resource == "leadtime.yaml"


def test_invalid_yaml(data_dir):
	(data_dir / "colors.yaml").write_text("body: [unclosed\n", encoding="utf-8")
	with pytest.raises(ConfigLoadError):
		asyncio.run(ConfigStore(data_dir).colors())


@pytest.mark.parametrize(
	"content",
	[
		"tiers: []\n",
		"tiers:\n  - {min: 10, max: 5, unit: 100}\n",
		"- just\n- a list\n",
	],
)
def test_malformed_pricing(data_dir, content):
	(data_dir / "pricing.yaml").write_text(content, encoding="utf-8")
	with pytest.raises(ConfigLoadError):
		asyncio.run(ConfigStore(data_dir).pricing())


def test_palette_must_cover_presets(data_dir):
	(data_dir / "colors.yaml").write_text(
		"body:\n  - {id: black, label: Black, hex: '#111827'}\ntext: []\n",
		encoding="utf-8",
	)
	with pytest.raises(ConfigLoadError):
		asyncio.run(ConfigStore(data_dir).colors())
