import asyncio
import shutil

import pytest

from bandquote.config_store import ConfigStore
from bandquote.settings import PACKAGE_DATA_DIR


@pytest.fixture
def store():
	return ConfigStore(PACKAGE_DATA_DIR, use_cache=True)


@pytest.fixture
def data_dir(tmp_path):
	target = tmp_path / "data"
	shutil.copytree(PACKAGE_DATA_DIR, target)
	return target


@pytest.fixture
def colors(store):
	return asyncio.run(store.colors())


@pytest.fixture
def forbidden_words(store):
	return asyncio.run(store.forbidden_words())


def make_item(**overrides):
	item = {
		"productType": "bonfilet",
		"messageText": "TEAM BONFILET",
		"bodyColor": "black",
		"textColor": "white",
		"finish": "normal",
		"size": "12mm/202mm",
		"qty": 10,
		"options": [],
	}
	item.update(overrides)
	return item


def make_request(*items, country="US", **extra):
	payload = {"items": list(items) or [make_item()], "shipTo": {"country": country}}
	payload.update(extra)
	return payload
