"""
Pytest configuration for webdriver-factory tests.

Every test starts with no system properties and none of the feature-flag
environment variables set, so flags only come from what the test provides.
"""

import logging

import pytest

from webdriver_factory import SYSTEM_PROPERTIES, BrowserFactory, FeatureFlags, SingletonDriver

FLAG_ENV_VARS = [
	'ZAP_HOST',
	'ACCESSIBILITY_TEST',
	'WEBDRIVER_FACTORY_PROPERTIES',
	'WEBDRIVER_FACTORY_EXTENSION_PATH',
	'WEBDRIVER_FACTORY_USE_WEBDRIVER_MANAGER',
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
	for name in FLAG_ENV_VARS:
		monkeypatch.delenv(name, raising=False)
	SYSTEM_PROPERTIES.reset()
	yield
	SYSTEM_PROPERTIES.reset()
	SingletonDriver._instance = None


@pytest.fixture(autouse=True)
def propagate_logs(monkeypatch):
	"""Let caplog see webdriver_factory records, which setup_logging keeps off the root logger."""
	monkeypatch.setattr(logging.getLogger('webdriver_factory'), 'propagate', True)


@pytest.fixture
def make_factory():
	"""Build a BrowserFactory whose flags come only from the given mappings."""

	def _make(properties: dict[str, str] | None = None, environ: dict[str, str] | None = None) -> BrowserFactory:
		return BrowserFactory(flags=FeatureFlags(properties=properties or {}, environ=environ or {}))

	return _make
