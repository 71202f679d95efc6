"""Feature flags resolved from system properties and environment variables."""

import os
from collections.abc import Mapping

from webdriver_factory.config import SYSTEM_PROPERTIES, parse_bool


class FeatureFlags:
	"""Feature toggles read on every access, never cached.

	``properties`` and ``environ`` default to the process-wide system properties and
	``os.environ``; pass explicit mappings to make a factory independent of global state.
	"""

	def __init__(self, properties: Mapping[str, str] | None = None, environ: Mapping[str, str] | None = None):
		self._properties = properties
		self._environ = environ

	@property
	def properties(self) -> Mapping[str, str]:
		return SYSTEM_PROPERTIES if self._properties is None else self._properties

	@property
	def environ(self) -> Mapping[str, str]:
		return os.environ if self._environ is None else self._environ

	@property
	def zap_proxy_enabled(self) -> bool:
		return self.properties.get('zap.proxy') == 'true'

	@property
	def zap_host(self) -> str | None:
		return self.environ.get('ZAP_HOST') or None

	@property
	def accessibility_test_enabled(self) -> bool:
		if 'ACCESSIBILITY_TEST' in self.environ:
			return parse_bool(self.environ['ACCESSIBILITY_TEST'])
		return parse_bool(self.properties.get('accessibility.test'))

	@property
	def disable_javascript(self) -> bool:
		return parse_bool(self.properties.get('disable.javascript'))

	def __repr__(self) -> str:
		return (
			f'FeatureFlags(zap_proxy_enabled={self.zap_proxy_enabled}, zap_host={self.zap_host!r}, '
			f'accessibility_test_enabled={self.accessibility_test_enabled}, disable_javascript={self.disable_javascript})'
		)
