"""Configuration system for webdriver-factory: environment variables and system properties."""

import logging
import os
import shlex
from collections.abc import Iterable, Iterator, MutableMapping
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION_PATH = Path(__file__).parent / 'assets' / 'page-capture-chrome-extension.crx'


def parse_bool(value: str | None) -> bool:
	"""Parse a flag value; absent or empty means false."""
	if not value:
		return False
	return value.strip().lower() in ('true', 'yes', '1')


class EnvConfig:
	"""Lazy-loading configuration class for environment variables."""

	@property
	def WEBDRIVER_FACTORY_LOGGING_LEVEL(self) -> str:
		return os.getenv('WEBDRIVER_FACTORY_LOGGING_LEVEL', 'info').lower()

	@property
	def WEBDRIVER_FACTORY_PROPERTIES(self) -> str:
		return os.getenv('WEBDRIVER_FACTORY_PROPERTIES', '')

	@property
	def WEBDRIVER_FACTORY_EXTENSION_PATH(self) -> Path:
		path = os.getenv('WEBDRIVER_FACTORY_EXTENSION_PATH')
		if not path:
			return DEFAULT_EXTENSION_PATH
		return Path(path).expanduser().resolve()


class FlatEnvConfig(BaseSettings):
	"""All environment variables in a flat namespace."""

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', case_sensitive=True, extra='allow')

	WEBDRIVER_FACTORY_LOGGING_LEVEL: str = Field(default='info')

	# System properties seed, e.g. "zap.proxy=true browserstack.os_version=Big_Sur"
	WEBDRIVER_FACTORY_PROPERTIES: str = Field(default='')

	WEBDRIVER_FACTORY_EXTENSION_PATH: str | None = Field(default=None)

	# Only read through FlatEnvConfig, so it can also come from .env
	WEBDRIVER_FACTORY_USE_WEBDRIVER_MANAGER: bool = Field(default=False)


class Config:
	"""Configuration class that merges all config sources.

	Re-reads environment variables on every access.
	"""

	def __getattr__(self, name: str) -> Any:
		if name.startswith('_'):
			raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

		env_config = EnvConfig()
		if hasattr(env_config, name):
			return getattr(env_config, name)

		flat_config = FlatEnvConfig()
		if hasattr(flat_config, name):
			return getattr(flat_config, name)

		raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")


CONFIG = Config()


def parse_property_pairs(pairs: Iterable[str]) -> dict[str, str]:
	"""Parse ``key=value`` strings (the shape of a JVM ``-Dkey=value`` flag)."""
	properties: dict[str, str] = {}
	for pair in pairs:
		key, sep, value = pair.partition('=')
		key = key.strip()
		if not sep or not key:
			raise ValueError(f'Invalid system property {pair!r}, expected key=value')
		properties[key] = value
	return properties


class SystemProperties(MutableMapping[str, str]):
	"""Process-wide dotted ``key=value`` settings such as ``zap.proxy`` or ``browserstack.key``.

	Seeded lazily from ``WEBDRIVER_FACTORY_PROPERTIES`` the first time it is read.
	Explicit assignments take precedence over the seed.
	"""

	def __init__(self, initial: dict[str, str] | None = None):
		self._values: dict[str, str] = dict(initial or {})
		self._seeded = initial is not None

	def _ensure_seeded(self) -> None:
		if self._seeded:
			return
		self._seeded = True
		raw = CONFIG.WEBDRIVER_FACTORY_PROPERTIES
		if raw:
			seed = parse_property_pairs(shlex.split(raw))
			logger.debug(f'Loaded {len(seed)} system properties from WEBDRIVER_FACTORY_PROPERTIES')
			for key, value in seed.items():
				self._values.setdefault(key, value)

	def __getitem__(self, key: str) -> str:
		self._ensure_seeded()
		return self._values[key]

	def __setitem__(self, key: str, value: str) -> None:
		self._ensure_seeded()
		self._values[key] = str(value)

	def __delitem__(self, key: str) -> None:
		self._ensure_seeded()
		del self._values[key]

	def __iter__(self) -> Iterator[str]:
		self._ensure_seeded()
		return iter(dict(self._values))

	def __len__(self) -> int:
		self._ensure_seeded()
		return len(self._values)

	def __repr__(self) -> str:
		return f'{self.__class__.__name__}({self._values!r})'

	def reset(self) -> None:
		"""Forget every property and re-read the environment seed on next access."""
		self._values.clear()
		self._seeded = False


SYSTEM_PROPERTIES = SystemProperties()
