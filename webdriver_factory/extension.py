"""The page-capture Chrome extension used by accessibility-assessment tests."""

import base64
import logging
from functools import cache
from pathlib import Path

from webdriver_factory.config import CONFIG

logger = logging.getLogger(__name__)


@cache
def _read_encoded(path: Path) -> str:
	data = path.read_bytes()
	logger.debug(f'Loaded accessibility extension ({len(data)} bytes) from {path}')
	return base64.b64encode(data).decode('ascii')


def load_accessibility_extension(path: Path | None = None) -> str:
	"""Return the packaged extension as the base64 string Chrome expects in its extension list.

	The .crx asset is shipped with the package; set WEBDRIVER_FACTORY_EXTENSION_PATH to use another build.
	"""
	return _read_encoded(path or CONFIG.WEBDRIVER_FACTORY_EXTENSION_PATH)
