from webdriver_factory.logging_config import setup_logging

logger = setup_logging()

from webdriver_factory.config import CONFIG, SYSTEM_PROPERTIES
from webdriver_factory.exceptions import (
	AccessibilityConfigurationError,
	BrowserCreationError,
	BrowserStackConfigurationError,
	WebDriverFactoryError,
	ZapConfigurationError,
)
from webdriver_factory.factory import BrowserFactory, BrowserKind
from webdriver_factory.flags import FeatureFlags
from webdriver_factory.singleton import SingletonDriver

__all__ = [
	'AccessibilityConfigurationError',
	'BrowserCreationError',
	'BrowserFactory',
	'BrowserKind',
	'BrowserStackConfigurationError',
	'CONFIG',
	'FeatureFlags',
	'SYSTEM_PROPERTIES',
	'SingletonDriver',
	'WebDriverFactoryError',
	'ZapConfigurationError',
]
