import logging

from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_factory.factory import BrowserFactory
from webdriver_factory.flags import FeatureFlags

logger = logging.getLogger(__name__)


class SingletonDriver:
	"""One shared driver per process, created from the ``browser`` system property."""

	_instance: WebDriver | None = None

	@classmethod
	def get_instance(cls, custom_options: ArgOptions | None = None, flags: FeatureFlags | None = None) -> WebDriver:
		if cls._instance is None:
			cls._instance = cls.initialise_browser(custom_options, flags)
		return cls._instance

	@classmethod
	def initialise_browser(cls, custom_options: ArgOptions | None = None, flags: FeatureFlags | None = None) -> WebDriver:
		factory = BrowserFactory(flags=flags)
		browser_type = factory.flags.properties.get('browser')
		instance = factory.create_driver_instance(browser_type, custom_options)
		cls._instance = instance
		return instance

	@classmethod
	def close_instance(cls) -> None:
		instance, cls._instance = cls._instance, None
		if instance is not None:
			logger.debug('Quitting singleton driver')
			instance.quit()
