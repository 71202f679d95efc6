import logging
import os
import re
from enum import Enum

from selenium import webdriver
from selenium.webdriver import ChromeOptions, EdgeOptions, FirefoxOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.common.proxy import Proxy
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.file_detector import LocalFileDetector
from selenium.webdriver.remote.webdriver import WebDriver
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from webdriver_factory.config import CONFIG
from webdriver_factory.exceptions import (
	AccessibilityConfigurationError,
	BrowserCreationError,
	BrowserStackConfigurationError,
	ZapConfigurationError,
)
from webdriver_factory.extension import load_accessibility_extension
from webdriver_factory.flags import FeatureFlags

logger = logging.getLogger(__name__)

DEFAULT_SELENIUM_HUB_URL = 'http://localhost:4444/wd/hub'
DEFAULT_ZAP_HOST = 'localhost:11000'
ZAP_HOST_PATTERN = re.compile(r'localhost:[0-9]+')

BROWSERSTACK_HUB = 'hub.browserstack.com/wd/hub'
BROWSERSTACK_PROPERTY_PREFIX = 'browserstack.'

# Chrome does not proxy requests to localhost unless the loopback bypass is removed
CHROME_ALLOW_LOCALHOST_PROXY = '<-loopback>'
FIREFOX_ALLOW_LOCALHOST_PROXY = 'network.proxy.allow_hijacking_localhost'

CHROME_DEFAULT_ARGS = [
	'start-maximized',
	# workaround for slow test duration in chrome 85 and higher
	'--use-cmd-decoder=validating',
	'--use-gl=desktop',
]
CHROME_HEADLESS_ARG = '--headless=new'
CHROME_DISABLE_JAVASCRIPT_PREFS = {'profile.managed_default_content_settings.javascript': 2}

ACCESSIBILITY_IN_HEADLESS_CHROME_NOT_SUPPORTED = 'Headless Chrome not supported with accessibility-assessment tests.'


class BrowserKind(str, Enum):
	CHROME = 'chrome'
	FIREFOX = 'firefox'
	EDGE = 'edge'
	REMOTE_CHROME = 'remote-chrome'
	REMOTE_FIREFOX = 'remote-firefox'
	REMOTE_EDGE = 'remote-edge'
	HEADLESS_CHROME = 'headless-chrome'
	BROWSERSTACK = 'browserstack'


def _accessibility_only_with_chrome(browser: str) -> AccessibilityConfigurationError:
	return AccessibilityConfigurationError(
		f'Failed to configure {browser} browser to run accessibility-assessment tests.'
		' The accessibility-assessment can only be configured to run with Chrome.'
	)


class BrowserFactory:
	"""Builds Selenium options from defaults, feature flags and caller overrides, and creates drivers from them.

	If custom options are passed they are used as the base instead of the library defaults; proxy
	and accessibility settings are still applied on top of them.
	"""

	def __init__(
		self,
		flags: FeatureFlags | None = None,
		selenium_hub_url: str = DEFAULT_SELENIUM_HUB_URL,
	):
		self.flags = flags or FeatureFlags()
		self.selenium_hub_url = selenium_hub_url

	# --- driver creation ---

	def create_driver_instance(
		self,
		browser_type: BrowserKind | str | None,
		custom_options: ArgOptions | None = None,
	) -> WebDriver:
		"""Return a WebDriver for ``browser_type``; raises BrowserCreationError if it is not set or not recognised."""
		if not browser_type:
			raise BrowserCreationError("'browser' property is not set, this is required to instantiate a Browser")
		try:
			kind = BrowserKind(browser_type)
		except ValueError:
			raise BrowserCreationError(
				f"'browser' property '{browser_type}' not supported by the webdriver-factory library."
			) from None

		logger.debug(f'Creating {kind.value} browser')
		match kind:
			case BrowserKind.CHROME:
				return self._chrome_instance(self.build_chrome_capabilities(custom_options))
			case BrowserKind.FIREFOX:
				return self._firefox_instance(self.build_firefox_capabilities(custom_options))
			case BrowserKind.EDGE:
				return self._edge_instance(self.build_edge_capabilities(custom_options))
			case BrowserKind.REMOTE_CHROME:
				return self._remote_instance(self.build_chrome_capabilities(custom_options))
			case BrowserKind.REMOTE_FIREFOX:
				return self._remote_instance(self.build_firefox_capabilities(custom_options))
			case BrowserKind.REMOTE_EDGE:
				return self._remote_instance(self.build_edge_capabilities(custom_options))
			case BrowserKind.HEADLESS_CHROME:
				return self._chrome_instance(self.build_headless_chrome_capabilities(custom_options))
			case BrowserKind.BROWSERSTACK:
				return self.create_browserstack_instance()

	def _chrome_instance(self, options: ChromeOptions) -> WebDriver:
		return webdriver.Chrome(options=options, service=self._chrome_service())

	def _firefox_instance(self, options: FirefoxOptions) -> WebDriver:
		"""Start Firefox with geckodriver logging silenced and the window maximised."""
		driver = webdriver.Firefox(options=options, service=self._firefox_service())
		driver.maximize_window()
		return driver

	def _edge_instance(self, options: EdgeOptions) -> WebDriver:
		return webdriver.Edge(options=options, service=self._edge_service())

	def _remote_instance(self, options: ArgOptions) -> WebDriver:
		driver = webdriver.Remote(command_executor=self.selenium_hub_url, options=options)
		# upload local files when typing file paths into remote file inputs
		driver.file_detector = LocalFileDetector()
		return driver

	def _chrome_service(self) -> ChromeService:
		if CONFIG.WEBDRIVER_FACTORY_USE_WEBDRIVER_MANAGER:
			return ChromeService(ChromeDriverManager().install())
		return ChromeService()

	def _firefox_service(self) -> FirefoxService:
		if CONFIG.WEBDRIVER_FACTORY_USE_WEBDRIVER_MANAGER:
			return FirefoxService(GeckoDriverManager().install(), log_output=os.devnull)
		return FirefoxService(log_output=os.devnull)

	def _edge_service(self) -> EdgeService:
		if CONFIG.WEBDRIVER_FACTORY_USE_WEBDRIVER_MANAGER:
			return EdgeService(EdgeChromiumDriverManager().install())
		return EdgeService()

	# --- capabilities ---

	def build_chrome_capabilities(self, custom_options: ChromeOptions | None = None) -> ChromeOptions:
		if custom_options is not None:
			options = self._expect_options(custom_options, ChromeOptions, 'chrome', 'ChromeOptions')
			self.apply_proxy_configuration(options)
			if self.flags.accessibility_test_enabled:
				self.add_accessibility_extension(options)
			return options

		options = ChromeOptions()
		self.apply_proxy_configuration(options)
		if self.flags.accessibility_test_enabled:
			self.add_accessibility_extension(options)
		for arg in CHROME_DEFAULT_ARGS:
			options.add_argument(arg)
		options.add_experimental_option('excludeSwitches', ['enable-automation'])
		if self.flags.disable_javascript:
			options.add_experimental_option('prefs', dict(CHROME_DISABLE_JAVASCRIPT_PREFS))
			logger.info("'disable.javascript' system property is set to: true. Disabling JavaScript.")
		return options

	def build_headless_chrome_capabilities(self, custom_options: ChromeOptions | None = None) -> ChromeOptions:
		# must fail before chrome is spawned
		if self.flags.accessibility_test_enabled:
			raise AccessibilityConfigurationError(ACCESSIBILITY_IN_HEADLESS_CHROME_NOT_SUPPORTED)
		options = self.build_chrome_capabilities(custom_options)
		options.add_argument(CHROME_HEADLESS_ARG)
		return options

	def build_firefox_capabilities(self, custom_options: FirefoxOptions | None = None) -> FirefoxOptions:
		if self.flags.accessibility_test_enabled:
			raise _accessibility_only_with_chrome('Firefox')

		if custom_options is not None:
			options = self._expect_options(custom_options, FirefoxOptions, 'firefox', 'FirefoxOptions')
			self.apply_proxy_configuration(options)
			return options

		options = FirefoxOptions()
		options.set_capability('acceptInsecureCerts', True)
		options.set_preference(FIREFOX_ALLOW_LOCALHOST_PROXY, True)
		self.apply_proxy_configuration(options)
		if self.flags.disable_javascript:
			options.set_preference('javascript.enabled', False)
			logger.info("'disable.javascript' system property is set to: true. Disabling JavaScript.")
		return options

	def build_edge_capabilities(self, custom_options: EdgeOptions | None = None) -> EdgeOptions:
		if self.flags.accessibility_test_enabled:
			raise _accessibility_only_with_chrome('Edge')

		if custom_options is not None:
			options = self._expect_options(custom_options, EdgeOptions, 'edge', 'EdgeOptions')
		else:
			options = EdgeOptions()
		self.apply_proxy_configuration(options)
		return options

	@staticmethod
	def _expect_options(custom_options: ArgOptions, expected: type, browser: str, expected_name: str):
		# every selenium options class is named Options
		if not isinstance(custom_options, expected):
			got = type(custom_options)
			raise BrowserCreationError(
				f'Custom options for {browser} must be {expected_name}, got {got.__module__}.{got.__qualname__}'
			)
		return custom_options

	def apply_proxy_configuration(self, options: ArgOptions) -> None:
		"""Configure the ZAP proxy on ``options``.

		Applied when ZAP_HOST is set (it must look like localhost:port) or when the
		``zap.proxy`` system property is ``true``; ZAP_HOST wins over the property.
		"""
		zap_host = self.flags.zap_host
		if zap_host is not None:
			if not ZAP_HOST_PATTERN.fullmatch(zap_host):
				raise ZapConfigurationError(
					'Failed to configure browser with ZAP proxy.'
					' Environment variable ZAP_HOST is not of the format localhost:portNumber.'
				)
			host = zap_host
		elif self.flags.zap_proxy_enabled:
			host = DEFAULT_ZAP_HOST
		else:
			return

		proxy = Proxy()
		proxy.http_proxy = host
		proxy.ssl_proxy = host
		if str(options.capabilities.get('browserName', '')).lower() == 'chrome':
			proxy.no_proxy = CHROME_ALLOW_LOCALHOST_PROXY
		options.set_capability('proxy', proxy.to_capabilities())
		options.set_capability('acceptInsecureCerts', True)
		logger.info(f'Zap Configuration Enabled: using {host}')

	def add_accessibility_extension(self, options: ChromeOptions) -> None:
		"""Install the page-capture extension used by accessibility-assessment tests.

		Raises AccessibilityConfigurationError when the options already run Chrome headless.
		"""
		if any('headless' in arg for arg in options.arguments):
			raise AccessibilityConfigurationError(ACCESSIBILITY_IN_HEADLESS_CHROME_NOT_SUPPORTED)
		options.add_encoded_extension(load_accessibility_extension())
		logger.info(f'Configured {options.capabilities.get("browserName")} browser to run accessibility-assessment tests.')

	# --- browserstack ---

	def create_browserstack_instance(self) -> WebDriver:
		"""Create a BrowserStack driver.

		Every non-empty ``browserstack.*`` system property is passed through as a capability,
		e.g. ``browserstack.os_version=Big_Sur`` becomes ``os version = 'Big Sur'``.
		"""
		hub_url = self.browserstack_hub_url()
		return webdriver.Remote(command_executor=hub_url, options=self.build_browserstack_capabilities())

	def browserstack_hub_url(self) -> str:
		username = self._required_property('browserstack.username')
		key = self._required_property('browserstack.key')
		return f'http://{username}:{key}@{BROWSERSTACK_HUB}'

	def build_browserstack_capabilities(self) -> ArgOptions:
		options = ArgOptions()
		options.set_capability('browserstack.debug', 'true')
		options.set_capability('browserstack.local', 'true')
		for name, value in self.flags.properties.items():
			if name.startswith(BROWSERSTACK_PROPERTY_PREFIX) and value != '':
				capability = name.removeprefix(BROWSERSTACK_PROPERTY_PREFIX).replace('_', ' ')
				options.set_capability(capability, value.replace('_', ' '))
		return options

	def _required_property(self, name: str) -> str:
		value = self.flags.properties.get(name)
		if not value:
			raise BrowserStackConfigurationError(name)
		return value
