class WebDriverFactoryError(Exception):
	"""Base class for all webdriver-factory errors"""


class BrowserCreationError(WebDriverFactoryError):
	"""Error raised when the requested browser type is missing, unknown or given the wrong options"""


class BrowserStackConfigurationError(BrowserCreationError):
	"""Error raised when BrowserStack credentials are missing"""

	def __init__(self, property_name: str):
		super().__init__(f'{property_name} is required. Enter a valid {property_name.rsplit(".", 1)[-1]}')
		self.property_name = property_name


class ZapConfigurationError(WebDriverFactoryError):
	"""Error raised when ZAP_HOST is not of the format localhost:port"""


class AccessibilityConfigurationError(WebDriverFactoryError):
	"""Error raised when accessibility-assessment is combined with a browser or mode that cannot run it"""
