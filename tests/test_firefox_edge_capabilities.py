import pytest
from selenium.webdriver import ChromeOptions, EdgeOptions, FirefoxOptions

from webdriver_factory import AccessibilityConfigurationError, BrowserCreationError


def firefox_prefs(options: FirefoxOptions) -> dict:
	return options.to_capabilities().get('moz:firefoxOptions', {}).get('prefs', {})


class TestFirefox:
	def test_default_firefox_capabilities(self, make_factory):
		options = make_factory().build_firefox_capabilities()
		caps = options.to_capabilities()

		assert caps['browserName'] == 'firefox'
		assert caps['acceptInsecureCerts'] is True
		assert firefox_prefs(options)['network.proxy.allow_hijacking_localhost'] is True
		assert 'proxy' not in caps

	def test_disable_javascript_preference(self, make_factory):
		options = make_factory(properties={'disable.javascript': 'true'}).build_firefox_capabilities()

		assert firefox_prefs(options)['javascript.enabled'] is False

	def test_custom_options_get_proxy_but_no_defaults(self, make_factory):
		custom = FirefoxOptions()
		custom.add_argument('-headless')

		options = make_factory(properties={'zap.proxy': 'true'}).build_firefox_capabilities(custom)
		caps = options.to_capabilities()

		assert options is custom
		assert caps['moz:firefoxOptions']['args'] == ['-headless']
		assert 'network.proxy.allow_hijacking_localhost' not in firefox_prefs(options)
		assert caps['proxy']['httpProxy'] == 'localhost:11000'

	@pytest.mark.parametrize('custom', [None, FirefoxOptions()])
	def test_accessibility_rejected(self, make_factory, custom):
		with pytest.raises(AccessibilityConfigurationError) as exc_info:
			make_factory(properties={'accessibility.test': 'true'}).build_firefox_capabilities(custom)

		assert str(exc_info.value) == (
			'Failed to configure Firefox browser to run accessibility-assessment tests.'
			' The accessibility-assessment can only be configured to run with Chrome.'
		)

	def test_accessibility_checked_before_proxy(self, make_factory):
		factory = make_factory(properties={'accessibility.test': 'true'}, environ={'ZAP_HOST': 'localhost:abcd'})

		with pytest.raises(AccessibilityConfigurationError):
			factory.build_firefox_capabilities()

	def test_wrong_custom_options_type_is_rejected(self, make_factory):
		with pytest.raises(BrowserCreationError, match='must be FirefoxOptions, got selenium.webdriver.chrome.options.Options'):
			make_factory().build_firefox_capabilities(ChromeOptions())


class TestEdge:
	def test_default_edge_capabilities(self, make_factory):
		options = make_factory().build_edge_capabilities()
		caps = options.to_capabilities()

		assert caps['browserName'] == 'MicrosoftEdge'
		assert caps['ms:edgeOptions'].get('args', []) == []
		assert 'proxy' not in caps

	def test_zap_proxy(self, make_factory):
		options = make_factory(properties={'zap.proxy': 'true'}).build_edge_capabilities()

		proxy = options.to_capabilities()['proxy']
		assert proxy['httpProxy'] == 'localhost:11000'
		assert proxy['sslProxy'] == 'localhost:11000'
		assert 'noProxy' not in proxy

	def test_custom_options(self, make_factory):
		custom = EdgeOptions()
		custom.add_argument('--headless')

		options = make_factory(environ={'ZAP_HOST': 'localhost:1234'}).build_edge_capabilities(custom)
		caps = options.to_capabilities()

		assert caps['ms:edgeOptions']['args'] == ['--headless']
		assert caps['proxy']['httpProxy'] == 'localhost:1234'

	@pytest.mark.parametrize('custom', [None, EdgeOptions()])
	def test_accessibility_rejected(self, make_factory, custom):
		with pytest.raises(AccessibilityConfigurationError, match='Failed to configure Edge browser'):
			make_factory(environ={'ACCESSIBILITY_TEST': 'true'}).build_edge_capabilities(custom)
