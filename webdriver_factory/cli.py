import json
import logging
import sys
from collections import ChainMap
from typing import NoReturn

import click
from dotenv import load_dotenv

from webdriver_factory.config import SYSTEM_PROPERTIES, parse_property_pairs
from webdriver_factory.exceptions import WebDriverFactoryError
from webdriver_factory.factory import BrowserFactory, BrowserKind
from webdriver_factory.flags import FeatureFlags

logger = logging.getLogger('webdriver_factory.cli')

BROWSER_CHOICE = click.Choice([kind.value for kind in BrowserKind])


def _factory(properties: tuple[str, ...]) -> BrowserFactory:
	try:
		overrides = parse_property_pairs(properties)
	except ValueError as e:
		raise click.BadParameter(str(e), param_hint="'-D'")
	return BrowserFactory(flags=FeatureFlags(properties=ChainMap(overrides, SYSTEM_PROPERTIES)))


def _fail(e: Exception) -> NoReturn:
	logger.debug(f'{type(e).__name__}: {e}')
	click.echo(f'Error: {e}', err=True)
	sys.exit(1)


def build_capabilities(factory: BrowserFactory, kind: BrowserKind) -> dict:
	"""Capabilities the factory would hand to Selenium for ``kind``, without starting a browser."""
	match kind:
		case BrowserKind.CHROME | BrowserKind.REMOTE_CHROME:
			options = factory.build_chrome_capabilities()
		case BrowserKind.HEADLESS_CHROME:
			options = factory.build_headless_chrome_capabilities()
		case BrowserKind.FIREFOX | BrowserKind.REMOTE_FIREFOX:
			options = factory.build_firefox_capabilities()
		case BrowserKind.EDGE | BrowserKind.REMOTE_EDGE:
			options = factory.build_edge_capabilities()
		case BrowserKind.BROWSERSTACK:
			options = factory.build_browserstack_capabilities()
	return options.to_capabilities()


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(debug: bool = False):
	"""Build Selenium browser capabilities and drivers from system properties and environment variables."""
	load_dotenv()
	if debug:
		logging.getLogger('webdriver_factory').setLevel(logging.DEBUG)


@main.command()
@click.argument('browser', type=BROWSER_CHOICE)
@click.option('-D', 'properties', multiple=True, metavar='KEY=VALUE', help='Set a system property, e.g. -D zap.proxy=true')
def capabilities(browser: str, properties: tuple[str, ...]):
	"""Print the capabilities for BROWSER as JSON."""
	factory = _factory(properties)
	try:
		caps = build_capabilities(factory, BrowserKind(browser))
	except WebDriverFactoryError as e:
		_fail(e)
	click.echo(json.dumps(caps, indent=2, sort_keys=True))


@main.command()
@click.argument('browser', type=BROWSER_CHOICE)
@click.option('-D', 'properties', multiple=True, metavar='KEY=VALUE', help='Set a system property, e.g. -D zap.proxy=true')
@click.option('--url', type=str, help='Page to open once the browser is up')
def launch(browser: str, properties: tuple[str, ...], url: str | None):
	"""Start BROWSER, optionally open URL, and quit when Enter is pressed."""
	factory = _factory(properties)
	try:
		driver = factory.create_driver_instance(browser)
	except WebDriverFactoryError as e:
		_fail(e)

	try:
		if url:
			logger.info(f'Opening {url}')
			driver.get(url)
		click.prompt('Press Enter to quit', default='', show_default=False)
	finally:
		driver.quit()


if __name__ == '__main__':
	main()
