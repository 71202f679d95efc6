import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from webdriver_factory.config import CONFIG


def setup_logging():
	log_type = CONFIG.WEBDRIVER_FACTORY_LOGGING_LEVEL

	# Check if handlers are already set up
	if logging.getLogger().hasHandlers():
		return logging.getLogger('webdriver_factory')

	root = logging.getLogger()
	root.handlers = []

	console = logging.StreamHandler(sys.stdout)
	console.setFormatter(logging.Formatter('%(levelname)-8s [%(name)s] %(message)s'))
	root.addHandler(console)

	if log_type == 'debug':
		root.setLevel(logging.DEBUG)
	elif log_type == 'warning':
		root.setLevel(logging.WARNING)
	else:
		root.setLevel(logging.INFO)

	webdriver_factory_logger = logging.getLogger('webdriver_factory')
	webdriver_factory_logger.propagate = False  # Don't propagate to root logger
	webdriver_factory_logger.addHandler(console)
	webdriver_factory_logger.setLevel(root.level)

	# Silence or adjust third-party loggers
	third_party_loggers = [
		'WDM',
		'selenium',
		'urllib3',
	]
	for logger_name in third_party_loggers:
		third_party = logging.getLogger(logger_name)
		third_party.setLevel(logging.ERROR)
		third_party.propagate = False

	return webdriver_factory_logger
