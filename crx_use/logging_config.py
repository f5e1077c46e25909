"""Logging setup for hosts embedding crx_use.

Attaches a rotating file handler and a stream handler to the ``crx_use``
namespace logger. Safe to call more than once.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from crx_use import config

LOG_FORMAT = '%(asctime)s [%(levelname)s] [%(name)s] %(message)s'


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
	level_name = (level or config.LOG_LEVEL).upper()
	numeric_level = getattr(logging, level_name, logging.INFO)
	log_dir = log_dir or config.LOG_DIR

	ns_logger = logging.getLogger('crx_use')
	ns_logger.setLevel(numeric_level)
	formatter = logging.Formatter(LOG_FORMAT)

	try:
		os.makedirs(log_dir, exist_ok=True)
		log_path = os.path.abspath(os.path.join(log_dir, 'crx_use.log'))
		# Avoid duplicate handlers on repeated setup
		if not any(
			isinstance(h, RotatingFileHandler) and getattr(h, 'baseFilename', '') == log_path for h in ns_logger.handlers
		):
			file_handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=3)
			file_handler.setFormatter(formatter)
			file_handler.setLevel(numeric_level)
			ns_logger.addHandler(file_handler)
	except OSError as e:
		ns_logger.warning(f'File logging disabled, cannot use {log_dir}: {e}')

	if not any(type(h) is logging.StreamHandler for h in ns_logger.handlers):
		stream_handler = logging.StreamHandler()
		stream_handler.setFormatter(formatter)
		stream_handler.setLevel(numeric_level)
		ns_logger.addHandler(stream_handler)

	ns_logger.debug(f'Log setup complete. level={level_name} handlers={[type(h).__name__ for h in ns_logger.handlers]}')
	return ns_logger
