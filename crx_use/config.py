"""
crx_use configuration

Values are read from the environment once at import time. A `.env` file in
the project root is loaded first so local overrides work without exporting
variables by hand.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

root_dir = Path(__file__).parent.parent
env_path = root_dir / '.env'
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)


def _float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw.strip() == '':
		return default
	try:
		value = float(raw)
	except ValueError:
		logger.warning(f'Invalid {name}={raw!r}, falling back to {default}')
		return default
	if value <= 0:
		logger.warning(f'{name} must be positive, got {value}; falling back to {default}')
		return default
	return value


# Upper bound for the liveness probe run against an already-started session (seconds)
PROBE_TIMEOUT: float = _float_env('CRX_PROBE_TIMEOUT', 5.0)

# Upper bound for each best-effort close during a forced reset (seconds)
RESET_CLOSE_TIMEOUT: float = _float_env('CRX_RESET_CLOSE_TIMEOUT', 10.0)

LOG_LEVEL: str = os.getenv('CRX_LOG_LEVEL', 'INFO').upper()
LOG_DIR: str = os.getenv('CRX_LOG_DIR', os.path.join('tmp', 'logs'))

__all__ = [
	'PROBE_TIMEOUT',
	'RESET_CLOSE_TIMEOUT',
	'LOG_LEVEL',
	'LOG_DIR',
]
