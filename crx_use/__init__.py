"""
crx_use: client-side session controller for crx automation applications

- Crx: per-mode singleton sessions with liveness-checked recovery
- CrxApplication: attach/detach tabs, open pages, forward host events
- CrxRecorder: recorder visibility and mode mirrored from host events
"""

from .application.service import CrxApplication
from .application.views import AttachAllOptions, AttachedEvent, DetachedEvent, NewPageOptions
from .crx.service import Crx
from .crx.views import SessionMode, StartOptions
from .exceptions import AlreadyStartedError, CrxError, SessionProbeError
from .fs.service import CrxFs
from .recorder.service import CrxRecorder
from .recorder.views import Mode, ModeChangedEvent, ShowRecorderOptions

__version__ = '0.1.0'
__all__ = [
	'AlreadyStartedError',
	'AttachAllOptions',
	'AttachedEvent',
	'Crx',
	'CrxApplication',
	'CrxError',
	'CrxFs',
	'CrxRecorder',
	'DetachedEvent',
	'Mode',
	'ModeChangedEvent',
	'NewPageOptions',
	'SessionMode',
	'SessionProbeError',
	'ShowRecorderOptions',
	'StartOptions',
]
