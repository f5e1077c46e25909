from typing import Any, Optional


class CrxError(RuntimeError):
	"""Base class for errors raised by crx_use itself (not by the remote host)."""


class AlreadyStartedError(CrxError):
	def __init__(self, mode: str):
		self.mode = mode
		label = 'incognito crxApplication' if mode == 'incognito' else 'crxApplication'
		super().__init__(f'{label} is already started')


class SessionProbeError(CrxError):
	"""A cached session failed its liveness probe. Never surfaced to callers of start()."""

	def __init__(self, mode: str, cause: Optional[BaseException] = None, slot: Optional[Any] = None):
		self.mode = mode
		self.cause = cause
		# the slot that was probed; a reset only applies while it is still current
		self.slot = slot
		super().__init__(f'{mode} crxApplication is not usable: {cause!r}')
