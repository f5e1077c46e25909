import asyncio
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from crx_use.application.service import CrxApplication


class SessionMode(str, Enum):
	NORMAL = 'normal'
	INCOGNITO = 'incognito'

	@classmethod
	def from_incognito(cls, incognito: Optional[bool]) -> 'SessionMode':
		return cls.INCOGNITO if incognito else cls.NORMAL


class StartOptions(BaseModel):
	"""Start configuration forwarded to the host as-is.

	Only ``incognito`` is interpreted locally, to pick the session slot.
	"""

	model_config = ConfigDict(extra='allow')
	incognito: Optional[bool] = None
	deviceName: Optional[str] = None
	slowMo: Optional[Union[int, float]] = None
	contextOptions: Optional[Dict[str, Any]] = None

	@property
	def mode(self) -> SessionMode:
		return SessionMode.from_incognito(self.incognito)

	def to_params(self) -> Dict[str, Any]:
		params = self.model_dump(exclude_unset=True)
		params.update(self.model_extra or {})
		return params

	@classmethod
	def coerce(cls, options: Union['StartOptions', Dict[str, Any], None]) -> 'StartOptions':
		if isinstance(options, StartOptions):
			return options
		return cls.model_validate(options or {})


class SessionSlot:
	"""One mode's start operation: pending until the task settles, then ready."""

	def __init__(self, mode: SessionMode, task: 'asyncio.Task[CrxApplication]'):
		self.mode = mode
		self.task = task
		self.application: Optional[CrxApplication] = None

	@property
	def state(self) -> str:
		return 'ready' if self.application is not None else 'pending'

	def __repr__(self) -> str:
		return f'<SessionSlot mode={self.mode.value} state={self.state}>'
