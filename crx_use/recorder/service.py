"""
CrxRecorder: recorder UI state mirrored from the remote host

State (visibility and recording mode) changes only when the host reports it
through `hide`, `show` and `modeChanged` events. The command methods merely
ask the host to change something; the host echoes the change back as an event
once it has actually happened.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from crx_use.channel.views import Channel, PageResolver
from crx_use.events import EventEmitter
from crx_use.recorder.views import Mode, ModeChangedEvent, ShowRecorderOptions

logger = logging.getLogger(__name__)


class CrxRecorder(EventEmitter):
	def __init__(self, channel: Channel, resolver: PageResolver):
		super().__init__()
		self._channel = channel
		self._resolver = resolver
		self._hidden: bool = True
		self._mode: str = 'none'

		self._channel.on('hide', self._on_hide)
		self._channel.on('show', self._on_show)
		self._channel.on('modeChanged', self._on_mode_changed)

	def _on_hide(self, *_: Any) -> None:
		self._hidden = True
		self.emit('hide')

	def _on_show(self, *_: Any) -> None:
		self._hidden = False
		self.emit('show')

	def _on_mode_changed(self, event: Union[ModeChangedEvent, Dict[str, Any]]) -> None:
		if not isinstance(event, ModeChangedEvent):
			event = ModeChangedEvent.model_validate(event)
		logger.debug(f'Recorder mode {self._mode} -> {event.mode}')
		self._mode = event.mode
		self.emit('modechanged', event)

	def mode(self) -> str:
		return self._mode

	def is_hidden(self) -> bool:
		return self._hidden

	async def set_mode(self, mode: Union[Mode, str]) -> None:
		await self._channel.send('setMode', {'mode': mode})

	async def show(self, options: Optional[Union[ShowRecorderOptions, Dict[str, Any]]] = None) -> None:
		if isinstance(options, ShowRecorderOptions):
			params = options.model_dump(exclude_none=True)
		else:
			params = dict(options or {})
		await self._channel.send('showRecorder', params)

	async def hide(self) -> None:
		await self._channel.send('hideRecorder', {})

	async def list(self, code: str) -> List[Any]:
		"""Ask the host which tests the given script contains."""
		result = await self._channel.send('list', {'code': code})
		return list((result or {}).get('tests', []))

	async def load(self, code: str) -> None:
		await self._channel.send('load', {'code': code})

	async def run(self, code: str, page: Optional[Any] = None) -> None:
		params: Dict[str, Any] = {'code': code}
		if page is not None:
			params['page'] = self._resolver.channel_of(page)
		await self._channel.send('run', params)
