"""
CrxApplication: one running automation session

Owns exactly one browsing context and one recorder. The remote host decides
which tabs are attached; this class only issues the requests and re-emits the
host's notifications:

- attached  -> AttachedEvent(tabId, page)
- detached  -> DetachedEvent(tabId)
- close     -> emitted when the owned context closes
"""

import logging
from typing import Any, Dict, List, Optional, Union

from crx_use.application.views import AttachAllOptions, AttachedEvent, DetachedEvent, NewPageOptions
from crx_use.channel.owner import ChannelOwner
from crx_use.channel.views import BrowsingContext, Channel, PageResolver
from crx_use.recorder.service import CrxRecorder

logger = logging.getLogger(__name__)


class CrxApplication(ChannelOwner):
	def __init__(self, channel: Channel, resolver: PageResolver, context: Optional[BrowsingContext] = None):
		super().__init__(channel, resolver)
		if context is None:
			context = resolver.resolve(self.initializer.get('context'))
		if context is None:
			raise ValueError(f'{self.guid}: crxApplication has no browsing context')
		self._context: BrowsingContext = context
		self.recorder = CrxRecorder(channel, resolver)
		self._closed = False

		self._channel.on('attached', self._on_attached)
		self._channel.on('detached', self._on_detached)
		self._context.on('close', self._on_context_close)

	def _on_attached(self, event: Dict[str, Any]) -> None:
		attached = AttachedEvent(tabId=event['tabId'], page=self._page(event['page']))
		logger.debug(f'{self.guid}: tab {attached.tabId} attached')
		self.emit('attached', attached)

	def _on_detached(self, event: Dict[str, Any]) -> None:
		detached = DetachedEvent(tabId=event['tabId'])
		logger.debug(f'{self.guid}: tab {detached.tabId} detached')
		self.emit('detached', detached)

	def _on_context_close(self, *_: Any) -> None:
		self._closed = True
		logger.info(f'{self.guid}: browsing context closed')
		self.emit('close')

	@property
	def is_closed(self) -> bool:
		return self._closed

	def context(self) -> BrowsingContext:
		return self._context

	async def pages(self) -> List[Any]:
		return list(await self._context.pages())

	async def attach(self, tab_id: int) -> Any:
		result = await self._send('attach', {'tabId': tab_id})
		return self._page(result['page'])

	async def attach_all(self, options: Optional[Union[AttachAllOptions, Dict[str, Any]]] = None) -> List[Any]:
		if not isinstance(options, AttachAllOptions):
			options = AttachAllOptions.model_validate(options or {})
		result = await self._send('attachAll', options.to_params())
		return [self._page(ref) for ref in result.get('pages', [])]

	async def detach(self, target: Union[int, Any]) -> None:
		"""Detach by tab id or by page handle."""
		await self._send('detach', self._detach_params(target))

	def _detach_params(self, target: Union[int, Any]) -> Dict[str, Any]:
		# bool is an int subclass but never a tab id
		if isinstance(target, int) and not isinstance(target, bool):
			return {'tabId': target}
		if target is None or isinstance(target, bool):
			raise TypeError(f'detach() expects a tab id or a page, got {target!r}')
		return {'page': self._page_ref(target)}

	async def detach_all(self) -> None:
		await self._send('detachAll')

	async def new_page(self, options: Optional[Union[NewPageOptions, Dict[str, Any]]] = None) -> Any:
		if isinstance(options, NewPageOptions):
			params = options.model_dump(exclude_none=True)
		else:
			params = dict(options or {})
		result = await self._send('newPage', params)
		return self._page(result['page'])

	async def close(self) -> None:
		logger.info(f'{self.guid}: closing')
		await self._send('close')
