import logging
from typing import Any, Dict, Optional

from crx_use.channel.views import Channel, PageResolver
from crx_use.events import EventEmitter

logger = logging.getLogger(__name__)


class ChannelOwner(EventEmitter):
	"""Client-side object bound to exactly one remote channel.

	Identity follows the channel: two owners are the same object only if they
	wrap the same channel.
	"""

	def __init__(self, channel: Channel, resolver: PageResolver):
		super().__init__()
		self._channel = channel
		self._resolver = resolver

	@property
	def guid(self) -> str:
		return getattr(self._channel, 'guid', '') or f'{type(self).__name__}@{id(self._channel):x}'

	@property
	def channel(self) -> Channel:
		return self._channel

	@property
	def initializer(self) -> Dict[str, Any]:
		return getattr(self._channel, 'initializer', None) or {}

	async def _send(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
		logger.debug(f'{self.guid} -> {method}')
		result = await self._channel.send(method, params if params is not None else {})
		return result or {}

	def _page_ref(self, page: Any) -> Any:
		return self._resolver.channel_of(page)

	def _page(self, ref: Any) -> Any:
		return self._resolver.resolve(ref)

	def __repr__(self) -> str:
		return f'<{type(self).__name__} guid={self.guid}>'
