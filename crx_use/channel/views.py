"""
Narrow interfaces of the collaborators crx_use consumes but does not implement.

- Channel: asynchronous request/response + event connection to the remote
  automation host. ``send`` may raise; any exception is a remote-call failure.
- PageResolver: turns a protocol-level page reference into the page handle the
  caller manipulates, and back.
- BrowsingContext: the page/browsing-context object owned by an application.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

EventHandler = Callable[..., Any]


@runtime_checkable
class Channel(Protocol):
	guid: str
	initializer: Dict[str, Any]

	async def send(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]: ...

	def on(self, event: str, handler: EventHandler) -> Any: ...


@runtime_checkable
class PageResolver(Protocol):
	def resolve(self, ref: Any) -> Any: ...

	def channel_of(self, page: Any) -> Any: ...


@runtime_checkable
class BrowsingContext(Protocol):
	async def pages(self) -> List[Any]: ...

	def on(self, event: str, handler: EventHandler) -> Any: ...
