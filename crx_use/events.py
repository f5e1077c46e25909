"""
Minimal event emitter used by channel owners to re-emit protocol events.

Handlers may be plain callables or coroutine functions. Coroutine results are
scheduled on the running loop (fire-and-forget), the same way log payloads are
fanned out to subscribers elsewhere in the project.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Set, Tuple

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventEmitter:
	def __init__(self) -> None:
		# event -> [(handler, once)]
		self._listeners: Dict[str, List[Tuple[Handler, bool]]] = {}
		self._pending_tasks: Set[asyncio.Task] = set()

	def on(self, event: str, handler: Handler) -> 'EventEmitter':
		self._listeners.setdefault(event, []).append((handler, False))
		return self

	def once(self, event: str, handler: Handler) -> 'EventEmitter':
		self._listeners.setdefault(event, []).append((handler, True))
		return self

	def off(self, event: str, handler: Handler) -> 'EventEmitter':
		entries = self._listeners.get(event)
		if not entries:
			return self
		for index, (registered, _) in enumerate(entries):
			if registered == handler:
				del entries[index]
				break
		if not entries:
			self._listeners.pop(event, None)
		return self

	def listener_count(self, event: str) -> int:
		return len(self._listeners.get(event, []))

	def emit(self, event: str, *args: Any) -> bool:
		"""Call every handler registered for ``event`` in registration order.

		Returns True if at least one handler was registered.
		"""
		entries = self._listeners.get(event)
		if not entries:
			return False

		snapshot = list(entries)
		remaining = [entry for entry in entries if not entry[1]]
		if remaining:
			self._listeners[event] = remaining
		else:
			self._listeners.pop(event, None)

		for handler, _ in snapshot:
			try:
				result = handler(*args)
				if inspect.isawaitable(result):
					task = asyncio.ensure_future(result)
					self._pending_tasks.add(task)
					task.add_done_callback(self._pending_tasks.discard)
			except Exception as e:
				logger.exception(f"Handler for '{event}' failed: {e}")
		return True
