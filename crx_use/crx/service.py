"""
Crx: session controller for crx applications

Keeps at most one CrxApplication per SessionMode. Each mode owns a slot that
is either empty, pending (start in flight) or ready (session available).

Slot transitions happen only at four points:
- start() on an empty slot        -> pending
- the start call settles          -> ready, or empty on failure
- the session emits 'close'       -> empty
- force_reset()                   -> both slots empty

A start() on a non-empty slot probes the cached session. If the probe fails the
controller resets and retries the start exactly once.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from crx_use import config
from crx_use.application.service import CrxApplication
from crx_use.channel.owner import ChannelOwner
from crx_use.channel.views import Channel, PageResolver
from crx_use.crx.views import SessionMode, SessionSlot, StartOptions
from crx_use.exceptions import AlreadyStartedError, SessionProbeError
from crx_use.fs.service import CrxFs

logger = logging.getLogger(__name__)


class Crx(ChannelOwner):
	def __init__(
		self,
		channel: Channel,
		resolver: PageResolver,
		probe_timeout: Optional[float] = None,
		reset_close_timeout: Optional[float] = None,
	):
		super().__init__(channel, resolver)
		self.fs = CrxFs()
		self.probe_timeout = probe_timeout if probe_timeout is not None else config.PROBE_TIMEOUT
		self.reset_close_timeout = reset_close_timeout if reset_close_timeout is not None else config.RESET_CLOSE_TIMEOUT
		self._slots: Dict[SessionMode, Optional[SessionSlot]] = {mode: None for mode in SessionMode}

	# --- Public API ---

	async def start(self, options: Union[StartOptions, Dict[str, Any], None] = None) -> CrxApplication:
		"""Return the session for the requested mode, starting it if needed.

		Concurrent callers for the same mode share one session. If the cached
		session turns out to be dead, it is discarded and a fresh one started.
		"""
		start_options = StartOptions.coerce(options)
		mode = start_options.mode
		try:
			return await self._start_or_probe(mode, start_options)
		except SessionProbeError as e:
			if self._slots[mode] is e.slot:
				logger.warning(f'⚠️ Cached {mode.value} crxApplication is unusable ({e.cause!r}), resetting and retrying')
				await self.force_reset()
			else:
				# Another caller already replaced the dead session
				logger.info(f'Cached {mode.value} crxApplication is unusable ({e.cause!r}), slot already replaced, retrying')
			# Single retry: a second probe failure is terminal
			try:
				return await self._start_or_probe(mode, start_options)
			except SessionProbeError as retry_error:
				raise AlreadyStartedError(mode.value) from retry_error.cause

	async def get(
		self,
		options: Union[StartOptions, Dict[str, Any], bool, SessionMode, None] = None,
		incognito: Optional[bool] = None,
	) -> Optional[CrxApplication]:
		"""Return the session for a mode, or None if no start is pending or done.

		``options`` may be a SessionMode, an incognito flag, or start options.
		"""
		if incognito is not None:
			mode = SessionMode.from_incognito(incognito)
		elif isinstance(options, SessionMode):
			mode = options
		elif isinstance(options, str):
			mode = SessionMode(options)
		elif isinstance(options, (StartOptions, dict)) or options is None:
			mode = StartOptions.coerce(options).mode
		else:
			mode = SessionMode.from_incognito(bool(options))
		slot = self._slots[mode]
		if slot is None:
			return None
		try:
			return await asyncio.shield(slot.task)
		except asyncio.CancelledError:
			if slot.task.cancelled():
				return None
			raise
		except Exception as e:
			logger.debug(f'get({mode.value}): pending start failed: {e!r}')
			return None

	async def force_reset(self) -> None:
		"""Drop both slots, then best-effort close whatever they held."""
		old_slots = [slot for slot in self._slots.values() if slot is not None]
		# Clear first so new start() calls are unblocked right away
		for mode in SessionMode:
			self._slots[mode] = None

		if not old_slots:
			logger.debug('force_reset: no sessions to discard')
			return

		logger.info(f'force_reset: discarding {len(old_slots)} session(s)')
		for slot in old_slots:
			await self._discard(slot)

	def slot_state(self, mode: SessionMode) -> str:
		slot = self._slots[mode]
		return 'empty' if slot is None else slot.state

	def applications(self) -> List[CrxApplication]:
		return [slot.application for slot in self._slots.values() if slot is not None and slot.application is not None]

	# --- Internals ---

	async def _start_or_probe(self, mode: SessionMode, options: StartOptions) -> CrxApplication:
		slot = self._slots[mode]
		if slot is None:
			slot = self._open_slot(mode, options)
			return await asyncio.shield(slot.task)

		logger.debug(f'{mode.value} crxApplication is already started, probing existing session ({slot.state})')
		return await self._probe(slot)

	def _open_slot(self, mode: SessionMode, options: StartOptions) -> SessionSlot:
		# The slot must be non-empty before the first suspension point
		task = asyncio.ensure_future(self._start_remote(mode, options))
		slot = SessionSlot(mode, task)
		self._slots[mode] = slot
		task.add_done_callback(lambda t: self._on_start_settled(slot, t))
		return slot

	async def _start_remote(self, mode: SessionMode, options: StartOptions) -> CrxApplication:
		logger.info(f'Starting {mode.value} crxApplication')
		result = await self._send('start', options.to_params())
		application = CrxApplication(result['crxApplication'], self._resolver)
		logger.info(f'✅ {mode.value} crxApplication started: {application.guid}')
		return application

	def _on_start_settled(self, slot: SessionSlot, task: 'asyncio.Task[CrxApplication]') -> None:
		if task.cancelled():
			self._clear_slot(slot, 'start cancelled')
			return
		error = task.exception()
		if error is not None:
			logger.error(f'❌ Failed to start {slot.mode.value} crxApplication: {error!r}')
			self._clear_slot(slot, 'start failed')
			return

		application = task.result()
		slot.application = application
		if application.is_closed:
			self._clear_slot(slot, 'closed during start')
			return
		application.once('close', lambda *_: self._clear_slot(slot, 'session closed'))

	def _clear_slot(self, slot: SessionSlot, reason: str) -> None:
		# A reset may already have replaced this slot with a newer one
		if self._slots[slot.mode] is slot:
			self._slots[slot.mode] = None
			logger.info(f'{slot.mode.value} slot cleared: {reason}')

	async def _probe(self, slot: SessionSlot) -> CrxApplication:
		try:
			application = await asyncio.shield(slot.task)
			await asyncio.wait_for(application.pages(), timeout=self.probe_timeout)
		except asyncio.CancelledError:
			if slot.task.cancelled():
				raise SessionProbeError(slot.mode.value, asyncio.CancelledError(), slot)
			raise
		except Exception as e:
			raise SessionProbeError(slot.mode.value, e, slot) from e
		logger.debug(f'Reusing {slot.mode.value} crxApplication {application.guid}')
		return application

	async def _discard(self, slot: SessionSlot) -> None:
		try:
			application = await asyncio.wait_for(asyncio.shield(slot.task), timeout=self.reset_close_timeout)
		except asyncio.TimeoutError:
			logger.debug(f'force_reset: {slot.mode.value} start still in flight, closing it once it settles')
			slot.task.add_done_callback(self._close_orphan)
			return
		except asyncio.CancelledError:
			if not slot.task.cancelled():
				raise
			return
		except Exception as e:
			logger.debug(f'force_reset: {slot.mode.value} start never produced a session: {e!r}')
			return
		await self._quiet_close(application)

	def _close_orphan(self, task: 'asyncio.Task[CrxApplication]') -> None:
		if task.cancelled() or task.exception() is not None:
			return
		orphan = asyncio.ensure_future(self._quiet_close(task.result()))
		self._pending_tasks.add(orphan)
		orphan.add_done_callback(self._pending_tasks.discard)

	async def _quiet_close(self, application: CrxApplication) -> None:
		try:
			await asyncio.wait_for(application.close(), timeout=self.reset_close_timeout)
			logger.debug(f'force_reset: closed crxApplication {application.guid}')
		except Exception as e:
			logger.debug(f'force_reset: ignoring close failure for {application.guid}: {e!r}')
