import asyncio
import itertools
from typing import Any, Callable, Dict, List, Optional

import pytest

from crx_use.crx.service import Crx

_ids = itertools.count(1)


class FakePage:
    def __init__(self, ref: str):
        self.ref = ref

    def __repr__(self):
        return f'<FakePage {self.ref}>'


class FakeResolver:
    """Maps protocol refs to client objects (pages, contexts) and back."""

    def __init__(self):
        self.objects: Dict[str, Any] = {}

    def register(self, ref: str, obj: Any) -> Any:
        self.objects[ref] = obj
        return obj

    def page(self, ref: str) -> FakePage:
        return self.objects.setdefault(ref, FakePage(ref))

    def resolve(self, ref):
        if ref is None:
            return None
        if ref not in self.objects:
            return self.page(ref)
        return self.objects[ref]

    def channel_of(self, page):
        return page.ref


class FakeChannel:
    def __init__(self, guid: str, initializer: Optional[dict] = None):
        self.guid = guid
        self.initializer = initializer or {}
        self.handlers: Dict[str, List[Callable]] = {}
        self.calls: List[tuple] = []
        self.responses: Dict[str, Any] = {}
        self.broken = False

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def fire(self, event, payload=None):
        for handler in list(self.handlers.get(event, [])):
            if payload is None:
                handler()
            else:
                handler(payload)

    def calls_for(self, method):
        return [params for name, params in self.calls if name == method]

    async def send(self, method, params=None):
        self.calls.append((method, params))
        await asyncio.sleep(0)
        if self.broken:
            raise ConnectionError(f'{self.guid}: channel closed')
        response = self.responses.get(method)
        if callable(response):
            response = response(params)
            if asyncio.iscoroutine(response):
                response = await response
        if isinstance(response, BaseException):
            raise response
        return response or {}


class FakeContext:
    def __init__(self, guid: str):
        self.guid = guid
        self.handlers: Dict[str, List[Callable]] = {}
        self.page_list: List[FakePage] = []
        self.broken = False
        self.hang = False
        self.pages_calls = 0
        # one gate per pages() call, consumed in call order
        self.pages_gates: List[asyncio.Event] = []

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def fire_close(self):
        for handler in list(self.handlers.get('close', [])):
            handler()

    async def pages(self):
        self.pages_calls += 1
        gate = self.pages_gates.pop(0) if self.pages_gates else None
        await asyncio.sleep(0)
        if gate is not None:
            await gate.wait()
        if self.hang:
            await asyncio.Event().wait()
        if self.broken:
            raise ConnectionError(f'{self.guid}: target closed')
        return list(self.page_list)


class FakeHost:
    """Remote automation host: answers `start` with fresh application channels."""

    def __init__(self, resolver: FakeResolver):
        self.resolver = resolver
        self.channel = FakeChannel('crx@1')
        self.channel.responses['start'] = self._start
        self.apps: List[FakeChannel] = []
        self.contexts: List[FakeContext] = []
        self.start_gate: Optional[asyncio.Event] = None
        self.start_errors: List[BaseException] = []
        self.close_errors: Dict[str, BaseException] = {}

    @property
    def start_calls(self):
        return self.channel.calls_for('start')

    async def _start(self, params):
        if self.start_gate is not None:
            await self.start_gate.wait()
        if self.start_errors:
            raise self.start_errors.pop(0)
        n = next(_ids)
        context = self.resolver.register(f'context@{n}', FakeContext(f'context@{n}'))
        app = FakeChannel(f'crxApplication@{n}', {'context': f'context@{n}'})
        app.responses['close'] = lambda _params, app=app, context=context: self._close(app, context)
        self.apps.append(app)
        self.contexts.append(context)
        return {'crxApplication': app}

    def _close(self, app, context):
        error = self.close_errors.get(app.guid)
        if error is not None:
            return error
        context.fire_close()
        return {}

    def kill(self, index: int):
        """Break an application's connection without emitting close."""
        self.apps[index].broken = True
        self.contexts[index].broken = True


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def host(resolver):
    return FakeHost(resolver)


@pytest.fixture
def crx(host, resolver):
    return Crx(host.channel, resolver, probe_timeout=0.5, reset_close_timeout=0.5)
