import pytest

from crx_use.recorder.service import CrxRecorder
from crx_use.recorder.views import ModeChangedEvent, ShowRecorderOptions

from conftest import FakeChannel


@pytest.fixture
def channel():
    return FakeChannel('crxApplication@rec')


@pytest.fixture
def recorder(channel, resolver):
    return CrxRecorder(channel, resolver)


def test_initial_state(recorder):
    assert recorder.is_hidden() is True
    assert recorder.mode() == 'none'


@pytest.mark.asyncio
async def test_commands_do_not_change_local_state(recorder, channel):
    await recorder.show()
    assert recorder.is_hidden() is True

    await recorder.set_mode('recording')
    assert recorder.mode() == 'none'

    channel.fire('show')
    assert recorder.is_hidden() is False

    await recorder.hide()
    assert recorder.is_hidden() is False

    channel.fire('hide')
    assert recorder.is_hidden() is True

    assert channel.calls == [('showRecorder', {}), ('setMode', {'mode': 'recording'}), ('hideRecorder', {})]


def test_events_are_reemitted(recorder, channel):
    seen = []
    recorder.on('show', lambda: seen.append('show'))
    recorder.on('hide', lambda: seen.append('hide'))
    recorder.on('modechanged', lambda event: seen.append(event))

    channel.fire('show')
    channel.fire('modeChanged', {'mode': 'inspecting'})
    channel.fire('hide')

    assert seen == ['show', ModeChangedEvent(mode='inspecting'), 'hide']
    assert recorder.mode() == 'inspecting'


@pytest.mark.asyncio
async def test_show_options(recorder, channel):
    await recorder.show(ShowRecorderOptions(mode='recording', window={'type': 'sidepanel'}))
    await recorder.show({'language': 'python'})

    assert channel.calls_for('showRecorder') == [
        {'mode': 'recording', 'window': {'type': 'sidepanel'}},
        {'language': 'python'},
    ]


@pytest.mark.asyncio
async def test_list_load_and_run(recorder, channel, resolver):
    channel.responses['list'] = {'tests': [{'title': 'login works'}]}

    tests = await recorder.list('test("login works", async () => {})')
    await recorder.load('code')
    await recorder.run('code')
    await recorder.run('code', resolver.page('page@9'))

    assert tests == [{'title': 'login works'}]
    assert channel.calls_for('load') == [{'code': 'code'}]
    assert channel.calls_for('run') == [{'code': 'code'}, {'code': 'code', 'page': 'page@9'}]
    assert recorder.mode() == 'none'


def test_unlisted_mode_from_host_is_accepted(recorder, channel):
    seen = []
    recorder.on('modechanged', seen.append)

    channel.fire('modeChanged', {'mode': 'recording-assertions'})

    assert recorder.mode() == 'recording-assertions'
    assert seen == [ModeChangedEvent(mode='recording-assertions')]
