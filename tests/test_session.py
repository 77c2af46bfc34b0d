import pytest
import xapi

from conftest import feedback_event


def test_command_scenario(session, backend):

    session.command('Presentation Start')
    session.command('UserInterface Extensions Set', {'ConfigId': 'x'}, '<Extensions/>')

    # Every envelope is tagged with the JSON-RPC version alongside the id,
    # method and params.

    assert backend.sent[0] == {'jsonrpc': '2.0', 'id': '1', 'method': 'xCommand/Presentation/Start'}

    params = {'body': '<Extensions/>', 'ConfigId': 'x'}
    assert backend.sent[1] == {'jsonrpc': '2.0', 'id': '2', 'method': 'xCommand/UserInterface/Extensions/Set', 'params': params}


def test_command_forms(session, backend):

    session.command('Presentation/Start')
    session.command(['Presentation', 'Start'], {'PresentationSource': 1})
    session.command('Message Send', body='hello')

    assert backend.sent_methods() == ['xCommand/Presentation/Start'] * 2 + ['xCommand/Message/Send']
    assert backend.sent[1]['params'] == {'PresentationSource': 1}
    assert backend.sent[2]['params'] == {'body': 'hello'}


def test_command_params_not_modified(session, backend):

    params = {'ConfigId': 'x'}
    session.command('UserInterface Extensions Set', params, '<Extensions/>')
    assert params == {'ConfigId': 'x'}


def test_command_result(session, backend):

    future = session.command('Dial', {'Number': 'johndoe@example.com'})
    backend.respond({'status': 'OK', 'CallId': 3})

    assert future.result() == {'status': 'OK', 'CallId': 3}


def test_routing(session, backend):

    received = list()
    session.status.on('Audio Volume', received.append)

    future = session.status.get('Audio Volume')

    backend.deliver(feedback_event({'Status': {'Audio': {'Volume': 30}}, 'Id': 1}))
    assert received == [30]
    assert not future.done()

    backend.respond(30)
    assert future.result() == 30


def test_feedback_without_params(session, backend):

    received = list()
    session.status.on('Audio', received.append)
    subscribes = len(backend.sent)

    backend.deliver({'jsonrpc': '2.0', 'method': 'xFeedback/Event'})

    assert received == []
    assert len(backend.sent) == subscribes
    assert session.requests.pending == ('1',)


def test_get_error(session, backend):

    future = session.config.get('Audio Nope')

    error = {'code': 3, 'message': 'No match on Path argument'}
    backend.deliver({'jsonrpc': '2.0', 'id': backend.sent[-1]['id'], 'error': error})

    with pytest.raises(xapi.ProtocolError) as caught:
        future.result()

    assert caught.value.error is error


def test_signals(session, backend):

    seen = list()
    session.register('ready', lambda argument: seen.append(('ready', argument)))
    session.register('error', lambda argument: seen.append(('error', argument)))
    session.register('close', lambda: seen.append(('close',)))

    problem = OSError('connection reset')

    backend.emit('ready')
    backend.emit('error', problem)
    session.close()

    assert backend.closed
    assert seen == [('ready', session), ('error', problem), ('close',)]


def test_signal_callback_failure(session, backend):

    seen = list()

    def broken():
        raise RuntimeError('observer failure')

    session.register('close', broken)
    session.register('close', lambda: seen.append('close'))

    backend.emit('close')
    assert seen == ['close']


def test_unregister(session, backend):

    seen = list()
    callback = lambda: seen.append('close')

    session.register('close', callback)
    session.unregister('close', callback)
    session.unregister('close', callback)

    backend.emit('close')
    assert seen == []


def test_unknown_signal(session):

    with pytest.raises(ValueError):
        session.register('data', print)

    with pytest.raises(TypeError):
        session.register('ready', 'not callable')


def test_unknown_response(session, backend):

    unknown = list()
    session.register('unknown', unknown.append)

    backend.deliver({'jsonrpc': '2.0', 'id': '42', 'result': None})
    assert unknown == [{'jsonrpc': '2.0', 'id': '42', 'result': None}]


def test_transport_error_leaves_pending(session, backend):

    future = session.status.get('Audio Volume')
    backend.emit('error', OSError('gone'))

    assert not future.done()
    assert session.requests.pending == ('1',)


def test_sealed(session):

    with pytest.raises(AttributeError):
        session.config = None

    with pytest.raises(AttributeError):
        session.anything = 1

    with pytest.raises(AttributeError):
        del session.status


def test_unsealed(backend):

    session = xapi.Session(backend, seal=False)
    session.extra = 1
    assert session.extra == 1


def test_new_session_restarts_ids(backend):

    first = xapi.Session(backend)
    first.command('Presentation Start')

    second = xapi.Session(backend)
    second.command('Presentation Stop')

    assert [envelope['id'] for envelope in backend.sent] == ['1', '1']


def test_feedback_interceptor(backend):

    payloads = list()

    def interceptor(params, dispatch):
        payloads.append(params)
        if 'Id' not in params:
            dispatch()

    session = xapi.Session(backend, feedback_interceptor=interceptor)

    received = list()
    session.event.on('Message Send Text', received.append)

    backend.deliver(feedback_event({'Event': {'Message': {'Send': {'Text': 'hi'}}}, 'Id': 2}))
    backend.deliver(feedback_event({'Event': {'Message': {'Send': {'Text': 'there'}}}}))

    assert len(payloads) == 2
    assert received == ['there']


def test_execute(session, backend):

    session.execute('xFeedback/Subscribe', {'Query': ['Status', 'Audio']})
    assert backend.sent[-1] == {'jsonrpc': '2.0', 'id': '1', 'method': 'xFeedback/Subscribe', 'params': {'Query': ['Status', 'Audio']}}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
