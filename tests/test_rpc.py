import pytest
import xapi


def test_create_request():

    request = xapi.rpc.create_request('1', 'xGet', {'Path': ['Status', 'Audio']})
    assert request == {'jsonrpc': '2.0', 'id': '1', 'method': 'xGet', 'params': {'Path': ['Status', 'Audio']}}

    request = xapi.rpc.create_request('2', 'xCommand/Presentation/Start')
    assert 'params' not in request


def test_command_method():

    assert xapi.rpc.command_method('Presentation Start') == 'xCommand/Presentation/Start'
    assert xapi.rpc.command_method(['Dial']) == 'xCommand/Dial'


def test_is_feedback():

    assert xapi.rpc.is_feedback({'method': 'xFeedback/Event', 'params': {}})
    assert not xapi.rpc.is_feedback({'id': '1', 'result': {}})
    assert not xapi.rpc.is_feedback({'method': 'xCommand/Dial'})


def test_encode_and_decode():

    envelope = xapi.rpc.create_request('7', 'xSet', {'Path': ['Configuration', 'Audio', 'DefaultVolume'], 'Value': 50})

    encoded = xapi.rpc.encode(envelope)
    assert isinstance(encoded, bytes)

    assert xapi.rpc.decode(encoded) == envelope
    assert xapi.rpc.decode(encoded.decode()) == envelope


def test_decode_rejects():

    with pytest.raises(ValueError):
        xapi.rpc.decode(b'[1, 2, 3]')

    with pytest.raises(ValueError):
        xapi.rpc.decode(b'{"id": ')


def test_protocol_error():

    payload = {'code': 3, 'message': 'No match on address expression'}
    error = xapi.ProtocolError(payload, '5')

    assert error.error is payload
    assert error.id == '5'
    assert error.code == 3
    assert str(error) == 'No match on address expression'

    error = xapi.ProtocolError('just a string')
    assert error.error == 'just a string'
    assert error.code is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
