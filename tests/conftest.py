import pytest
import xapi


class RecordingBackend(xapi.Backend):
    """ An in-memory backend: every outbound envelope is kept in the
        *sent* list, and tests push inbound envelopes with :func:`deliver`.
    """

    def __init__(self):
        xapi.Backend.__init__(self)
        self.sent = list()
        self.closed = False
        self.fail = None

    def execute(self, envelope):
        if self.fail is not None:
            raise self.fail
        self.sent.append(envelope)

    def close(self):
        self.closed = True
        self.emit('close')

    def deliver(self, envelope):
        self.emit('data', envelope)

    def respond(self, result, index=-1):
        """ Answer the request at *index* in the sent list with *result*.
        """

        request = self.sent[index]
        self.deliver({'jsonrpc': '2.0', 'id': request['id'], 'result': result})

    def sent_methods(self):
        return [envelope['method'] for envelope in self.sent]


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def session(backend):
    return xapi.Session(backend)


def feedback_event(params):
    return {'jsonrpc': '2.0', 'method': 'xFeedback/Event', 'params': params}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
