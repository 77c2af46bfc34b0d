""" Construction and encoding of the JSON-RPC envelopes exchanged with the
    device. The method names defined here are the protocol contract and are
    reproduced verbatim on the wire.
"""

from . import json
from . import path as xpath


COMMAND = 'xCommand'
GET = 'xGet'
SET = 'xSet'
SUBSCRIBE = 'xFeedback/Subscribe'
UNSUBSCRIBE = 'xFeedback/Unsubscribe'
FEEDBACK = 'xFeedback/Event'

version = '2.0'


class ProtocolError(Exception):
    """ Raised from a request future when the device answers with an error
        rather than a result. The *error* attribute is the error payload
        exactly as it arrived in the response envelope; nothing is
        interpreted or replaced.

        :ivar error: The raw error payload from the response.
        :ivar id: The request id the error arrived for, if known.
    """

    def __init__(self, error, id=None):

        self.error = error
        self.id = id

        try:
            text = error['message']
        except (KeyError, TypeError):
            text = repr(error)

        Exception.__init__(self, text)


    @property
    def code(self):
        """ The numeric error code, if the payload carries one.
        """

        try:
            return self.error['code']
        except (KeyError, TypeError):
            return None


# end of class ProtocolError



def create_request(id, method, params=None):
    """ Return a new request envelope. The *params* field is left out of the
        envelope entirely when it is None.
    """

    request = dict()
    request['jsonrpc'] = version
    request['id'] = id
    request['method'] = method

    if params is not None:
        request['params'] = params

    return request



def command_method(path):
    """ Return the method name used to invoke the command at *path*, for
        example ``xCommand/Presentation/Start``.
    """

    return COMMAND + '/' + xpath.join(path)



def is_feedback(envelope):
    """ Return True if *envelope* is an unsolicited feedback notification
        rather than the response to a request.
    """

    try:
        method = envelope['method']
    except (KeyError, TypeError):
        return False

    return method == FEEDBACK



def is_success(envelope):
    return 'result' in envelope



def encode(envelope):
    """ Return the JSON encoding of *envelope* as bytes, suitable for a
        backend to put on the wire.
    """

    return json.dumps(envelope)



def decode(data):
    """ Parse one inbound message. The result must be a JSON object; anything
        else is rejected with :class:`ValueError`, as there is no way to route
        it to either a pending request or the feedback dispatcher.
    """

    try:
        envelope = json.loads(data)
    except json.DecodeError as e:
        raise ValueError('malformed envelope: ' + str(e)) from e

    if not isinstance(envelope, dict):
        raise ValueError('envelope must be a JSON object, got ' + type(envelope).__name__)

    return envelope


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
