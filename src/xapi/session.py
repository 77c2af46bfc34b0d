""" The :class:`Session` is the user-facing entry point: one session per
    backend connection, composing the request correlator and the feedback
    dispatcher behind the command, configuration, event and status sections.
"""

import logging

from . import backend as xbackend
from . import feedback
from . import request
from . import rpc
from . import section

logger = logging.getLogger(__name__)


READY = xbackend.READY
CLOSE = xbackend.CLOSE
ERROR = xbackend.ERROR
UNKNOWN = 'unknown'

signals = (READY, CLOSE, ERROR, UNKNOWN)


class Session:
    """ User-facing API towards a device. Requires a connected
        :class:`xapi.backend.Backend`; the session registers itself for the
        backend's signals as part of its initialization.

        Invoke a command:

        >>> session = xapi.Session(backend)
        >>> session.command('Dial', {'Number': 'johndoe@example.com'})

        Fetch and set a configuration:

        >>> session.config.get('Audio DefaultVolume').result()
        >>> session.config.set('Audio DefaultVolume', 100)

        Fetch a status, or listen to it:

        >>> session.status.get('Audio Volume').result()
        >>> registration = session.status.on('Audio Volume', print)
        >>> registration()

        Every operation returns a :class:`concurrent.futures.Future`
        immediately; nothing here blocks waiting for the device.

        The session relays the backend's ``ready``, ``close`` and ``error``
        signals to callbacks registered via :func:`register`, along with an
        ``unknown`` signal for responses that matched no pending request.

        A *feedback_interceptor* is passed on to :class:`xapi.feedback.Feedback`.
        With *seal* set, the default, the attributes of the session cannot be
        reassigned after construction.

        :ivar backend: The backend this session communicates through.
        :ivar requests: The :class:`xapi.request.Requests` correlator.
        :ivar feedback: The :class:`xapi.feedback.Feedback` dispatcher.
        :ivar command: The :class:`xapi.section.Command` section.
        :ivar config: The :class:`xapi.section.Config` section.
        :ivar event: The :class:`xapi.section.Event` section.
        :ivar status: The :class:`xapi.section.Status` section.
    """

    def __init__(self, backend, seal=True, feedback_interceptor=None):

        self.backend = backend
        self.requests = request.Requests(backend, self._unknown)
        self.feedback = feedback.Feedback(self.requests, feedback_interceptor)

        self.command = section.Command(self)
        self.config = section.Config(self)
        self.event = section.Event(self)
        self.status = section.Status(self)

        self._callbacks = dict()
        for signal in signals:
            self._callbacks[signal] = list()

        backend.register(xbackend.CLOSE, self._close)
        backend.register(xbackend.ERROR, self._error)
        backend.register(xbackend.READY, self._ready)
        backend.register(xbackend.DATA, self.handle_response)

        self._sealed = seal


    def __setattr__(self, name, value):
        if getattr(self, '_sealed', False):
            raise AttributeError('cannot assign to a sealed Session: ' + name)

        object.__setattr__(self, name, value)


    def __delattr__(self, name):
        if getattr(self, '_sealed', False):
            raise AttributeError('cannot delete from a sealed Session: ' + name)

        object.__delattr__(self, name)


    def __repr__(self):
        return "Session(%r)" % (self.backend,)


    def register(self, signal, callback):
        """ Invoke *callback* every time the session emits *signal*, one of
            ``ready`` (with the session as the argument), ``close``,
            ``error`` (with the backend's error), or ``unknown`` (with the
            unmatched response envelope). Returns the session.
        """

        if not callable(callback):
            raise TypeError('callback must be callable')

        try:
            callbacks = self._callbacks[signal]
        except KeyError:
            raise ValueError('unknown session signal: ' + repr(signal))

        callbacks.append(callback)
        return self


    def unregister(self, signal, callback):
        try:
            self._callbacks[signal].remove(callback)
        except (KeyError, ValueError):
            pass


    def _emit(self, signal, *args):

        for callback in tuple(self._callbacks[signal]):
            try:
                callback(*args)
            except Exception:
                logger.exception('%s callback failed', signal)


    def _close(self):
        self._emit(CLOSE)


    def _error(self, error):
        self._emit(ERROR, error)


    def _ready(self):
        self._emit(READY, self)


    def _unknown(self, response):
        self._emit(UNKNOWN, response)


    def close(self):
        """ Close the backend connection. Requests still pending are not
            completed; the caller is expected to treat them as abandoned.
        """

        self.backend.close()
        return self


    def execute(self, method, params=None):
        """ Execute an arbitrary request on the device, returning a future
            for the result. For example:

            >>> session.execute('xFeedback/Subscribe', {'Query': ['Status', 'Audio']})
        """

        return self.requests.execute(method, params)


    def handle_response(self, response):
        """ The single routing point for everything the backend receives:
            feedback notifications go to the dispatcher, all other envelopes
            are treated as responses to pending requests.
        """

        if rpc.is_feedback(response):
            self.feedback.dispatch(response.get('params', {}))
        else:
            self.requests.handle_response(response)


# end of class Session


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
