""" Classes and methods implemented here implement the request/response
    correlation aspects of a session: every outbound request gets a locally
    unique id, and the response carrying that id completes the future that
    was handed back to the caller.
"""

import concurrent.futures
import itertools
import logging
import threading

from . import rpc

logger = logging.getLogger(__name__)


class Requests:
    """ Issue requests through a :class:`xapi.backend.Backend` and match the
        responses to them. The id counter starts at 1 and is owned by this
        instance; a new :class:`Requests` (in practice, a new session) is the
        only way to start over.

        Requests that never receive a response stay pending forever. Nothing
        here expires them; a caller that needs a deadline should use
        ``future.result(timeout)``, and :attr:`pending` lists whatever is
        still outstanding.

        The optional *on_unknown* callable is invoked with any response
        envelope whose id does not match a pending request.
    """

    def __init__(self, backend, on_unknown=None):

        self.backend = backend
        self.on_unknown = on_unknown

        self._id_ticker = itertools.count(1)
        self._pending = dict()
        self._pending_lock = threading.Lock()


    @property
    def pending(self):
        """ A tuple of the ids of all requests still awaiting a response, in
            the order they were issued.
        """

        with self._pending_lock:
            return tuple(self._pending.keys())


    def _id_next(self):
        """ Return the next request id. The counter advances even if the
            request that consumes the id is never delivered.
        """

        return str(next(self._id_ticker))


    def execute(self, method, params=None):
        """ Send a request for *method* with the optional *params* dictionary,
            returning a :class:`concurrent.futures.Future` without waiting for
            the response. The future resolves with the ``result`` field of the
            matching response, or raises :class:`xapi.rpc.ProtocolError` if
            the response carries an ``error`` instead.
        """

        id = self._id_next()
        request = rpc.create_request(id, method, params)
        future = concurrent.futures.Future()

        # The pending entry has to exist before the backend sees the request;
        # a backend reading on another thread could otherwise deliver the
        # response before there is anything to deliver it to.

        with self._pending_lock:
            self._pending[id] = future

        logger.debug('request: %r', request)

        try:
            self.backend.execute(request)
        except Exception as e:
            with self._pending_lock:
                self._pending.pop(id, None)
            future.set_exception(e)

        return future


    def handle_response(self, response):
        """ Complete the pending request matching the id in the *response*
            envelope. Responses for ids that are not pending, such as a late
            or duplicated delivery, are dropped without raising.
        """

        id = response.get('id')

        with self._pending_lock:
            future = self._pending.pop(id, None)

        if future is None:
            logger.debug('no pending request for response: %r', response)
            if self.on_unknown is not None:
                self.on_unknown(response)
            return

        # A caller is free to cancel the future it was handed; the response
        # still consumes the pending entry.

        if future.cancelled():
            return

        # A cancel from another thread can still land between the check above
        # and the completion below.

        try:
            if rpc.is_success(response):
                logger.debug('result: %r', response)
                future.set_result(response['result'])
            else:
                logger.debug('error: %r', response)
                future.set_exception(rpc.ProtocolError(response.get('error'), id))
        except concurrent.futures.InvalidStateError:
            logger.debug('request %s cancelled before its response arrived', id)


# end of class Requests


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
