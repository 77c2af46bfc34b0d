""" Classes and methods implemented here implement the feedback aspects of a
    session: registering listeners on paths in the device namespace, keeping
    the device informed of those subscriptions, and routing inbound feedback
    notifications to every listener whose path they touch.

    A feedback notification does not name its path in a separate field; the
    path is the shape of the payload itself. A notification for the audio
    volume status looks like::

        {'Status': {'Audio': {'Volume': 50}}}

    which carries the paths ``Status``, ``Status Audio`` and ``Status Audio
    Volume``. A listener registered on any of those receives the part of the
    payload found at its path: ``{'Audio': {'Volume': 50}}``, ``{'Volume':
    50}`` and ``50`` respectively.
"""

import logging
import threading
import warnings

from . import path as xpath
from . import rpc

logger = logging.getLogger(__name__)


class Registration:
    """ A single listener registered on a single path. The registration is
        its own deactivation handle: calling it removes this listener, and
        only this listener, from the :class:`Feedback` instance that created
        it. Calling it again does nothing.

        :ivar path: The normalized path the listener is registered on.
        :ivar listener: The callable invoked with matching feedback.
        :ivar once: True if the registration removes itself on first use.
        :ivar subscription: The future for the subscribe request sent to the
            device; it resolves with the subscription description, including
            its ``Id``.
    """

    def __init__(self, feedback, path, listener, once=False, owner=None):

        self.feedback = feedback
        self.path = path
        self.listener = listener
        self.once = once
        self.owner = owner
        self.subscription = None
        self.active = True


    def __call__(self):
        self.feedback._remove(self)


    def __repr__(self):
        if self.once:
            kind = 'once'
        else:
            kind = 'on'

        status = 'active' if self.active else 'inactive'
        return "feedback.Registration(%s %s, %s)" % (kind, xpath.join(self.path), status)


    def off(self):
        """ Equivalent to calling the registration directly.
        """

        self()


# end of class Registration



class Group:
    """ A convenience container for several :class:`Registration` instances
        that should be deactivated together, for example everything a
        particular feature of an application listens to.
    """

    def __init__(self, registrations=()):
        self.registrations = list(registrations)


    def __iter__(self):
        return iter(tuple(self.registrations))


    def __len__(self):
        return len(self.registrations)


    def add(self, registration):
        if not callable(registration):
            raise TypeError('registration must be callable')

        self.registrations.append(registration)
        return self


    def remove(self, registration):
        """ Stop tracking *registration* without deactivating it.
        """

        try:
            self.registrations.remove(registration)
        except ValueError:
            pass

        return self


    def off(self):
        """ Deactivate every member of the group and empty it.
        """

        registrations = self.registrations
        self.registrations = list()

        for registration in registrations:
            registration()

        return self


# end of class Group



class Feedback:
    """ The feedback registry and dispatcher for one session. Subscribe and
        unsubscribe requests are issued through the :class:`xapi.request.Requests`
        instance provided as *requests*.

        An *interceptor*, if provided, is called as ``interceptor(params,
        dispatch)`` for every inbound notification; the notification only
        reaches the listeners when (and if) the interceptor calls
        ``dispatch()``.

        :ivar notify_current_value: Sent with every subscribe request; when
            True the device immediately sends feedback with the current value
            of the subscribed path.
    """

    notify_current_value = False

    def __init__(self, requests, interceptor=None):

        self.requests = requests
        self.interceptor = interceptor

        self._registrations = list()
        self._registrations_lock = threading.Lock()


    def _register(self, path, listener, once, owner):

        if not callable(listener):
            raise TypeError('listener must be callable')

        path = xpath.normalize(path)
        registration = Registration(self, path, listener, once, owner)

        with self._registrations_lock:
            self._registrations.append(registration)

        logger.info('new feedback listener on: %s', xpath.join(path))

        params = dict()
        params['Query'] = path
        params['NotifyCurrentValue'] = self.notify_current_value

        registration.subscription = self.requests.execute(rpc.SUBSCRIBE, params)
        return registration


    def _remove(self, registration):
        """ Remove *registration* from the registry and tell the device the
            subscription is no longer wanted. Returns True if this call did
            the removal, False if the registration was already inactive.
        """

        with self._registrations_lock:
            if registration.active == False:
                return False

            registration.active = False
            self._registrations.remove(registration)

        logger.info('removed feedback listener on: %s', xpath.join(registration.path))

        subscription = registration.subscription
        if subscription is not None:
            subscription.add_done_callback(self._unsubscribe)

        return True


    def _unsubscribe(self, subscription):
        """ Invoked once the subscribe request for a removed registration has
            completed. There is nothing to undo if the subscribe failed, or if
            the device did not assign the subscription an id.
        """

        if subscription.cancelled() or subscription.exception() is not None:
            return

        result = subscription.result()

        try:
            id = result['Id']
        except (KeyError, TypeError):
            logger.debug('subscription without an Id: %r', result)
            return

        params = dict()
        params['Id'] = id
        self.requests.execute(rpc.UNSUBSCRIBE, params)


    def on(self, path, listener, owner=None):
        """ Register *listener* to be called with every feedback notification
            touching *path* or anything below it. Returns the
            :class:`Registration`, which doubles as the deactivation handle.
        """

        return self._register(path, listener, False, owner)


    def once(self, path, listener, owner=None):
        """ As :func:`on`, but the registration removes itself just before
            the listener is called for the first time.
        """

        return self._register(path, listener, True, owner)


    def off(self, owner=None):
        """ Deactivate every registration, or only those created on behalf of
            *owner* if one is specified.

            .. deprecated::
                Use the :class:`Registration` returned from :func:`on` or
                :func:`once` instead.
        """

        warnings.warn('Feedback.off() is deprecated, use the registration handle instead', DeprecationWarning, stacklevel=2)
        self._off(owner)


    def _off(self, owner=None):

        with self._registrations_lock:
            registrations = tuple(self._registrations)

        for registration in registrations:
            if owner is None or registration.owner is owner:
                registration()


    def group(self, registrations=()):
        return Group(registrations)


    def registrations(self, owner=None):
        """ Return a tuple of the active registrations, in the order they were
            created, optionally limited to those created for *owner*.
        """

        with self._registrations_lock:
            registrations = tuple(self._registrations)

        if owner is None:
            return registrations

        return tuple(r for r in registrations if r.owner is owner)


    def dispatch(self, params):
        """ Deliver one inbound feedback notification, the ``params`` field of
            an ``xFeedback/Event`` envelope, to the registered listeners.
        """

        logger.debug('feedback: %r', params)

        if self.interceptor is None:
            self._deliver(params)
        else:
            self.interceptor(params, lambda: self._deliver(params))


    def _deliver(self, params):
        """ Invoke every matching listener in the order the registrations
            were created. The set of registrations considered is fixed when
            delivery begins; a registration deactivated by an earlier listener
            during this delivery is skipped.
        """

        with self._registrations_lock:
            registrations = tuple(self._registrations)

        for registration in registrations:
            if registration.active == False:
                continue

            values = resolve(params, registration.path)

            if len(values) == 0:
                continue

            if registration.once:
                if self._remove(registration) == False:
                    continue
                values = values[:1]

            for value in values:
                try:
                    registration.listener(value)
                except Exception:
                    logger.exception('feedback listener failed on %s', xpath.join(registration.path))


# end of class Feedback



def is_index(segment):
    """ A repetition index is an int, or a string of digits.
    """

    if isinstance(segment, bool):
        return False

    if isinstance(segment, int):
        return True

    return isinstance(segment, str) and segment.isdigit()



def descend(value, segment):
    """ Return a list of everything found one *segment* below *value*. A
        dictionary yields at most one match, its key compared without regard
        to case. A list is a repeated node: an index segment selects the
        elements whose ``id`` equals it, and a name segment is looked up in
        every element.
    """

    if isinstance(value, dict):
        for key in value:
            if xpath.same_segment(key, segment):
                return [value[key]]
        return []

    if isinstance(value, list):
        if is_index(segment):
            found = list()
            for element in value:
                if isinstance(element, dict) and 'id' in element:
                    if xpath.same_segment(element['id'], segment):
                        found.append(element)
            return found

        found = list()
        for element in value:
            found.extend(descend(element, segment))
        return found

    return []



def resolve(payload, path):
    """ Return a list of the values found at *path* within a feedback
        *payload*; an empty list means the payload does not carry the path.
    """

    values = [payload]

    for segment in path:
        found = list()
        for value in values:
            found.extend(descend(value, segment))

        values = found
        if len(values) == 0:
            break

    return values


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
