""" The four addressable sections of the device namespace: commands,
    configurations, events and statuses. Each section is a thin facade over
    the session's request correlator and feedback dispatcher that applies
    its own path prefix before delegating.

    The capabilities are not the same for every section: a configuration can
    be read, written and listened to; a status can be read and listened to;
    an event can only be listened to. The operations themselves are the
    module-level functions below, shared by the section classes.
"""

import warnings

from . import node
from . import path as xpath
from . import rpc


def get(session, path):
    """ Fetch the value at the already-prefixed *path*.
    """

    params = dict()
    params['Path'] = path
    return session.execute(rpc.GET, params)



def set(session, path, value):
    """ Assign *value* to the already-prefixed *path*. Only scalar string or
        numeric values are accepted; anything else is rejected here rather
        than sent to the device.
    """

    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise TypeError('value must be a string or a number, not ' + type(value).__name__)

    params = dict()
    params['Path'] = path
    params['Value'] = value
    return session.execute(rpc.SET, params)



class Section:
    """ Common base class for the section types. The *prefix* is placed in
        front of every path issued through the section.
    """

    prefix = None

    def __init__(self, session):
        self.session = session


    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.prefix)


    def normalize(self, path):
        """ Return the normalized form of *path* including the prefix.
        """

        return xpath.prefixed(self.prefix, path)


    def node(self, path):
        """ Return a :class:`xapi.node.Node` for *path* within this section.
        """

        return node.Node(self, xpath.normalize(path))


    def _on(self, path, listener):
        return self.session.feedback.on(self.normalize(path), listener, owner=self)


    def _once(self, path, listener):
        return self.session.feedback.once(self.normalize(path), listener, owner=self)


    def _off(self):
        warnings.warn('off() is deprecated, use the registration handle from on() or once() instead', DeprecationWarning, stacklevel=3)
        self.session.feedback._off(owner=self)


# end of class Section



class Command(Section):
    """ Interface to device commands. Calling the section invokes a command:

        >>> session.command('Presentation Start', {'PresentationSource': 1})

        Commands are addressed through the method name rather than a path
        parameter, so there is no prefix.
    """

    def __call__(self, path, params=None, body=None):
        """ Invoke the command at *path* with the optional *params*. A
            multi-line *body*, required by some commands, is sent as the
            ``body`` parameter alongside the others.
        """

        method = rpc.command_method(path)

        if body is not None:
            merged = dict()
            merged['body'] = body
            if params is not None:
                merged.update(params)
            params = merged

        return self.session.execute(method, params)


# end of class Command



class Config(Section):
    """ Interface to device configurations.
    """

    prefix = 'Configuration'

    def get(self, path):
        """ Fetch the configuration value at *path*. Returns a future that
            resolves to the value.

            >>> session.config.get('Audio DefaultVolume').result()
            50
        """

        return get(self.session, self.normalize(path))


    def set(self, path, value):
        """ Set the configuration at *path* to *value*, which must be a
            string or a number.
        """

        return set(self.session, self.normalize(path), value)


    def on(self, path, listener):
        return self._on(path, listener)


    def once(self, path, listener):
        return self._once(path, listener)


    def off(self):
        """ Deactivate every listener registered through this section.

            .. deprecated::
                Use the registration returned by :func:`on` or :func:`once`.
        """

        self._off()


# end of class Config



class Event(Section):
    """ Interface to device events. Events carry no value that can be read
        or written, they can only be listened to.
    """

    prefix = 'Event'

    def on(self, path, listener):
        return self._on(path, listener)


    def once(self, path, listener):
        return self._once(path, listener)


    def off(self):
        self._off()


# end of class Event



class Status(Section):
    """ Interface to device statuses, which can be read and listened to but
        never set.
    """

    prefix = 'Status'

    def get(self, path):
        return get(self.session, self.normalize(path))


    def on(self, path, listener):
        return self._on(path, listener)


    def once(self, path, listener):
        return self._once(path, listener)


    def off(self):
        self._off()


# end of class Status


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
