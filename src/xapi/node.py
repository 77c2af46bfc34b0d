""" A :class:`Node` is a path within one section, bound to that section so
    the path only has to be spelled out once:

    >>> volume = session.status.node('Audio Volume')
    >>> volume.get().result()
    50
    >>> registration = volume.on(print)

    Nodes are built explicitly, with :func:`Node.child` or the ``/``
    operator, rather than through attribute access:

    >>> audio = session.config.node('Audio')
    >>> (audio / 'DefaultVolume').set(50)
"""

from . import path as xpath


class Node:
    """ The *section* is one of the :mod:`xapi.section` instances belonging to
        a session; the *path* is the normalized path within that section,
        without the section prefix. Only the operations the section supports
        are usable; the others raise :class:`AttributeError`.
    """

    def __init__(self, section, path):

        self.section = section
        self.path = list(path)


    def __repr__(self):
        return "Node(%r, %r)" % (self.section, self.path)


    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.section is other.section and self.path == other.path


    def __hash__(self):
        return hash((id(self.section), tuple(self.path)))


    def __truediv__(self, segment):
        return self.child(segment)


    def _capability(self, name):

        try:
            return getattr(self.section, name)
        except AttributeError:
            raise AttributeError("%s does not support %s()" % (self.section.__class__.__name__, name)) from None


    def child(self, *segments):
        """ Return a new node further down the tree. Each of the *segments*
            may itself be a multi-segment path, such as ``'Input Connectors'``.
        """

        extended = list(self.path)
        for segment in segments:
            if isinstance(segment, int):
                extended.append(segment)
            else:
                extended.extend(xpath.normalize(segment))

        return Node(self.section, extended)


    def __call__(self, params=None, body=None):
        """ Invoke this node as a command.
        """

        if not callable(self.section):
            raise AttributeError("%s nodes cannot be invoked" % (self.section.__class__.__name__))

        return self.section(self.path, params, body)


    def get(self):
        return self._capability('get')(self.path)


    def set(self, value):
        return self._capability('set')(self.path, value)


    def on(self, listener):
        return self._capability('on')(self.path, listener)


    def once(self, listener):
        return self._capability('once')(self.path, listener)


# end of class Node


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
