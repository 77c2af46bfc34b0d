""" Routines for handling paths into the device namespace. A path is an
    ordered list of segments, such as ``['Audio', 'Volume']``; a segment is
    either a node name or a 1-based repetition index. Callers may express a
    path as a space delimited string, a slash delimited string, or a
    sequence of segments, and all three forms normalize to the same list.
"""


def normalize(path):
    """ Return the canonical list form of *path*. A list or tuple is copied
        as-is; a string is split on slashes if it contains any, otherwise on
        whitespace. Either way, empty segments left by leading, trailing or
        doubled delimiters are discarded, so '/Audio//Volume' is the same path
        as 'Audio Volume'. Segments are not interpreted in any way beyond that.
        An empty path is a caller error and raises :class:`ValueError`.
    """

    if isinstance(path, str):
        if '/' in path:
            segments = [segment for segment in path.split('/') if segment]
        else:
            segments = path.split()
    else:
        segments = list(path)

    if len(segments) == 0:
        raise ValueError('path must have at least one segment: ' + repr(path))

    return segments



def prefixed(prefix, path):
    """ Normalize *path*, then place *prefix* in front of it. A prefix of
        None or the empty string leaves the normalized path unchanged.
    """

    normalized = normalize(path)

    if prefix:
        return [prefix] + normalized
    else:
        return normalized



def join(path, separator='/'):
    """ Return the string form of *path*, with segments joined by
        *separator*; this is how a command path is rendered into a method
        name.
    """

    return separator.join(str(segment) for segment in normalize(path))



def same_segment(first, second):
    """ Node names are case-insensitive on the device side, and an index
        can arrive as either an int or a string.
    """

    return str(first).lower() == str(second).lower()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
