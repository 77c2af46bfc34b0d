""" Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`. Envelopes
    headed for a backend are small but frequent; feedback payloads can be
    large when a subscription covers a whole section of the status tree.
"""

# msgspec is preferred when it is installed; orjson is the declared
# dependency and is always available as the fallback.

msgspec = None
orjson = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    import orjson


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. Both
# loads methods accept either bytes or str, and each library raises its own
# exception class for malformed input; DecodeError names whichever is active.

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
else:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
