""" Python client session layer for a device's command, configuration,
    status and event surface. A :class:`Session` wraps a backend connection
    and correlates requests with their responses, and routes feedback
    notifications to the listeners registered on their paths.
"""

# Utility components.

from . import json
from . import path
normalize = path.normalize

# Protocol and engine components.

from . import rpc
from . import backend
from . import request
from . import feedback
from . import node
from . import section

# Primary public-facing interfaces.

from .backend import Backend
from .rpc import ProtocolError
from .session import Session

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
