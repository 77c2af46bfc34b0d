"""Backend interface.

This is the (small) contract that transport implementations follow in order
to carry envelopes between a :class:`xapi.Session` and a device. Sockets,
SSH sessions, HTTP and WebSocket connections all live outside this package;
they subclass :class:`Backend` and call :func:`Backend.emit` as things happen
on their end of the connection.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


READY = 'ready'
CLOSE = 'close'
ERROR = 'error'
DATA = 'data'

signals = (READY, CLOSE, ERROR, DATA)


class Backend(ABC):
    """Minimal contract for a message-oriented transport.

    Inbound traffic is reported through four signals: ``ready`` once the
    connection is usable, ``close`` when it ends, ``error`` with the failure
    for transport-level problems, and ``data`` with one decoded envelope
    (a dict) per inbound message.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[str, List[Callable[..., Any]]] = dict()
        for signal in signals:
            self._callbacks[signal] = list()

    def register(self, signal: str, callback: Callable[..., Any]) -> 'Backend':
        """Invoke *callback* every time *signal* is emitted. Returns the
        backend so that registrations can be chained.
        """

        if not callable(callback):
            raise TypeError('callback must be callable')

        try:
            callbacks = self._callbacks[signal]
        except KeyError:
            raise ValueError('unknown backend signal: ' + repr(signal))

        callbacks.append(callback)
        return self

    def unregister(self, signal: str, callback: Callable[..., Any]) -> None:
        try:
            self._callbacks[signal].remove(callback)
        except (KeyError, ValueError):
            pass

    def emit(self, signal: str, *args: Any) -> None:
        """Deliver *signal* to every registered callback, in registration
        order. Exceptions from a ``data`` callback propagate to the backend,
        which is reading the wire and is in the best position to decide
        whether the connection survives; exceptions from the other signals
        are logged.
        """

        try:
            callbacks = tuple(self._callbacks[signal])
        except KeyError:
            raise ValueError('unknown backend signal: ' + repr(signal))

        for callback in callbacks:
            if signal == DATA:
                callback(*args)
                continue

            try:
                callback(*args)
            except Exception:
                logger.exception('%s callback failed', signal)

    @abstractmethod
    def execute(self, envelope: Dict[str, Any]) -> None:
        """Submit one outbound envelope. Fire-and-forget."""

    @abstractmethod
    def close(self) -> None:
        """Terminate the connection."""
