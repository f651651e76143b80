"""Endpoint implementations and the transport error taxonomy."""

from .base import (
    DIALER,
    LISTENER,
    Endpoint,
    EndpointCreationError,
    TransportConnectionError,
    TransportError,
    TransportPortError,
    TransportReceiveError,
    TransportSendError,
    TransportTimeout,
)

from .zmq import pair
