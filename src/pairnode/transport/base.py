"""Endpoint interface.

This is the (small) contract that an endpoint implementation should follow.
The node runner only talks to this interface, never to the messaging
library directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


LISTENER = "listener"
DIALER = "dialer"


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""

    operation = "transport"


class EndpointCreationError(TransportError):
    """The messaging library could not produce a usable endpoint."""

    operation = "create"


class TransportConnectionError(TransportError):
    """The endpoint could not listen on or dial an address."""

    operation = "connect"


class TransportPortError(TransportConnectionError):
    """The address is already claimed by another endpoint."""


class TransportSendError(TransportError):
    """A message could not be handed to the transport."""

    operation = "send"


class TransportReceiveError(TransportError):
    """No message could be received."""

    operation = "receive"


class TransportTimeout(TransportReceiveError):
    """No message arrived before the receive timeout expired."""


class Endpoint(ABC):
    """Minimal contract for a bidirectional pair endpoint.

    An endpoint is a context manager; leaving the ``with`` block closes it,
    whether the block exits normally or by exception.
    """

    role: Optional[str] = None

    @abstractmethod
    def listen(self, address: str) -> None:
        """Accept a peer on *address*."""

    @abstractmethod
    def dial(self, address: str) -> None:
        """Connect to a peer listening on *address*."""

    @abstractmethod
    def send(self, payload: bytes) -> None:
        """Send one raw payload to the peer."""

    @abstractmethod
    def recv(self) -> bytes:
        """Block until the next payload arrives from the peer."""

    @abstractmethod
    def close(self) -> None:
        """Release the endpoint. Calling this more than once is harmless."""

    @property
    def is_open(self) -> bool:
        """Whether the endpoint can still be used."""
        return False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
