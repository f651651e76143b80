"""ZeroMQ PAIR endpoint.

A single ``zmq.PAIR`` socket that can either bind (listen) or connect (dial)
an address, then exchange raw byte payloads with exactly one peer. All of
the protocol and framing work is done by libzmq; this module maps socket
options and ``zmq.ZMQError`` onto the transport-agnostic
:class:`~pairnode.transport.base.Endpoint` contract.
"""

from __future__ import annotations

import atexit
import errno
import logging
import os
import socket as pysocket
from typing import Iterable, Optional

import zmq

from ... import address as addresses
from ..base import (
    DIALER,
    LISTENER,
    Endpoint as BaseEndpoint,
    EndpointCreationError,
    TransportConnectionError,
    TransportPortError,
    TransportReceiveError,
    TransportSendError,
    TransportTimeout,
)


log = logging.getLogger(__name__)

zmq_context = zmq.Context()

# Transports libzmq provides without a draft build. An endpoint may enable
# any subset of these.

supported = ("inproc", "ipc", "tcp")


def _milliseconds(seconds: Optional[float]) -> int:
    # libzmq uses -1 for "block forever".
    if seconds is None:
        return -1
    return int(round(seconds * 1000))


def _ipc_claimed(path: str) -> bool:
    """Return True if something is accepting connections on *path*.

    libzmq unlinks an existing ipc socket file before binding, which would
    quietly take the address away from a live listener.
    """

    if not os.path.exists(path):
        return False

    probe = pysocket.socket(pysocket.AF_UNIX, pysocket.SOCK_STREAM)
    try:
        probe.connect(path)
    except OSError:
        return False
    finally:
        probe.close()

    return True


def _target(parsed: addresses.Address) -> str:
    # With IPV6 enabled libzmq may resolve localhost to ::1 on one side and
    # 127.0.0.1 on the other; both sides use the IPv4 loopback.
    if parsed.scheme == "tcp" and parsed.host == "localhost":
        return str(parsed._replace(location="127.0.0.1"))
    return str(parsed)


class Endpoint(BaseEndpoint):
    """Pair endpoint backed by a ZeroMQ ``PAIR`` socket."""

    def __init__(
        self,
        receive_timeout: Optional[float] = 10,
        send_timeout: Optional[float] = 10,
        transports: Iterable[str] = ("ipc", "tcp"),
    ):
        self.receive_timeout = receive_timeout
        self.send_timeout = send_timeout
        self.transports = tuple(transports)
        self.role = None
        self.address: Optional[str] = None
        self.socket = None

        for name in self.transports:
            if name not in supported:
                raise EndpointCreationError(f"transport not available: {name}")

        try:
            sock = zmq_context.socket(zmq.PAIR)
        except zmq.ZMQError as exc:
            raise EndpointCreationError(f"cannot create socket: {exc}") from exc

        try:
            sock.setsockopt(zmq.LINGER, 0)
            sock.setsockopt(zmq.RCVTIMEO, _milliseconds(receive_timeout))
            sock.setsockopt(zmq.SNDTIMEO, _milliseconds(send_timeout))
            sock.setsockopt(zmq.IPV6, 1)
        except Exception as exc:
            # An unclosed socket blocks context termination at exit.
            sock.close()
            raise EndpointCreationError(f"cannot configure socket: {exc}") from exc

        self.socket = sock
        log.debug(
            "PAIR socket created: receive timeout %s s, send timeout %s s, transports %s",
            receive_timeout,
            send_timeout,
            ",".join(self.transports),
        )

    @property
    def is_open(self) -> bool:
        return self.socket is not None and not self.socket.closed

    def _resolve(self, address: str) -> addresses.Address:
        if not self.is_open:
            raise TransportConnectionError("endpoint is closed")

        try:
            parsed = addresses.parse(address)
        except ValueError as exc:
            raise TransportConnectionError(str(exc)) from exc

        if parsed.scheme not in self.transports:
            raise TransportConnectionError(
                f"transport {parsed.scheme!r} is not enabled, expected one of: {', '.join(self.transports)}"
            )

        return parsed

    def listen(self, address: str) -> None:
        parsed = self._resolve(address)

        if parsed.scheme == "ipc" and _ipc_claimed(parsed.location):
            raise TransportPortError(f"address already in use: {address}")

        target = _target(parsed)

        try:
            self.socket.bind(target)
        except zmq.ZMQError as exc:
            if exc.errno == errno.EADDRINUSE:
                raise TransportPortError(f"address already in use: {address}") from exc
            raise TransportConnectionError(f"cannot listen on {address}: {exc}") from exc

        self.role = LISTENER
        self.address = str(parsed)
        log.debug("PAIR socket listening on %s", target)

    def dial(self, address: str) -> None:
        parsed = self._resolve(address)

        try:
            self.socket.connect(_target(parsed))
        except zmq.ZMQError as exc:
            raise TransportConnectionError(f"cannot dial {address}: {exc}") from exc

        self.role = DIALER
        self.address = str(parsed)
        log.debug("PAIR socket dialing %s", _target(parsed))

    def send(self, payload: bytes) -> None:
        if not self.is_open:
            raise TransportSendError("endpoint is closed")

        try:
            self.socket.send(payload)
        except zmq.Again as exc:
            raise TransportSendError(
                f"peer did not accept the message within {self.send_timeout} sec"
            ) from exc
        except zmq.ZMQError as exc:
            raise TransportSendError(str(exc)) from exc

    def recv(self) -> bytes:
        if not self.is_open:
            raise TransportReceiveError("endpoint is closed")

        try:
            return self.socket.recv()
        except zmq.Again as exc:
            raise TransportTimeout(
                f"no message received within {self.receive_timeout} sec"
            ) from exc
        except zmq.ZMQError as exc:
            raise TransportReceiveError(str(exc)) from exc

    def close(self) -> None:
        if self.socket is None:
            return

        if not self.socket.closed:
            self.socket.close()
            log.debug("PAIR socket closed")

        self.socket = None


def create(settings) -> Endpoint:
    """Return a new :class:`Endpoint` configured from a
    :class:`~pairnode.config.Settings` instance."""

    return Endpoint(
        receive_timeout=settings.receive_timeout,
        send_timeout=settings.send_timeout,
        transports=settings.transports,
    )


def _cleanup() -> None:
    try:
        zmq_context.term()
    except Exception:
        pass


atexit.register(_cleanup)
