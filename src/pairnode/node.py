""" The node runner: acquire a pair endpoint, become either the listening or
    the dialing side of an address, trade a fixed number of messages with
    the peer, and release the endpoint.

    Two processes run the same code against the same address. Whichever one
    binds the address first becomes the listener; the other sees the bind
    fail and dials instead. If both attempt the bind at the same instant
    the outcome depends on the transport; the fallback order is always
    listen first, then dial.
"""

import logging
import time

from . import config
from . import message
from . import transport


log = logging.getLogger(__name__)


class NodeError(Exception):
    """ A fatal failure of one node operation. *operation* is one of
        ``create``, ``connect``, ``send`` or ``receive``; the originating
        :class:`~pairnode.transport.TransportError` is available as
        ``__cause__``.
    """

    def __init__(self, role, operation, text):
        self.role = role
        self.operation = operation
        self.text = text
        Exception.__init__(self, 'Node %s %s' % (role, text))


# end of class NodeError



def create(role, settings):
    """ Return a new endpoint configured according to *settings*.
    """

    try:
        return transport.pair.create(settings)
    except transport.EndpointCreationError as e:
        raise NodeError(role, e.operation, 'cannot create socket: ' + str(e)) from e



def establish(endpoint, address, role):
    """ Try to listen on *address*; if that fails, dial it instead. Returns
        the role the endpoint ended up with, either
        :data:`~pairnode.transport.LISTENER` or
        :data:`~pairnode.transport.DIALER`.
    """

    try:
        endpoint.listen(address)
    except transport.TransportConnectionError as e:
        log.warning("Node %s cannot listen on socket '%s': %s", role, address, str(e))
        log.warning('Trying to dial instead')
    else:
        log.debug('Node %s is listening on %s', role, address)
        return endpoint.role

    try:
        endpoint.dial(address)
    except transport.TransportConnectionError as e:
        text = "can neither listen nor dial on socket '%s': %s" % (address, str(e))
        raise NodeError(role, e.operation, text) from e

    log.debug('Node %s is dialing %s', role, address)
    return endpoint.role



def send(endpoint, text, role):

    log.info('Node %s sends %s', role, text)

    try:
        endpoint.send(message.encode(text))
    except transport.TransportError as e:
        diagnostic = "failed to send '%s': %s" % (text, str(e))
        raise NodeError(role, 'send', diagnostic) from e



def receive(endpoint, role):

    try:
        payload = endpoint.recv()
    except transport.TransportError as e:
        raise NodeError(role, 'receive', 'failed receiving a message: ' + str(e)) from e

    text = message.decode(payload)
    log.info('Node %s received %s', role, text)
    return text



def exchange(endpoint, role, exchanges=3, pause=1):
    """ Perform *exchanges* round trips on an established *endpoint*. Each
        round trip sends one message, then blocks until the peer's message
        arrives, then sleeps for *pause* seconds. Returns the list of
        received texts, in order.
    """

    received = list()

    for counter in range(exchanges):
        send(endpoint, message.format(counter, role), role)
        received.append(receive(endpoint, role))
        time.sleep(pause)

    log.info('Node %s: Done.', role)
    return received



def run(role, address, settings=None):
    """ Run one node from start to finish. The endpoint is closed when this
        function returns, including when it raises :class:`NodeError`.
    """

    role = str(role)

    if settings is None:
        settings = config.Settings()

    with create(role, settings) as endpoint:
        establish(endpoint, address, role)
        return exchange(endpoint, role, settings.exchanges, settings.pause)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
