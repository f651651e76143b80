""" A two-node PAIR messaging walkthrough over ZeroMQ. Each node tries to
    listen on a shared address, falls back to dialing it, then trades a
    fixed number of messages with its peer.
"""

# Utility components.

from . import address
from . import config
from . import message

# Endpoint implementations.

from . import transport

# Primary public-facing interfaces.

from . import node
run = node.run
NodeError = node.NodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
