""" Addresses are strings of the form ``<scheme>://<location>``, where the
    location for a networked transport is a ``host:port`` pair and for a
    local transport is a path or a name:

        tcp://localhost:54545
        ipc:///tmp/pairnode.sock
        inproc://pairnode

    The :class:`Address` produced by :func:`parse` is immutable; rendering
    it with ``str()`` yields the same text, scheme in lower case.
"""

from typing import NamedTuple, Optional


separator = '://'

# Schemes whose location must carry a port number.

networked = ('tcp', 'ws')


class Address(NamedTuple):
    scheme: str
    location: str
    port: Optional[int] = None

    def __str__(self):
        if self.port is None:
            return self.scheme + separator + self.location

        return '%s%s%s:%d' % (self.scheme, separator, self.location, self.port)


    @property
    def host(self):
        """ The host portion of a networked address, with any brackets
            around an IPv6 literal removed. None for local transports.
        """

        if self.port is None:
            return None

        host = self.location
        if host.startswith('[') and host.endswith(']'):
            host = host[1:-1]

        return host


# end of class Address



def parse(text):
    """ Parse the supplied *text* into an :class:`Address`. A ValueError is
        raised if the text has no scheme, no location, or is a networked
        address without a usable port number.
    """

    text = str(text).strip()

    try:
        scheme, location = text.split(separator, 1)
    except ValueError:
        raise ValueError('address has no scheme: ' + repr(text))

    scheme = scheme.lower()

    if scheme == '':
        raise ValueError('address has no scheme: ' + repr(text))

    if location == '':
        raise ValueError('address has no location: ' + repr(text))

    if scheme not in networked:
        return Address(scheme, location)

    host, colon, port = location.rpartition(':')

    if colon == '' or host == '':
        raise ValueError('address has no host:port pair: ' + repr(text))

    try:
        port = int(port)
    except ValueError:
        raise ValueError('address has an invalid port: ' + repr(text))

    if port < 0 or port > 65535:
        raise ValueError('address port out of range: ' + repr(text))

    return Address(scheme, host, port)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
