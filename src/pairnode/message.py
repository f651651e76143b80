""" Exchange messages. On the wire a message is nothing more than a byte
    payload; the text is UTF-8 encoded on the way out and decoded on the
    way in.
"""

encoding = 'utf-8'

template = 'message %d from node %s.'


def format(counter, role):
    """ Return the text for iteration *counter* sent by the node identified
        by *role*.
    """

    return template % (counter, role)


def encode(text):
    return text.encode(encoding)


def decode(payload):
    """ Decode a received *payload*. Invalid UTF-8 sequences are replaced
        with U+FFFD instead of raising an exception.
    """

    return bytes(payload).decode(encoding, errors='replace')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
