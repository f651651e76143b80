import pytest

import pairnode


def test_tcp():

    address = pairnode.address.parse('tcp://localhost:54545')
    assert address.scheme == 'tcp'
    assert address.location == 'localhost'
    assert address.port == 54545
    assert address.host == 'localhost'
    assert str(address) == 'tcp://localhost:54545'


def test_ipc():

    address = pairnode.address.parse('ipc:///tmp/pairnode.sock')
    assert address.scheme == 'ipc'
    assert address.location == '/tmp/pairnode.sock'
    assert address.port is None
    assert address.host is None
    assert str(address) == 'ipc:///tmp/pairnode.sock'


def test_ipv6():

    address = pairnode.address.parse('tcp://[::1]:6000')
    assert address.location == '[::1]'
    assert address.host == '::1'
    assert address.port == 6000
    assert str(address) == 'tcp://[::1]:6000'


def test_immutable():

    address = pairnode.address.parse('tcp://localhost:54545')

    with pytest.raises(AttributeError):
        address.port = 1

    other = address._replace(location='127.0.0.1')
    assert str(other) == 'tcp://127.0.0.1:54545'
    assert str(address) == 'tcp://localhost:54545'


def test_scheme_case():
    """ The scheme is case-insensitive, and always rendered in lower case.
    """

    address = pairnode.address.parse('TCP://localhost:54545')
    assert address.scheme == 'tcp'
    assert str(address) == 'tcp://localhost:54545'


def test_unknown_scheme():
    """ Parsing does not decide which transports are usable; that is up to
        the endpoint.
    """

    address = pairnode.address.parse('carrier-pigeon://coop')
    assert address.scheme == 'carrier-pigeon'
    assert address.port is None


@pytest.mark.parametrize('text', (
    'localhost:54545',
    '://localhost:54545',
    'tcp://',
    'tcp://localhost',
    'tcp://:54545',
    'tcp://localhost:port',
    'tcp://localhost:65536',
    'tcp://localhost:-1',
))
def test_invalid(text):

    with pytest.raises(ValueError):
        pairnode.address.parse(text)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
