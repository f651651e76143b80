import os
import pytest
import shutil
import socket
import subprocess
import sys
import tempfile

import pairnode


@pytest.fixture
def settings():
    """ Settings suitable for running two nodes inside one test: no pause
        between round trips, and timeouts short enough that a broken test
        fails quickly.
    """

    return pairnode.config.Settings(
        receive_timeout=5,
        send_timeout=5,
        pause=0,
        transports=('inproc', 'ipc', 'tcp'))


@pytest.fixture
def tcp_address():

    # Let the kernel pick an unused port, then release it for the test.

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()

    return 'tcp://127.0.0.1:%d' % (port)


@pytest.fixture
def ipc_address():

    # Unix socket paths are limited to roughly 100 characters, the pytest
    # tmp_path is sometimes longer than that.

    directory = tempfile.mkdtemp(prefix='pairnode')
    yield 'ipc://' + os.path.join(directory, 'pair.sock')
    shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """ Point the settings directory at an empty temporary location, and
        forget any directory found by an earlier test.
    """

    monkeypatch.setenv('PAIRNODE_HOME', str(tmp_path))
    monkeypatch.setattr(pairnode.config.directory, 'found', None)
    return tmp_path


@pytest.fixture
def run_peer(home):
    """ Return a function that launches ``python -m pairnode`` as a separate
        process. Every launched process is terminated at the end of the test
        if it is still running.
    """

    source = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')

    environment = dict(os.environ)
    environment['PYTHONPATH'] = os.pathsep.join((source, environment.get('PYTHONPATH', '')))
    environment['PAIRNODE_HOME'] = str(home)
    environment['PAIRNODE_PAUSE'] = '0'

    launched = list()

    def launch(role, address):
        arguments = list()
        arguments.append(sys.executable)
        arguments.append('-m')
        arguments.append('pairnode')
        arguments.append(role)
        arguments.append(address)

        pipe = subprocess.PIPE
        peer = subprocess.Popen(arguments, stdout=pipe, stderr=pipe, env=environment)
        launched.append(peer)
        return peer

    yield launch

    for peer in launched:
        if peer.poll() is None:
            peer.terminate()
            peer.wait()

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
