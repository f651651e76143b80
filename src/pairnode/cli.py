""" Command-line entry point. Run two copies against the same address, in
    two terminals:

        pairnode 0 tcp://localhost:54545
        pairnode 1 tcp://localhost:54545

    Whichever starts first listens, the other dials; both trade three
    messages and exit.
"""

import argparse
import logging
import sys

from . import config
from . import node


log = logging.getLogger(__name__)

log_format = '%(asctime)s %(message)s'
date_format = '%Y/%m/%d %H:%M:%S'


def parser(prog=None):

    parser = argparse.ArgumentParser(
        prog=prog,
        description='Exchange a few messages with a peer over a ZeroMQ PAIR socket.',
    )
    parser.add_argument(
        'role', nargs='?',
        help='Name for this node in log output, for example 0 or 1')
    parser.add_argument(
        'address', nargs='?',
        help='Address shared by both nodes, for example tcp://localhost:54545')
    parser.add_argument(
        '-c', '--config', default=None,
        help='Path to a JSON settings file (default: settings.json in $PAIRNODE_HOME)')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Log socket-level detail')

    return parser



def setup_logging(verbose=False):

    if verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=log_format, datefmt=date_format)



def main(argv=None):
    """ Run a node according to the command-line arguments *argv*, which
        default to ``sys.argv[1:]``. Returns the process exit status.
    """

    if argv is None:
        argv = sys.argv[1:]

    prog = 'pairnode'
    arguments = parser(prog).parse_args(argv)

    setup_logging(arguments.verbose)

    if arguments.role is None or arguments.address is None:
        log.info('Usage: %s 0|1 <url>', prog)
        return 0

    try:
        settings = config.load(arguments.config)
    except (OSError, RuntimeError, ValueError) as e:
        log.critical('Node %s: cannot load settings: %s', arguments.role, str(e))
        return 1

    try:
        node.run(arguments.role, arguments.address, settings)
    except node.NodeError as e:
        log.critical(str(e))
        return 1

    return 0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
