""" Run both nodes on this host over the ipc transport, each in its own
    process, and show what each of them logged. The first process gets a
    short head start so that it wins the listen race.
"""

import argparse
import os
import subprocess
import sys
import tempfile
import time


def launch(role, address):

    arguments = list()
    arguments.append(sys.executable)
    arguments.append('-m')
    arguments.append('pairnode')
    arguments.append(role)
    arguments.append(address)

    pipe = subprocess.PIPE
    return subprocess.Popen(arguments, stdout=pipe, stderr=subprocess.STDOUT)



def main():

    parser = argparse.ArgumentParser(
        description='Run two pairnode processes against one ipc address'
    )
    parser.add_argument(
        '-a', '--address',
        help='ipc address to use (default: a socket in a new temporary directory)',
        default=None
    )
    parser.add_argument(
        '-d', '--delay', type=float,
        help='Seconds between starting the two processes (default: 0.5)',
        default=0.5
    )

    args = parser.parse_args()

    if args.address is None:
        directory = tempfile.mkdtemp(prefix='pairnode')
        address = 'ipc://' + os.path.join(directory, 'pair.sock')
    else:
        address = args.address

    first = launch('0', address)
    time.sleep(args.delay)
    second = launch('1', address)

    status = 0

    for process in (first, second):
        output, _ = process.communicate()
        print(output.decode(), end='')
        print('exit status: %d\n' % (process.returncode))

        if process.returncode != 0:
            status = process.returncode

    return status


if __name__ == '__main__':
    sys.exit(main())
