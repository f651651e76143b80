""" Runtime settings for a node: timeouts, how many round trips to make,
    the pause between them, and which transports an endpoint accepts.

    :func:`load` starts from the defaults, applies the JSON settings file
    found in :func:`directory` (if any), then applies ``PAIRNODE_*``
    environment variables. The result is fixed for the life of the process.
"""

import json
import math
import os


defaults = dict()
defaults['receive_timeout'] = 10
defaults['send_timeout'] = 10
defaults['exchanges'] = 3
defaults['pause'] = 1
defaults['transports'] = ('ipc', 'tcp')

filename = 'settings.json'
environment_prefix = 'PAIRNODE_'

# libzmq takes timeouts as a signed 32-bit count of milliseconds.

longest = (2 ** 31 - 1) / 1000


class Settings:
    """ A validated, read-only collection of node settings. Any setting not
        specified as a keyword argument takes its value from :data:`defaults`.
    """

    __slots__ = tuple(defaults.keys())

    def __init__(self, **kwargs):

        for key in kwargs:
            if key not in defaults:
                raise ValueError('unknown setting: ' + str(key))

        for key, default in defaults.items():
            value = kwargs.get(key, default)
            value = _validate(key, value)
            object.__setattr__(self, key, value)


    def __setattr__(self, key, value):
        raise AttributeError('Settings instances are read-only')


    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented

        return self.as_dict() == other.as_dict()


    def __repr__(self):
        pairs = ['%s=%r' % (key, value) for key, value in self.as_dict().items()]
        return 'Settings(' + ', '.join(pairs) + ')'


    def as_dict(self):
        return dict((key, getattr(self, key)) for key in defaults)


    def replace(self, **kwargs):
        """ Return a new :class:`Settings` instance with the supplied
            keyword arguments overriding the values in this one.
        """

        values = self.as_dict()
        values.update(kwargs)
        return Settings(**values)


# end of class Settings



def _validate(key, value):

    if key == 'transports':
        if isinstance(value, str):
            value = value.split(',')

        value = tuple(str(name).strip().lower() for name in value)
        value = tuple(name for name in value if name != '')

        if len(value) == 0:
            raise ValueError('at least one transport must be enabled')

        return value

    if key == 'exchanges':
        if isinstance(value, bool):
            raise ValueError('exchanges must be an integer, not a boolean')

        try:
            value = int(value)
        except (TypeError, ValueError):
            raise ValueError('exchanges must be an integer: ' + repr(value))

        if value < 0:
            raise ValueError('exchanges must not be negative: ' + repr(value))

        return value

    # Everything else is a duration in seconds. Only the send timeout may be
    # None, meaning a send blocks until the peer accepts the message.

    if value is None and key == 'send_timeout':
        return None

    if isinstance(value, bool):
        raise ValueError(key + ' must be a number, not a boolean')

    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError(key + ' must be a number: ' + repr(value))

    if math.isfinite(value):
        pass
    else:
        raise ValueError(key + ' must be a finite number: ' + repr(value))

    if value < 0:
        raise ValueError(key + ' must not be negative: ' + repr(value))

    if value > longest:
        raise ValueError('%s must not exceed %d seconds: %r' % (key, longest, value))

    return value



def directory():
    """ Return the directory location where the settings file is expected.
        This defaults to ``$HOME/.pairnode``, but can be overridden by setting
        the ``PAIRNODE_HOME`` environment variable. Note that changes to the
        environment variable will be ignored unless it is set prior to the
        first invocation of this method.
    """

    found = directory.found

    if found is not None:
        return found

    try:
        found = os.environ['PAIRNODE_HOME']
    except KeyError:
        pass
    else:
        directory.found = found
        return found

    try:
        home = os.environ['HOME']
    except KeyError:
        raise RuntimeError('PAIRNODE_HOME and HOME environment variables not set, cannot determine pairnode settings directory')

    found = os.path.join(home, '.pairnode')

    directory.found = found
    return found

directory.found = None



def load(path=None, environ=None):
    """ Return a :class:`Settings` instance. If *path* is not specified the
        settings file in :func:`directory` is used, if it exists; an explicit
        *path* must exist. *environ* defaults to :data:`os.environ`.
    """

    if environ is None:
        environ = os.environ

    values = dict()

    if path is None:
        path = os.path.join(directory(), filename)
        if os.path.exists(path):
            values.update(read(path))
    else:
        values.update(read(path))

    values.update(from_environment(environ))

    return Settings(**values)



def read(path):
    """ Return the dictionary of settings contained in the JSON file at
        *path*. Unknown keys raise a ValueError.
    """

    with open(path, 'r') as contents:
        try:
            values = json.load(contents)
        except json.JSONDecodeError as e:
            raise ValueError('invalid JSON in %s: %s' % (path, str(e)))

    if isinstance(values, dict):
        pass
    else:
        raise ValueError('settings file must contain a JSON object: ' + str(path))

    for key in values:
        if key not in defaults:
            raise ValueError('unknown setting in %s: %s' % (path, key))

    return values



def from_environment(environ):
    """ Pick out any ``PAIRNODE_<SETTING>`` variables from *environ*. The
        literal value ``none`` for the send timeout means no timeout.
    """

    values = dict()

    for key in defaults:
        variable = environment_prefix + key.upper()

        try:
            value = environ[variable]
        except KeyError:
            continue

        if key == 'send_timeout' and value.strip().lower() == 'none':
            value = None

        values[key] = value

    return values


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
