"""ZeroMQ endpoint implementations."""

from . import pair
