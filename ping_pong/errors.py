"""Exceptions raised by the ping pong core."""


class PingPongError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(PingPongError, ValueError):
    """A field or rules value was rejected at construction time."""
