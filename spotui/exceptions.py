"""
Spotui Exceptions - Error kinds raised by the gateway and dispatcher.
"""


class PlayerError(Exception):
    """Base class for all errors raised while handling an intent."""


class AuthFailure(PlayerError):
    """No access token could be obtained."""


class NoActiveContext(PlayerError):
    """An action needed a live playback context but none is known."""

    def __init__(self, message: str = 'unable to get the currently playing context'):
        super().__init__(message)


class RemoteCallFailure(PlayerError):
    """The remote service rejected a call. Message is kept verbatim."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkFailure(PlayerError):
    """Transport-level failure talking to the remote service."""


class UnknownIntent(PlayerError):
    """The dispatcher has no handler for an intent."""
