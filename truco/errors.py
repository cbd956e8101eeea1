"""Exceptions raised by the truco package."""


class TrucoError(Exception):
    """Base class for every error raised by the package."""


class ServerInitializationError(TrucoError):
    """The game server could not be set up."""


class NetworkError(TrucoError):
    """A socket operation failed."""