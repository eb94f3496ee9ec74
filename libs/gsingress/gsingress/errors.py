"""
Errors raised while building an Ingress for a GameServer.

Every error is caused by the GameServer's annotations (or the issuer the
pipeline was assembled with) and is fixed by correcting the manifest.
"""

from typing import Optional


class IngressOptionError(Exception):
    """Base class for ingress option failures."""

    def __init__(self, message: str, gameserver: Optional[str] = None):
        super().__init__(message)
        self.gameserver = gameserver


class MissingAnnotationError(IngressOptionError):
    """A routing or TLS annotation required by the routing mode is absent."""

    def __init__(self, message: str, mode: str, annotation: str, gameserver: str):
        super().__init__(message, gameserver)
        self.mode = mode
        self.annotation = annotation


class ValidationError(IngressOptionError):
    """An annotation is present but its key or value is malformed."""

    def __init__(
        self,
        message: str,
        annotation: Optional[str] = None,
        gameserver: Optional[str] = None,
    ):
        super().__init__(message, gameserver)
        self.annotation = annotation


class ConfigurationError(IngressOptionError):
    """The pipeline was assembled without a setting it needs."""

    def __init__(self, message: str, annotation: str, gameserver: str):
        super().__init__(message, gameserver)
        self.annotation = annotation
