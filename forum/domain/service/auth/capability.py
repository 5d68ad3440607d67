"""Authentication capabilities a user account can be composed with."""

from enum import Enum


class AuthCapability(str, Enum):
    """Pluggable authentication behaviours.

    Each one is implemented by a strategy class in this package and
    composed by ``IdentityService``.
    """

    DATABASE_AUTHENTICATABLE = "database_authenticatable"
    RECOVERABLE = "recoverable"
    REMEMBERABLE = "rememberable"
    TRACKABLE = "trackable"
    OMNIAUTHABLE = "omniauthable"
