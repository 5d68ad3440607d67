"""Authentication capability strategies."""

from .capability import AuthCapability
from .database import DatabaseAuthenticatable
from .omniauthable import Omniauthable
from .recoverable import Recoverable
from .rememberable import Rememberable
from .trackable import Trackable
from .validatable import Validatable

__all__ = [
    "AuthCapability",
    "DatabaseAuthenticatable",
    "Omniauthable",
    "Recoverable",
    "Rememberable",
    "Trackable",
    "Validatable",
]
