"""Infrastructure providers."""

# Import bases
from .clock import ClockProvider
from .mail import MailProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .clock import ProdClockProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ClockProvider",
    "MailProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
]
