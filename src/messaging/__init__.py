"""
Read path of a private messaging feature: conversation inboxes ordered by
per-viewer read activity, message pages, participant lookups and the tag
catalog, over SQLAlchemy's asyncio ORM.
"""

from .exceptions import (
    RepositoryError,
    NotFoundError,
    InvalidArgumentError,
    IntegrityViolationError,
)
from .repositories import (
    EntityMapping,
    FetchPlan,
    MessagingDriver,
    SQLAlchemyDriver,
    get_driver,
    register_driver,
)
from .validators.pagination_validators import SortDirection

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidArgumentError",
    "IntegrityViolationError",
    "EntityMapping",
    "FetchPlan",
    "MessagingDriver",
    "SQLAlchemyDriver",
    "get_driver",
    "register_driver",
    "SortDirection",
]
