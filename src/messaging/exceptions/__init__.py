from .base import (
    RepositoryError,
    NotFoundError,
    InvalidArgumentError,
    IntegrityViolationError,
)
from .mapper import query_error_handler

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidArgumentError",
    "IntegrityViolationError",
    "query_error_handler",
]
