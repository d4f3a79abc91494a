"""
Input checks for paginated reads. They run before any query is constructed
so malformed input never reaches the store.
"""
from enum import Enum

from messaging.exceptions.base import InvalidArgumentError


class SortDirection(str, Enum):
    """Direction applied to every ordering key of a paginated read."""
    ASC = "ASC"
    DESC = "DESC"


def validate_non_negative_int(name: str, value: object) -> int:
    """
    Return `value` when it is a non-negative int, raise InvalidArgumentError otherwise.

    bool is rejected even though it subclasses int: `limit=True` is a caller bug.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(value).__name__}", fields=[name]
        )
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}", fields=[name])
    return value


def validate_page_window(offset: object, limit: object) -> tuple[int, int]:
    return validate_non_negative_int("offset", offset), validate_non_negative_int("limit", limit)


def coerce_sort_direction(value: SortDirection | str) -> SortDirection:
    """
    Accept a SortDirection or its name in any case ("asc", "DESC", ...).
    """
    if isinstance(value, SortDirection):
        return value
    if isinstance(value, str):
        try:
            return SortDirection(value.strip().upper())
        except ValueError:
            pass
    raise InvalidArgumentError(
        f"sort_direction must be one of ASC, DESC; got {value!r}", fields=["sort_direction"]
    )
