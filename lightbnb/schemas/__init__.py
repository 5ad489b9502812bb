from .records import (
    check_limit,
    PropertySearchOptions,
    NewUser,
    NewProperty,
    UserRecord,
    PropertyRecord,
    ReservationRecord,
)
from .results import ErrorKind, QueryError, QueryFailed, QueryResult, classify_error, describe_error

__all__ = [
    "check_limit",
    "PropertySearchOptions",
    "NewUser",
    "NewProperty",
    "UserRecord",
    "PropertyRecord",
    "ReservationRecord",
    "ErrorKind",
    "QueryError",
    "QueryFailed",
    "QueryResult",
    "classify_error",
    "describe_error",
]
