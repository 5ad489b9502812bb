from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Generic, Optional, TypeVar
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

T = TypeVar("T")

class ErrorKind(str, Enum):
    CONNECTION = "connection"
    INTEGRITY = "integrity"
    QUERY = "query"

class QueryError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

class QueryFailed(Exception):
    def __init__(self, error: QueryError):
        super().__init__(f"{error.kind.value}: {error.message}")
        self.error = error

class QueryResult(BaseModel, Generic[T]):
    """Outcome of a single statement.

    ``ok`` separates "ran and found nothing" (``value`` is ``None`` or ``[]``)
    from "did not run" (``error`` is set).
    """
    model_config = ConfigDict(frozen=True)

    value: Optional[T] = None
    error: Optional[QueryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value=None):
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str):
        return cls(error=QueryError(kind=kind, message=message))

    def unwrap(self):
        if self.error is not None:
            raise QueryFailed(self.error)
        return self.value

def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, IntegrityError):
        return ErrorKind.INTEGRITY
    if isinstance(exc, (OperationalError, InterfaceError, OSError)):
        return ErrorKind.CONNECTION
    return ErrorKind.QUERY

def describe_error(exc: BaseException) -> str:
    """Driver message without SQLAlchemy's ``[SQL: ...]`` and ``[parameters: ...]`` suffixes."""
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)
