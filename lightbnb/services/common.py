from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

from lightbnb.schemas.results import QueryResult, classify_error, describe_error

logger = get_logger()

# caught and turned into a failed QueryResult; anything else propagates
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)

def failed(operation: str, exc: BaseException, **context) -> QueryResult:
    kind = classify_error(exc)
    # bound parameters (passwords included) stay out of logs and results
    message = describe_error(exc)
    logger.error("Database operation failed", operation=operation, kind=kind.value, error=message, **context)
    return QueryResult.failure(kind, message)
