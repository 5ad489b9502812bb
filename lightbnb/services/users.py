from sqlalchemy import insert, select
from structlog import get_logger
from typing import Optional

from lightbnb.database import Database
from lightbnb.models import User
from lightbnb.schemas.records import NewUser, UserRecord
from lightbnb.schemas.results import QueryResult
from lightbnb.services.common import PERSISTENCE_ERRORS, failed

logger = get_logger()
users = User.__table__

async def _fetch_one_user(db: Database, operation: str, condition, **context) -> QueryResult[Optional[UserRecord]]:
    try:
        async with db.connect() as conn:
            result = await conn.execute(select(users).where(condition))
            row = result.mappings().first()
    except PERSISTENCE_ERRORS as e:
        return failed(operation, e, **context)
    if row is None:
        logger.debug("User not found", **context)
        return QueryResult.success(None)
    return QueryResult.success(UserRecord.model_validate(dict(row)))

async def get_user_with_email(db: Database, email: str) -> QueryResult[Optional[UserRecord]]:
    """Single user by email; a successful result holds ``None`` when nobody matches."""
    return await _fetch_one_user(db, "get_user_with_email", users.c.email == email, email=email)

async def get_user_with_id(db: Database, user_id: int) -> QueryResult[Optional[UserRecord]]:
    return await _fetch_one_user(db, "get_user_with_id", users.c.id == user_id, user_id=user_id)

async def add_user(db: Database, user: NewUser) -> QueryResult[UserRecord]:
    stmt = insert(User).values(**user.model_dump()).returning(*users.c)
    try:
        async with db.begin() as conn:
            result = await conn.execute(stmt)
            row = result.mappings().one()
    except PERSISTENCE_ERRORS as e:
        return failed("add_user", e, email=user.email)
    record = UserRecord.model_validate(dict(row))
    logger.info("Added user", user_id=record.id)
    return QueryResult.success(record)
