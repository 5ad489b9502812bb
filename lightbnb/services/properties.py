from sqlalchemy import insert
from structlog import get_logger
from typing import List, Optional

from lightbnb.database import Database
from lightbnb.models import Property
from lightbnb.queries.property_search import build_property_search
from lightbnb.schemas.records import NewProperty, PropertyRecord, PropertySearchOptions
from lightbnb.schemas.results import QueryResult
from lightbnb.services.common import PERSISTENCE_ERRORS, failed

logger = get_logger()

async def get_all_properties(
    db: Database,
    options: Optional[PropertySearchOptions] = None,
    limit: int = 10,
) -> QueryResult[List[PropertyRecord]]:
    """Cheapest properties first, narrowed by whichever filters ``options`` sets."""
    statement = build_property_search(options or PropertySearchOptions(), limit)
    logger.debug("Property search statement", sql=statement.sql, params=list(statement.params))
    try:
        async with db.connect() as conn:
            # $n placeholders go straight to asyncpg
            result = await conn.exec_driver_sql(statement.sql, statement.params)
            rows = result.mappings().all()
    except PERSISTENCE_ERRORS as e:
        return failed("get_all_properties", e, params=list(statement.params))
    properties = [PropertyRecord.model_validate(dict(row)) for row in rows]
    logger.info("Fetched properties", count=len(properties))
    return QueryResult.success(properties)

async def add_property(db: Database, prop: NewProperty) -> QueryResult[PropertyRecord]:
    stmt = insert(Property).values(**prop.model_dump()).returning(*Property.__table__.c)
    try:
        async with db.begin() as conn:
            result = await conn.execute(stmt)
            row = result.mappings().one()
    except PERSISTENCE_ERRORS as e:
        return failed("add_property", e, owner_id=prop.owner_id)
    record = PropertyRecord.model_validate(dict(row))
    logger.info("Added property", property_id=record.id, owner_id=record.owner_id)
    return QueryResult.success(record)
