from sqlalchemy import func, select
from structlog import get_logger
from typing import List

from lightbnb.database import Database
from lightbnb.models import Property, PropertyReview, Reservation
from lightbnb.schemas.records import ReservationRecord, check_limit
from lightbnb.schemas.results import QueryResult
from lightbnb.services.common import PERSISTENCE_ERRORS, failed

logger = get_logger()

def past_reservations_query(guest_id: int, limit: int = 10):
    """Completed stays of a guest, oldest first, with each property's average rating.

    Property columns come first and the reservation's own columns follow, so
    ``id`` in a row is the reservation id.
    """
    properties = Property.__table__
    reservations = Reservation.__table__
    reviews = PropertyReview.__table__
    return (
        select(
            *[c for c in properties.c if c.name != "id"],
            *reservations.c,
            func.avg(reviews.c.rating).label("average_rating"),
        )
        .select_from(
            reservations
            .join(properties, reservations.c.property_id == properties.c.id)
            .join(reviews, properties.c.id == reviews.c.property_id)
        )
        .where(reservations.c.guest_id == guest_id, reservations.c.end_date < func.current_date())
        .group_by(properties.c.id, reservations.c.id)
        .order_by(reservations.c.start_date)
        .limit(limit)
    )

async def get_all_reservations(db: Database, guest_id: int, limit: int = 10) -> QueryResult[List[ReservationRecord]]:
    check_limit(limit)
    try:
        async with db.connect() as conn:
            result = await conn.execute(past_reservations_query(guest_id, limit))
            rows = result.mappings().all()
    except PERSISTENCE_ERRORS as e:
        return failed("get_all_reservations", e, guest_id=guest_id)
    reservations = [ReservationRecord.model_validate(dict(row)) for row in rows]
    logger.info("Fetched reservations", guest_id=guest_id, count=len(reservations))
    return QueryResult.success(reservations)
