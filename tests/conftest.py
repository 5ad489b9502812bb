from contextlib import asynccontextmanager
from datetime import date
from unittest.mock import AsyncMock, MagicMock
import pytest


def make_result(rows):
    result = MagicMock()
    mappings = result.mappings.return_value
    mappings.all.return_value = rows
    mappings.first.return_value = rows[0] if rows else None
    mappings.one.return_value = rows[0] if rows else None
    return result


class FakeDatabase:
    """Stands in for lightbnb.database.Database; every connection is the same mock."""

    def __init__(self, rows=None, error=None):
        self.conn = MagicMock()
        self.conn.execute = AsyncMock(return_value=make_result(rows or []), side_effect=error)
        self.conn.exec_driver_sql = AsyncMock(return_value=make_result(rows or []), side_effect=error)
        self.begun = 0

    @asynccontextmanager
    async def connect(self):
        yield self.conn

    @asynccontextmanager
    async def begin(self):
        self.begun += 1
        yield self.conn


@pytest.fixture
def fake_db():
    return FakeDatabase


@pytest.fixture
def property_row():
    return {
        "id": 7,
        "owner_id": 3,
        "title": "Speed lamp",
        "description": "description",
        "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
        "cover_photo_url": "https://images.example.com/cover.jpg",
        "cost_per_night": 9300,
        "parking_spaces": 6,
        "number_of_bathrooms": 4,
        "number_of_bedrooms": 8,
        "country": "Canada",
        "street": "536 Namsub Highway",
        "city": "Sotboske",
        "province": "Quebec",
        "post_code": "28142",
    }


@pytest.fixture
def reservation_row(property_row):
    row = {k: v for k, v in property_row.items() if k != "id"}
    row.update({
        "id": 41,
        "start_date": date(2018, 9, 11),
        "end_date": date(2018, 9, 26),
        "property_id": 7,
        "guest_id": 1,
        "average_rating": 4.2,
    })
    return row
