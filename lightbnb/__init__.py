"""LightBnB data access: users, reservations and property search over PostgreSQL."""
from .database import Database
from .log import configure_logging

__all__ = ["Database", "configure_logging"]
