from .users import get_user_with_email, get_user_with_id, add_user
from .reservations import get_all_reservations
from .properties import get_all_properties, add_property

__all__ = [
    "get_user_with_email",
    "get_user_with_id",
    "add_user",
    "get_all_reservations",
    "get_all_properties",
    "add_property",
]
