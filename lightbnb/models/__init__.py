from .tables import Base, User, Property, Reservation, PropertyReview

__all__ = ["Base", "User", "Property", "Reservation", "PropertyReview"]
