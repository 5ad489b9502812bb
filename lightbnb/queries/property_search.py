"""Builds the property listing statement from optional search filters.

Each filter becomes a predicate object that renders its own SQL through a
``bind`` callback. ``bind`` pushes the value onto the parameter list and hands
back the matching ``$n`` placeholder, so a placeholder is always numbered
after the value it refers to, whatever order predicates are added in.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, List, NamedTuple, Tuple

from lightbnb.schemas.records import PropertySearchOptions, check_limit

Bind = Callable[[Any], str]

BASE_SELECT = (
    "SELECT properties.*, avg(property_reviews.rating) AS average_rating "
    "FROM properties "
    "LEFT JOIN property_reviews ON properties.id = property_reviews.property_id "
    "WHERE true"
)

def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

class CityMatch(NamedTuple):
    city: str
    having = False

    def render(self, bind: Bind) -> str:
        return f"city LIKE {bind(f'%{self.city}%')}"

class OwnerMatch(NamedTuple):
    owner_id: int
    having = False

    def render(self, bind: Bind) -> str:
        return f"owner_id = {bind(self.owner_id)}"

class PriceRange(NamedTuple):
    minimum_cents: int
    maximum_cents: int
    having = False

    def render(self, bind: Bind) -> str:
        low = bind(self.minimum_cents)
        high = bind(self.maximum_cents)
        return f"cost_per_night >= {low} AND cost_per_night <= {high}"

class RatingThreshold(NamedTuple):
    minimum_rating: Decimal
    having = True

    def render(self, bind: Bind) -> str:
        return f"avg(property_reviews.rating) >= {bind(self.minimum_rating)}"

class SearchStatement(NamedTuple):
    sql: str
    params: Tuple[Any, ...]

def predicates_from_options(options: PropertySearchOptions) -> list:
    """Translate filters into predicates, always in city, owner, price, rating order.

    Zero and empty values count as unset. The price range only applies when
    both bounds are set.
    """
    predicates = []
    if options.city:
        predicates.append(CityMatch(options.city))
    if options.owner_id:
        predicates.append(OwnerMatch(options.owner_id))
    if options.minimum_price_per_night and options.maximum_price_per_night:
        predicates.append(PriceRange(
            to_minor_units(options.minimum_price_per_night),
            to_minor_units(options.maximum_price_per_night),
        ))
    if options.minimum_rating:
        predicates.append(RatingThreshold(options.minimum_rating))
    return predicates

def render_statement(predicates: list, limit: int) -> SearchStatement:
    check_limit(limit)
    params: List[Any] = []

    def bind(value: Any) -> str:
        params.append(value)
        return f"${len(params)}"

    parts = [BASE_SELECT]
    parts.extend(f"AND {p.render(bind)}" for p in predicates if not p.having)
    parts.append("GROUP BY properties.id")
    having = [p.render(bind) for p in predicates if p.having]
    if having:
        parts.append("HAVING " + " AND ".join(having))
    parts.append("ORDER BY cost_per_night")
    parts.append(f"LIMIT {bind(limit)}")
    return SearchStatement(" ".join(parts) + ";", tuple(params))

def build_property_search(options: PropertySearchOptions, limit: int = 10) -> SearchStatement:
    return render_statement(predicates_from_options(options), limit)
