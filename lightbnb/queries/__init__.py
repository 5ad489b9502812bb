from .property_search import (
    CityMatch,
    OwnerMatch,
    PriceRange,
    RatingThreshold,
    SearchStatement,
    build_property_search,
    predicates_from_options,
    render_statement,
)

__all__ = [
    "CityMatch",
    "OwnerMatch",
    "PriceRange",
    "RatingThreshold",
    "SearchStatement",
    "build_property_search",
    "predicates_from_options",
    "render_statement",
]
