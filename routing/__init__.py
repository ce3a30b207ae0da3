#Marks routing as a package.
#Re-exports the public route APIs so other modules import from routing
#without knowing internal file names.
#No business logic.

from .distances import CITY_DISTANCES, DEFAULT_FALLBACK_DISTANCE_KM, DistanceTable, load_distance_table
from .history import RouteHistoryIndex, TripRecord
from .route_resolver import RouteResolver

__all__ = [
    "CITY_DISTANCES",
    "DEFAULT_FALLBACK_DISTANCE_KM",
    "DistanceTable",
    "load_distance_table",
    "RouteHistoryIndex",
    "TripRecord",
    "RouteResolver",
]
