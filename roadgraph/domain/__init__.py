"""Domain layer - Core models, speed table and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    InvalidEdgeError,
    NoRouteFoundError,
    RoadGraphError,
    TourError,
    UnknownVertexError,
)
from .models import Algorithm, Path, Point, RouteResult
from .speeds import DEFAULT_SPEED, DEFAULT_SPEED_TABLE, SpeedTable

__all__ = [
    # Models
    "Algorithm",
    "Path",
    "Point",
    "RouteResult",
    # Speeds
    "DEFAULT_SPEED",
    "DEFAULT_SPEED_TABLE",
    "SpeedTable",
    # Errors
    "RoadGraphError",
    "UnknownVertexError",
    "InvalidEdgeError",
    "NoRouteFoundError",
    "TourError",
    "ConfigurationError",
]
