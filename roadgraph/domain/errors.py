"""Typed domain errors for the road graph.

All errors inherit from RoadGraphError and can optionally wrap a root
cause exception for debugging. Errors signalling a bad argument also
inherit from ValueError so callers can catch them generically.

"No path" is not an error at the graph level: search entry points
return None. Only the route service turns it into NoRouteFoundError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class RoadGraphError(Exception):
    """Base error for the road graph domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class UnknownVertexError(RoadGraphError, ValueError):
    """A point used as an edge endpoint or search endpoint is not a vertex.

    Attributes:
        point: The point that is not registered in the graph
    """

    point: Any = None


@dataclass
class InvalidEdgeError(RoadGraphError, ValueError):
    """An edge cannot be created or followed.

    Raised for negative or non-finite lengths, and when two consecutive
    points of a path are not connected by any edge.

    Attributes:
        start: Start point of the offending edge
        end: End point of the offending edge
    """

    start: Any = None
    end: Any = None


@dataclass
class NoRouteFoundError(RoadGraphError):
    """No path exists between the requested points.

    Attributes:
        start: Start point of the query
        goal: Goal point of the query
        algorithm: Tag of the algorithm that exhausted its frontier
    """

    start: Any = None
    goal: Any = None
    algorithm: str = ""


@dataclass
class TourError(RoadGraphError):
    """A tour cannot be planned from the requested start.

    Attributes:
        start: The tour start point
    """

    start: Any = None


@dataclass
class ConfigurationError(RoadGraphError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
