"""Services layer - Application orchestration.

Available services:
- RouteService: Algorithm dispatch, timing and route summaries
"""

from .route_service import RouteService

__all__ = ["RouteService"]
