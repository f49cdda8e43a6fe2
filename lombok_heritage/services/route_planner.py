"""
Route Planner Service
Aggregate statistics and map geometry for tourism routes
"""
from typing import Any, Dict, List, Optional

from lombok_heritage.services.geo_math import distance_km
from lombok_heritage.services.snapshot import RouteRecord, RouteWaypoint

DEFAULT_VISIT_MINUTES = 60


class RoutePlanner:
    """Stateless calculations over a RouteRecord"""

    @staticmethod
    def ordered_waypoints(route: RouteRecord) -> List[RouteWaypoint]:
        return sorted(route.waypoints, key=lambda wp: wp.sequence_order)

    @staticmethod
    def calculate_route_stats(route: RouteRecord) -> Dict[str, Any]:
        """
        Calculate route statistics

        Returns:
            dict with total_sites, total_duration (minutes), total_distance
            (km, straight legs between consecutive stops) and average_rating
            (mean cultural significance of the stops)
        """
        waypoints = RoutePlanner.ordered_waypoints(route)
        total_sites = len(waypoints)

        if total_sites == 0:
            return {
                'total_sites': 0,
                'total_duration': 0,
                'total_distance': 0,
                'average_rating': 0
            }

        total_duration = sum(
            wp.visit_duration_minutes if wp.visit_duration_minutes is not None
            else DEFAULT_VISIT_MINUTES
            for wp in waypoints
        )

        total_distance = 0.0
        for prev, curr in zip(waypoints, waypoints[1:]):
            total_distance += distance_km(
                prev.site.latitude, prev.site.longitude,
                curr.site.latitude, curr.site.longitude
            )

        average_rating = sum(
            wp.site.cultural_significance_score or 0 for wp in waypoints
        ) / total_sites

        return {
            'total_sites': total_sites,
            'total_duration': total_duration,
            'total_distance': round(total_distance, 2),
            'average_rating': round(average_rating, 1)
        }

    @staticmethod
    def generate_route_coordinates(route: RouteRecord) -> Optional[Dict[str, Any]]:
        """GeoJSON LineString through the stops in sequence order, or None"""
        waypoints = RoutePlanner.ordered_waypoints(route)
        if not waypoints:
            return None

        return {
            'type': 'LineString',
            'coordinates': [[wp.site.longitude, wp.site.latitude] for wp in waypoints]
        }

    @staticmethod
    def has_authored_path(route: RouteRecord) -> bool:
        geometry = route.route_coordinates
        if not isinstance(geometry, dict):
            return False
        coordinates = geometry.get('coordinates')
        return (geometry.get('type') == 'LineString'
                and isinstance(coordinates, list)
                and len(coordinates) >= 2)

    @staticmethod
    def resolve_route_geometry(route: RouteRecord) -> Optional[Dict[str, Any]]:
        """
        Geometry to draw for a route.

        A stored LineString with at least two positions wins over one
        generated from the stops.
        """
        if RoutePlanner.has_authored_path(route):
            return {
                'type': 'LineString',
                'coordinates': route.route_coordinates['coordinates']
            }
        return RoutePlanner.generate_route_coordinates(route)
