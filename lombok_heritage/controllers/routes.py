"""
Tourism Routes Controller
Route statistics and map geometry
"""
from flask import Blueprint, jsonify, current_app

from lombok_heritage.services.route_planner import RoutePlanner
from lombok_heritage.services.snapshot import load_route, load_routes

routes_bp = Blueprint('routes', __name__, url_prefix='/api/routes')


def _route_payload(route):
    return {
        'id': route.id,
        'name': route.name,
        'is_active': route.is_active,
        'stats': RoutePlanner.calculate_route_stats(route),
        'stops': [{
            'sequence_order': wp.sequence_order,
            'visit_duration_minutes': wp.visit_duration_minutes,
            'site': wp.site.to_dict()
        } for wp in RoutePlanner.ordered_waypoints(route)]
    }


@routes_bp.route('/')
def list_routes():
    """Active routes with their statistics"""
    try:
        return jsonify({'routes': [_route_payload(r) for r in load_routes(active_only=True)]})
    except Exception as e:
        current_app.logger.error(f"Error fetching routes: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@routes_bp.route('/<int:route_id>')
def route_detail(route_id):
    """Single route with statistics, stops and geometry"""
    try:
        route = load_route(route_id)
        if not route:
            return jsonify({'error': f'Route {route_id} not found'}), 404

        payload = _route_payload(route)
        payload['geometry'] = RoutePlanner.resolve_route_geometry(route)
        payload['authored_path'] = RoutePlanner.has_authored_path(route)
        return jsonify(payload)

    except Exception as e:
        current_app.logger.error(f"Error fetching route {route_id}: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@routes_bp.route('/<int:route_id>/geometry')
def route_geometry(route_id):
    """GeoJSON LineString to draw; stored paths take precedence"""
    try:
        route = load_route(route_id)
        if not route:
            return jsonify({'error': f'Route {route_id} not found'}), 404

        geometry = RoutePlanner.resolve_route_geometry(route)
        if geometry is None:
            return jsonify({'error': f'Route {route_id} has no stops'}), 404
        return jsonify(geometry)

    except Exception as e:
        current_app.logger.error(f"Error building geometry for route {route_id}: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500
