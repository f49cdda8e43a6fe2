"""
Spatial Controller
Buffer analysis, overlays and route drawing for the public map
"""
from flask import Blueprint, jsonify, request, current_app

from lombok_heritage.services.snapshot import load_sites
from lombok_heritage.services.spatial_analysis import SpatialAnalysisService

spatial_bp = Blueprint('spatial', __name__, url_prefix='/api/spatial')


def _radius_arg():
    """Buffer radius from the query string, or None when out of bounds"""
    radius = request.args.get('radius', current_app.config['BUFFER_RADIUS_DEFAULT'], type=float)
    low = current_app.config['BUFFER_RADIUS_MIN']
    high = current_app.config['BUFFER_RADIUS_MAX']
    if radius is None or not low <= radius <= high:
        return None
    return radius


def _radius_error():
    return jsonify({
        'error': (f"radius must be between {current_app.config['BUFFER_RADIUS_MIN']} and "
                  f"{current_app.config['BUFFER_RADIUS_MAX']} meters")
    }), 400


@spatial_bp.route('/buffers')
def buffer_zones():
    """
    Buffer zones around selected sites

    Query:
        site_id: repeated, one per selected site (selection order is kept)
        radius: meters
    """
    site_ids = request.args.getlist('site_id', type=int)
    if not site_ids:
        return jsonify({'error': 'At least one site_id is required'}), 400

    radius = _radius_arg()
    if radius is None:
        return _radius_error()

    try:
        by_id = {site.id: site for site in load_sites(active_only=True, site_ids=site_ids)}
        missing = [sid for sid in site_ids if sid not in by_id]
        if missing:
            return jsonify({'error': f"Sites not found: {', '.join(str(m) for m in missing)}"}), 404

        selected = [by_id[sid] for sid in site_ids]
        zones = SpatialAnalysisService.create_buffer_zones(selected, radius)
        return jsonify({'radius': radius, 'zones': [z.to_dict() for z in zones]})

    except Exception as e:
        current_app.logger.error(f"Error creating buffer zones: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@spatial_bp.route('/sites-in-buffer')
def sites_in_buffer():
    """Active sites within radius meters of (lat, lng)"""
    lat = request.args.get('lat', type=float)
    lng = request.args.get('lng', type=float)
    if lat is None or lng is None or not -90 <= lat <= 90 or not -180 <= lng <= 180:
        return jsonify({'error': 'Valid lat and lng are required'}), 400

    radius = _radius_arg()
    if radius is None:
        return _radius_error()

    try:
        sites = SpatialAnalysisService.find_sites_in_buffer((lat, lng), load_sites(active_only=True), radius)
        return jsonify({
            'center': [lat, lng],
            'radius': radius,
            'sites': [s.to_dict() for s in sites]
        })
    except Exception as e:
        current_app.logger.error(f"Error searching sites in buffer: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@spatial_bp.route('/overlays')
def overlays():
    """Available map overlays with their default visibility and opacity"""
    return jsonify({'overlays': [o.to_dict() for o in SpatialAnalysisService.default_overlays()]})


@spatial_bp.route('/stats')
def spatial_stats():
    """Centroid, spread, density and clusters of active sites"""
    try:
        return jsonify(SpatialAnalysisService.calculate_spatial_stats(load_sites(active_only=True)))
    except Exception as e:
        current_app.logger.error(f"Error calculating spatial stats: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@spatial_bp.route('/geojson')
def geojson():
    """Active sites as a GeoJSON FeatureCollection"""
    try:
        return jsonify(SpatialAnalysisService.export_as_geojson(load_sites(active_only=True)))
    except Exception as e:
        current_app.logger.error(f"Error exporting GeoJSON: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@spatial_bp.route('/route', methods=['POST'])
def generate_route():
    """
    Polyline through user-chosen points

    Request Body (JSON):
    {
        "points": [{"lat": -8.58, "lng": 116.10, "name": "Pura Meru"}, ...]
    }
    """
    data = request.get_json(silent=True) or {}
    points = data.get('points')
    if not isinstance(points, list):
        return jsonify({'error': 'points must be a list'}), 400

    try:
        route = SpatialAnalysisService.generate_route(points)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'error': f'Invalid point: {e}'}), 400

    return jsonify({'route': route, 'point_count': len(route)})
