"""
Dashboard Controller
Summary statistics and chart series for the admin dashboard
"""
from flask import Blueprint, jsonify, request, current_app

from lombok_heritage.services.dashboard_service import DashboardService
from lombok_heritage.services.snapshot import load_catalogue, load_sites

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@dashboard_bp.route('/stats')
def stats():
    """Dashboard statistics API"""
    try:
        snapshot = load_catalogue()
        return jsonify(DashboardService.get_dashboard_stats(
            snapshot.sites, snapshot.categories, snapshot.reviews, snapshot.routes
        ))
    except Exception as e:
        current_app.logger.error(f"Error fetching dashboard stats: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@dashboard_bp.route('/categories')
def category_distribution():
    """Active sites per category (bar/pie chart)"""
    try:
        sites = load_sites(active_only=True)
        return jsonify({'categories': DashboardService.get_category_distribution(sites)})
    except Exception as e:
        current_app.logger.error(f"Error fetching category distribution: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@dashboard_bp.route('/growth')
def site_growth():
    """Monthly site additions over the last 6 or 12 months"""
    months = request.args.get('months', current_app.config['GROWTH_DEFAULT_MONTHS'], type=int)
    allowed = current_app.config['GROWTH_WINDOWS']
    if months not in allowed:
        return jsonify({
            'error': f"months must be one of {', '.join(str(m) for m in allowed)}"
        }), 400

    try:
        sites = load_sites(active_only=False)
        return jsonify({
            'months': months,
            'series': DashboardService.get_site_growth(sites, months=months)
        })
    except Exception as e:
        current_app.logger.error(f"Error fetching site growth data: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@dashboard_bp.route('/heatmap')
def heatmap():
    """Site density/significance heatmap points"""
    try:
        sites = load_sites(active_only=True)
        return jsonify({'points': DashboardService.get_heatmap_data(sites)})
    except Exception as e:
        current_app.logger.error(f"Error fetching heatmap data: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@dashboard_bp.route('/preservation-status')
def preservation_status():
    """Preservation status distribution"""
    try:
        sites = load_sites(active_only=True)
        return jsonify({'statuses': DashboardService.get_preservation_status_distribution(sites)})
    except Exception as e:
        current_app.logger.error(f"Error fetching preservation status distribution: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@dashboard_bp.route('/recent')
def recent_activities():
    """Latest sites, reviews and routes"""
    limit = request.args.get('limit', current_app.config['RECENT_ACTIVITY_LIMIT'], type=int)
    if limit is None or limit < 1:
        return jsonify({'error': 'limit must be a positive integer'}), 400

    try:
        snapshot = load_catalogue()
        return jsonify(DashboardService.get_recent_activities(
            snapshot.sites, snapshot.reviews, snapshot.routes, limit=limit
        ))
    except Exception as e:
        current_app.logger.error(f"Error fetching recent activities: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500
