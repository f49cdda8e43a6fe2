"""
Recommendations Controller
Preservation priority rankings and CSV report download
"""
from datetime import datetime

from flask import Blueprint, Response, jsonify, request, current_app

from lombok_heritage.services.recommendation_service import RecommendationService, TIERS
from lombok_heritage.services.snapshot import load_sites

recommendations_bp = Blueprint('recommendations', __name__, url_prefix='/api/recommendations')


def _current_priorities():
    """Score every active site; recomputed on each request"""
    service = RecommendationService()
    return service.calculate_all_priorities(load_sites(active_only=True))


def _limit_arg(default):
    limit = request.args.get('limit', default, type=int)
    if limit is None or limit < 1:
        return None
    return limit


@recommendations_bp.route('/')
def list_priorities():
    """All active sites with their preservation priority, highest first"""
    try:
        priorities = RecommendationService.get_top_priority_sites(
            _current_priorities(), limit=None
        )
        return jsonify({'priorities': [p.to_dict() for p in priorities]})
    except Exception as e:
        current_app.logger.error(f"Error calculating preservation priorities: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@recommendations_bp.route('/top')
def top_priorities():
    """Top priority sites for immediate action"""
    limit = _limit_arg(current_app.config['TOP_PRIORITY_LIMIT'])
    if limit is None:
        return jsonify({'error': 'limit must be a positive integer'}), 400

    try:
        priorities = RecommendationService.get_top_priority_sites(_current_priorities(), limit=limit)
        return jsonify({'priorities': [p.to_dict() for p in priorities]})
    except Exception as e:
        current_app.logger.error(f"Error fetching top priority sites: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@recommendations_bp.route('/tier/<tier>')
def priorities_by_tier(tier):
    """Sites of one priority tier"""
    if tier not in TIERS:
        return jsonify({'error': f"tier must be one of {', '.join(TIERS)}"}), 400

    limit = _limit_arg(current_app.config['TIER_LIST_LIMIT'])
    if limit is None:
        return jsonify({'error': 'limit must be a positive integer'}), 400

    try:
        priorities = RecommendationService.get_sites_by_priority(
            _current_priorities(), tier, limit=limit
        )
        return jsonify({'tier': tier, 'priorities': [p.to_dict() for p in priorities]})
    except Exception as e:
        current_app.logger.error(f"Error fetching {tier} priority sites: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@recommendations_bp.route('/stats')
def recommendation_stats():
    """Tier counts and average priority score"""
    try:
        return jsonify(RecommendationService.get_recommendation_stats(_current_priorities()))
    except Exception as e:
        current_app.logger.error(f"Error fetching recommendation stats: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500


@recommendations_bp.route('/export.csv')
def export_csv():
    """Download the priority report as CSV (optionally one tier)"""
    tier = request.args.get('tier')
    if tier is not None and tier not in TIERS:
        return jsonify({'error': f"tier must be one of {', '.join(TIERS)}"}), 400

    try:
        priorities = RecommendationService.get_top_priority_sites(_current_priorities(), limit=None)
        if tier:
            priorities = [p for p in priorities if p.priority_level == tier]

        filename = f"preservation_priorities_{datetime.utcnow().strftime('%Y%m%d')}.csv"
        return Response(
            RecommendationService.export_recommendations_as_csv(priorities),
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={filename}'}
        )
    except Exception as e:
        current_app.logger.error(f"Error exporting recommendations: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500
