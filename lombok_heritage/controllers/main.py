"""Main routes - health check and image tag suggestions"""
from flask import Blueprint, jsonify, request, current_app

from lombok_heritage.services.image_tagging import ClassifierUnavailable, suggest_tags

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """Liveness probe"""
    return jsonify({
        'status': 'ok',
        'project': current_app.config['PROJECT_NAME'],
        'organization': current_app.config['ORGANIZATION_NAME'],
        'version': current_app.config['VERSION']
    })


@main_bp.route('/api/tagging/suggest', methods=['POST'])
def suggest_image_tags():
    """
    Suggest tags for a site photo

    Request body: raw image bytes

    Returns:
        JSON with classifier predictions and suggested tags
    """
    image = request.get_data()
    if not image:
        return jsonify({'error': 'Request body must contain an image'}), 400

    classifier = current_app.extensions['classifier']
    if not classifier.configured:
        return jsonify({'error': 'Image classifier is not configured'}), 503

    try:
        with classifier:
            predictions = classifier.classify(image)

        min_score = request.args.get('min_score', current_app.config['TAG_MIN_SCORE'], type=float)
        return jsonify({
            'predictions': predictions,
            'tags': suggest_tags(predictions, min_score=min_score)
        })

    except ClassifierUnavailable as e:
        return jsonify({'error': str(e)}), 503
    except Exception as e:
        current_app.logger.error(f"Error classifying image: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500
