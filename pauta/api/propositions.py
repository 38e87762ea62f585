"""
Proposition API Endpoints

- GET  /api/propositions/highlights        hot topics strip
- POST /api/propositions/<id>/engagement   view/favorite/share tracking
- GET  /api/propositions/<id>/stances      stance poll summary
"""
from flask import Blueprint, request, jsonify, current_app

from pauta import limiter
from pauta.api.errors import api_error
from pauta.engagement import MAX_INTEREST_AMOUNT, is_valid_amount, record_interest, summarize_stances
from pauta.highlights.constants import DEFAULT_LIMIT, DEFAULT_MAX_CANDIDATES
from pauta.highlights.selector import list_hot_topics
from pauta.models import PropositionInterestDaily


propositions_bp = Blueprint('propositions_api', __name__)


def parse_limit(raw, default: int, maximum: int) -> int:
    """Missing, non-numeric or non-positive values fall back to the default."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, maximum)


@propositions_bp.route('/propositions/highlights', methods=['GET'])
def highlights():
    """
    Ranked hot topics.

    Query Parameters:
        limit (optional): Number of topics (default HOT_TOPICS_DEFAULT_LIMIT)

    Returns:
        200: {"data": [topic, ...]}
        500: Ranking could not be computed
    """
    limit = parse_limit(
        request.args.get('limit'),
        default=current_app.config.get('HOT_TOPICS_DEFAULT_LIMIT', DEFAULT_LIMIT),
        maximum=current_app.config.get('HOT_TOPICS_MAX_CANDIDATES', DEFAULT_MAX_CANDIDATES),
    )

    try:
        topics = list_hot_topics(limit=limit)
    except Exception as e:
        current_app.logger.error(f"[propositions.highlights] Failed to list hot topics: {e}")
        return api_error('highlights_unavailable', 'Could not load highlighted propositions.', 500)

    return jsonify({'data': [topic.to_dict() for topic in topics]})


def _validate_engagement_payload(body):
    """Returns (event_type, amount, errors)."""
    if not isinstance(body, dict):
        return None, None, {'body': 'Expected a JSON object.'}

    errors = {}
    event_type = body.get('eventType')
    if event_type not in PropositionInterestDaily.EVENT_COLUMNS:
        errors['eventType'] = f"Must be one of: {', '.join(PropositionInterestDaily.EVENT_COLUMNS)}."

    amount = body.get('amount', 1)
    if not is_valid_amount(amount):
        errors['amount'] = f"Must be an integer between 1 and {MAX_INTEREST_AMOUNT}."

    return event_type, amount, errors


@propositions_bp.route('/propositions/<int:proposition_id>/engagement', methods=['POST'])
@limiter.limit(lambda: current_app.config.get('ENGAGEMENT_RATE_LIMIT', '120 per minute'))
def track_engagement(proposition_id):
    """
    Record a view, favorite or share.

    Body:
        {"eventType": "view" | "favorite" | "share", "amount": 1..10 (optional)}

    Returns:
        200: {"ok": true}
        400: Body is not valid JSON
        404: Unknown proposition
        422: Invalid payload
    """
    body = request.get_json(silent=True)
    if body is None:
        return api_error('invalid_json', 'Request body must be valid JSON.', 400)

    event_type, amount, errors = _validate_engagement_payload(body)
    if errors:
        return api_error('invalid_payload', 'Invalid engagement payload.', 422, details=errors)

    try:
        record_interest(proposition_id, event_type, amount)
    except LookupError:
        return api_error('not_found', 'Proposition not found.', 404)
    except Exception as e:
        current_app.logger.error(f"[propositions.engagement] Failed to record {event_type} for {proposition_id}: {e}")
        return api_error('engagement_failed', 'Could not record the engagement event.', 500)

    return jsonify({'ok': True})


@propositions_bp.route('/propositions/<int:proposition_id>/stances', methods=['GET'])
def stance_summary(proposition_id):
    try:
        summary = summarize_stances(proposition_id)
    except LookupError:
        return api_error('not_found', 'Proposition not found.', 404)
    return jsonify(summary)
