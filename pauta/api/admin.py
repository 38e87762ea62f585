"""
Admin API Endpoints

POST /api/admin/sync-propositions is called by the scheduler. It is
authenticated with the shared CRON_SECRET sent as X-Cron-Secret and is
disabled when no secret is configured.
"""
import hmac

from flask import Blueprint, request, jsonify, current_app

from pauta.api.errors import api_error
from pauta.sync.camara import CamaraAPIError, sync_recent_propositions


admin_api_bp = Blueprint('admin_api', __name__)


def _cron_secret_matches() -> bool:
    expected = current_app.config.get('CRON_SECRET') or ''
    provided = request.headers.get('X-Cron-Secret') or ''
    return hmac.compare_digest(expected.encode(), provided.encode())


@admin_api_bp.route('/admin/sync-propositions', methods=['POST'])
def sync_propositions():
    """
    Sync recently presented propositions from the Camara API.

    Body (optional):
        {"days": int, "prune": bool}

    Returns:
        200: Sync stats
        401: Missing or wrong X-Cron-Secret
        403: No CRON_SECRET configured
        502: Camara API unavailable
    """
    if not current_app.config.get('CRON_SECRET'):
        return api_error('sync_disabled', 'Sync endpoint is disabled: CRON_SECRET is not configured.', 403)
    if not _cron_secret_matches():
        return api_error('unauthorized', 'Authentication required.', 401)

    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return api_error('invalid_payload', 'Expected a JSON object.', 422)

    days = body.get('days')
    if days is not None and (isinstance(days, bool) or not isinstance(days, int) or days <= 0):
        return api_error('invalid_payload', 'days must be a positive integer.', 422)

    # prune deletes rows; only a literal JSON boolean turns it on
    prune = body.get('prune', False)
    if not isinstance(prune, bool):
        return api_error('invalid_payload', 'prune must be true or false.', 422)

    try:
        stats = sync_recent_propositions(days=days, prune=prune)
    except CamaraAPIError as e:
        current_app.logger.error(f"[admin.sync-propositions] Camara API failure: {e}")
        return api_error('upstream_error', 'The Camara API could not be reached.', 502)

    return jsonify({'message': 'Sync complete.', **stats})
