"""
Tests for the JSON API.

Covers:
- Highlights listing, limit parsing and degraded errors
- Engagement payload validation and error envelope
- Stance summaries
- Cron-secret protected sync endpoint
"""

import pytest
from datetime import timedelta
from unittest.mock import patch

from pauta.api.propositions import parse_limit
from pauta.lib.time import utcnow_naive
from pauta.models import PropositionInterestDaily, Stance


class TestParseLimit:
    """Tests for parse_limit helper."""

    def test_missing(self):
        assert parse_limit(None, 5, 80) == 5

    def test_non_numeric(self):
        assert parse_limit('abc', 5, 80) == 5

    def test_non_positive(self):
        assert parse_limit('0', 5, 80) == 5
        assert parse_limit('-3', 5, 80) == 5

    def test_capped(self):
        assert parse_limit('500', 5, 80) == 80

    def test_valid(self):
        assert parse_limit('12', 5, 80) == 12


class TestHighlightsEndpoint:
    """GET /api/propositions/highlights"""

    def test_empty(self, client):
        response = client.get('/api/propositions/highlights')
        assert response.status_code == 200
        assert response.get_json() == {'data': []}

    def test_returns_ranked_topics(self, client, make_proposition):
        today = utcnow_naive().date()
        make_proposition(today - timedelta(days=20))
        fresh = make_proposition(today, theme='Saúde')

        response = client.get('/api/propositions/highlights')
        data = response.get_json()['data']

        assert response.status_code == 200
        assert len(data) == 2
        assert data[0]['id'] == fresh.id
        assert data[0]['label'] == 'New & relevant'
        assert data[0]['score'] == pytest.approx(0.51)
        assert data[0]['presentation_date'] == today.isoformat()
        assert data[0]['components']['momentum'] == 0.25

    def test_limit_param(self, client, make_proposition):
        today = utcnow_naive().date()
        for n in range(4):
            make_proposition(today - timedelta(days=n))

        assert len(client.get('/api/propositions/highlights?limit=2').get_json()['data']) == 2
        assert len(client.get('/api/propositions/highlights?limit=nope').get_json()['data']) == 4

    def test_failure_returns_error_envelope(self, client):
        with patch('pauta.api.propositions.list_hot_topics', side_effect=RuntimeError('db down')):
            response = client.get('/api/propositions/highlights')

        assert response.status_code == 500
        body = response.get_json()
        assert body['error'] == 'highlights_unavailable'
        assert 'message' in body


class TestEngagementEndpoint:
    """POST /api/propositions/<id>/engagement"""

    def test_records_view(self, client, make_proposition):
        proposition = make_proposition()
        response = client.post(
            f'/api/propositions/{proposition.id}/engagement',
            json={'eventType': 'view'},
        )

        assert response.status_code == 200
        assert response.get_json() == {'ok': True}
        row = PropositionInterestDaily.query.filter_by(proposition_id=proposition.id).one()
        assert row.views == 1

    def test_records_amount(self, client, make_proposition):
        proposition = make_proposition()
        client.post(f'/api/propositions/{proposition.id}/engagement',
                    json={'eventType': 'share', 'amount': 3})

        row = PropositionInterestDaily.query.filter_by(proposition_id=proposition.id).one()
        assert row.shares == 3

    def test_invalid_json(self, client, make_proposition):
        proposition = make_proposition()
        response = client.post(
            f'/api/propositions/{proposition.id}/engagement',
            data='{not json',
            content_type='application/json',
        )
        assert response.status_code == 400
        assert response.get_json()['error'] == 'invalid_json'

    @pytest.mark.parametrize('payload', [
        {'eventType': 'like'},
        {'eventType': 'view', 'amount': 0},
        {'eventType': 'view', 'amount': 11},
        {'eventType': 'view', 'amount': '2'},
        {'eventType': 'view', 'amount': True},
        {},
        ['view'],
    ])
    def test_invalid_payload(self, client, make_proposition, payload):
        proposition = make_proposition()
        response = client.post(f'/api/propositions/{proposition.id}/engagement', json=payload)

        assert response.status_code == 422
        assert response.get_json()['error'] == 'invalid_payload'
        assert PropositionInterestDaily.query.count() == 0

    def test_unknown_proposition(self, client):
        response = client.post('/api/propositions/4242/engagement', json={'eventType': 'view'})
        assert response.status_code == 404
        assert response.get_json()['error'] == 'not_found'

    def test_unexpected_failure(self, client, make_proposition):
        proposition = make_proposition()
        with patch('pauta.api.propositions.record_interest', side_effect=RuntimeError('boom')):
            response = client.post(f'/api/propositions/{proposition.id}/engagement',
                                   json={'eventType': 'view'})

        assert response.status_code == 500
        assert response.get_json()['error'] == 'engagement_failed'


class TestStancesEndpoint:
    """GET /api/propositions/<id>/stances"""

    def test_summary(self, client, db, make_proposition):
        proposition = make_proposition()
        db.session.add_all([
            Stance(proposition_id=proposition.id, user_id='a', stance='against'),
            Stance(proposition_id=proposition.id, user_id='b', stance='neutral'),
        ])
        db.session.commit()

        body = client.get(f'/api/propositions/{proposition.id}/stances').get_json()

        assert body['total'] == 2
        assert body['percentages'] == {'for': 0, 'against': 50, 'neutral': 50}

    def test_unknown_proposition(self, client):
        response = client.get('/api/propositions/4242/stances')
        assert response.status_code == 404


class TestSyncEndpoint:
    """POST /api/admin/sync-propositions"""

    STATS = {'fetched': 3, 'created': 2, 'updated': 1, 'pruned': 0, 'errors': 0}

    def test_disabled_without_secret(self, client):
        response = client.post('/api/admin/sync-propositions', headers={'X-Cron-Secret': 'anything'})
        assert response.status_code == 403
        assert response.get_json()['error'] == 'sync_disabled'

    def test_wrong_secret(self, app, client):
        app.config['CRON_SECRET'] = 's3cret'
        response = client.post('/api/admin/sync-propositions', headers={'X-Cron-Secret': 'nope'})
        assert response.status_code == 401
        assert response.get_json()['error'] == 'unauthorized'

    def test_missing_header(self, app, client):
        app.config['CRON_SECRET'] = 's3cret'
        assert client.post('/api/admin/sync-propositions').status_code == 401

    def test_runs_sync(self, app, client):
        app.config['CRON_SECRET'] = 's3cret'
        with patch('pauta.api.admin.sync_recent_propositions', return_value=dict(self.STATS)) as sync:
            response = client.post(
                '/api/admin/sync-propositions',
                headers={'X-Cron-Secret': 's3cret'},
                json={'days': 5, 'prune': True},
            )

        assert response.status_code == 200
        assert response.get_json()['created'] == 2
        sync.assert_called_once_with(days=5, prune=True)

    def test_invalid_days(self, app, client):
        app.config['CRON_SECRET'] = 's3cret'
        response = client.post(
            '/api/admin/sync-propositions',
            headers={'X-Cron-Secret': 's3cret'},
            json={'days': 0},
        )
        assert response.status_code == 422

    @pytest.mark.parametrize('prune', ['false', 1, None, 'true'])
    def test_prune_must_be_boolean(self, app, client, prune):
        app.config['CRON_SECRET'] = 's3cret'
        with patch('pauta.api.admin.sync_recent_propositions') as sync:
            response = client.post(
                '/api/admin/sync-propositions',
                headers={'X-Cron-Secret': 's3cret'},
                json={'prune': prune},
            )

        assert response.status_code == 422
        assert response.get_json()['error'] == 'invalid_payload'
        sync.assert_not_called()

    def test_prune_defaults_to_false(self, app, client):
        app.config['CRON_SECRET'] = 's3cret'
        with patch('pauta.api.admin.sync_recent_propositions', return_value=dict(self.STATS)) as sync:
            response = client.post(
                '/api/admin/sync-propositions',
                headers={'X-Cron-Secret': 's3cret'},
                json={'days': 3},
            )

        assert response.status_code == 200
        sync.assert_called_once_with(days=3, prune=False)

    @pytest.mark.parametrize('payload', [[1, 2], 'sync', 7])
    def test_non_object_body(self, app, client, payload):
        app.config['CRON_SECRET'] = 's3cret'
        with patch('pauta.api.admin.sync_recent_propositions') as sync:
            response = client.post(
                '/api/admin/sync-propositions',
                headers={'X-Cron-Secret': 's3cret'},
                json=payload,
            )

        assert response.status_code == 422
        assert response.get_json()['error'] == 'invalid_payload'
        sync.assert_not_called()

    def test_upstream_failure(self, app, client):
        from pauta.sync.camara import CamaraAPIError

        app.config['CRON_SECRET'] = 's3cret'
        with patch('pauta.api.admin.sync_recent_propositions', side_effect=CamaraAPIError('timeout')):
            response = client.post('/api/admin/sync-propositions', headers={'X-Cron-Secret': 's3cret'})

        assert response.status_code == 502
        assert response.get_json()['error'] == 'upstream_error'
