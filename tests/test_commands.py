"""
Tests for the flask CLI commands in pauta.commands.
"""

from datetime import timedelta
from unittest.mock import patch

from pauta.lib.time import utcnow_naive
from pauta.models import PropositionHighlightOverride


class TestHotTopicsCommand:

    def test_empty(self, app, db):
        result = app.test_cli_runner().invoke(args=['hot-topics'])
        assert result.exit_code == 0
        assert 'No propositions' in result.output

    def test_lists_ranking(self, app, db, make_proposition):
        proposition = make_proposition(theme='Saúde', title='Piso nacional da enfermagem')

        result = app.test_cli_runner().invoke(args=['hot-topics', '--limit', '3'])

        assert result.exit_code == 0
        assert f'#{proposition.id}' in result.output
        assert 'Piso nacional da enfermagem' in result.output
        assert 'momentum=0.25' in result.output

    def test_limit_defaults_to_config(self, app, db, make_proposition):
        app.config['HOT_TOPICS_DEFAULT_LIMIT'] = 2
        for _ in range(3):
            make_proposition()

        result = app.test_cli_runner().invoke(args=['hot-topics'])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert [line.split('.')[0] for line in lines if not line.startswith(' ')] == ['1', '2']


class TestHighlightOverrideCommands:

    def test_set_override(self, app, db, make_proposition):
        proposition = make_proposition()

        result = app.test_cli_runner().invoke(args=[
            'highlight-override', str(proposition.id),
            '--priority', '7', '--expires-in-days', '3', '--reason', 'Votação em plenário',
        ])

        assert result.exit_code == 0
        assert 'priority 7' in result.output
        db.session.expire_all()
        override = db.session.get(PropositionHighlightOverride, proposition.id)
        assert override.priority == 7
        assert override.reason == 'Votação em plenário'
        assert override.expires_at > utcnow_naive() + timedelta(days=2)

    def test_priority_out_of_range(self, app, db, make_proposition):
        proposition = make_proposition()
        result = app.test_cli_runner().invoke(args=[
            'highlight-override', str(proposition.id), '--priority', '11',
        ])
        assert result.exit_code == 2

    def test_unknown_proposition(self, app, db):
        result = app.test_cli_runner().invoke(args=['highlight-override', '4242', '--priority', '5'])
        assert result.exit_code == 1
        assert 'not found' in result.output

    def test_clear_override(self, app, db, make_proposition):
        proposition = make_proposition()
        runner = app.test_cli_runner()
        runner.invoke(args=['highlight-override', str(proposition.id), '--priority', '5'])

        result = runner.invoke(args=['clear-highlight-override', str(proposition.id)])
        assert 'Override cleared' in result.output

        result = runner.invoke(args=['clear-highlight-override', str(proposition.id)])
        assert 'No override' in result.output


class TestSyncPropositionsCommand:

    def test_reports_stats(self, app, db):
        stats = {'fetched': 4, 'created': 3, 'updated': 1, 'pruned': 2, 'errors': 0}
        with patch('pauta.commands.sync_recent_propositions', return_value=stats) as sync:
            result = app.test_cli_runner().invoke(args=['sync-propositions', '--days', '7', '--prune'])

        assert result.exit_code == 0
        assert '3 created' in result.output
        assert '2 pruned' in result.output
        sync.assert_called_once_with(days=7, prune=True)

    def test_upstream_failure(self, app, db):
        from pauta.sync.camara import CamaraAPIError

        with patch('pauta.commands.sync_recent_propositions', side_effect=CamaraAPIError('timeout')):
            result = app.test_cli_runner().invoke(args=['sync-propositions'])

        assert result.exit_code == 1
        assert 'Camara API unavailable' in result.output
