from datetime import timedelta

import click
from flask import current_app
from flask.cli import with_appcontext

from pauta.highlights.constants import DEFAULT_LIMIT
from pauta.highlights.overrides import set_override, clear_override
from pauta.highlights.selector import list_hot_topics
from pauta.lib.time import utcnow_naive
from pauta.sync.camara import CamaraAPIError, sync_recent_propositions


@click.command('sync-propositions')
@click.option('--days', type=click.IntRange(min=1), default=None,
              help='Sync window in days (defaults to SYNC_WINDOW_DAYS)')
@click.option('--prune', is_flag=True, help='Delete propositions presented before the window')
@with_appcontext
def sync_propositions(days, prune):
    """Pull recently presented propositions from the Camara API."""
    try:
        stats = sync_recent_propositions(days=days, prune=prune)
    except CamaraAPIError as e:
        raise click.ClickException(f"Camara API unavailable: {e}")

    click.echo(
        f"Fetched {stats['fetched']}: {stats['created']} created, {stats['updated']} updated, "
        f"{stats['pruned']} pruned, {stats['errors']} errors"
    )


@click.command('hot-topics')
@click.option('--limit', type=click.IntRange(min=1), default=None,
              help='Number of topics (defaults to HOT_TOPICS_DEFAULT_LIMIT)')
@with_appcontext
def hot_topics(limit):
    """Print the current hot-topics ranking."""
    if limit is None:
        limit = current_app.config.get('HOT_TOPICS_DEFAULT_LIMIT', DEFAULT_LIMIT)
    topics = list_hot_topics(limit=limit)
    if not topics:
        click.echo('No propositions in the lookback window.')
        return

    for position, topic in enumerate(topics, 1):
        components = topic.computation.components
        click.echo(
            f"{position}. [{topic.score:.2f}] {topic.label:<16} #{topic.id} "
            f"{topic.proposal.type} {topic.proposal.number}/{topic.proposal.year} - {topic.proposal.title}"
        )
        click.echo(
            f"   recency={components.recency:.2f} engagement={components.engagement:.2f} "
            f"momentum={components.momentum:.2f} theme={components.theme:.2f} "
            f"override={components.override:.2f}"
        )


@click.command('highlight-override')
@click.argument('proposition_id', type=int)
@click.option('--priority', type=click.IntRange(0, 10), required=True)
@click.option('--expires-in-days', type=click.IntRange(min=1), default=None,
              help='Override stops applying after this many days')
@click.option('--reason', default=None)
@with_appcontext
def highlight_override(proposition_id, priority, expires_in_days, reason):
    """Pin a proposition in the hot-topics ranking."""
    expires_at = utcnow_naive() + timedelta(days=expires_in_days) if expires_in_days else None
    try:
        set_override(proposition_id, priority, expires_at=expires_at, reason=reason)
    except LookupError as e:
        raise click.ClickException(str(e))

    suffix = f" until {expires_at:%Y-%m-%d %H:%M} UTC" if expires_at else ''
    click.echo(f"Override set for proposition {proposition_id}: priority {priority}{suffix}")


@click.command('clear-highlight-override')
@click.argument('proposition_id', type=int)
@with_appcontext
def clear_highlight_override(proposition_id):
    """Remove a curator override."""
    if clear_override(proposition_id):
        click.echo(f"Override cleared for proposition {proposition_id}")
    else:
        click.echo(f"No override for proposition {proposition_id}")


def init_commands(app):
    app.cli.add_command(sync_propositions)
    app.cli.add_command(hot_topics)
    app.cli.add_command(highlight_override)
    app.cli.add_command(clear_highlight_override)
