"""
Database-backed source for the hot-topics selector.

Two reads per ranking: candidate propositions with their comment/stance
counts, then interaction windows and overrides for exactly those ids.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List

from sqlalchemy import case, func, select

from pauta import db
from pauta.highlights.selector import HotTopicsSource, InteractionContext
from pauta.highlights.types import (
    CandidateProposal,
    EngagementCounts,
    InteractionWindow,
)
from pauta.models import (
    Comment,
    Proposition,
    PropositionHighlightOverride,
    PropositionInterestDaily,
    Stance,
)

WINDOW_DAYS = 7


def _sum_when(condition, column):
    return func.coalesce(func.sum(case((condition, column), else_=0)), 0)


class SqlAlchemyHotTopicsSource(HotTopicsSource):
    """
    Reads hot-topic inputs through SQLAlchemy.

    Windows end on the `as_of` date passed by the selector. The "last 7
    days" are that day and the six days before it; the "previous 7
    days" are the seven days before those. A proposition has a window only
    when it has at least one daily row inside those fourteen days.
    """

    def __init__(self, session=None):
        self.session = session or db.session

    def fetch_candidate_proposals(self, since: date, max_count: int) -> List[CandidateProposal]:
        comments_count = (
            select(func.count(Comment.id))
            .where(Comment.proposition_id == Proposition.id)
            .correlate(Proposition)
            .scalar_subquery()
        )
        stances_count = (
            select(func.count(Stance.id))
            .where(Stance.proposition_id == Proposition.id)
            .correlate(Proposition)
            .scalar_subquery()
        )

        rows = (
            self.session.query(
                Proposition,
                comments_count.label('comments_count'),
                stances_count.label('stances_count'),
            )
            .filter(Proposition.presentation_date >= since)
            .order_by(Proposition.presentation_date.desc(), Proposition.id.desc())
            .limit(max_count)
            .all()
        )

        return [
            CandidateProposal(
                proposal=proposition.to_snapshot(),
                engagement=EngagementCounts(comments=comments or 0, stances=stances or 0),
            )
            for proposition, comments, stances in rows
        ]

    def fetch_interaction_context(self, proposal_ids: Iterable[int], as_of: date) -> InteractionContext:
        ids = list(proposal_ids)
        if not ids:
            return {}

        windows = self._fetch_windows(ids, as_of)
        overrides = {
            row.proposition_id: row.to_override()
            for row in self.session.query(PropositionHighlightOverride)
            .filter(PropositionHighlightOverride.proposition_id.in_(ids))
            .all()
        }

        context: InteractionContext = {}
        for proposition_id in ids:
            window = windows.get(proposition_id)
            override = overrides.get(proposition_id)
            if window is not None or override is not None:
                context[proposition_id] = (window, override)
        return context

    def _fetch_windows(self, ids: List[int], today: date) -> Dict[int, InteractionWindow]:
        last_start = today - timedelta(days=WINDOW_DAYS - 1)
        previous_start = today - timedelta(days=2 * WINDOW_DAYS - 1)

        daily = PropositionInterestDaily
        recent = daily.day >= last_start
        earlier = daily.day < last_start

        rows = (
            self.session.query(
                daily.proposition_id,
                _sum_when(recent, daily.views).label('views_last7'),
                _sum_when(earlier, daily.views).label('views_prev7'),
                _sum_when(recent, daily.favorites).label('favorites_last7'),
                _sum_when(earlier, daily.favorites).label('favorites_prev7'),
                _sum_when(recent, daily.shares).label('shares_last7'),
                _sum_when(earlier, daily.shares).label('shares_prev7'),
            )
            .filter(
                daily.proposition_id.in_(ids),
                daily.day >= previous_start,
                daily.day <= today,
            )
            .group_by(daily.proposition_id)
            .all()
        )

        return {
            row.proposition_id: InteractionWindow(
                views_last7=int(row.views_last7 or 0),
                views_prev7=int(row.views_prev7 or 0),
                favorites_last7=int(row.favorites_last7 or 0),
                favorites_prev7=int(row.favorites_prev7 or 0),
                shares_last7=int(row.shares_last7 or 0),
                shares_prev7=int(row.shares_prev7 or 0),
            )
            for row in rows
        }
