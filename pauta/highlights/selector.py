"""
Hot-Topics Selection

Picks the propositions shown in the "Em destaque" strip:
1. Load recent candidates (bounded lookback, bounded count)
2. Load interaction windows and curator overrides for those ids in one batch
3. Score each candidate and keep the top N

No caching: every call re-reads and re-scores. Errors from the data source
propagate to the caller, which decides whether to degrade to an empty list.
"""

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from flask import current_app

from pauta.highlights.constants import (
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_MAX_CANDIDATES,
    DEFAULT_LIMIT,
)
from pauta.highlights.scoring import compute_highlight_score
from pauta.highlights.types import (
    CandidateProposal,
    HighlightOverride,
    HotTopic,
    InteractionWindow,
)
from pauta.lib.time import utcnow_naive, to_naive_utc, subtract_days_utc, utc_date

logger = logging.getLogger(__name__)


InteractionContext = Dict[int, Tuple[Optional[InteractionWindow], Optional[HighlightOverride]]]


class HotTopicsSource:
    """
    Read interface the selector needs from the persistence layer.

    fetch_candidate_proposals must return candidates ordered by presentation
    date descending; the selector relies on that order to break score ties.

    fetch_interaction_context receives the UTC date the ranking is computed
    for; interaction windows end on that day.
    """

    def fetch_candidate_proposals(self, since: date, max_count: int) -> List[CandidateProposal]:
        raise NotImplementedError

    def fetch_interaction_context(self, proposal_ids: Iterable[int], as_of: date) -> InteractionContext:
        raise NotImplementedError


class HotTopicsSelector:
    """
    Ranks recent propositions by highlight score.

    Usage:
        selector = HotTopicsSelector(SqlAlchemyHotTopicsSource())
        topics = selector.select(limit=5)
    """

    def __init__(self, source: HotTopicsSource,
                 lookback_days: int = DEFAULT_LOOKBACK_DAYS,
                 max_candidates: int = DEFAULT_MAX_CANDIDATES):
        self.source = source
        self.lookback_days = lookback_days
        self.max_candidates = max_candidates

    def select(self, limit: int = DEFAULT_LIMIT, now: Optional[datetime] = None) -> List[HotTopic]:
        """
        Return up to `limit` hot topics, best first.

        A non-positive limit yields an empty list. Equal scores keep the
        source order (most recently presented first) because sorted() is stable.
        """
        if limit <= 0:
            return []

        now = to_naive_utc(now) if now is not None else utcnow_naive()
        since = subtract_days_utc(now, self.lookback_days)

        candidates = self.source.fetch_candidate_proposals(since, self.max_candidates)
        if not candidates:
            logger.debug(f"No hot-topic candidates presented since {since}")
            return []

        ids = [candidate.proposal.id for candidate in candidates]
        context = self.source.fetch_interaction_context(ids, as_of=utc_date(now))

        scored = [self._score(candidate, context, now) for candidate in candidates]
        scored = sorted(scored, key=lambda topic: topic.score, reverse=True)

        logger.debug(f"Scored {len(scored)} hot-topic candidates since {since}")
        return scored[:limit]

    @staticmethod
    def _score(candidate: CandidateProposal, context: InteractionContext, now: datetime) -> HotTopic:
        interactions, override = context.get(candidate.proposal.id, (None, None))
        computation = compute_highlight_score(
            candidate.proposal,
            candidate.engagement.comments,
            candidate.engagement.stances,
            interactions=interactions,
            override=override,
            now=now,
        )
        return HotTopic(
            proposal=candidate.proposal,
            computation=computation,
            comments_count=candidate.engagement.comments,
            stances_count=candidate.engagement.stances,
        )


def list_hot_topics(limit: int = DEFAULT_LIMIT, now: Optional[datetime] = None,
                    source: Optional[HotTopicsSource] = None) -> List[HotTopic]:
    """
    Hot topics for the current app, using the database unless a source is given.

    Lookback window and candidate cap come from HOT_TOPICS_LOOKBACK_DAYS and
    HOT_TOPICS_MAX_CANDIDATES.
    """
    if source is None:
        from pauta.highlights.repository import SqlAlchemyHotTopicsSource
        source = SqlAlchemyHotTopicsSource()

    selector = HotTopicsSelector(
        source,
        lookback_days=current_app.config.get('HOT_TOPICS_LOOKBACK_DAYS', DEFAULT_LOOKBACK_DAYS),
        max_candidates=current_app.config.get('HOT_TOPICS_MAX_CANDIDATES', DEFAULT_MAX_CANDIDATES),
    )
    return selector.select(limit=limit, now=now)
