"""
Hot-Topics Highlight Scoring

Ranks propositions for the "Em destaque" strip by blending five signals:
- Recency: linear decay over the last 30 days
- Engagement: comments, stances and last-week interactions on a log curve
- Momentum: week-over-week change in views/favorites/shares
- Theme: priority policy areas and procedural urgency in the status text
- Override: manual curator boost, added outside the weighted blend

Every function here is pure. "now" is a parameter so rankings can be
reproduced and tested; nothing reads the clock except the default.
"""

import math
from datetime import datetime
from typing import Optional

from pauta.highlights.constants import (
    RECENCY_WEIGHT, ENGAGEMENT_WEIGHT, MOMENTUM_WEIGHT, THEME_WEIGHT,
    RECENCY_WINDOW_DAYS,
    COMMENT_WEIGHT, STANCE_WEIGHT, VIEW_WEIGHT, FAVORITE_WEIGHT, SHARE_WEIGHT,
    ENGAGEMENT_LOG_CAP,
    MOMENTUM_NO_WINDOW, MOMENTUM_COLD_START_DIVISOR, MOMENTUM_COLD_START_FLOOR,
    PRIORITY_THEMES, PRIORITY_THEME_BONUS,
    STATUS_PRIORITY_KEYWORDS, STATUS_KEYWORD_BONUS,
    OVERRIDE_PRIORITY_SCALE, OVERRIDE_MAX_BOOST,
    LABEL_SPECIAL_CURATION, LABEL_TRENDING_NOW, LABEL_NEW_AND_RELEVANT,
    LABEL_STABLE, LABEL_TRENDING,
    LABEL_OVERRIDE_THRESHOLD, LABEL_MOMENTUM_HIGH, LABEL_RECENCY_HIGH,
    LABEL_MOMENTUM_LOW,
)
from pauta.highlights.types import (
    HighlightComponents,
    HighlightComputation,
    HighlightOverride,
    InteractionWindow,
    ProposalSnapshot,
)
from pauta.lib.time import utcnow_naive, to_naive_utc, utc_date


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def compute_highlight_score(
    proposal: ProposalSnapshot,
    comments_count: Optional[int],
    stances_count: Optional[int],
    interactions: Optional[InteractionWindow] = None,
    override: Optional[HighlightOverride] = None,
    now: Optional[datetime] = None,
) -> HighlightComputation:
    """
    Score a proposition for the hot-topics ranking.

    Args:
        proposal: Anything exposing presentation_date, theme and status_situation
        comments_count: Number of comments (None counts as 0)
        stances_count: Number of for/against/neutral votes (None counts as 0)
        interactions: Interaction window, or None when no record exists
        override: Curator override, or None
        now: Reference time (naive UTC or aware); defaults to the current time

    Returns:
        HighlightComputation with the score clamped to [0, 1]
    """
    now = to_naive_utc(now) if now is not None else utcnow_naive()

    recency = compute_recency_score(proposal.presentation_date, now)
    engagement = compute_engagement_score(comments_count, stances_count, interactions)
    momentum = compute_momentum_score(interactions)
    theme = compute_theme_bonus(proposal.theme, proposal.status_situation)
    boost = compute_override_boost(override, now)

    base_score = (
        RECENCY_WEIGHT * recency
        + ENGAGEMENT_WEIGHT * engagement
        + MOMENTUM_WEIGHT * momentum
        + THEME_WEIGHT * theme
    )
    score = clamp(base_score + boost, 0.0, 1.0)

    return HighlightComputation(
        score=score,
        label=derive_label(recency=recency, momentum=momentum, override=boost),
        components=HighlightComponents(
            recency=recency,
            engagement=engagement,
            momentum=momentum,
            theme=theme,
            override=boost,
        ),
    )


def compute_recency_score(presentation_date, now: datetime) -> float:
    """1.0 when presented today, falling linearly to 0.0 after RECENCY_WINDOW_DAYS."""
    days_since = (utc_date(now) - utc_date(presentation_date)).days
    ratio = 1 - max(days_since, 0) / RECENCY_WINDOW_DAYS
    return clamp(ratio, 0.0, 1.0)


def compute_engagement_score(
    comments: Optional[int],
    stances: Optional[int],
    interactions: Optional[InteractionWindow] = None,
) -> float:
    interaction_score = 0.0
    if interactions is not None:
        interaction_score = (
            (interactions.views_last7 or 0) * VIEW_WEIGHT
            + (interactions.favorites_last7 or 0) * FAVORITE_WEIGHT
            + (interactions.shares_last7 or 0) * SHARE_WEIGHT
        )
    aggregate = (comments or 0) * COMMENT_WEIGHT + (stances or 0) * STANCE_WEIGHT + interaction_score
    normalized = aggregate / ENGAGEMENT_LOG_CAP
    # log10(1 + 9x) maps [0, 1] onto [0, 1] and saturates above the cap
    return clamp(math.log10(1 + normalized * 9), 0.0, 1.0)


def compute_momentum_score(interactions: Optional[InteractionWindow]) -> float:
    """
    Week-over-week momentum.

    No record at all is a neutral prior (0.25); a record of zeros means the
    proposition was quiet for two weeks and scores 0.
    """
    if interactions is None:
        return MOMENTUM_NO_WINDOW

    current = interactions.current_total
    previous = interactions.previous_total

    if current == 0 and previous == 0:
        return 0.0

    if previous == 0:
        return clamp(
            min(current / MOMENTUM_COLD_START_DIVISOR, 1.0),
            MOMENTUM_COLD_START_FLOOR,
            1.0,
        )

    delta = (current - previous) / previous
    # map [-1, 1] -> [0, 1]
    return clamp((delta + 1) / 2, 0.0, 1.0)


def compute_theme_bonus(theme: Optional[str], status_situation: Optional[str]) -> float:
    bonus = 0.0
    if theme and theme.strip() in PRIORITY_THEMES:
        bonus += PRIORITY_THEME_BONUS
    if status_situation:
        situation = status_situation.lower()
        if any(keyword in situation for keyword in STATUS_PRIORITY_KEYWORDS):
            bonus += STATUS_KEYWORD_BONUS
    return clamp(bonus, 0.0, 1.0)


def compute_override_boost(override: Optional[HighlightOverride], now: datetime) -> float:
    if override is None:
        return 0.0
    if override.expires_at is not None and to_naive_utc(override.expires_at) < to_naive_utc(now):
        return 0.0
    return clamp((override.priority or 0) / OVERRIDE_PRIORITY_SCALE, 0.0, OVERRIDE_MAX_BOOST)


def derive_label(recency: float, momentum: float, override: float) -> str:
    """First matching rule wins: curation, then momentum, then age."""
    if override >= LABEL_OVERRIDE_THRESHOLD:
        return LABEL_SPECIAL_CURATION
    if momentum > LABEL_MOMENTUM_HIGH:
        return LABEL_TRENDING_NOW
    if recency > LABEL_RECENCY_HIGH:
        return LABEL_NEW_AND_RELEVANT
    if momentum < LABEL_MOMENTUM_LOW:
        return LABEL_STABLE
    return LABEL_TRENDING
