"""
Read-only records exchanged between the persistence layer, the scoring
engine and callers of the hot-topics selector.
"""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ProposalSnapshot:
    """Projection of a Proposition row used for scoring and display."""
    id: int
    title: str
    presentation_date: date
    theme: Optional[str] = None
    status: Optional[str] = None
    status_situation: Optional[str] = None
    type: Optional[str] = None
    number: Optional[int] = None
    year: Optional[int] = None
    author: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True)
class EngagementCounts:
    comments: int = 0
    stances: int = 0


@dataclass(frozen=True)
class CandidateProposal:
    proposal: ProposalSnapshot
    engagement: EngagementCounts


@dataclass(frozen=True)
class InteractionWindow:
    """Week-over-week interaction counters: last 7 days vs the 7 days before."""
    views_last7: int = 0
    views_prev7: int = 0
    favorites_last7: int = 0
    favorites_prev7: int = 0
    shares_last7: int = 0
    shares_prev7: int = 0

    @property
    def current_total(self) -> int:
        return self.views_last7 + self.favorites_last7 + self.shares_last7

    @property
    def previous_total(self) -> int:
        return self.views_prev7 + self.favorites_prev7 + self.shares_prev7


@dataclass(frozen=True)
class HighlightOverride:
    priority: int = 0
    expires_at: Optional[datetime] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class HighlightComponents:
    recency: float
    engagement: float
    momentum: float
    theme: float
    override: float


@dataclass(frozen=True)
class HighlightComputation:
    score: float
    label: str
    components: HighlightComponents


@dataclass(frozen=True)
class HotTopic:
    """A scored proposition as returned to the web layer."""
    proposal: ProposalSnapshot
    computation: HighlightComputation
    comments_count: int
    stances_count: int

    @property
    def id(self) -> int:
        return self.proposal.id

    @property
    def score(self) -> float:
        return self.computation.score

    @property
    def label(self) -> str:
        return self.computation.label

    def to_dict(self) -> Dict[str, Any]:
        proposal = self.proposal
        return {
            'id': proposal.id,
            'title': proposal.title,
            'type': proposal.type,
            'number': proposal.number,
            'year': proposal.year,
            'status': proposal.status,
            'status_situation': proposal.status_situation,
            'theme': proposal.theme,
            'presentation_date': proposal.presentation_date.isoformat(),
            'summary': proposal.summary,
            'author': proposal.author,
            'score': self.computation.score,
            'label': self.computation.label,
            'components': asdict(self.computation.components),
            'comments_count': self.comments_count,
            'stances_count': self.stances_count,
        }
