"""
Engagement tracking for propositions.

Views, favorites and shares are counted per proposition per UTC day; the
hot-topics ranking aggregates those rows into week-over-week windows.
Stance summaries feed the poll shown next to each proposition.
"""

import logging
from datetime import date
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from pauta import db
from pauta.lib.time import utcnow_naive
from pauta.models import Proposition, PropositionInterestDaily, Stance

logger = logging.getLogger(__name__)

# Largest batch a single engagement call may add
MAX_INTEREST_AMOUNT = 10


def is_valid_amount(amount) -> bool:
    return not isinstance(amount, bool) and isinstance(amount, int) and 1 <= amount <= MAX_INTEREST_AMOUNT


def record_interest(proposition_id: int, event_type: str, amount: int = 1,
                    day: Optional[date] = None) -> PropositionInterestDaily:
    """
    Add `amount` view/favorite/share events to today's counters.

    Args:
        proposition_id: Target proposition
        event_type: 'view', 'favorite' or 'share'
        amount: Positive integer, at most MAX_INTEREST_AMOUNT
        day: UTC day to count against (defaults to today)

    Raises:
        ValueError: unknown event type or amount out of range
        LookupError: proposition does not exist
    """
    column_name = PropositionInterestDaily.EVENT_COLUMNS.get(event_type)
    if column_name is None:
        raise ValueError(f"Unknown engagement event: {event_type!r}")

    if not is_valid_amount(amount):
        raise ValueError(f"Amount must be an integer between 1 and {MAX_INTEREST_AMOUNT}")

    if db.session.get(Proposition, proposition_id) is None:
        raise LookupError(f"Proposition {proposition_id} not found")

    day = day or utcnow_naive().date()

    row = PropositionInterestDaily.query.filter_by(proposition_id=proposition_id, day=day).first()
    if row is None:
        try:
            row = PropositionInterestDaily(proposition_id=proposition_id, day=day,
                                           views=0, favorites=0, shares=0)
            setattr(row, column_name, amount)
            db.session.add(row)
            db.session.commit()
            return row
        except IntegrityError:
            # Another request created today's row first; fall through to the update
            db.session.rollback()
            logger.debug(f"Concurrent insert for proposition {proposition_id} on {day}, retrying as update")

    try:
        column = getattr(PropositionInterestDaily, column_name)
        PropositionInterestDaily.query.filter_by(
            proposition_id=proposition_id, day=day
        ).update({column: column + amount}, synchronize_session=False)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    return PropositionInterestDaily.query.filter_by(proposition_id=proposition_id, day=day).first()


def summarize_stances(proposition_id: int) -> Dict:
    """
    Stance counts and rounded percentages for a proposition.

    Returns:
        {'for': n, 'against': n, 'neutral': n, 'total': n,
         'percentages': {'for': p, 'against': p, 'neutral': p}}
    """
    if db.session.get(Proposition, proposition_id) is None:
        raise LookupError(f"Proposition {proposition_id} not found")

    rows = (
        db.session.query(Stance.stance, func.count(Stance.id))
        .filter(Stance.proposition_id == proposition_id)
        .group_by(Stance.stance)
        .all()
    )
    counts = {value: 0 for value in Stance.VALUES}
    for stance, count in rows:
        counts[stance] = count

    total = sum(counts.values())
    percentages = {
        value: round(count * 100 / total) if total else 0
        for value, count in counts.items()
    }

    return {**counts, 'total': total, 'percentages': percentages}
