"""
Curator overrides for the hot-topics ranking.
"""

import logging
from datetime import datetime
from typing import Optional

from pauta import db
from pauta.lib.time import to_naive_utc
from pauta.models import Proposition, PropositionHighlightOverride

logger = logging.getLogger(__name__)


def set_override(proposition_id: int, priority: int,
                 expires_at: Optional[datetime] = None,
                 reason: Optional[str] = None) -> PropositionHighlightOverride:
    """
    Create or replace the override for a proposition.

    Raises:
        LookupError: proposition does not exist
        ValueError: priority outside 0..10
    """
    proposition = db.session.get(Proposition, proposition_id)
    if proposition is None:
        raise LookupError(f"Proposition {proposition_id} not found")

    try:
        override = db.session.get(PropositionHighlightOverride, proposition_id)
        if override is None:
            override = PropositionHighlightOverride(proposition_id=proposition_id, priority=priority)
            db.session.add(override)
        else:
            override.priority = priority
        override.expires_at = to_naive_utc(expires_at) if expires_at else None
        override.reason = reason
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Highlight override set for proposition {proposition_id}: priority={priority}, expires_at={expires_at}")
    return override


def clear_override(proposition_id: int) -> bool:
    """Remove the override for a proposition. Returns False if there was none."""
    override = db.session.get(PropositionHighlightOverride, proposition_id)
    if override is None:
        return False

    try:
        db.session.delete(override)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Highlight override cleared for proposition {proposition_id}")
    return True
