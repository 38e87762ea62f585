from pauta import db
from pauta.lib.time import utcnow_naive
from pauta.highlights.constants import OVERRIDE_MIN_PRIORITY, OVERRIDE_MAX_PRIORITY
from pauta.highlights.types import ProposalSnapshot, HighlightOverride
from sqlalchemy.orm import validates


class Proposition(db.Model):
    """
    Legislative proposition synced from the Camara dos Deputados open data API.

    camara_id is the upstream identifier; id is ours and is what comments,
    stances and interaction counters point at.
    """
    __tablename__ = 'proposition'
    __table_args__ = (
        db.Index('idx_proposition_presentation_date', 'presentation_date'),
        db.Index('idx_proposition_type', 'type'),
    )

    id = db.Column(db.Integer, primary_key=True)
    camara_id = db.Column(db.Integer, unique=True, nullable=False)
    house = db.Column(db.String(20), nullable=False, default='camara')

    type = db.Column(db.String(10), nullable=False)
    sigla_tipo = db.Column(db.String(10), nullable=False)
    number = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)

    title = db.Column(db.Text, nullable=False)
    ementa = db.Column(db.Text)
    ementa_detalhada = db.Column(db.Text)
    keywords = db.Column(db.JSON)
    theme = db.Column(db.String(200))

    presentation_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(300), nullable=False, default='Em tramitação')
    status_situation = db.Column(db.Text)
    status_code = db.Column(db.Integer)
    status_date = db.Column(db.DateTime)
    origin = db.Column(db.String(50))

    author = db.Column(db.String(300))
    author_party = db.Column(db.String(50))
    author_state = db.Column(db.String(2))

    source_url = db.Column(db.String(500))
    full_text_url = db.Column(db.String(500))
    tramitacao_url = db.Column(db.String(500))

    ai_summary = db.Column(db.Text)
    ai_summary_updated_at = db.Column(db.DateTime)

    fetched_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow_naive)
    updated_at = db.Column(db.DateTime, default=utcnow_naive, onupdate=utcnow_naive)

    comments = db.relationship('Comment', backref='proposition', lazy='dynamic',
                               cascade='all, delete-orphan')
    stances = db.relationship('Stance', backref='proposition', lazy='dynamic',
                              cascade='all, delete-orphan')
    interest_days = db.relationship('PropositionInterestDaily', backref='proposition', lazy='dynamic',
                                    cascade='all, delete-orphan')
    highlight_override = db.relationship('PropositionHighlightOverride', backref='proposition',
                                         uselist=False, cascade='all, delete-orphan')

    def to_snapshot(self) -> ProposalSnapshot:
        return ProposalSnapshot(
            id=self.id,
            title=self.title,
            presentation_date=self.presentation_date,
            theme=self.theme,
            status=self.status,
            status_situation=self.status_situation,
            type=self.type,
            number=self.number,
            year=self.year,
            author=self.author,
            summary=self.ai_summary,
        )

    def __repr__(self):
        return f'<Proposition {self.sigla_tipo} {self.number}/{self.year}>'


class Comment(db.Model):
    __tablename__ = 'comment'
    __table_args__ = (
        db.Index('idx_comment_proposition', 'proposition_id'),
    )

    id = db.Column(db.Integer, primary_key=True)
    proposition_id = db.Column(db.Integer, db.ForeignKey('proposition.id', ondelete='CASCADE'), nullable=False)
    # Identity lives in the auth provider; we only keep its opaque id
    user_id = db.Column(db.String(64), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow_naive)


class Stance(db.Model):
    """A citizen's for/against/neutral vote on a proposition. One per user."""
    __tablename__ = 'stance'
    __table_args__ = (
        db.UniqueConstraint('proposition_id', 'user_id', name='uq_stance_proposition_user'),
        db.Index('idx_stance_proposition', 'proposition_id'),
    )

    VALUES = ('for', 'against', 'neutral')

    id = db.Column(db.Integer, primary_key=True)
    proposition_id = db.Column(db.Integer, db.ForeignKey('proposition.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.String(64), nullable=False)
    stance = db.Column(db.String(10), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow_naive)

    @validates('stance')
    def validate_stance(self, key, stance):
        if stance not in self.VALUES:
            raise ValueError("Stance must be 'for', 'against' or 'neutral'")
        return stance


class PropositionInterestDaily(db.Model):
    """
    Per-day interaction counters. The 7-day vs previous-7-day windows used
    for momentum are aggregated from these rows at query time.
    """
    __tablename__ = 'proposition_interest_daily'
    __table_args__ = (
        db.UniqueConstraint('proposition_id', 'day', name='uq_interest_proposition_day'),
        db.Index('idx_interest_day', 'day'),
    )

    EVENT_COLUMNS = {
        'view': 'views',
        'favorite': 'favorites',
        'share': 'shares',
    }

    id = db.Column(db.Integer, primary_key=True)
    proposition_id = db.Column(db.Integer, db.ForeignKey('proposition.id', ondelete='CASCADE'), nullable=False)
    day = db.Column(db.Date, nullable=False)
    views = db.Column(db.Integer, nullable=False, default=0)
    favorites = db.Column(db.Integer, nullable=False, default=0)
    shares = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow_naive)
    updated_at = db.Column(db.DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class PropositionHighlightOverride(db.Model):
    """Manual curation: at most one per proposition, optionally time-boxed."""
    __tablename__ = 'proposition_highlight_override'

    proposition_id = db.Column(db.Integer, db.ForeignKey('proposition.id', ondelete='CASCADE'), primary_key=True)
    priority = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime, nullable=True)
    reason = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow_naive)

    @validates('priority')
    def validate_priority(self, key, priority):
        if priority is None or not OVERRIDE_MIN_PRIORITY <= priority <= OVERRIDE_MAX_PRIORITY:
            raise ValueError(f"Priority must be between {OVERRIDE_MIN_PRIORITY} and {OVERRIDE_MAX_PRIORITY}")
        return priority

    def to_override(self) -> HighlightOverride:
        return HighlightOverride(
            priority=self.priority,
            expires_at=self.expires_at,
            reason=self.reason,
        )
