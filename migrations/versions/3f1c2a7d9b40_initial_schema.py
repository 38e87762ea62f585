"""initial_schema

Revision ID: 3f1c2a7d9b40
Revises:
Create Date: 2026-10-19 09:12:05.318207

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a7d9b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'proposition',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('camara_id', sa.Integer(), nullable=False),
        sa.Column('house', sa.String(20), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('sigla_tipo', sa.String(10), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('ementa', sa.Text(), nullable=True),
        sa.Column('ementa_detalhada', sa.Text(), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=True),
        sa.Column('theme', sa.String(200), nullable=True),
        sa.Column('presentation_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(300), nullable=False),
        sa.Column('status_situation', sa.Text(), nullable=True),
        sa.Column('status_code', sa.Integer(), nullable=True),
        sa.Column('status_date', sa.DateTime(), nullable=True),
        sa.Column('origin', sa.String(50), nullable=True),
        sa.Column('author', sa.String(300), nullable=True),
        sa.Column('author_party', sa.String(50), nullable=True),
        sa.Column('author_state', sa.String(2), nullable=True),
        sa.Column('source_url', sa.String(500), nullable=True),
        sa.Column('full_text_url', sa.String(500), nullable=True),
        sa.Column('tramitacao_url', sa.String(500), nullable=True),
        sa.Column('ai_summary', sa.Text(), nullable=True),
        sa.Column('ai_summary_updated_at', sa.DateTime(), nullable=True),
        sa.Column('fetched_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('camara_id'),
    )
    op.create_index('idx_proposition_presentation_date', 'proposition', ['presentation_date'])
    op.create_index('idx_proposition_type', 'proposition', ['type'])

    op.create_table(
        'comment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('proposition_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['proposition_id'], ['proposition.id'], ondelete='CASCADE'),
    )
    op.create_index('idx_comment_proposition', 'comment', ['proposition_id'])

    op.create_table(
        'stance',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('proposition_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('stance', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['proposition_id'], ['proposition.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('proposition_id', 'user_id', name='uq_stance_proposition_user'),
    )
    op.create_index('idx_stance_proposition', 'stance', ['proposition_id'])

    op.create_table(
        'proposition_interest_daily',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('proposition_id', sa.Integer(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('favorites', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('shares', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['proposition_id'], ['proposition.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('proposition_id', 'day', name='uq_interest_proposition_day'),
    )
    op.create_index('idx_interest_day', 'proposition_interest_daily', ['day'])

    op.create_table(
        'proposition_highlight_override',
        sa.Column('proposition_id', sa.Integer(), nullable=False),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('reason', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('proposition_id'),
        sa.ForeignKeyConstraint(['proposition_id'], ['proposition.id'], ondelete='CASCADE'),
    )


def downgrade():
    op.drop_table('proposition_highlight_override')
    op.drop_index('idx_interest_day', table_name='proposition_interest_daily')
    op.drop_table('proposition_interest_daily')
    op.drop_index('idx_stance_proposition', table_name='stance')
    op.drop_table('stance')
    op.drop_index('idx_comment_proposition', table_name='comment')
    op.drop_table('comment')
    op.drop_index('idx_proposition_type', table_name='proposition')
    op.drop_index('idx_proposition_presentation_date', table_name='proposition')
    op.drop_table('proposition')
