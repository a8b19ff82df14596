"""Add translation_cache table

Revision ID: add_translation_cache_table
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'add_translation_cache_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'translation_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_text', sa.Text(), nullable=False),
        sa.Column('source_language', sa.String(10), nullable=False),
        sa.Column('target_language', sa.String(10), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source_text', 'source_language', 'target_language', name='unique_translation_key')
    )

    # Lookups filter on expires_at, the sweep deletes by it
    op.create_index('ix_translation_cache_expires_at', 'translation_cache', ['expires_at'])


def downgrade():
    op.drop_index('ix_translation_cache_expires_at', table_name='translation_cache')
    op.drop_table('translation_cache')
