"""Create groups, animals, breeding batches, enrollments and pregnancy records

Revision ID: 3f2b9c7d1a04
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c7d1a04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the flock and breeding tables."""

    # --- groups ---
    op.create_table(
        'groups',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('normalized_name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_groups'),
        sa.UniqueConstraint('normalized_name', name='uq_groups_normalized_name'),
    )

    # --- animals ---
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('sex', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='active', nullable=False),
        sa.Column('group_id', sa.Uuid(), nullable=True),
        sa.Column('is_pregnant', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], name='fk_animals_group_id_groups'),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.UniqueConstraint('tag', name='uq_animals_tag'),
    )
    op.create_index(
        'ix_animals_group_sex_status', 'animals', ['group_id', 'sex', 'status'],
        unique=False,
    )

    # --- breeding_batches ---
    op.create_table(
        'breeding_batches',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='open', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_batches'),
    )
    op.create_index(
        'ix_breeding_batches_status', 'breeding_batches', ['status'],
        unique=False,
    )

    # --- ewe_enrollments ---
    op.create_table(
        'ewe_enrollments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('batch_id', sa.Uuid(), nullable=False),
        sa.Column('ewe_id', sa.Uuid(), nullable=False),
        sa.Column('attempt_count', sa.Integer(), server_default='1', nullable=False),
        sa.Column('cycle1_result', sa.String(length=16), server_default='pending', nullable=False),
        sa.Column('cycle2_result', sa.String(length=16), server_default='pending', nullable=False),
        sa.Column('cycle3_result', sa.String(length=16), server_default='pending', nullable=False),
        sa.Column('finalized', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['batch_id'], ['breeding_batches.id'],
            name='fk_ewe_enrollments_batch_id_breeding_batches',
            ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(['ewe_id'], ['animals.id'], name='fk_ewe_enrollments_ewe_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_ewe_enrollments'),
        sa.UniqueConstraint('batch_id', 'ewe_id', name='uq_ewe_enrollments_batch_ewe'),
    )
    op.create_index(
        'ix_ewe_enrollments_ewe_id', 'ewe_enrollments', ['ewe_id'],
        unique=False,
    )

    # --- pregnancy_records ---
    op.create_table(
        'pregnancy_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('ewe_id', sa.Uuid(), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('covering_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('outcome', sa.String(length=16), server_default='confirmed', nullable=False),
        sa.Column('actual_date', sa.Date(), nullable=True),
        sa.Column('origin_batch_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['ewe_id'], ['animals.id'], name='fk_pregnancy_records_ewe_id_animals'),
        sa.ForeignKeyConstraint(
            ['origin_batch_id'], ['breeding_batches.id'],
            name='fk_pregnancy_records_origin_batch_id_breeding_batches',
            ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_pregnancy_records'),
    )
    op.create_index(
        'ix_pregnancy_records_ewe_origin', 'pregnancy_records', ['ewe_id', 'origin_batch_id'],
        unique=False,
    )
    op.create_index(
        'ix_pregnancy_records_due', 'pregnancy_records', ['outcome', 'due_date'],
        unique=False,
    )


def downgrade() -> None:
    """Drop the flock and breeding tables."""
    op.drop_index('ix_pregnancy_records_due', table_name='pregnancy_records')
    op.drop_index('ix_pregnancy_records_ewe_origin', table_name='pregnancy_records')
    op.drop_table('pregnancy_records')
    op.drop_index('ix_ewe_enrollments_ewe_id', table_name='ewe_enrollments')
    op.drop_table('ewe_enrollments')
    op.drop_index('ix_breeding_batches_status', table_name='breeding_batches')
    op.drop_table('breeding_batches')
    op.drop_index('ix_animals_group_sex_status', table_name='animals')
    op.drop_table('animals')
    op.drop_table('groups')
