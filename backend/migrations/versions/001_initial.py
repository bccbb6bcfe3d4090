"""Initial migration - create the laundry tables

Revision ID: 001_initial
Revises: None
Create Date: 2025-09-02

Creates:
- Students: registered residents keyed by generated id
- Laundry_Records: one row per drop-off, dated by the database
- Laundry_Record_Details: per-garment quantities of a drop-off
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── Students Table ────────────────────────────────────────
    op.create_table(
        'Students',
        sa.Column('student_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('floor_no', sa.Integer(), nullable=False),
        sa.Column('page_no', sa.Integer(), nullable=False),
    )

    # ── Laundry Records Table ─────────────────────────────────
    op.create_table(
        'Laundry_Records',
        sa.Column('record_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('student_id', sa.Integer(),
                  sa.ForeignKey('Students.student_id'), nullable=False),
        sa.Column('date_given', sa.Date(), nullable=False),
        sa.Column('total_clothes', sa.Integer(), nullable=True),
        sa.Column('is_collected', sa.Boolean(), nullable=False,
                  server_default=sa.false()),
    )
    op.create_index('ix_laundry_records_student_id', 'Laundry_Records', ['student_id'])

    # ── Laundry Record Details Table ──────────────────────────
    op.create_table(
        'Laundry_Record_Details',
        sa.Column('detail_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('record_id', sa.Integer(),
                  sa.ForeignKey('Laundry_Records.record_id'), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
    )
    op.create_index('ix_laundry_record_details_record_id',
                    'Laundry_Record_Details', ['record_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index('ix_laundry_record_details_record_id', table_name='Laundry_Record_Details')
    op.drop_table('Laundry_Record_Details')
    op.drop_index('ix_laundry_records_student_id', table_name='Laundry_Records')
    op.drop_table('Laundry_Records')
    op.drop_table('Students')
