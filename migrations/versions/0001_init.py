"""init schema

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('weekly_rent_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('current_rent_credit_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('current_rent_paid_to_date', sa.Date(), nullable=False),
        sa.Column('creation_date', sa.DateTime(), nullable=False),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('rent_receipts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('creation_date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_rent_receipts_tenant_id', 'rent_receipts', ['tenant_id'])
    op.create_index('ix_rent_receipts_creation_date', 'rent_receipts', ['creation_date'])

def downgrade():
    op.drop_index('ix_rent_receipts_creation_date', table_name='rent_receipts')
    op.drop_index('ix_rent_receipts_tenant_id', table_name='rent_receipts')
    op.drop_table('rent_receipts')
    op.drop_table('tenants')
