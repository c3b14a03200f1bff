"""initial_schema

Revision ID: 3f1c9a7d2b64
Revises:
Create Date: 2026-10-17 09:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b64'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _tenant_fk() -> list:
    return [
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='RESTRICT'),
    ]


def upgrade() -> None:
    """
    Create the multi-tenant schema.

    Every business table carries a non-null tenant_id referencing tenants;
    tenants are never deleted so the foreign keys RESTRICT.
    """
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_uuid', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('tax_id', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('plan', sa.String(length=10), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_tenants_tenant_uuid'), 'tenants', ['tenant_uuid'], unique=True)
    op.create_index(op.f('ix_tenants_is_active'), 'tenants', ['is_active'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('role', sa.String(length=5), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        *_tenant_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_tenant_id'), 'users', ['tenant_id'], unique=False)

    for table, date_column, party_column in (
        ('purchases', 'purchase_date', 'supplier'),
        ('sales', 'sale_date', 'customer'),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('product_name', sa.String(length=100), nullable=False),
            sa.Column('product_key', sa.String(length=100), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False),
            sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column(date_column, sa.Date(), nullable=False),
            sa.Column(party_column, sa.String(length=100), nullable=True),
            sa.Column('user_id', sa.Integer(), nullable=False),
            *_timestamps(),
            *_tenant_fk(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f(f'ix_{table}_product_key'), table, ['product_key'], unique=False)
        op.create_index(op.f(f'ix_{table}_{date_column}'), table, [date_column], unique=False)
        op.create_index(op.f(f'ix_{table}_user_id'), table, ['user_id'], unique=False)
        op.create_index(op.f(f'ix_{table}_tenant_id'), table, ['tenant_id'], unique=False)
        op.create_index(f'ix_{table}_tenant_date', table, ['tenant_id', date_column], unique=False)

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('label', sa.String(length=200), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('expense_date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=11), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        *_timestamps(),
        *_tenant_fk(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_expenses_expense_date'), 'expenses', ['expense_date'], unique=False)
    op.create_index(op.f('ix_expenses_category'), 'expenses', ['category'], unique=False)
    op.create_index(op.f('ix_expenses_user_id'), 'expenses', ['user_id'], unique=False)
    op.create_index(op.f('ix_expenses_tenant_id'), 'expenses', ['tenant_id'], unique=False)
    op.create_index('ix_expenses_tenant_date', 'expenses', ['tenant_id', 'expense_date'], unique=False)

    op.create_table(
        'currencies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=10), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('symbol', sa.String(length=10), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('exchange_rate', sa.Float(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        *_timestamps(),
        *_tenant_fk(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'code', name='uq_currency_tenant_code'),
    )
    op.create_index(op.f('ix_currencies_tenant_id'), 'currencies', ['tenant_id'], unique=False)


def downgrade() -> None:
    """Drop all tables (children first)."""
    op.drop_index(op.f('ix_currencies_tenant_id'), table_name='currencies')
    op.drop_table('currencies')

    op.drop_index('ix_expenses_tenant_date', table_name='expenses')
    op.drop_index(op.f('ix_expenses_tenant_id'), table_name='expenses')
    op.drop_index(op.f('ix_expenses_user_id'), table_name='expenses')
    op.drop_index(op.f('ix_expenses_category'), table_name='expenses')
    op.drop_index(op.f('ix_expenses_expense_date'), table_name='expenses')
    op.drop_table('expenses')

    for table, date_column in (('sales', 'sale_date'), ('purchases', 'purchase_date')):
        op.drop_index(f'ix_{table}_tenant_date', table_name=table)
        op.drop_index(op.f(f'ix_{table}_tenant_id'), table_name=table)
        op.drop_index(op.f(f'ix_{table}_user_id'), table_name=table)
        op.drop_index(op.f(f'ix_{table}_{date_column}'), table_name=table)
        op.drop_index(op.f(f'ix_{table}_product_key'), table_name=table)
        op.drop_table(table)

    op.drop_index(op.f('ix_users_tenant_id'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    op.drop_index(op.f('ix_tenants_is_active'), table_name='tenants')
    op.drop_index(op.f('ix_tenants_tenant_uuid'), table_name='tenants')
    op.drop_table('tenants')
