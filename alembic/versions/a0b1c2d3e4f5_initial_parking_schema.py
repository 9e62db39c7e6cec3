"""initial_parking_schema

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-10-18 09:00:00.000000

주차 공간 마켓플레이스 초기 스키마: users, refresh_tokens, listings, bookings, payments.
Initial marketplace schema: users, refresh_tokens, listings, bookings, payments.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a0b1c2d3e4f5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users: 계정 (Renter | Owner | Admin)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='Renter'),
        sa.Column('contact', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # listings: 주차 공간과 시간/일/월 요금 (Spots with three price tiers)
    op.create_table(
        'listings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('price_hourly', sa.Float(), nullable=False, server_default='0'),
        sa.Column('price_daily', sa.Float(), nullable=False, server_default='0'),
        sa.Column('price_monthly', sa.Float(), nullable=False, server_default='0'),
        sa.Column('availability', sa.String(20), nullable=False, server_default='Available'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_listings_owner', 'listings', ['owner_id'])

    # bookings: 예약 (status: pending | confirmed | cancelled)
    op.create_table(
        'bookings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('listing_id', UUID(as_uuid=True), sa.ForeignKey('listings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('renter_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration_type', sa.String(20), nullable=False, server_default='optimal'),
        sa.Column('total_price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    # 충돌 검사용: Overlap lookups filter by listing and time range
    op.create_index('ix_bookings_listing_time', 'bookings', ['listing_id', 'start_time', 'end_time'])
    op.create_index('ix_bookings_renter', 'bookings', ['renter_id'])

    # payments: 예약당 1건의 더미 결제 (One dummy payment per booking)
    op.create_table(
        'payments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('booking_id', UUID(as_uuid=True), sa.ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('payment_method', sa.String(50), nullable=False, server_default='dummy'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_index('ix_bookings_renter', table_name='bookings')
    op.drop_index('ix_bookings_listing_time', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_listings_owner', table_name='listings')
    op.drop_table('listings')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
