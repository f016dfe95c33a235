"""create_shop_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 10:00:00.000000

쇼핑몰 기본 테이블 생성: member, item, delivery, orders, order_item.
Create the shop tables: member, item, delivery, orders, order_item.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # member — 회원 (주소는 값 타입으로 컬럼에 펼쳐 저장)
    # Members; the address value is stored as three columns
    op.create_table(
        'member',
        sa.Column('member_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('street', sa.String(255), nullable=True),
        sa.Column('zipcode', sa.String(20), nullable=True),
    )
    op.create_index('ix_member_name', 'member', ['name'])

    # item — 상품 (Items with stock)
    op.create_table(
        'item',
        sa.Column('item_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('stock_quantity', sa.Integer(), nullable=False),
    )

    # delivery — 배송 (READY | COMP)
    op.create_table(
        'delivery',
        sa.Column('delivery_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('street', sa.String(255), nullable=True),
        sa.Column('zipcode', sa.String(20), nullable=True),
        sa.Column('status', sa.String(10), nullable=False),
    )

    # orders — 주문 (ORDER | CANCEL), 배송과 1:1
    # Orders; one delivery per order
    op.create_table(
        'orders',
        sa.Column('order_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('member.member_id'), nullable=False),
        sa.Column('delivery_id', sa.Integer(), sa.ForeignKey('delivery.delivery_id'), nullable=False, unique=True),
        sa.Column('order_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(10), nullable=False),
    )
    op.create_index('ix_orders_member_id', 'orders', ['member_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])

    # order_item — 주문상품 (주문 시점 가격과 수량)
    # Order lines with the price paid and quantity
    op.create_table(
        'order_item',
        sa.Column('order_item_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.order_id'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('item.item_id'), nullable=False),
        sa.Column('order_price', sa.Integer(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
    )
    op.create_index('ix_order_item_order_id', 'order_item', ['order_id'])


def downgrade() -> None:
    op.drop_index('ix_order_item_order_id', table_name='order_item')
    op.drop_table('order_item')
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_index('ix_orders_member_id', table_name='orders')
    op.drop_table('orders')
    op.drop_table('delivery')
    op.drop_table('item')
    op.drop_index('ix_member_name', table_name='member')
    op.drop_table('member')
