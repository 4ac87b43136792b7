"""initial forecast schema

Revision ID: 3b9e1c7a52d4
Revises:
Create Date: 2026-10-18 09:12:41.208113

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3b9e1c7a52d4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1. Reference tables
    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("is_class_a", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_orderable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )

    # 2. Monthly sales history
    op.create_table(
        "sales_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(3), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_id", "year", "month", name="uq_sales_product_month"),
    )
    op.create_index("ix_sales_history_product_id", "sales_history", ["product_id"])
    op.create_index("ix_sales_history_year", "sales_history", ["year"])

    # 3. Daily order history
    op.create_table(
        "daily_order_history",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.Integer(), nullable=False),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("quantity_ordered", sa.Integer(), nullable=False),
        sa.Column("stock_at_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["store_id"], ["stores.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_daily_order_history_product_id", "daily_order_history", ["product_id"])
    op.create_index("ix_daily_order_history_store_id", "daily_order_history", ["store_id"])
    op.create_index("ix_daily_order_history_order_date", "daily_order_history", ["order_date"])
    op.create_index(
        "ix_order_history_product_store_date",
        "daily_order_history",
        ["product_id", "store_id", "order_date"],
    )

    # 4. Flat forecasts and cached insights
    op.create_table(
        "product_forecasts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("average_daily_forecast", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_id"),
    )
    op.create_table(
        "daily_insight",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("insight", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("date"),
    )


def downgrade() -> None:
    op.drop_table("daily_insight")
    op.drop_table("product_forecasts")
    op.drop_index("ix_order_history_product_store_date", table_name="daily_order_history")
    op.drop_index("ix_daily_order_history_order_date", table_name="daily_order_history")
    op.drop_index("ix_daily_order_history_store_id", table_name="daily_order_history")
    op.drop_index("ix_daily_order_history_product_id", table_name="daily_order_history")
    op.drop_table("daily_order_history")
    op.drop_index("ix_sales_history_year", table_name="sales_history")
    op.drop_index("ix_sales_history_product_id", table_name="sales_history")
    op.drop_table("sales_history")
    op.drop_table("products")
    op.drop_table("stores")
