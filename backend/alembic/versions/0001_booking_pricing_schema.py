"""Businesses, rooms, seasonal pricing bands, and promotions."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    promotion_type = sa.Enum(
        "COUPON", "ROOM_DISCOUNT", "CODE", name="promotiontype"
    )

    op.create_table(
        "businesses",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("room_number", sa.String(length=64), nullable=False),
        sa.Column("room_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("per_hour_rate", sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "seasonal_pricing",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "end_date >= start_date", name="ck_seasonal_pricing_band_dates_ordered"
        ),
    )
    op.create_index(
        "ix_seasonal_pricing_room_id_start_date",
        "seasonal_pricing",
        ["room_id", "start_date"],
    )

    op.create_table(
        "promotions",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "business_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("businesses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("promo_type", promotion_type, nullable=False),
        sa.Column("promo_code", sa.String(length=64), nullable=True),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=True),
        sa.Column("fixed_discount_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("used_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_promotions_business_id_promo_code",
        "promotions",
        ["business_id", "promo_code"],
    )


def downgrade() -> None:
    op.drop_index("ix_promotions_business_id_promo_code", table_name="promotions")
    op.drop_table("promotions")
    op.drop_index(
        "ix_seasonal_pricing_room_id_start_date", table_name="seasonal_pricing"
    )
    op.drop_table("seasonal_pricing")
    op.drop_table("rooms")
    op.drop_table("businesses")

    sa.Enum(name="promotiontype").drop(op.get_bind(), checkfirst=True)
