"""Initial: properties, rooms, reservations, pricing rules

Revision ID: initial_001
Revises:
Create Date: 2025-09-09
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision = "initial_001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- properties ---
    op.create_table(
        "properties",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("property_type", sa.String(30), server_default="apartment"),
        sa.Column("address", sa.String(500)),
        sa.Column("city", sa.String(100)),
        sa.Column("country", sa.String(100)),
        sa.Column("max_guests", sa.Integer, server_default="2"),
        sa.Column("bedrooms", sa.Integer, server_default="1"),
        sa.Column("bathrooms", sa.Integer, server_default="1"),
        sa.Column("star_rating", sa.Integer),
        sa.Column("amenities", JSONB, server_default="[]"),
        sa.Column("base_price", sa.Numeric(10, 2), server_default="100.00"),
        sa.Column("currency", sa.String(3), server_default="USD"),
        sa.Column("check_in_time", sa.Time, server_default="15:00:00"),
        sa.Column("check_out_time", sa.Time, server_default="11:00:00"),
        sa.Column("is_active", sa.Boolean, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("star_rating >= 1 AND star_rating <= 5", name="ck_properties_star_rating"),
    )
    op.create_index("idx_properties_active", "properties", ["is_active"])

    # --- rooms ---
    op.create_table(
        "rooms",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("room_number", sa.String(50), nullable=False),
        sa.Column("room_type", sa.String(50), server_default="standard"),
        sa.Column("size_sqm", sa.Numeric(8, 2)),
        sa.Column("max_guests", sa.Integer, server_default="2"),
        sa.Column("base_price", sa.Numeric(10, 2), server_default="0"),
        sa.Column("amenities", JSONB, server_default="[]"),
        sa.Column("description", sa.Text),
        sa.Column("floor_number", sa.Integer),
        sa.Column("position_description", sa.String(300)),
        sa.Column("is_active", sa.Boolean, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("property_id", "room_number", name="uq_rooms_property_number"),
    )
    op.create_index("idx_rooms_property", "rooms", ["property_id"])

    # --- reservations ---
    op.create_table(
        "reservations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("guest_name", sa.String(200), nullable=False),
        sa.Column("guest_email", sa.String(255)),
        sa.Column("guest_phone", sa.String(50)),
        sa.Column("check_in", sa.Date, nullable=False),
        sa.Column("check_out", sa.Date, nullable=False),
        sa.Column("guests_count", sa.Integer, server_default="1"),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), server_default="confirmed"),
        sa.Column("source", sa.String(50), server_default="manual"),
        sa.Column("external_reservation_id", sa.String(100)),
        sa.Column("notes", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("check_out > check_in", name="ck_reservations_dates"),
    )
    op.create_index("idx_reservations_property", "reservations", ["property_id"])
    op.create_index("idx_reservations_check_in", "reservations", ["check_in"])

    # --- pricing_rules ---
    op.create_table(
        "pricing_rules",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("property_id", UUID(as_uuid=True), sa.ForeignKey("properties.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rule_type", sa.String(20), nullable=False),
        sa.Column("rule_name", sa.String(300), nullable=False),
        sa.Column("conditions", JSONB),
        sa.Column("price_adjustment", sa.Numeric(10, 2)),
        sa.Column("is_percentage", sa.Boolean, server_default="true"),
        sa.Column("is_active", sa.Boolean, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_pricing_rules_property", "pricing_rules", ["property_id"])


def downgrade() -> None:
    op.drop_table("pricing_rules")
    op.drop_table("reservations")
    op.drop_table("rooms")
    op.drop_table("properties")
