"""create users, artisans, bookings and payments tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "marketplace_20261019"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("consumer", "provider")
BOOKING_STATUSES = ("pending", "paid", "expired")


def upgrade():
    user_role_enum = sa.Enum(*USER_ROLES, name="user_role")
    booking_status_enum = sa.Enum(*BOOKING_STATUSES, name="booking_status")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_phone", "users", ["phone"], unique=True)

    op.create_table(
        "artisans",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("category", sa.String(length=120), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("price_from", sa.Numeric(12, 2), nullable=True),
        sa.Column("avg_rating", sa.Float(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_photo", sa.String(length=512), nullable=True),
        sa.Column("id_document", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_artisans_category", "artisans", ["category"])
    op.create_index("ix_artisans_city", "artisans", ["city"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("artisan_id", sa.Integer(), sa.ForeignKey("artisans.id"), nullable=False),
        sa.Column("service_category", sa.String(length=120), nullable=False),
        sa.Column("scheduled_at", sa.DateTime(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "status",
            booking_status_enum,
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("payment_ref", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_artisan_id", "bookings", ["artisan_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "booking_id",
            sa.Integer(),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("provider", sa.String(length=64), nullable=False),
        sa.Column("provider_ref", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default=sa.text("'initiated'"),
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_payments_provider_ref", "payments", ["provider_ref"], unique=True)


def downgrade():
    op.drop_index("ix_payments_provider_ref", table_name="payments")
    op.drop_table("payments")

    op.drop_index("ix_bookings_artisan_id", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_artisans_city", table_name="artisans")
    op.drop_index("ix_artisans_category", table_name="artisans")
    op.drop_table("artisans")

    op.drop_index("ix_users_phone", table_name="users")
    op.drop_table("users")

    sa.Enum(*BOOKING_STATUSES, name="booking_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(*USER_ROLES, name="user_role").drop(op.get_bind(), checkfirst=True)
