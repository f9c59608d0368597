"""Create spraytrack tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:31.418206

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c2a9d7b10"
down_revision = None
branch_labels = None
depends_on = None


def timestamp_columns():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "actor_types",
        sa.Column("actor_type_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("actor_type_name", sa.String(length=50), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("actor_type_uid", name=op.f("pk_actor_types")),
        sa.UniqueConstraint(
            "actor_type_name", name=op.f("uq_actor_types_actor_type_name")
        ),
    )

    op.create_table(
        "users",
        sa.Column("user_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_secure", sa.String(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("number", sa.String(length=20), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("actor_type_uid", sa.Integer(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *timestamp_columns(),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "role IN ('ADMIN', 'SUPERVISOR', 'SPRAYER')", name=op.f("ck_users_role")
        ),
        sa.ForeignKeyConstraint(
            ["actor_type_uid"],
            ["actor_types.actor_type_uid"],
            name=op.f("fk_users_actor_type_uid_actor_types"),
        ),
        sa.PrimaryKeyConstraint("user_uid", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
        sa.UniqueConstraint("number", name=op.f("uq_users_number")),
    )

    op.create_table(
        "provinces",
        sa.Column("province_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("province_name", sa.String(length=100), nullable=False),
        sa.Column("province_code", sa.String(length=10), nullable=True),
        *timestamp_columns(),
        sa.PrimaryKeyConstraint("province_uid", name=op.f("pk_provinces")),
        sa.UniqueConstraint("province_name", name=op.f("uq_provinces_province_name")),
        sa.UniqueConstraint("province_code", name=op.f("uq_provinces_province_code")),
    )

    op.create_table(
        "districts",
        sa.Column("district_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("district_name", sa.String(length=100), nullable=False),
        sa.Column("district_code", sa.String(length=10), nullable=True),
        sa.Column("province_uid", sa.Integer(), nullable=False),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["province_uid"],
            ["provinces.province_uid"],
            name=op.f("fk_districts_province_uid_provinces"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("district_uid", name=op.f("pk_districts")),
        sa.UniqueConstraint(
            "province_uid", "district_name", name="_province_uid_district_name_uc"
        ),
    )

    op.create_table(
        "localities",
        sa.Column("locality_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("locality_name", sa.String(length=100), nullable=False),
        sa.Column("district_uid", sa.Integer(), nullable=False),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["district_uid"],
            ["districts.district_uid"],
            name=op.f("fk_localities_district_uid_districts"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("locality_uid", name=op.f("pk_localities")),
        sa.UniqueConstraint(
            "district_uid", "locality_name", name="_district_uid_locality_name_uc"
        ),
    )

    op.create_table(
        "communities",
        sa.Column("community_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("community_name", sa.String(length=100), nullable=False),
        sa.Column("locality_uid", sa.Integer(), nullable=False),
        *timestamp_columns(),
        sa.ForeignKeyConstraint(
            ["locality_uid"],
            ["localities.locality_uid"],
            name=op.f("fk_communities_locality_uid_localities"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("community_uid", name=op.f("pk_communities")),
        sa.UniqueConstraint(
            "locality_uid", "community_name", name="_locality_uid_community_name_uc"
        ),
    )

    op.create_table(
        "spray_configurations",
        sa.Column(
            "spray_configuration_uid", sa.Integer(), autoincrement=True, nullable=False
        ),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("province_uid", sa.Integer(), nullable=True),
        sa.Column("district_uid", sa.Integer(), nullable=True),
        sa.Column("spray_target", sa.Integer(), nullable=False),
        sa.Column("proposed_spray_days", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("spray_rounds", sa.Integer(), nullable=False),
        sa.Column("days_between_rounds", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *timestamp_columns(),
        sa.CheckConstraint(
            "spray_target >= 0", name=op.f("ck_spray_configurations_spray_target")
        ),
        sa.CheckConstraint(
            "proposed_spray_days BETWEEN 1 AND 365",
            name=op.f("ck_spray_configurations_proposed_spray_days"),
        ),
        sa.CheckConstraint(
            "spray_rounds BETWEEN 1 AND 5",
            name=op.f("ck_spray_configurations_spray_rounds"),
        ),
        sa.CheckConstraint(
            "days_between_rounds >= 0",
            name=op.f("ck_spray_configurations_days_between_rounds"),
        ),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.user_uid"],
            name=op.f("fk_spray_configurations_created_by_users"),
        ),
        sa.ForeignKeyConstraint(
            ["district_uid"],
            ["districts.district_uid"],
            name=op.f("fk_spray_configurations_district_uid_districts"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["province_uid"],
            ["provinces.province_uid"],
            name=op.f("fk_spray_configurations_province_uid_provinces"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "spray_configuration_uid", name=op.f("pk_spray_configurations")
        ),
    )

    op.create_table(
        "spray_totals",
        sa.Column("spray_totals_uid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sprayer_uid", sa.Integer(), nullable=False),
        sa.Column("brigade_chief_uid", sa.Integer(), nullable=False),
        sa.Column("community_uid", sa.Integer(), nullable=False),
        sa.Column("spray_configuration_uid", sa.Integer(), nullable=True),
        sa.Column("spray_type", sa.String(), nullable=False),
        sa.Column("spray_date", sa.Date(), nullable=False),
        sa.Column("spray_year", sa.Integer(), nullable=False),
        sa.Column("spray_round", sa.Integer(), nullable=False),
        sa.Column("spray_status", sa.String(), nullable=False),
        sa.Column("insecticide_used", sa.String(length=100), nullable=False),
        sa.Column("structures_found", sa.Integer(), nullable=False),
        sa.Column("structures_sprayed", sa.Integer(), nullable=False),
        sa.Column("structures_not_sprayed", sa.Integer(), nullable=False),
        sa.Column("compartments_sprayed", sa.Integer(), nullable=False),
        sa.Column("walls_type", sa.String(), nullable=False),
        sa.Column("roofs_type", sa.String(), nullable=False),
        sa.Column("number_of_persons", sa.Integer(), nullable=False),
        sa.Column("children_under_5", sa.Integer(), nullable=False),
        sa.Column("pregnant_women", sa.Integer(), nullable=False),
        sa.Column("reason_not_sprayed", sa.String(), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("deleted_by", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("updated_by", sa.Integer(), nullable=True),
        *timestamp_columns(),
        sa.CheckConstraint(
            "spray_type IN ('PRINCIPAL', 'SECUNDARIA')",
            name=op.f("ck_spray_totals_spray_type"),
        ),
        sa.CheckConstraint(
            "spray_status IN ('PLANNED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')",
            name=op.f("ck_spray_totals_spray_status"),
        ),
        sa.CheckConstraint(
            "walls_type IN ('MATOPE', 'COLMO', 'CIMENTO')",
            name=op.f("ck_spray_totals_walls_type"),
        ),
        sa.CheckConstraint(
            "roofs_type IN ('CAPIM_PLASTICO', 'ZINCO')",
            name=op.f("ck_spray_totals_roofs_type"),
        ),
        sa.CheckConstraint(
            "reason_not_sprayed IS NULL OR "
            "reason_not_sprayed IN ('RECUSA', 'FECHADA', 'OUTRO')",
            name=op.f("ck_spray_totals_reason_not_sprayed"),
        ),
        sa.CheckConstraint(
            "spray_round >= 1", name=op.f("ck_spray_totals_spray_round")
        ),
        sa.CheckConstraint(
            "structures_found >= 0 AND structures_sprayed >= 0 "
            "AND structures_not_sprayed >= 0 AND compartments_sprayed >= 0 "
            "AND number_of_persons >= 0 AND children_under_5 >= 0 "
            "AND pregnant_women >= 0",
            name=op.f("ck_spray_totals_non_negative_counts"),
        ),
        sa.CheckConstraint(
            "structures_sprayed + structures_not_sprayed = structures_found",
            name=op.f("ck_spray_totals_structures_balance"),
        ),
        sa.ForeignKeyConstraint(
            ["brigade_chief_uid"],
            ["users.user_uid"],
            name=op.f("fk_spray_totals_brigade_chief_uid_users"),
        ),
        sa.ForeignKeyConstraint(
            ["community_uid"],
            ["communities.community_uid"],
            name=op.f("fk_spray_totals_community_uid_communities"),
        ),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.user_uid"],
            name=op.f("fk_spray_totals_created_by_users"),
        ),
        sa.ForeignKeyConstraint(
            ["deleted_by"],
            ["users.user_uid"],
            name=op.f("fk_spray_totals_deleted_by_users"),
        ),
        sa.ForeignKeyConstraint(
            ["spray_configuration_uid"],
            ["spray_configurations.spray_configuration_uid"],
            name=op.f("fk_spray_totals_spray_configuration_uid_spray_configurations"),
        ),
        sa.ForeignKeyConstraint(
            ["sprayer_uid"],
            ["users.user_uid"],
            name=op.f("fk_spray_totals_sprayer_uid_users"),
        ),
        sa.ForeignKeyConstraint(
            ["updated_by"],
            ["users.user_uid"],
            name=op.f("fk_spray_totals_updated_by_users"),
        ),
        sa.PrimaryKeyConstraint("spray_totals_uid", name=op.f("pk_spray_totals")),
    )
    op.create_index(
        "ix_spray_totals_spray_year_is_deleted",
        "spray_totals",
        ["spray_year", "is_deleted"],
    )


def downgrade():
    op.drop_index("ix_spray_totals_spray_year_is_deleted", table_name="spray_totals")
    op.drop_table("spray_totals")
    op.drop_table("spray_configurations")
    op.drop_table("communities")
    op.drop_table("localities")
    op.drop_table("districts")
    op.drop_table("provinces")
    op.drop_table("users")
    op.drop_table("actor_types")
