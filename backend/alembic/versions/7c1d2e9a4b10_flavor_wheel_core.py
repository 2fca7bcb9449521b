"""Create flavor wheel core tables

Revision ID: 7c1d2e9a4b10
Revises:
Create Date: 2026-10-12 10:15:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "7c1d2e9a4b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "flavor_descriptors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("source_type", sa.String(length=32), nullable=False),
        sa.Column("source_id", sa.String(length=64), nullable=False),
        sa.Column("descriptor_text", sa.Text(), nullable=False),
        sa.Column("normalized_form", sa.Text(), nullable=False),
        sa.Column("descriptor_type", sa.String(length=16), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("subcategory", sa.String(length=100), nullable=True),
        sa.Column("confidence_score", sa.Float(), nullable=False),
        sa.Column("intensity", sa.Integer(), nullable=True),
        sa.Column("item_name", sa.String(length=255), nullable=True),
        sa.Column("item_category", sa.String(length=100), nullable=True),
        sa.Column("ai_extracted", sa.Boolean(), nullable=False),
        sa.Column("extraction_model", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id",
            "normalized_form",
            "descriptor_type",
            name="uq_flavor_descriptors_user_normalized_type",
        ),
    )
    op.create_index(op.f("ix_flavor_descriptors_id"), "flavor_descriptors", ["id"], unique=False)
    op.create_index(op.f("ix_flavor_descriptors_user_id"), "flavor_descriptors", ["user_id"], unique=False)
    op.create_index(op.f("ix_flavor_descriptors_source_id"), "flavor_descriptors", ["source_id"], unique=False)
    op.create_index(
        op.f("ix_flavor_descriptors_normalized_form"), "flavor_descriptors", ["normalized_form"], unique=False
    )
    op.create_index(op.f("ix_flavor_descriptors_item_name"), "flavor_descriptors", ["item_name"], unique=False)
    op.create_index(
        op.f("ix_flavor_descriptors_item_category"), "flavor_descriptors", ["item_category"], unique=False
    )

    op.create_table(
        "category_taxonomies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_name", sa.String(length=255), nullable=False),
        sa.Column("normalized_name", sa.String(length=255), nullable=False),
        sa.Column("taxonomy_data", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("usage_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_category_taxonomies_id"), "category_taxonomies", ["id"], unique=False)
    op.create_index(
        op.f("ix_category_taxonomies_normalized_name"), "category_taxonomies", ["normalized_name"], unique=True
    )

    op.create_table(
        "ai_extraction_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("tasting_id", sa.String(length=64), nullable=True),
        sa.Column("source_type", sa.String(length=32), nullable=True),
        sa.Column("input_text", sa.Text(), nullable=False),
        sa.Column("input_category", sa.String(length=255), nullable=True),
        sa.Column("model_used", sa.String(length=100), nullable=True),
        sa.Column("prompt_version", sa.String(length=20), nullable=True),
        sa.Column("tokens_used", sa.Integer(), nullable=True),
        sa.Column("processing_time_ms", sa.Integer(), nullable=True),
        sa.Column("descriptors_extracted", sa.Integer(), nullable=True),
        sa.Column("extraction_successful", sa.Boolean(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("raw_ai_response", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ai_extraction_logs_id"), "ai_extraction_logs", ["id"], unique=False)
    op.create_index(op.f("ix_ai_extraction_logs_user_id"), "ai_extraction_logs", ["user_id"], unique=False)
    op.create_index(op.f("ix_ai_extraction_logs_tasting_id"), "ai_extraction_logs", ["tasting_id"], unique=False)
    op.create_index(op.f("ix_ai_extraction_logs_created_at"), "ai_extraction_logs", ["created_at"], unique=False)

    op.create_table(
        "flavor_wheels",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("wheel_type", sa.String(length=16), nullable=False),
        sa.Column("scope_type", sa.String(length=16), nullable=False),
        sa.Column("scope_key", sa.Text(), nullable=False),
        sa.Column("scope_filter", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("wheel_data", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("descriptor_count", sa.Integer(), nullable=False),
        sa.Column("generated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("wheel_type", "scope_type", "scope_key", name="uq_flavor_wheels_cache_key"),
    )
    op.create_index(op.f("ix_flavor_wheels_id"), "flavor_wheels", ["id"], unique=False)
    op.create_index(op.f("ix_flavor_wheels_user_id"), "flavor_wheels", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_flavor_wheels_user_id"), table_name="flavor_wheels")
    op.drop_index(op.f("ix_flavor_wheels_id"), table_name="flavor_wheels")
    op.drop_table("flavor_wheels")

    op.drop_index(op.f("ix_ai_extraction_logs_created_at"), table_name="ai_extraction_logs")
    op.drop_index(op.f("ix_ai_extraction_logs_tasting_id"), table_name="ai_extraction_logs")
    op.drop_index(op.f("ix_ai_extraction_logs_user_id"), table_name="ai_extraction_logs")
    op.drop_index(op.f("ix_ai_extraction_logs_id"), table_name="ai_extraction_logs")
    op.drop_table("ai_extraction_logs")

    op.drop_index(op.f("ix_category_taxonomies_normalized_name"), table_name="category_taxonomies")
    op.drop_index(op.f("ix_category_taxonomies_id"), table_name="category_taxonomies")
    op.drop_table("category_taxonomies")

    op.drop_index(op.f("ix_flavor_descriptors_item_category"), table_name="flavor_descriptors")
    op.drop_index(op.f("ix_flavor_descriptors_item_name"), table_name="flavor_descriptors")
    op.drop_index(op.f("ix_flavor_descriptors_normalized_form"), table_name="flavor_descriptors")
    op.drop_index(op.f("ix_flavor_descriptors_source_id"), table_name="flavor_descriptors")
    op.drop_index(op.f("ix_flavor_descriptors_user_id"), table_name="flavor_descriptors")
    op.drop_index(op.f("ix_flavor_descriptors_id"), table_name="flavor_descriptors")
    op.drop_table("flavor_descriptors")
