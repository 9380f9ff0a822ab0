"""initial_schema

Create the schema for the review desk:
- Profiles (roles of identity provider users)
- Review states (workflow states with kind and a single default)
- Materials (content under review)
- Tag groups, tags and material tag links
- Comments (append-only review history)

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-09-14 10:12:03.415208

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() is built in from PostgreSQL 13; pgcrypto covers older servers
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),  # Identity provider user ID
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="regular"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('admin', 'regular')", name="ck_profiles_role"),
    )
    op.create_index("idx_profiles_email", "profiles", ["email"])

    # ========================================================================
    # REVIEW_STATES table
    # ========================================================================
    op.create_table(
        "review_states",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(7), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("kind", sa.String(20), nullable=False, server_default="normal"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_review_states_name"),
        sa.CheckConstraint(
            "kind IN ('normal', 'transient', 'initial_default')",
            name="ck_review_states_kind",
        ),
        sa.CheckConstraint("color ~ '^#[0-9A-Fa-f]{6}$'", name="ck_review_states_color"),
    )
    op.create_index(
        "idx_review_states_display_order", "review_states", ["display_order"]
    )
    # At most one default state
    op.create_index(
        "uq_review_states_default",
        "review_states",
        ["is_default"],
        unique=True,
        postgresql_where=sa.text("is_default"),
    )
    # At most one state per workflow kind
    op.create_index(
        "uq_review_states_workflow_kind",
        "review_states",
        ["kind"],
        unique=True,
        postgresql_where=sa.text("kind <> 'normal'"),
    )

    # ========================================================================
    # MATERIALS table
    # ========================================================================
    op.create_table(
        "materials",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("format", sa.String(10), nullable=False),
        sa.Column("expected_category", sa.String(40), nullable=False),
        sa.Column("source", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("subcategory", sa.String(255), nullable=True),
        sa.Column("review_state_id", sa.UUID(), nullable=True),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["review_state_id"], ["review_states.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "format IN ('text', 'image', 'video')", name="ck_materials_format"
        ),
    )
    op.create_index("idx_materials_review_state_id", "materials", ["review_state_id"])
    op.create_index(
        "idx_materials_created_at",
        "materials",
        [sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_materials_expected_category", "materials", ["expected_category"]
    )

    # ========================================================================
    # TAG_GROUPS and TAGS tables
    # ========================================================================
    op.create_table(
        "tag_groups",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "selection_type", sa.String(10), nullable=False, server_default="multiple"
        ),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_tag_groups_name"),
        sa.CheckConstraint(
            "selection_type IN ('single', 'multiple')",
            name="ck_tag_groups_selection_type",
        ),
    )

    op.create_table(
        "tags",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("group_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(7), nullable=False, server_default="#6B7280"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["group_id"], ["tag_groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("group_id", "name", name="uq_tags_group_name"),
    )
    op.create_index("idx_tags_group_id", "tags", ["group_id"])

    op.create_table(
        "material_tags",
        sa.Column("material_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["material_id"], ["materials.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("material_id", "tag_id", name="pk_material_tags"),
    )
    op.create_index("idx_material_tags_tag_id", "material_tags", ["tag_id"])

    # ========================================================================
    # COMMENTS table (append-only)
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("material_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("review_state_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["material_id"], ["materials.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["review_state_id"], ["review_states.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 5000",
            name="ck_comments_content_length",
        ),
    )
    op.create_index(
        "idx_comments_material_created",
        "comments",
        ["material_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_material_created", table_name="comments")
    op.drop_table("comments")

    op.drop_index("idx_material_tags_tag_id", table_name="material_tags")
    op.drop_table("material_tags")

    op.drop_index("idx_tags_group_id", table_name="tags")
    op.drop_table("tags")
    op.drop_table("tag_groups")

    op.drop_index("idx_materials_expected_category", table_name="materials")
    op.drop_index("idx_materials_created_at", table_name="materials")
    op.drop_index("idx_materials_review_state_id", table_name="materials")
    op.drop_table("materials")

    op.drop_index("uq_review_states_workflow_kind", table_name="review_states")
    op.drop_index("uq_review_states_default", table_name="review_states")
    op.drop_index("idx_review_states_display_order", table_name="review_states")
    op.drop_table("review_states")

    op.drop_index("idx_profiles_email", table_name="profiles")
    op.drop_table("profiles")
