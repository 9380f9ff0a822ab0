"""SQLAlchemy table definitions for the review desk.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (roles of identity provider users)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True),  # Same ID as the identity provider user
    Column("email", String(255), nullable=False),
    Column("role", String(20), nullable=False, server_default="regular"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("role IN ('admin', 'regular')", name="ck_profiles_role"),
)

Index("idx_profiles_email", profiles_table.c.email)

# ============================================================================
# REVIEW STATES TABLE
# ============================================================================
review_states_table = Table(
    "review_states",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("color", String(7), nullable=False),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column("is_default", Boolean, nullable=False, server_default="false"),
    Column("kind", String(20), nullable=False, server_default="normal"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "kind IN ('normal', 'transient', 'initial_default')",
        name="ck_review_states_kind",
    ),
)

Index("idx_review_states_display_order", review_states_table.c.display_order)
# At most one default state
Index(
    "uq_review_states_default",
    review_states_table.c.is_default,
    unique=True,
    postgresql_where=text("is_default"),
)
# At most one state per workflow kind
Index(
    "uq_review_states_workflow_kind",
    review_states_table.c.kind,
    unique=True,
    postgresql_where=text("kind <> 'normal'"),
)

# ============================================================================
# MATERIALS TABLE
# ============================================================================
materials_table = Table(
    "materials",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("url", Text, nullable=False),
    Column("format", String(10), nullable=False),  # 'text', 'image', 'video'
    Column("expected_category", String(40), nullable=False),
    Column("source", Text, nullable=True),
    Column("description", Text, nullable=True),
    Column("subcategory", String(255), nullable=True),
    Column(
        "review_state_id",
        UUID,
        ForeignKey("review_states.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("created_by", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("format IN ('text', 'image', 'video')", name="ck_materials_format"),
)

Index("idx_materials_review_state_id", materials_table.c.review_state_id)
Index("idx_materials_created_at", materials_table.c.created_at.desc())
Index("idx_materials_expected_category", materials_table.c.expected_category)

# ============================================================================
# TAG GROUPS AND TAGS
# ============================================================================
tag_groups_table = Table(
    "tag_groups",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column("selection_type", String(10), nullable=False, server_default="multiple"),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "selection_type IN ('single', 'multiple')", name="ck_tag_groups_selection_type"
    ),
)

tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "group_id",
        UUID,
        ForeignKey("tag_groups.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(100), nullable=False),
    Column("color", String(7), nullable=False, server_default="#6B7280"),
    Column("description", Text, nullable=True),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("group_id", "name", name="uq_tags_group_name"),
)

Index("idx_tags_group_id", tags_table.c.group_id)

material_tags_table = Table(
    "material_tags",
    metadata,
    Column(
        "material_id",
        UUID,
        ForeignKey("materials.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("material_id", "tag_id", name="pk_material_tags"),
)

Index("idx_material_tags_tag_id", material_tags_table.c.tag_id)

# ============================================================================
# COMMENTS TABLE (append-only)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "material_id",
        UUID,
        ForeignKey("materials.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("author_id", UUID, nullable=False),
    Column("author_email", String(255), nullable=True),
    Column("content", Text, nullable=False),
    Column(
        "review_state_id",
        UUID,
        ForeignKey("review_states.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 5000", name="ck_comments_content_length"
    ),
)

Index(
    "idx_comments_material_created",
    comments_table.c.material_id,
    comments_table.c.created_at.desc(),
)
