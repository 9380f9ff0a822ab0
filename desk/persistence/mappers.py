"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from desk.domain.model import Comment, Material, Profile, ReviewState, Tag, TagGroup
from desk.domain.value import (
    CommentId,
    ExpectedCategory,
    HexColor,
    MaterialFormat,
    MaterialId,
    ReviewStateId,
    ReviewStateKind,
    SelectionType,
    TagGroupId,
    TagId,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_material(row: Dict[str, Any]) -> Material:
    """Convert database row to Material domain model.

    Args:
        row: Database row as dict

    Returns:
        Material domain model
    """
    state_id = _optional_uuid(row.get("review_state_id"))
    created_by = _optional_uuid(row.get("created_by"))
    return Material(
        id=MaterialId(_uuid(row["id"])),
        url=row["url"],
        format=MaterialFormat(row["format"]),
        expected_category=ExpectedCategory(row["expected_category"]),
        source=row.get("source"),
        description=row.get("description"),
        subcategory=row.get("subcategory"),
        review_state_id=ReviewStateId(state_id) if state_id else None,
        created_by=UserId(created_by) if created_by else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def material_to_dict(material: Material) -> Dict[str, Any]:
    """Convert Material domain model to database dict."""
    data = material.model_dump()
    data["format"] = material.format.value
    data["expected_category"] = material.expected_category.value
    return data


def row_to_review_state(row: Dict[str, Any]) -> ReviewState:
    """Convert database row to ReviewState domain model."""
    return ReviewState(
        id=ReviewStateId(_uuid(row["id"])),
        name=row["name"],
        color=HexColor(row["color"]),
        display_order=row["display_order"],
        is_default=row["is_default"],
        kind=ReviewStateKind(row["kind"]),
        created_at=row["created_at"],
    )


def review_state_to_dict(state: ReviewState) -> Dict[str, Any]:
    """Convert ReviewState domain model to database dict."""
    data = state.model_dump()
    data["kind"] = state.kind.value
    return data


def row_to_tag_group(row: Dict[str, Any]) -> TagGroup:
    """Convert database row to TagGroup domain model."""
    return TagGroup(
        id=TagGroupId(_uuid(row["id"])),
        name=row["name"],
        description=row.get("description"),
        selection_type=SelectionType(row["selection_type"]),
        display_order=row["display_order"],
        created_at=row["created_at"],
    )


def tag_group_to_dict(group: TagGroup) -> Dict[str, Any]:
    """Convert TagGroup domain model to database dict."""
    data = group.model_dump()
    data["selection_type"] = group.selection_type.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        group_id=TagGroupId(_uuid(row["group_id"])),
        name=row["name"],
        color=HexColor(row["color"]),
        description=row.get("description"),
        display_order=row["display_order"],
        created_at=row["created_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return tag.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    state_id = _optional_uuid(row.get("review_state_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        material_id=MaterialId(_uuid(row["material_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_email=row.get("author_email"),
        content=row["content"],
        review_state_id=ReviewStateId(state_id) if state_id else None,
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    data = profile.model_dump()
    data["role"] = profile.role.value
    return data
