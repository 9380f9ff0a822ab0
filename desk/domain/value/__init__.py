"""Domain value objects for the review desk."""

from desk.domain.value.identifiers import (
    CommentId,
    MaterialId,
    ReviewSessionId,
    ReviewStateId,
    TagGroupId,
    TagId,
    UserId,
)
from desk.domain.value.types import (
    DEFAULT_TAG_COLOR,
    MAX_COMMENT_LENGTH,
    Editor,
    ExpectedCategory,
    HexColor,
    MaterialFormat,
    ReviewStateKind,
    SelectionType,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "MaterialId",
    "ReviewStateId",
    "TagGroupId",
    "TagId",
    "CommentId",
    "ReviewSessionId",
    # Types
    "DEFAULT_TAG_COLOR",
    "MAX_COMMENT_LENGTH",
    "Editor",
    "ExpectedCategory",
    "HexColor",
    "MaterialFormat",
    "ReviewStateKind",
    "SelectionType",
    "UserRole",
]
