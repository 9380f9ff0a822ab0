"""Response models shared by several use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from desk.domain.model import (
    Comment,
    Lock,
    Material,
    ReviewSession,
    ReviewState,
    Tag,
    TagGroup,
)
from desk.domain.value import (
    ExpectedCategory,
    MaterialFormat,
    ReviewStateKind,
    SelectionType,
)


class AuthenticatedRequest(BaseModel):
    """Request made on behalf of a signed-in user."""

    user_id: str  # User ID from the verified token
    email: str  # E-mail from the verified token


class ReviewStateInfo(BaseModel):
    """Review state information for responses."""

    id: str
    name: str
    color: str
    display_order: int
    is_default: bool
    kind: ReviewStateKind

    @classmethod
    def from_domain(cls, state: ReviewState) -> "ReviewStateInfo":
        return cls(
            id=str(state.id),
            name=state.name,
            color=state.color.root,
            display_order=state.display_order,
            is_default=state.is_default,
            kind=state.kind,
        )


class MaterialInfo(BaseModel):
    """Material information for responses."""

    id: str
    url: str
    format: MaterialFormat
    expected_category: ExpectedCategory
    source: Optional[str]
    description: Optional[str]
    subcategory: Optional[str]
    review_state_id: Optional[str]
    review_state: Optional[ReviewStateInfo] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(
        cls, material: Material, state: Optional[ReviewState] = None
    ) -> "MaterialInfo":
        return cls(
            id=str(material.id),
            url=material.url,
            format=material.format,
            expected_category=material.expected_category,
            source=material.source,
            description=material.description,
            subcategory=material.subcategory,
            review_state_id=str(material.review_state_id)
            if material.review_state_id
            else None,
            review_state=ReviewStateInfo.from_domain(state) if state else None,
            created_at=material.created_at,
            updated_at=material.updated_at,
        )


class CommentInfo(BaseModel):
    """Comment information for responses."""

    id: str
    material_id: str
    author_id: str
    author_email: Optional[str]
    content: str
    review_state_id: Optional[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentInfo":
        return cls(
            id=str(comment.id),
            material_id=str(comment.material_id),
            author_id=str(comment.author_id),
            author_email=comment.author_email,
            content=comment.content,
            review_state_id=str(comment.review_state_id)
            if comment.review_state_id
            else None,
            created_at=comment.created_at,
        )


class TagInfo(BaseModel):
    """Tag information for responses."""

    id: str
    group_id: str
    name: str
    color: str
    description: Optional[str]
    display_order: int

    @classmethod
    def from_domain(cls, tag: Tag) -> "TagInfo":
        return cls(
            id=str(tag.id),
            group_id=str(tag.group_id),
            name=tag.name,
            color=tag.color.root,
            description=tag.description,
            display_order=tag.display_order,
        )


class TagGroupInfo(BaseModel):
    """Tag group information (with tags) for responses."""

    id: str
    name: str
    description: Optional[str]
    selection_type: SelectionType
    display_order: int
    tags: list[TagInfo] = []

    @classmethod
    def from_domain(cls, group: TagGroup, tags: list[Tag]) -> "TagGroupInfo":
        return cls(
            id=str(group.id),
            name=group.name,
            description=group.description,
            selection_type=group.selection_type,
            display_order=group.display_order,
            tags=[TagInfo.from_domain(tag) for tag in tags],
        )


class LockInfo(BaseModel):
    """Soft lock information for responses."""

    material_id: str
    editor: str
    locked_at: datetime

    @classmethod
    def from_domain(cls, lock: Lock) -> "LockInfo":
        return cls(
            material_id=str(lock.material_id),
            editor=lock.editor,
            locked_at=lock.locked_at,
        )


class SessionInfo(BaseModel):
    """Review session information for responses."""

    session_id: str
    material_id: str
    editor: str
    prior_state_id: Optional[str]
    started_at: datetime
    expires_at: datetime

    @classmethod
    def from_domain(cls, session: ReviewSession) -> "SessionInfo":
        return cls(
            session_id=str(session.id),
            material_id=str(session.material_id),
            editor=session.editor,
            prior_state_id=str(session.prior_state_id)
            if session.prior_state_id
            else None,
            started_at=session.started_at,
            expires_at=session.expires_at,
        )
