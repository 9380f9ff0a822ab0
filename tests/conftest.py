"""Test configuration and fixtures."""

from uuid import uuid4

from desk.config import Settings
from desk.domain.model import Material, Profile, ReviewState, Tag, TagGroup
from desk.domain.value import (
    ExpectedCategory,
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
from desk.persistence.repository.inmemory import InMemoryDatabase
from desk.util.jwt import create_token

# (key, name, color, kind, is_default) of the states a fresh database starts with
DEFAULT_REVIEW_STATES = [
    ("pending", "Pending", "#FCD34D", ReviewStateKind.INITIAL_DEFAULT, True),
    ("in_progress", "In progress", "#60A5FA", ReviewStateKind.TRANSIENT, False),
    ("analyzed", "Analyzed", "#34D399", ReviewStateKind.NORMAL, False),
    ("incomplete", "Incomplete", "#F87171", ReviewStateKind.NORMAL, False),
    ("needs_review", "Needs review", "#A78BFA", ReviewStateKind.NORMAL, False),
]


def seed_review_states(store: InMemoryDatabase) -> dict[str, ReviewState]:
    """Insert the default review states.

    Returns:
        States keyed by "pending", "in_progress", "analyzed", "incomplete"
        and "needs_review"
    """
    states = {}
    for order, (key, name, color, kind, is_default) in enumerate(
        DEFAULT_REVIEW_STATES
    ):
        state = ReviewState(
            id=ReviewStateId(uuid4()),
            name=name,
            color=color,
            display_order=order,
            is_default=is_default,
            kind=kind,
        )
        store.review_states[state.id] = state
        states[key] = state
    return states


def add_material(
    store: InMemoryDatabase,
    state: ReviewState | None = None,
    url: str = "https://example.org/post/1",
    format: MaterialFormat = MaterialFormat.IMAGE,
    expected_category: ExpectedCategory = ExpectedCategory.DEEPFAKE,
    **fields,
) -> Material:
    """Insert a material, optionally in a review state."""
    material = Material(
        id=MaterialId(uuid4()),
        url=url,
        format=format,
        expected_category=expected_category,
        review_state_id=state.id if state else None,
        **fields,
    )
    store.materials[material.id] = material
    return material


def add_tags(
    store: InMemoryDatabase, group_name: str = "Technique", names: tuple = ("Crop", "Splice")
) -> tuple[TagGroup, list[Tag]]:
    """Insert a tag group with tags."""
    group = TagGroup(
        id=TagGroupId(uuid4()),
        name=group_name,
        selection_type=SelectionType.MULTIPLE,
        display_order=len(store.tag_groups),
    )
    store.tag_groups[group.id] = group
    tags = []
    for order, name in enumerate(names):
        tag = Tag(
            id=TagId(uuid4()),
            group_id=group.id,
            name=name,
            color="#6B7280",
            display_order=order,
        )
        store.tags[tag.id] = tag
        tags.append(tag)
    return group, tags


def add_profile(
    store: InMemoryDatabase, email: str, role: UserRole = UserRole.REGULAR
) -> Profile:
    """Insert a user profile."""
    profile = Profile(id=UserId(uuid4()), email=email, role=role)
    store.profiles[profile.id] = profile
    return profile


def make_token(user_id: UserId | str, email: str) -> str:
    """Sign a session token the way the identity provider does."""
    return create_token(str(user_id), email, Settings().auth)


def auth_headers(user_id: UserId | str, email: str) -> dict[str, str]:
    """Cookie header carrying a session token.

    Used for both HTTP requests and WebSocket handshakes.
    """
    return {"cookie": f"auth_token={make_token(user_id, email)}"}
