"""Review state domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from desk.domain.error import (
    BusinessRuleViolationError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from desk.domain.model.review_state import ReviewState
from desk.domain.repository import ReviewStateRepository
from desk.domain.value import HexColor, ReviewStateId, ReviewStateKind

from .base import Service

MAX_NAME_LENGTH = 100


def normalize_name(name: str) -> str:
    """Trim a display name and check its length.

    Raises:
        ValidationError: If the name is empty or too long
    """
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Name is required")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name cannot exceed {MAX_NAME_LENGTH} characters")
    return trimmed


def parse_color(color: str) -> HexColor:
    """Parse a #RRGGBB color.

    Raises:
        ValidationError: If the color is not a hex code
    """
    try:
        return HexColor(color)
    except PydanticValidationError:
        raise ValidationError("Color must be a hex code like #RRGGBB")


class ReviewStateService(Service):
    """Domain service for review states and their workflow roles."""

    def __init__(self, review_state_repository: ReviewStateRepository) -> None:
        """Initialize review state service.

        Args:
            review_state_repository: Review state repository
        """
        self.review_state_repository = review_state_repository

    async def get_state(self, state_id: ReviewStateId) -> ReviewState:
        """Get a review state by ID.

        Raises:
            NotFoundError: If the state does not exist
        """
        state = await self.review_state_repository.find_by_id(state_id)
        if not state:
            raise NotFoundError("ReviewState", str(state_id))
        return state

    async def find_state(self, state_id: Optional[ReviewStateId]) -> Optional[ReviewState]:
        """Get a review state by ID, None when missing or not given."""
        if state_id is None:
            return None
        return await self.review_state_repository.find_by_id(state_id)

    async def list_states(self) -> list[ReviewState]:
        """Get all review states in display order."""
        with logfire.span("review_state_service.list_states"):
            states = await self.review_state_repository.find_all()
            logfire.info("Review states retrieved", count=len(states))
            return states

    async def get_transient_state(self) -> Optional[ReviewState]:
        """Get the state marking a material as being edited."""
        return await self.review_state_repository.find_by_kind(
            ReviewStateKind.TRANSIENT
        )

    async def get_initial_state(self) -> Optional[ReviewState]:
        """Get the state that recovered materials fall back to."""
        return await self.review_state_repository.find_by_kind(
            ReviewStateKind.INITIAL_DEFAULT
        )

    async def get_default_state(self) -> Optional[ReviewState]:
        """Get the state new materials start in."""
        return await self.review_state_repository.find_default()

    async def resolve_resting_state(
        self, state_id: Optional[ReviewStateId]
    ) -> Optional[ReviewStateId]:
        """Map a state to a valid resting state for the review workflow.

        A transient state, or one that no longer exists, is replaced by the
        initial state. None stays None.

        Args:
            state_id: State a material was found in

        Returns:
            State ID safe to restore a material to
        """
        if state_id is None:
            return None

        state = await self.review_state_repository.find_by_id(state_id)
        if state is not None and not state.is_transient:
            return state_id

        initial = await self.get_initial_state()
        logfire.info(
            "Substituting initial review state",
            found_state_id=str(state_id),
            found_kind=state.kind.value if state else None,
            initial_state_id=str(initial.id) if initial else None,
        )
        return initial.id if initial else None

    async def validate_outcome_state(self, state_id: ReviewStateId) -> ReviewState:
        """Check that a state may be chosen as the outcome of a review.

        Raises:
            InvalidReferenceError: If the state does not exist
            ValidationError: If the state is the transient in-progress marker
        """
        state = await self.review_state_repository.find_by_id(state_id)
        if not state:
            logfire.warn("Invalid review state reference", state_id=str(state_id))
            raise InvalidReferenceError("review state", str(state_id))
        if state.is_transient:
            raise ValidationError(
                f"Review state '{state.name}' only marks a review in progress"
            )
        return state

    async def create_state(self, name: str, color: str) -> ReviewState:
        """Create a normal review state at the end of the display order.

        Raises:
            ValidationError: If name or color are invalid
            BusinessRuleViolationError: If the name is taken
        """
        with logfire.span("review_state_service.create_state", name=name):
            clean_name = normalize_name(name)
            hex_color = parse_color(color)

            if await self.review_state_repository.find_by_name(clean_name):
                raise BusinessRuleViolationError(
                    f"A review state named '{clean_name}' already exists"
                )

            state = ReviewState(
                id=ReviewStateId(uuid4()),
                name=clean_name,
                color=hex_color,
                display_order=await self.review_state_repository.next_display_order(),
                is_default=False,
                kind=ReviewStateKind.NORMAL,
            )
            saved = await self.review_state_repository.save(state)
            logfire.info("Review state created", state_id=str(saved.id), name=clean_name)
            return saved

    async def update_state(
        self,
        state_id: ReviewStateId,
        name: Optional[str] = None,
        color: Optional[str] = None,
        display_order: Optional[int] = None,
    ) -> ReviewState:
        """Update the display attributes of a review state.

        The workflow kind is never changed.

        Raises:
            NotFoundError: If the state does not exist
            ValidationError: If name or color are invalid
            BusinessRuleViolationError: If the new name is taken
        """
        with logfire.span("review_state_service.update_state", state_id=str(state_id)):
            state = await self.get_state(state_id)
            updates: dict = {}

            if name is not None:
                clean_name = normalize_name(name)
                existing = await self.review_state_repository.find_by_name(clean_name)
                if existing and existing.id != state_id:
                    raise BusinessRuleViolationError(
                        f"A review state named '{clean_name}' already exists"
                    )
                updates["name"] = clean_name
            if color is not None:
                updates["color"] = parse_color(color)
            if display_order is not None:
                if display_order < 0:
                    raise ValidationError("Display order cannot be negative")
                updates["display_order"] = display_order

            if not updates:
                return state

            saved = await self.review_state_repository.save(
                state.model_copy(update=updates)
            )
            logfire.info(
                "Review state updated", state_id=str(state_id), fields=sorted(updates)
            )
            return saved

    async def delete_state(self, state_id: ReviewStateId) -> None:
        """Delete a review state.

        Raises:
            NotFoundError: If the state does not exist
            BusinessRuleViolationError: If the state is the default or drives
                the workflow
        """
        with logfire.span("review_state_service.delete_state", state_id=str(state_id)):
            state = await self.get_state(state_id)
            if state.is_default:
                raise BusinessRuleViolationError("The default review state cannot be deleted")
            if state.is_protected:
                raise BusinessRuleViolationError(
                    f"Review state '{state.name}' is used by the review workflow "
                    "and cannot be deleted"
                )

            await self.review_state_repository.delete(state_id)
            logfire.info("Review state deleted", state_id=str(state_id))

    async def set_default_state(self, state_id: ReviewStateId) -> ReviewState:
        """Make a state the default for new materials.

        Raises:
            NotFoundError: If the state does not exist
            ValidationError: If the state is the transient in-progress marker
        """
        with logfire.span(
            "review_state_service.set_default_state", state_id=str(state_id)
        ):
            state = await self.get_state(state_id)
            if state.is_transient:
                raise ValidationError("The in-progress state cannot be the default")

            await self.review_state_repository.set_default(state_id)
            logfire.info("Default review state changed", state_id=str(state_id))
            return state.model_copy(update={"is_default": True})
