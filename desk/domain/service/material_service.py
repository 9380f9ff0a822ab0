"""Material domain service."""

from collections import Counter
from typing import Optional
from uuid import uuid4

import logfire

from desk.domain.error import NotFoundError, ValidationError
from desk.domain.model.common import utcnow
from desk.domain.model.material import (
    Material,
    MaterialFilter,
    MaterialStats,
    StateCount,
)
from desk.domain.model.review_state import ReviewState
from desk.domain.repository import MaterialRepository
from desk.domain.value import (
    ExpectedCategory,
    MaterialFormat,
    MaterialId,
    ReviewStateId,
    TagId,
    UserId,
)

from .base import Service

# Bucket for materials without a review state in stats
NO_STATE_LABEL = "No state"

# Material columns that admins may edit directly
EDITABLE_FIELDS = frozenset(
    {"url", "format", "expected_category", "source", "description", "subcategory"}
)


class MaterialService(Service):
    """Domain service for material operations."""

    def __init__(self, material_repository: MaterialRepository) -> None:
        """Initialize material service.

        Args:
            material_repository: Material repository
        """
        self.material_repository = material_repository

    async def get_material(self, material_id: MaterialId) -> Material:
        """Get a material by ID.

        Raises:
            NotFoundError: If the material does not exist
        """
        material = await self.material_repository.find_by_id(material_id)
        if not material:
            raise NotFoundError("Material", str(material_id))
        return material

    async def find_material(self, material_id: MaterialId) -> Optional[Material]:
        """Get a material by ID, None if it does not exist."""
        return await self.material_repository.find_by_id(material_id)

    async def list_materials(
        self,
        material_filter: Optional[MaterialFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Material]:
        """List materials newest first."""
        with logfire.span(
            "material_service.list_materials",
            filters=material_filter.model_dump(mode="json", exclude_none=True)
            if material_filter
            else None,
        ):
            materials = await self.material_repository.find_all(
                material_filter, limit=limit, offset=offset
            )
            logfire.info("Materials retrieved", count=len(materials))
            return materials

    async def create_material(
        self,
        url: str,
        format: MaterialFormat,
        expected_category: ExpectedCategory,
        created_by: Optional[UserId],
        review_state_id: Optional[ReviewStateId] = None,
        source: Optional[str] = None,
        description: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> Material:
        """Create a material.

        Args:
            url: Content URL
            format: Content format
            expected_category: Expected disinformation category
            created_by: User registering the material
            review_state_id: Starting state (callers pass the default state)
            source: Optional source name
            description: Optional description
            subcategory: Optional subcategory

        Returns:
            Created material
        """
        with logfire.span("material_service.create_material", url=url):
            clean_url = url.strip()
            if not clean_url:
                raise ValidationError("URL is required")

            now = utcnow()
            material = Material(
                id=MaterialId(uuid4()),
                url=clean_url,
                format=format,
                expected_category=expected_category,
                source=source,
                description=description,
                subcategory=subcategory,
                review_state_id=review_state_id,
                created_by=created_by,
                created_at=now,
                updated_at=now,
            )
            saved = await self.material_repository.save(material)
            logfire.info(
                "Material created",
                material_id=str(saved.id),
                format=format.value,
                review_state_id=str(review_state_id) if review_state_id else None,
            )
            return saved

    async def update_material(self, material_id: MaterialId, **fields) -> Material:
        """Apply an admin edit to a material's descriptive columns.

        Raises:
            NotFoundError: If the material does not exist
            ValidationError: If an unknown or empty column is given
        """
        with logfire.span(
            "material_service.update_material",
            material_id=str(material_id),
            fields=sorted(fields),
        ):
            unknown = set(fields) - EDITABLE_FIELDS
            if unknown:
                raise ValidationError(f"Cannot edit fields: {', '.join(sorted(unknown))}")
            if "url" in fields:
                if not fields["url"] or not fields["url"].strip():
                    raise ValidationError("URL is required")
                fields["url"] = fields["url"].strip()

            material = await self.get_material(material_id)
            updated = material.model_copy(update={**fields, "updated_at": utcnow()})
            saved = await self.material_repository.save(updated)
            logfire.info("Material updated", material_id=str(material_id))
            return saved

    async def delete_material(self, material_id: MaterialId) -> None:
        """Delete a material with its comments and tag links.

        Raises:
            NotFoundError: If the material does not exist
        """
        with logfire.span(
            "material_service.delete_material", material_id=str(material_id)
        ):
            await self.get_material(material_id)
            await self.material_repository.delete(material_id)
            logfire.info("Material deleted", material_id=str(material_id))

    async def set_review_state(
        self, material_id: MaterialId, review_state_id: Optional[ReviewStateId]
    ) -> Material:
        """Write a material's review state and bump its update time.

        Raises:
            NotFoundError: If the material does not exist
        """
        with logfire.span(
            "material_service.set_review_state",
            material_id=str(material_id),
            review_state_id=str(review_state_id) if review_state_id else None,
        ):
            material = await self.material_repository.update_review_state(
                material_id, review_state_id, utcnow()
            )
            if not material:
                raise NotFoundError("Material", str(material_id))
            logfire.info(
                "Material review state written",
                material_id=str(material_id),
                review_state_id=str(review_state_id) if review_state_id else None,
            )
            return material

    async def get_tag_ids(self, material_id: MaterialId) -> list[TagId]:
        """Get the tag IDs assigned to a material."""
        return await self.material_repository.get_tag_ids(material_id)

    async def replace_tags(self, material_id: MaterialId, tag_ids: list[TagId]) -> None:
        """Replace a material's full tag set."""
        with logfire.span(
            "material_service.replace_tags",
            material_id=str(material_id),
            tag_count=len(tag_ids),
        ):
            await self.material_repository.replace_tags(material_id, tag_ids)
            logfire.info(
                "Material tags replaced",
                material_id=str(material_id),
                tag_ids=[str(t) for t in tag_ids],
            )

    async def get_stats(self, states: list[ReviewState]) -> MaterialStats:
        """Count materials by category, format and review state.

        Args:
            states: All review states, for names and colors

        Returns:
            Aggregate material statistics
        """
        with logfire.span("material_service.get_stats"):
            materials = await self.material_repository.find_all()
            states_by_id = {state.id: state for state in states}

            by_category = Counter(m.expected_category.value for m in materials)
            by_format = Counter(m.format.value for m in materials)

            by_state: dict[str, StateCount] = {}
            for material in materials:
                state = (
                    states_by_id.get(material.review_state_id)
                    if material.review_state_id
                    else None
                )
                name = state.name if state else NO_STATE_LABEL
                color = state.color.root if state else None
                current = by_state.get(name) or StateCount(name=name, color=color)
                by_state[name] = current.model_copy(update={"count": current.count + 1})

            stats = MaterialStats(
                total=len(materials),
                by_category=dict(by_category),
                by_format=dict(by_format),
                by_state=list(by_state.values()),
            )
            logfire.info("Material stats computed", total=stats.total)
            return stats
