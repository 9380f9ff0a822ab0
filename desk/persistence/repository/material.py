"""PostgreSQL implementation of Material repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from desk.domain.model.material import Material, MaterialFilter
from desk.domain.repository.material import MaterialRepository
from desk.domain.value import MaterialId, ReviewStateId, TagId
from desk.persistence.mappers import material_to_dict, row_to_material
from desk.persistence.tables import material_tags_table, materials_table


class PostgresMaterialRepository(MaterialRepository):
    """PostgreSQL implementation of MaterialRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, material_id: MaterialId) -> Optional[Material]:
        """Find material by ID."""
        stmt = select(materials_table).where(materials_table.c.id == material_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_material(row._asdict()) if row else None

    async def find_all(
        self,
        material_filter: Optional[MaterialFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Material]:
        """Find materials newest first, applying optional filters."""
        stmt = select(materials_table)

        if material_filter:
            if material_filter.category:
                stmt = stmt.where(
                    materials_table.c.expected_category
                    == material_filter.category.value
                )
            if material_filter.format:
                stmt = stmt.where(
                    materials_table.c.format == material_filter.format.value
                )
            if material_filter.review_state_id:
                stmt = stmt.where(
                    materials_table.c.review_state_id
                    == material_filter.review_state_id
                )
            if material_filter.search:
                pattern = f"%{material_filter.search}%"
                stmt = stmt.where(
                    or_(
                        materials_table.c.description.ilike(pattern),
                        materials_table.c.source.ilike(pattern),
                        materials_table.c.url.ilike(pattern),
                    )
                )

        stmt = stmt.order_by(materials_table.c.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_material(row._asdict()) for row in result.fetchall()]

    async def save(self, material: Material) -> Material:
        """Insert or update a material."""
        material_dict = material_to_dict(material)

        existing = await self.find_by_id(material.id)
        if existing:
            stmt = (
                update(materials_table)
                .where(materials_table.c.id == material.id)
                .values(**material_dict)
            )
        else:
            stmt = insert(materials_table).values(**material_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return material

    async def update_review_state(
        self,
        material_id: MaterialId,
        review_state_id: Optional[ReviewStateId],
        updated_at: datetime,
    ) -> Optional[Material]:
        """Write only the review state and update time of a material."""
        stmt = (
            update(materials_table)
            .where(materials_table.c.id == material_id)
            .values(review_state_id=review_state_id, updated_at=updated_at)
            .returning(*materials_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_material(row._asdict()) if row else None

    async def delete(self, material_id: MaterialId) -> None:
        """Delete a material; comments and tag links cascade."""
        stmt = delete(materials_table).where(materials_table.c.id == material_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def get_tag_ids(self, material_id: MaterialId) -> list[TagId]:
        """Get tag IDs linked to a material."""
        stmt = select(material_tags_table.c.tag_id).where(
            material_tags_table.c.material_id == material_id
        )
        result = await self.session.execute(stmt)
        return [TagId(row.tag_id) for row in result.fetchall()]

    async def replace_tags(self, material_id: MaterialId, tag_ids: list[TagId]) -> None:
        """Delete all tag links of a material, then insert the desired set."""
        await self.session.execute(
            delete(material_tags_table).where(
                material_tags_table.c.material_id == material_id
            )
        )
        if tag_ids:
            await self.session.execute(
                insert(material_tags_table),
                [{"material_id": material_id, "tag_id": tag_id} for tag_id in tag_ids],
            )
        await self.session.flush()
