"""PostgreSQL implementation of Tag repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from desk.domain.model.tag import Tag, TagGroup
from desk.domain.repository.tag import TagRepository
from desk.domain.value import TagGroupId, TagId
from desk.persistence.mappers import (
    row_to_tag,
    row_to_tag_group,
    tag_group_to_dict,
    tag_to_dict,
)
from desk.persistence.tables import tag_groups_table, tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_group_by_id(self, group_id: TagGroupId) -> Optional[TagGroup]:
        """Find tag group by ID."""
        stmt = select(tag_groups_table).where(tag_groups_table.c.id == group_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag_group(row._asdict()) if row else None

    async def find_group_by_name(self, name: str) -> Optional[TagGroup]:
        """Find tag group by case-insensitive name."""
        stmt = select(tag_groups_table).where(
            func.lower(tag_groups_table.c.name) == name.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag_group(row._asdict()) if row else None

    async def find_all_groups(self) -> list[TagGroup]:
        """Find all tag groups in display order."""
        stmt = select(tag_groups_table).order_by(
            tag_groups_table.c.display_order, tag_groups_table.c.name
        )
        result = await self.session.execute(stmt)
        return [row_to_tag_group(row._asdict()) for row in result.fetchall()]

    async def next_group_order(self) -> int:
        """Get max group display order plus one."""
        stmt = select(func.coalesce(func.max(tag_groups_table.c.display_order), -1))
        result = await self.session.execute(stmt)
        return result.scalar_one() + 1

    async def save_group(self, group: TagGroup) -> TagGroup:
        """Insert or update a tag group."""
        group_dict = tag_group_to_dict(group)

        existing = await self.find_group_by_id(group.id)
        if existing:
            stmt = (
                update(tag_groups_table)
                .where(tag_groups_table.c.id == group.id)
                .values(**group_dict)
            )
        else:
            stmt = insert(tag_groups_table).values(**group_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return group

    async def delete_group(self, group_id: TagGroupId) -> None:
        """Delete a tag group; its tags cascade."""
        stmt = delete(tag_groups_table).where(tag_groups_table.c.id == group_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query."""
        if not tag_ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_name_in_group(
        self, group_id: TagGroupId, name: str
    ) -> Optional[Tag]:
        """Find tag by case-insensitive name within a group."""
        stmt = select(tags_table).where(
            tags_table.c.group_id == group_id,
            func.lower(tags_table.c.name) == name.lower(),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(self) -> list[Tag]:
        """Find all tags in display order."""
        stmt = select(tags_table).order_by(
            tags_table.c.display_order, tags_table.c.name
        )
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def next_order(self, group_id: TagGroupId) -> int:
        """Get max tag display order within a group plus one."""
        stmt = select(func.coalesce(func.max(tags_table.c.display_order), -1)).where(
            tags_table.c.group_id == group_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() + 1

    async def save(self, tag: Tag) -> Tag:
        """Insert or update a tag."""
        tag_dict = tag_to_dict(tag)

        existing = await self.find_by_id(tag.id)
        if existing:
            stmt = (
                update(tags_table).where(tags_table.c.id == tag.id).values(**tag_dict)
            )
        else:
            stmt = insert(tags_table).values(**tag_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return tag

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag; material links cascade."""
        stmt = delete(tags_table).where(tags_table.c.id == tag_id)
        await self.session.execute(stmt)
        await self.session.flush()
