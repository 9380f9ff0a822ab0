"""PostgreSQL implementation of Comment repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from desk.domain.model.comment import Comment
from desk.domain.repository.comment import CommentRepository
from desk.domain.value import CommentId, MaterialId
from desk.persistence.mappers import comment_to_dict, row_to_comment
from desk.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def add(self, comment: Comment) -> Comment:
        """Insert a comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_material(self, material_id: MaterialId) -> list[Comment]:
        """Find comments on a material, newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.material_id == material_id)
            .order_by(comments_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_materials(
        self, material_ids: list[MaterialId]
    ) -> dict[MaterialId, int]:
        """Count comments per material in a single query."""
        counts: dict[MaterialId, int] = {material_id: 0 for material_id in material_ids}
        if not material_ids:
            return counts

        stmt = (
            select(comments_table.c.material_id, func.count().label("comment_count"))
            .where(comments_table.c.material_id.in_(material_ids))
            .group_by(comments_table.c.material_id)
        )
        result = await self.session.execute(stmt)
        for row in result.fetchall():
            counts[MaterialId(row.material_id)] = row.comment_count
        return counts

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()
