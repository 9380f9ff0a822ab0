"""In-memory implementation of Tag repository for testing."""

from typing import Optional

from desk.domain.model.tag import Tag, TagGroup
from desk.domain.repository.tag import TagRepository
from desk.domain.value import TagGroupId, TagId
from desk.persistence.repository.inmemory.store import InMemoryDatabase


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self, store: Optional[InMemoryDatabase] = None) -> None:
        """Initialize repository on a shared or fresh store."""
        self.store = store or InMemoryDatabase()

    async def find_group_by_id(self, group_id: TagGroupId) -> Optional[TagGroup]:
        """Find tag group by ID."""
        return self.store.tag_groups.get(group_id)

    async def find_group_by_name(self, name: str) -> Optional[TagGroup]:
        """Find tag group by case-insensitive name."""
        return next(
            (
                g
                for g in self.store.tag_groups.values()
                if g.name.lower() == name.lower()
            ),
            None,
        )

    async def find_all_groups(self) -> list[TagGroup]:
        """Find all tag groups in display order."""
        return sorted(
            self.store.tag_groups.values(), key=lambda g: (g.display_order, g.name)
        )

    async def next_group_order(self) -> int:
        """Get max group display order plus one."""
        orders = [g.display_order for g in self.store.tag_groups.values()]
        return max(orders, default=-1) + 1

    async def save_group(self, group: TagGroup) -> TagGroup:
        """Insert or update a tag group."""
        self.store.tag_groups[group.id] = group
        return group

    async def delete_group(self, group_id: TagGroupId) -> None:
        """Delete a tag group with its tags."""
        self.store.tag_groups.pop(group_id, None)
        for tag_id in [t.id for t in self.store.tags.values() if t.group_id == group_id]:
            await self.delete(tag_id)

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        return self.store.tags.get(tag_id)

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find existing tags among the given IDs."""
        return [self.store.tags[t] for t in dict.fromkeys(tag_ids) if t in self.store.tags]

    async def find_by_name_in_group(
        self, group_id: TagGroupId, name: str
    ) -> Optional[Tag]:
        """Find tag by case-insensitive name within a group."""
        return next(
            (
                t
                for t in self.store.tags.values()
                if t.group_id == group_id and t.name.lower() == name.lower()
            ),
            None,
        )

    async def find_all(self) -> list[Tag]:
        """Find all tags in display order."""
        return sorted(self.store.tags.values(), key=lambda t: (t.display_order, t.name))

    async def next_order(self, group_id: TagGroupId) -> int:
        """Get max tag display order within a group plus one."""
        orders = [
            t.display_order for t in self.store.tags.values() if t.group_id == group_id
        ]
        return max(orders, default=-1) + 1

    async def save(self, tag: Tag) -> Tag:
        """Insert or update a tag."""
        self.store.tags[tag.id] = tag
        return tag

    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag and its material links."""
        self.store.tags.pop(tag_id, None)
        self.store.material_tags = {
            link for link in self.store.material_tags if link[1] != tag_id
        }
