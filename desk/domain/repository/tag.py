"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from desk.domain.model.tag import Tag, TagGroup
from desk.domain.value import TagGroupId, TagId


class TagRepository(ABC):
    """Repository for tag groups and their tags."""

    @abstractmethod
    async def find_group_by_id(self, group_id: TagGroupId) -> Optional[TagGroup]:
        """Find a tag group by ID."""
        pass

    @abstractmethod
    async def find_group_by_name(self, name: str) -> Optional[TagGroup]:
        """Find a tag group by name (case-insensitive)."""
        pass

    @abstractmethod
    async def find_all_groups(self) -> list[TagGroup]:
        """Find all tag groups ordered by display order."""
        pass

    @abstractmethod
    async def next_group_order(self) -> int:
        """Get the display order for a group appended at the end."""
        pass

    @abstractmethod
    async def save_group(self, group: TagGroup) -> TagGroup:
        """Insert or update a tag group."""
        pass

    @abstractmethod
    async def delete_group(self, group_id: TagGroupId) -> None:
        """Delete a tag group and all of its tags."""
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find a tag by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find all existing tags among the given IDs.

        Args:
            tag_ids: IDs to look up

        Returns:
            Tags that exist (unknown IDs are skipped)
        """
        pass

    @abstractmethod
    async def find_by_name_in_group(
        self, group_id: TagGroupId, name: str
    ) -> Optional[Tag]:
        """Find a tag by name (case-insensitive) within a group."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Tag]:
        """Find all tags ordered by display order."""
        pass

    @abstractmethod
    async def next_order(self, group_id: TagGroupId) -> int:
        """Get the display order for a tag appended to a group."""
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Insert or update a tag."""
        pass

    @abstractmethod
    async def delete(self, tag_id: TagId) -> None:
        """Delete a tag and its material links."""
        pass
