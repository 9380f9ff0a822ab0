"""Material repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from desk.domain.model.material import Material, MaterialFilter
from desk.domain.value import MaterialId, ReviewStateId, TagId


class MaterialRepository(ABC):
    """Repository for Material entity and its tag links.

    Defines the contract for material persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, material_id: MaterialId) -> Optional[Material]:
        """Find a material by ID.

        Args:
            material_id: The material's unique identifier

        Returns:
            The material if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        material_filter: Optional[MaterialFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Material]:
        """Find materials, newest first.

        Args:
            material_filter: Optional filters to apply
            limit: Maximum number of materials to return (None for all)
            offset: Number of materials to skip

        Returns:
            List of matching materials
        """
        pass

    @abstractmethod
    async def save(self, material: Material) -> Material:
        """Insert or update a material.

        Args:
            material: The material to save

        Returns:
            The saved material
        """
        pass

    @abstractmethod
    async def update_review_state(
        self,
        material_id: MaterialId,
        review_state_id: Optional[ReviewStateId],
        updated_at: datetime,
    ) -> Optional[Material]:
        """Set the review state of a material and bump its update time.

        Only the two columns are written, so concurrent edits of other
        columns are not overwritten.

        Args:
            material_id: Material to update
            review_state_id: New review state (None clears it)
            updated_at: New update timestamp

        Returns:
            The updated material, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete(self, material_id: MaterialId) -> None:
        """Delete a material together with its comments and tag links.

        Args:
            material_id: Material to delete
        """
        pass

    @abstractmethod
    async def get_tag_ids(self, material_id: MaterialId) -> list[TagId]:
        """Get the IDs of the tags assigned to a material.

        Args:
            material_id: Material to look up

        Returns:
            List of tag IDs
        """
        pass

    @abstractmethod
    async def replace_tags(self, material_id: MaterialId, tag_ids: list[TagId]) -> None:
        """Replace all tag links of a material with the given set.

        Existing links are deleted, then one link per ID is inserted.

        Args:
            material_id: Material to retag
            tag_ids: Complete desired tag set (may be empty)
        """
        pass
