"""In-memory implementation of Material repository for testing."""

from datetime import datetime
from typing import Optional

from desk.domain.model.material import Material, MaterialFilter
from desk.domain.repository.material import MaterialRepository
from desk.domain.value import MaterialId, ReviewStateId, TagId
from desk.persistence.repository.inmemory.store import InMemoryDatabase


class InMemoryMaterialRepository(MaterialRepository):
    """In-memory implementation of MaterialRepository for testing."""

    def __init__(self, store: Optional[InMemoryDatabase] = None) -> None:
        """Initialize repository on a shared or fresh store."""
        self.store = store or InMemoryDatabase()

    async def find_by_id(self, material_id: MaterialId) -> Optional[Material]:
        """Find material by ID."""
        return self.store.materials.get(material_id)

    async def find_all(
        self,
        material_filter: Optional[MaterialFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Material]:
        """Find materials newest first."""
        materials = [
            m
            for m in self.store.materials.values()
            if material_filter is None or material_filter.matches(m)
        ]
        materials.sort(key=lambda m: m.created_at, reverse=True)
        end = offset + limit if limit is not None else None
        return materials[offset:end]

    async def save(self, material: Material) -> Material:
        """Insert or update a material."""
        self.store.materials[material.id] = material
        return material

    async def update_review_state(
        self,
        material_id: MaterialId,
        review_state_id: Optional[ReviewStateId],
        updated_at: datetime,
    ) -> Optional[Material]:
        """Write the review state and update time of a material."""
        material = self.store.materials.get(material_id)
        if material is None:
            return None
        updated = material.model_copy(
            update={"review_state_id": review_state_id, "updated_at": updated_at}
        )
        self.store.materials[material_id] = updated
        return updated

    async def delete(self, material_id: MaterialId) -> None:
        """Delete a material with its comments and tag links."""
        self.store.materials.pop(material_id, None)
        self.store.material_tags = {
            link for link in self.store.material_tags if link[0] != material_id
        }
        for comment_id in [
            c.id for c in self.store.comments.values() if c.material_id == material_id
        ]:
            del self.store.comments[comment_id]

    async def get_tag_ids(self, material_id: MaterialId) -> list[TagId]:
        """Get tag IDs linked to a material."""
        return [tag_id for mid, tag_id in self.store.material_tags if mid == material_id]

    async def replace_tags(self, material_id: MaterialId, tag_ids: list[TagId]) -> None:
        """Delete all tag links of a material, then insert the desired set."""
        self.store.material_tags = {
            link for link in self.store.material_tags if link[0] != material_id
        }
        self.store.material_tags.update((material_id, tag_id) for tag_id in tag_ids)
