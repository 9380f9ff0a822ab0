"""Tag domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from desk.domain.error import (
    BusinessRuleViolationError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from desk.domain.model.tag import Tag, TagGroup, TagGroupWithTags
from desk.domain.repository import TagRepository
from desk.domain.value import DEFAULT_TAG_COLOR, SelectionType, TagGroupId, TagId

from .base import Service
from .review_state_service import normalize_name, parse_color


class TagService(Service):
    """Domain service for tag groups and tags."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    async def validate_tags_exist(self, tag_ids: list[TagId]) -> list[Tag]:
        """Validate that all requested tags exist.

        Args:
            tag_ids: Tag IDs to validate

        Returns:
            List of found tags

        Raises:
            InvalidReferenceError: If any tag is not found
        """
        with logfire.span(
            "tag_service.validate_tags_exist", tag_ids=[str(t) for t in tag_ids]
        ):
            if not tag_ids:
                return []

            tags = await self.tag_repository.find_by_ids(tag_ids)

            found = {tag.id for tag in tags}
            missing = sorted(str(t) for t in set(tag_ids) - found)
            if missing:
                logfire.warn("Unknown tags in request", missing=missing)
                raise InvalidReferenceError("tag", ", ".join(missing))

            logfire.info("All tags validated", count=len(tags))
            return tags

    async def list_groups_with_tags(self) -> list[TagGroupWithTags]:
        """Get all tag groups with their tags, both in display order."""
        with logfire.span("tag_service.list_groups_with_tags"):
            groups = await self.tag_repository.find_all_groups()
            tags = await self.tag_repository.find_all()

            by_group: dict[TagGroupId, list[Tag]] = {group.id: [] for group in groups}
            for tag in tags:
                by_group.setdefault(tag.group_id, []).append(tag)

            result = [
                TagGroupWithTags(group=group, tags=by_group[group.id])
                for group in groups
            ]
            logfire.info("Tag groups retrieved", groups=len(groups), tags=len(tags))
            return result

    async def create_group(
        self,
        name: str,
        description: Optional[str] = None,
        selection_type: SelectionType = SelectionType.MULTIPLE,
    ) -> TagGroup:
        """Create a tag group at the end of the display order.

        Raises:
            ValidationError: If the name is invalid
            BusinessRuleViolationError: If the name is taken
        """
        with logfire.span("tag_service.create_group", name=name):
            clean_name = normalize_name(name)
            if await self.tag_repository.find_group_by_name(clean_name):
                raise BusinessRuleViolationError(
                    f"A tag group named '{clean_name}' already exists"
                )

            group = TagGroup(
                id=TagGroupId(uuid4()),
                name=clean_name,
                description=description.strip() if description else None,
                selection_type=selection_type,
                display_order=await self.tag_repository.next_group_order(),
            )
            saved = await self.tag_repository.save_group(group)
            logfire.info("Tag group created", group_id=str(saved.id), name=clean_name)
            return saved

    async def update_group(
        self,
        group_id: TagGroupId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        selection_type: Optional[SelectionType] = None,
        display_order: Optional[int] = None,
    ) -> TagGroup:
        """Update a tag group in place, keeping its tags and their links.

        A blank description clears it.

        Raises:
            NotFoundError: If the group does not exist
            ValidationError: If the name or order are invalid
            BusinessRuleViolationError: If the new name is taken
        """
        with logfire.span("tag_service.update_group", group_id=str(group_id)):
            group = await self.tag_repository.find_group_by_id(group_id)
            if not group:
                raise NotFoundError("TagGroup", str(group_id))
            updates: dict = {}

            if name is not None:
                clean_name = normalize_name(name)
                existing = await self.tag_repository.find_group_by_name(clean_name)
                if existing and existing.id != group_id:
                    raise BusinessRuleViolationError(
                        f"A tag group named '{clean_name}' already exists"
                    )
                updates["name"] = clean_name
            if description is not None:
                updates["description"] = description.strip() or None
            if selection_type is not None:
                updates["selection_type"] = selection_type
            if display_order is not None:
                updates["display_order"] = _check_order(display_order)

            if not updates:
                return group

            saved = await self.tag_repository.save_group(
                group.model_copy(update=updates)
            )
            logfire.info(
                "Tag group updated", group_id=str(group_id), fields=sorted(updates)
            )
            return saved

    async def delete_group(self, group_id: TagGroupId) -> None:
        """Delete a tag group together with its tags.

        Raises:
            NotFoundError: If the group does not exist
        """
        with logfire.span("tag_service.delete_group", group_id=str(group_id)):
            if not await self.tag_repository.find_group_by_id(group_id):
                raise NotFoundError("TagGroup", str(group_id))
            await self.tag_repository.delete_group(group_id)
            logfire.info("Tag group deleted", group_id=str(group_id))

    async def create_tag(
        self,
        group_id: TagGroupId,
        name: str,
        color: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Tag:
        """Create a tag at the end of its group.

        Raises:
            NotFoundError: If the group does not exist
            ValidationError: If name or color are invalid
            BusinessRuleViolationError: If the group already has a tag with that name
        """
        with logfire.span("tag_service.create_tag", group_id=str(group_id), name=name):
            if not await self.tag_repository.find_group_by_id(group_id):
                raise NotFoundError("TagGroup", str(group_id))

            clean_name = normalize_name(name)
            hex_color = parse_color(color or DEFAULT_TAG_COLOR)

            if await self.tag_repository.find_by_name_in_group(group_id, clean_name):
                raise BusinessRuleViolationError(
                    f"The group already has a tag named '{clean_name}'"
                )

            tag = Tag(
                id=TagId(uuid4()),
                group_id=group_id,
                name=clean_name,
                color=hex_color,
                description=description.strip() if description else None,
                display_order=await self.tag_repository.next_order(group_id),
            )
            saved = await self.tag_repository.save(tag)
            logfire.info("Tag created", tag_id=str(saved.id), name=clean_name)
            return saved

    async def update_tag(
        self,
        tag_id: TagId,
        name: Optional[str] = None,
        color: Optional[str] = None,
        description: Optional[str] = None,
        display_order: Optional[int] = None,
    ) -> Tag:
        """Update a tag in place. Material links are kept.

        The name stays unique within the tag's group. A blank description
        clears it.

        Raises:
            NotFoundError: If the tag does not exist
            ValidationError: If name, color or order are invalid
            BusinessRuleViolationError: If the group already has the new name
        """
        with logfire.span("tag_service.update_tag", tag_id=str(tag_id)):
            tag = await self.tag_repository.find_by_id(tag_id)
            if not tag:
                raise NotFoundError("Tag", str(tag_id))
            updates: dict = {}

            if name is not None:
                clean_name = normalize_name(name)
                existing = await self.tag_repository.find_by_name_in_group(
                    tag.group_id, clean_name
                )
                if existing and existing.id != tag_id:
                    raise BusinessRuleViolationError(
                        f"The group already has a tag named '{clean_name}'"
                    )
                updates["name"] = clean_name
            if color is not None:
                updates["color"] = parse_color(color)
            if description is not None:
                updates["description"] = description.strip() or None
            if display_order is not None:
                updates["display_order"] = _check_order(display_order)

            if not updates:
                return tag

            saved = await self.tag_repository.save(tag.model_copy(update=updates))
            logfire.info("Tag updated", tag_id=str(tag_id), fields=sorted(updates))
            return saved

    async def delete_tag(self, tag_id: TagId) -> None:
        """Delete a tag and its material links.

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span("tag_service.delete_tag", tag_id=str(tag_id)):
            if not await self.tag_repository.find_by_id(tag_id):
                raise NotFoundError("Tag", str(tag_id))
            await self.tag_repository.delete(tag_id)
            logfire.info("Tag deleted", tag_id=str(tag_id))


def _check_order(display_order: int) -> int:
    if display_order < 0:
        raise ValidationError("Display order cannot be negative")
    return display_order
