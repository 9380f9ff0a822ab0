"""Soft-lock coordinator domain service."""

from typing import Optional

import logfire

from desk.domain.error import PresenceUnavailableError
from desk.domain.model.session import Lock
from desk.domain.value import Editor, MaterialId

from .base import Service
from .presence_service import PresenceRegistry


class SoftLockCoordinator(Service):
    """Gates the edit workflow on presence data.

    Fails open: while the presence channel is unavailable every material
    counts as unlocked, so an outage never blocks reviewers.
    """

    def __init__(self, presence_registry: PresenceRegistry) -> None:
        """Initialize soft-lock coordinator.

        Args:
            presence_registry: Registry holding the current locks
        """
        self.presence_registry = presence_registry

    async def holder(self, material_id: MaterialId) -> Optional[Lock]:
        """Get the lock currently held on a material.

        Returns:
            The lock, None when the material is free or presence is down
        """
        if not self.presence_registry.connected:
            return None
        try:
            locks = await self.presence_registry.snapshot()
        except PresenceUnavailableError as e:
            logfire.warn("Presence snapshot unavailable", error=str(e))
            return None
        return locks.get(material_id)

    async def can_open(self, material_id: MaterialId, editor: Editor) -> bool:
        """Check whether an editor may open the edit workflow for a material.

        An editor can always re-open a material it already holds.

        Args:
            material_id: Material to open
            editor: Requesting editor

        Returns:
            True unless another editor holds the material
        """
        with logfire.span(
            "soft_lock.can_open",
            material_id=str(material_id),
            editor=editor.identity,
        ):
            if not self.presence_registry.connected:
                logfire.warn(
                    "Presence unavailable, treating material as unlocked",
                    material_id=str(material_id),
                )
                return True

            lock = await self.holder(material_id)
            if lock is None or lock.editor == editor.identity:
                return True

            logfire.info(
                "Material locked by another editor",
                material_id=str(material_id),
                holder=lock.editor,
            )
            return False

    async def acquire(self, material_id: MaterialId, editor: Editor) -> Optional[Lock]:
        """Take the soft lock on a material.

        Does not check exclusivity. Call `can_open` first.

        Returns:
            The published lock, None when presence is unavailable
        """
        try:
            return await self.presence_registry.join(editor, material_id)
        except PresenceUnavailableError as e:
            logfire.warn(
                "Presence unavailable, lock not published",
                material_id=str(material_id),
                editor=editor.identity,
                error=str(e),
            )
            return None

    async def release(self, editor_key: str) -> None:
        """Drop whatever the presence key is tracking."""
        try:
            await self.presence_registry.leave(editor_key)
        except PresenceUnavailableError as e:
            logfire.warn(
                "Presence unavailable, lock not released", key=editor_key, error=str(e)
            )
