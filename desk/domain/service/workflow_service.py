"""Review workflow state machine.

A material moves through these states during an edit session:

    resting state --start--> transient --save-----> chosen outcome
                                       --cancel---> captured prior state
                                       --teardown-> captured prior state

The transient state is never a resting state. When a material is found in
it without a live session (a crashed session that never reverted), the
initial state stands in for the lost prior state.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire

from desk.config import PresenceSettings
from desk.domain.error import (
    MaterialLockedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from desk.domain.model.common import utcnow
from desk.domain.model.material import Material
from desk.domain.model.session import Lock, ReviewSession
from desk.domain.repository import ReviewSessionRepository
from desk.domain.value import (
    Editor,
    MaterialId,
    ReviewSessionId,
    ReviewStateId,
    UserId,
)

from .base import Service
from .lock_service import SoftLockCoordinator
from .material_service import MaterialService
from .review_state_service import ReviewStateService


class ReviewWorkflowService(Service):
    """Domain service driving a material's review state across an edit session."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        lock_coordinator: SoftLockCoordinator,
        session_repository: ReviewSessionRepository,
        presence_settings: PresenceSettings,
    ) -> None:
        """Initialize review workflow service.

        Args:
            material_service: Material service
            review_state_service: Review state service
            lock_coordinator: Soft-lock coordinator
            session_repository: In-memory store of open sessions
            presence_settings: Session TTL and exclusion mode
        """
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.lock_coordinator = lock_coordinator
        self.session_repository = session_repository
        self.presence_settings = presence_settings

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(seconds=self.presence_settings.session_ttl_seconds)

    async def start_session(
        self, material_id: MaterialId, editor: Editor, user_id: UserId
    ) -> ReviewSession:
        """Open an edit session on a material.

        Captures the effective prior state, takes the soft lock and marks the
        material as in progress.

        Args:
            material_id: Material to review
            editor: Editor opening the session
            user_id: Signed-in user behind the editor

        Returns:
            The open session

        Raises:
            NotFoundError: If the material does not exist
            MaterialLockedError: If another editor holds the material
        """
        with logfire.span(
            "workflow_service.start_session",
            material_id=str(material_id),
            editor=editor.identity,
        ):
            await self.purge_expired_sessions()
            material = await self.material_service.get_material(material_id)

            if not await self.lock_coordinator.can_open(material_id, editor):
                holder = await self.lock_coordinator.holder(material_id)
                raise MaterialLockedError(
                    str(material_id), holder.editor if holder else "another editor"
                )

            prior_state_id = await self.review_state_service.resolve_resting_state(
                material.review_state_id
            )

            # Re-opening keeps the prior state captured by the editor's first session
            existing = await self._find_editor_session(material_id, editor.identity)
            if existing:
                prior_state_id = existing.prior_state_id
                await self.session_repository.remove(existing.id)
                if existing.editor_key != editor.key:
                    await self.lock_coordinator.release(existing.editor_key)
                logfire.info(
                    "Editor re-opened material", session_id=str(existing.id)
                )
            elif prior_state_id != material.review_state_id:
                logfire.warn(
                    "Material was left in progress without a session",
                    material_id=str(material_id),
                    found_state_id=str(material.review_state_id),
                    substituted_state_id=str(prior_state_id),
                )

            now = utcnow()
            session = ReviewSession(
                id=ReviewSessionId(uuid4()),
                material_id=material_id,
                editor=editor.identity,
                editor_key=editor.key,
                user_id=user_id,
                prior_state_id=prior_state_id,
                started_at=now,
                expires_at=now + self.session_ttl,
            )

            if self.presence_settings.strict_exclusion:
                conflict = await self.session_repository.claim(session, now)
                if conflict:
                    logfire.warn(
                        "Active session held by another editor",
                        material_id=str(material_id),
                        holder=conflict.editor,
                    )
                    raise MaterialLockedError(str(material_id), conflict.editor)
            else:
                await self.session_repository.add(session)

            await self.lock_coordinator.acquire(material_id, editor)

            transient = await self.review_state_service.get_transient_state()
            if transient:
                await self.material_service.set_review_state(material_id, transient.id)
            else:
                logfire.warn(
                    "No in-progress review state configured, state left unchanged",
                    material_id=str(material_id),
                )

            logfire.info(
                "Review session started",
                session_id=str(session.id),
                material_id=str(material_id),
                prior_state_id=str(prior_state_id) if prior_state_id else None,
            )
            return session

    async def get_session(
        self,
        session_id: ReviewSessionId,
        editor_identity: str,
        material_id: Optional[MaterialId] = None,
    ) -> ReviewSession:
        """Get an open session owned by an editor.

        Raises:
            NotFoundError: If the session does not exist or expired
            NotAuthorizedError: If another editor owns it
            ValidationError: If it belongs to a different material
        """
        session = await self.session_repository.find_by_id(session_id)
        if not session or session.is_expired(utcnow()):
            raise NotFoundError("ReviewSession", str(session_id))
        if session.editor != editor_identity:
            raise NotAuthorizedError("use this review session", editor_identity)
        if material_id is not None and session.material_id != material_id:
            raise ValidationError("Review session belongs to another material")
        return session

    async def cancel_session(
        self,
        session_id: ReviewSessionId,
        editor_identity: str,
        material_id: Optional[MaterialId] = None,
    ) -> Material:
        """Abandon a session explicitly and restore the captured prior state.

        Raises:
            NotFoundError: If the session does not exist
            NotAuthorizedError: If another editor owns it
            ValidationError: If it belongs to a different material
        """
        with logfire.span(
            "workflow_service.cancel_session",
            session_id=str(session_id),
            editor=editor_identity,
        ):
            session = await self.get_session(session_id, editor_identity, material_id)
            material = await self.material_service.set_review_state(
                session.material_id, session.prior_state_id
            )
            await self._end_session(session)
            logfire.info(
                "Review session cancelled",
                session_id=str(session_id),
                material_id=str(session.material_id),
            )
            return material

    async def heartbeat(
        self,
        session_id: ReviewSessionId,
        editor_identity: str,
        material_id: Optional[MaterialId] = None,
    ) -> ReviewSession:
        """Extend a session's TTL.

        Raises:
            NotFoundError: If the session does not exist or expired
            NotAuthorizedError: If another editor owns it
            ValidationError: If it belongs to a different material
        """
        session = await self.get_session(session_id, editor_identity, material_id)
        refreshed = await self.session_repository.touch(
            session.id, utcnow() + self.session_ttl
        )
        if not refreshed:
            raise NotFoundError("ReviewSession", str(session_id))
        return refreshed

    async def complete_session(self, session: ReviewSession) -> None:
        """Close a session after its analysis was saved."""
        with logfire.span(
            "workflow_service.complete_session", session_id=str(session.id)
        ):
            await self._end_session(session)
            logfire.info(
                "Review session completed",
                session_id=str(session.id),
                material_id=str(session.material_id),
            )

    async def revert_abandoned(
        self,
        material_id: MaterialId,
        previous_state_id: Optional[ReviewStateId] = None,
        caller_identity: Optional[str] = None,
    ) -> bool:
        """Restore a material whose editor went away without saving.

        Called from the teardown endpoint, where credentials are optional.
        A signed-in caller may only end their own sessions. An anonymous
        caller may only end sessions that look abandoned: no live lock on
        the presence key and no heartbeat within the grace period. While
        any other session is live nothing is written, and the same holds
        for a live lock of another editor when no session is recorded.

        The prior state recorded server side wins over the client's value,
        and the client's value is only used when it names a resting state.
        The write only happens while the material is still in progress.

        Never raises: failures are logged and reported as False.

        Args:
            material_id: Material to restore
            previous_state_id: Prior state reported by the client
            caller_identity: Verified identity of the caller, if any

        Returns:
            True if the material's state was written
        """
        with logfire.span(
            "workflow_service.revert_abandoned",
            material_id=str(material_id),
            previous_state_id=str(previous_state_id) if previous_state_id else None,
            caller=caller_identity,
        ):
            try:
                sessions = await self.session_repository.find_by_material(material_id)
                holder = await self.lock_coordinator.holder(material_id)
                now = utcnow()

                live = [
                    s
                    for s in sessions
                    if not self._may_end(s, caller_identity, holder, now)
                ]
                if live:
                    logfire.warn(
                        "Revert refused, review session still live",
                        material_id=str(material_id),
                        holders=[s.editor for s in live],
                    )
                    return False
                if (
                    not sessions
                    and holder is not None
                    and holder.editor != caller_identity
                ):
                    logfire.warn(
                        "Revert refused, material locked by another editor",
                        material_id=str(material_id),
                        holder=holder.editor,
                    )
                    return False

                if sessions:
                    target = await self.review_state_service.resolve_resting_state(
                        sessions[0].prior_state_id
                    )
                elif previous_state_id:
                    target = await self.review_state_service.resolve_resting_state(
                        previous_state_id
                    )
                else:
                    initial = await self.review_state_service.get_initial_state()
                    target = initial.id if initial else None

                material = await self.material_service.find_material(material_id)
                if material is None:
                    logfire.warn("Revert for unknown material", material_id=str(material_id))
                    return False

                reverted = False
                current = await self.review_state_service.find_state(
                    material.review_state_id
                )
                if current is not None and current.is_transient:
                    await self.material_service.set_review_state(material_id, target)
                    reverted = True
                else:
                    logfire.info(
                        "Material no longer in progress, revert skipped",
                        material_id=str(material_id),
                    )

                for session in sessions:
                    await self._end_session(session)

                logfire.info(
                    "Abandoned review handled",
                    material_id=str(material_id),
                    reverted=reverted,
                    target_state_id=str(target) if target else None,
                    from_session=bool(sessions),
                )
                return reverted
            except Exception as e:
                logfire.error(
                    "Teardown revert failed",
                    material_id=str(material_id),
                    error=str(e),
                )
                return False

    async def purge_expired_sessions(self) -> int:
        """Drop sessions whose TTL passed and restore their materials.

        Returns:
            Number of sessions purged
        """
        expired = await self.session_repository.purge_expired(utcnow())
        for session in expired:
            await self.lock_coordinator.release(session.editor_key)
            material = await self.material_service.find_material(session.material_id)
            if material is None:
                continue
            current = await self.review_state_service.find_state(
                material.review_state_id
            )
            if current is not None and current.is_transient:
                await self.material_service.set_review_state(
                    session.material_id, session.prior_state_id
                )
            logfire.info(
                "Expired review session purged",
                session_id=str(session.id),
                material_id=str(session.material_id),
            )
        return len(expired)

    def _may_end(
        self,
        session: ReviewSession,
        caller_identity: Optional[str],
        holder: Optional[Lock],
        now: datetime,
    ) -> bool:
        if caller_identity is not None:
            return session.editor == caller_identity
        if holder is not None and holder.editor_key == session.editor_key:
            return False
        if session.is_expired(now):
            return True
        last_heartbeat = session.expires_at - self.session_ttl
        grace = timedelta(seconds=self.presence_settings.abandon_grace_seconds)
        return now - last_heartbeat >= grace

    async def _find_editor_session(
        self, material_id: MaterialId, editor_identity: str
    ) -> Optional[ReviewSession]:
        sessions = await self.session_repository.find_by_material(material_id)
        return next((s for s in sessions if s.editor == editor_identity), None)

    async def _end_session(self, session: ReviewSession) -> None:
        await self.session_repository.remove(session.id)
        await self.lock_coordinator.release(session.editor_key)
