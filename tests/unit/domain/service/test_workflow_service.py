"""Unit tests for ReviewWorkflowService."""

from uuid import uuid4

import pytest

from desk.adapter.session import LocalReviewSessionStore
from desk.config import PresenceSettings
from desk.domain.error import (
    MaterialLockedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from desk.domain.repository import ReviewSessionRepository
from desk.domain.service import (
    MaterialService,
    PresenceChannel,
    ReviewStateService,
    ReviewWorkflowService,
    SoftLockCoordinator,
)
from desk.domain.value import Editor, MaterialId, UserId
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_material, seed_review_states
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ANA = Editor(identity="ana@example.org", key="key-a")
BEN = Editor(identity="ben@example.org", key="key-b")


async def _workflow_with(unit_env, settings: PresenceSettings) -> ReviewWorkflowService:
    """Build a workflow service with its own session store and settings."""
    return ReviewWorkflowService(
        material_service=await unit_env.get(MaterialService),
        review_state_service=await unit_env.get(ReviewStateService),
        lock_coordinator=await unit_env.get(SoftLockCoordinator),
        session_repository=LocalReviewSessionStore(),
        presence_settings=settings,
    )


class TestStartAndCancel:
    """Tests for opening and abandoning a review."""

    @pytest.mark.asyncio
    async def test_start_then_cancel_restores_prior_state(self, unit_env):
        """Cancelling puts the material back where it was."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))
        during = store.materials[material.id].review_state_id
        restored = await workflow.cancel_session(session.id, ANA.identity)

        # Assert
        assert session.prior_state_id == states["analyzed"].id
        assert during == states["in_progress"].id
        assert restored.review_state_id == states["analyzed"].id

    @pytest.mark.asyncio
    async def test_start_takes_lock_and_cancel_releases_it(self, unit_env):
        """The session holds the soft lock while open."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        coordinator = await unit_env.get(SoftLockCoordinator)

        # Act
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))
        held = await coordinator.holder(material.id)
        await workflow.cancel_session(session.id, ANA.identity)

        # Assert
        assert held.editor == ANA.identity
        assert await coordinator.holder(material.id) is None

    @pytest.mark.asyncio
    async def test_material_left_in_progress_falls_back_to_initial_state(self, unit_env):
        """A crashed session's in-progress marker is never captured as prior state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["in_progress"])
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))
        restored = await workflow.cancel_session(session.id, ANA.identity)

        # Assert
        assert session.prior_state_id == states["pending"].id
        assert restored.review_state_id == states["pending"].id

    @pytest.mark.asyncio
    async def test_material_without_state_restores_to_none(self, unit_env):
        """A material with no state goes back to no state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        seed_review_states(store)
        material = add_material(store, None)
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))
        restored = await workflow.cancel_session(session.id, ANA.identity)

        # Assert
        assert session.prior_state_id is None
        assert restored.review_state_id is None

    @pytest.mark.asyncio
    async def test_start_refused_when_locked_by_other_editor(self, unit_env):
        """A second editor gets a locked error naming the holder."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        await workflow.start_session(material.id, BEN, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(MaterialLockedError) as exc_info:
            await workflow.start_session(material.id, ANA, UserId(uuid4()))
        assert exc_info.value.holder == BEN.identity

    @pytest.mark.asyncio
    async def test_start_allowed_when_presence_down(self, unit_env):
        """The lock fails open, so both editors get in."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        channel = await unit_env.get(PresenceChannel)
        channel.disconnect()

        # Act
        first = await workflow.start_session(material.id, BEN, UserId(uuid4()))
        second = await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Assert
        assert first.editor == BEN.identity
        assert second.editor == ANA.identity
        assert store.materials[material.id].review_state_id == states["in_progress"].id

    @pytest.mark.asyncio
    async def test_start_unknown_material_raises(self, unit_env):
        """Opening a missing material fails before any write."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        seed_review_states(store)
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await workflow.start_session(MaterialId(uuid4()), ANA, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_reopen_keeps_first_prior_state(self, unit_env):
        """Re-opening from a second tab keeps the original prior state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await unit_env.get(ReviewWorkflowService)
        user_id = UserId(uuid4())
        first = await workflow.start_session(material.id, ANA, user_id)

        # Act
        second = await workflow.start_session(
            material.id, Editor(identity=ANA.identity, key="key-a2"), user_id
        )

        # Assert
        assert second.prior_state_id == states["analyzed"].id
        with pytest.raises(NotFoundError):
            await workflow.get_session(first.id, ANA.identity)

    @pytest.mark.asyncio
    async def test_cancel_by_other_editor_refused(self, unit_env):
        """Only the session owner may cancel it."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await workflow.cancel_session(session.id, BEN.identity)

    @pytest.mark.asyncio
    async def test_cancel_for_other_material_refused(self, unit_env):
        """A session cannot be cancelled through another material."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(ValidationError):
            await workflow.cancel_session(
                session.id, ANA.identity, MaterialId(uuid4())
            )


class TestStrictExclusion:
    """Tests for the active-session record backing the lock."""

    @pytest.mark.asyncio
    async def test_second_editor_refused_even_when_presence_down(self, unit_env):
        """Strict mode refuses concurrent sessions without presence."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await _workflow_with(unit_env, PresenceSettings(strict_exclusion=True))
        channel = await unit_env.get(PresenceChannel)
        channel.disconnect()
        await workflow.start_session(material.id, BEN, UserId(uuid4()))

        # Act & Assert
        with pytest.raises(MaterialLockedError) as exc_info:
            await workflow.start_session(material.id, ANA, UserId(uuid4()))
        assert exc_info.value.holder == BEN.identity


class TestHeartbeatAndExpiry:
    """Tests for session TTL handling."""

    @pytest.mark.asyncio
    async def test_heartbeat_extends_session(self, unit_env):
        """A heartbeat pushes the expiry forward."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await unit_env.get(ReviewWorkflowService)
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Act
        refreshed = await workflow.heartbeat(session.id, ANA.identity, material.id)

        # Assert
        assert refreshed.id == session.id
        assert refreshed.expires_at >= session.expires_at

    @pytest.mark.asyncio
    async def test_expired_session_is_purged_and_material_restored(self, unit_env):
        """Purging an expired session restores its prior state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["needs_review"])
        workflow = await _workflow_with(unit_env, PresenceSettings(session_ttl_seconds=0))
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Act
        purged = await workflow.purge_expired_sessions()

        # Assert
        assert purged == 1
        assert store.materials[material.id].review_state_id == states["needs_review"].id
        with pytest.raises(NotFoundError):
            await workflow.heartbeat(session.id, ANA.identity)

    @pytest.mark.asyncio
    async def test_purge_leaves_saved_material_alone(self, unit_env):
        """A material already moved out of progress keeps its state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        workflow = await _workflow_with(unit_env, PresenceSettings(session_ttl_seconds=0))
        material_service = await unit_env.get(MaterialService)
        await workflow.start_session(material.id, ANA, UserId(uuid4()))
        await material_service.set_review_state(material.id, states["analyzed"].id)

        # Act
        await workflow.purge_expired_sessions()

        # Assert
        assert store.materials[material.id].review_state_id == states["analyzed"].id


class TestRevertAbandoned:
    """Tests for the teardown revert."""

    @pytest.mark.asyncio
    async def test_recorded_prior_state_wins_over_client_value(self, unit_env):
        """The server-side session decides the target state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await unit_env.get(ReviewWorkflowService)
        sessions = await unit_env.get(ReviewSessionRepository)
        coordinator = await unit_env.get(SoftLockCoordinator)
        await workflow.start_session(material.id, ANA, UserId(uuid4()))

        # Act
        reverted = await workflow.revert_abandoned(
            material.id, states["incomplete"].id, caller_identity=ANA.identity
        )

        # Assert
        assert reverted is True
        assert store.materials[material.id].review_state_id == states["analyzed"].id
        assert await sessions.find_by_material(material.id) == []
        assert await coordinator.holder(material.id) is None

    @pytest.mark.asyncio
    async def test_anonymous_revert_keeps_live_session(self, unit_env):
        """A caller without credentials cannot end a session in use."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await unit_env.get(ReviewWorkflowService)
        coordinator = await unit_env.get(SoftLockCoordinator)
        session = await workflow.start_session(material.id, BEN, UserId(uuid4()))

        # Act
        reverted = await workflow.revert_abandoned(material.id, states["pending"].id)

        # Assert
        assert reverted is False
        assert store.materials[material.id].review_state_id == states["in_progress"].id
        assert (await coordinator.holder(material.id)).editor == BEN.identity
        assert (await workflow.heartbeat(session.id, BEN.identity)).id == session.id

    @pytest.mark.asyncio
    async def test_other_editor_cannot_revert_session(self, unit_env):
        """A signed-in caller only ends their own sessions."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await _workflow_with(
            unit_env, PresenceSettings(abandon_grace_seconds=0)
        )
        coordinator = await unit_env.get(SoftLockCoordinator)
        await workflow.start_session(material.id, BEN, UserId(uuid4()))
        await coordinator.release(BEN.key)

        # Act
        reverted = await workflow.revert_abandoned(
            material.id, caller_identity=ANA.identity
        )

        # Assert
        assert reverted is False
        assert store.materials[material.id].review_state_id == states["in_progress"].id

    @pytest.mark.asyncio
    async def test_anonymous_revert_ends_abandoned_session(self, unit_env):
        """Without a lock or recent heartbeat the session counts as abandoned."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["needs_review"])
        workflow = await _workflow_with(
            unit_env, PresenceSettings(abandon_grace_seconds=0)
        )
        coordinator = await unit_env.get(SoftLockCoordinator)
        session = await workflow.start_session(material.id, ANA, UserId(uuid4()))
        await coordinator.release(ANA.key)

        # Act
        reverted = await workflow.revert_abandoned(material.id)

        # Assert
        assert reverted is True
        assert store.materials[material.id].review_state_id == states["needs_review"].id
        with pytest.raises(NotFoundError):
            await workflow.heartbeat(session.id, ANA.identity)

    @pytest.mark.asyncio
    async def test_anonymous_revert_refused_while_locked_without_session(
        self, unit_env
    ):
        """A live lock of another editor blocks the revert."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["in_progress"])
        workflow = await unit_env.get(ReviewWorkflowService)
        coordinator = await unit_env.get(SoftLockCoordinator)
        await coordinator.acquire(material.id, BEN)

        # Act
        reverted = await workflow.revert_abandoned(material.id, states["pending"].id)

        # Assert
        assert reverted is False
        assert store.materials[material.id].review_state_id == states["in_progress"].id

    @pytest.mark.asyncio
    async def test_client_value_used_without_session(self, unit_env):
        """After a restart the client's prior state is used."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["in_progress"])
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        reverted = await workflow.revert_abandoned(
            material.id, states["incomplete"].id
        )

        # Assert
        assert reverted is True
        assert store.materials[material.id].review_state_id == states["incomplete"].id

    @pytest.mark.asyncio
    async def test_transient_client_value_replaced_by_initial_state(self, unit_env):
        """The in-progress marker is never restored."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["in_progress"])
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        await workflow.revert_abandoned(material.id, states["in_progress"].id)

        # Assert
        assert store.materials[material.id].review_state_id == states["pending"].id

    @pytest.mark.asyncio
    async def test_no_write_when_material_not_in_progress(self, unit_env):
        """A late beacon cannot clobber a saved state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        reverted = await workflow.revert_abandoned(material.id, states["pending"].id)

        # Assert
        assert reverted is False
        assert store.materials[material.id].review_state_id == states["analyzed"].id

    @pytest.mark.asyncio
    async def test_unknown_material_reports_false(self, unit_env):
        """Reverting a missing material does not raise."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        seed_review_states(store)
        workflow = await unit_env.get(ReviewWorkflowService)

        # Act
        reverted = await workflow.revert_abandoned(MaterialId(uuid4()))

        # Assert
        assert reverted is False
