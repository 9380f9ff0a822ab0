"""Unit tests for the review session use cases."""

from uuid import uuid4

import pytest

from desk.application.usecase.review import (
    CancelReviewRequest,
    CancelReviewUseCase,
    HeartbeatReviewRequest,
    HeartbeatReviewUseCase,
    StartReviewRequest,
    StartReviewUseCase,
    SubmitAnalysisRequest,
    SubmitAnalysisUseCase,
)
from desk.domain.error import (
    MaterialLockedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from desk.domain.repository import ReviewSessionRepository
from desk.domain.service import PresenceRegistry, SoftLockCoordinator
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_material, add_tags, seed_review_states
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

ANA_ID = str(uuid4())
BEN_ID = str(uuid4())


class TestStartReviewUseCase:
    """Tests for StartReviewUseCase."""

    @pytest.mark.asyncio
    async def test_start_returns_session_and_form_data(self, unit_env):
        """The response carries the session and the analysis form."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["analyzed"])
        add_tags(store)
        use_case = await unit_env.get(StartReviewUseCase)

        # Act
        result = await use_case.execute(
            StartReviewRequest(
                user_id=ANA_ID,
                email="ana@example.org",
                material_id=str(material.id),
            )
        )

        # Assert
        assert result.session.prior_state_id == str(states["analyzed"].id)
        assert result.session.editor == "ana@example.org"
        assert result.analysis.material.review_state_id == str(states["in_progress"].id)
        assert len(result.analysis.review_states) == 5
        assert len(result.analysis.tag_groups[0].tags) == 2

    @pytest.mark.asyncio
    async def test_start_uses_presence_key_for_lock(self, unit_env):
        """The lock is published under the caller's presence key."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        use_case = await unit_env.get(StartReviewUseCase)
        coordinator = await unit_env.get(SoftLockCoordinator)
        registry = await unit_env.get(PresenceRegistry)

        # Act
        async with registry.connection("tab-1", owner="ana@example.org"):
            await use_case.execute(
                StartReviewRequest(
                    user_id=ANA_ID,
                    email="ana@example.org",
                    material_id=str(material.id),
                    presence_key="tab-1",
                )
            )
            lock = await coordinator.holder(material.id)

        # Assert
        assert lock.editor_key == "tab-1"

    @pytest.mark.asyncio
    async def test_start_refuses_presence_key_of_other_editor(self, unit_env):
        """A key issued to someone else cannot carry the caller's lock."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        use_case = await unit_env.get(StartReviewUseCase)
        registry = await unit_env.get(PresenceRegistry)

        # Act & Assert
        async with registry.connection("tab-ben", owner="ben@example.org"):
            with pytest.raises(ValidationError):
                await use_case.execute(
                    StartReviewRequest(
                        user_id=ANA_ID,
                        email="ana@example.org",
                        material_id=str(material.id),
                        presence_key="tab-ben",
                    )
                )
        assert store.materials[material.id].review_state_id == states["pending"].id

    @pytest.mark.asyncio
    async def test_start_refuses_unknown_presence_key(self, unit_env):
        """Keys that no open connection was given are rejected."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        use_case = await unit_env.get(StartReviewUseCase)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                StartReviewRequest(
                    user_id=ANA_ID,
                    email="ana@example.org",
                    material_id=str(material.id),
                    presence_key="made-up",
                )
            )

    @pytest.mark.asyncio
    async def test_start_without_presence_key_still_locks(self, unit_env):
        """Callers without a socket get a key of their own."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        use_case = await unit_env.get(StartReviewUseCase)
        coordinator = await unit_env.get(SoftLockCoordinator)

        # Act
        await use_case.execute(
            StartReviewRequest(
                user_id=ANA_ID, email="ana@example.org", material_id=str(material.id)
            )
        )

        # Assert
        lock = await coordinator.holder(material.id)
        assert lock.editor_key.startswith("http-")

    @pytest.mark.asyncio
    async def test_second_editor_locked_out(self, unit_env):
        """Another editor cannot start while the first holds the lock."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        use_case = await unit_env.get(StartReviewUseCase)
        await use_case.execute(
            StartReviewRequest(
                user_id=BEN_ID, email="ben@example.org", material_id=str(material.id)
            )
        )

        # Act & Assert
        with pytest.raises(MaterialLockedError):
            await use_case.execute(
                StartReviewRequest(
                    user_id=ANA_ID,
                    email="ana@example.org",
                    material_id=str(material.id),
                )
            )


class TestCancelAndHeartbeat:
    """Tests for CancelReviewUseCase and HeartbeatReviewUseCase."""

    @pytest.mark.asyncio
    async def test_cancel_restores_prior_state(self, unit_env):
        """Cancelling returns the material in its prior state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["needs_review"])
        start = await unit_env.get(StartReviewUseCase)
        cancel = await unit_env.get(CancelReviewUseCase)
        started = await start.execute(
            StartReviewRequest(
                user_id=ANA_ID, email="ana@example.org", material_id=str(material.id)
            )
        )

        # Act
        result = await cancel.execute(
            CancelReviewRequest(
                user_id=ANA_ID,
                email="ana@example.org",
                material_id=str(material.id),
                session_id=started.session.session_id,
            )
        )

        # Assert
        assert result.review_state_id == str(states["needs_review"].id)
        assert result.review_state.name == "Needs review"

    @pytest.mark.asyncio
    async def test_cancel_by_other_editor_refused(self, unit_env):
        """Only the session owner can cancel."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        start = await unit_env.get(StartReviewUseCase)
        cancel = await unit_env.get(CancelReviewUseCase)
        started = await start.execute(
            StartReviewRequest(
                user_id=ANA_ID, email="ana@example.org", material_id=str(material.id)
            )
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await cancel.execute(
                CancelReviewRequest(
                    user_id=BEN_ID,
                    email="ben@example.org",
                    material_id=str(material.id),
                    session_id=started.session.session_id,
                )
            )

    @pytest.mark.asyncio
    async def test_heartbeat_returns_session(self, unit_env):
        """A heartbeat returns the refreshed session."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        start = await unit_env.get(StartReviewUseCase)
        heartbeat = await unit_env.get(HeartbeatReviewUseCase)
        started = await start.execute(
            StartReviewRequest(
                user_id=ANA_ID, email="ana@example.org", material_id=str(material.id)
            )
        )

        # Act
        result = await heartbeat.execute(
            HeartbeatReviewRequest(
                user_id=ANA_ID,
                email="ana@example.org",
                material_id=str(material.id),
                session_id=started.session.session_id,
            )
        )

        # Assert
        assert result.session_id == started.session.session_id
        assert result.expires_at >= started.session.expires_at


class TestSubmitAnalysisUseCase:
    """Tests for SubmitAnalysisUseCase."""

    @pytest.mark.asyncio
    async def test_submit_closes_session(self, unit_env):
        """Saving ends the session and frees the lock."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        _, tags = add_tags(store)
        start = await unit_env.get(StartReviewUseCase)
        submit = await unit_env.get(SubmitAnalysisUseCase)
        sessions = await unit_env.get(ReviewSessionRepository)
        coordinator = await unit_env.get(SoftLockCoordinator)
        started = await start.execute(
            StartReviewRequest(
                user_id=ANA_ID, email="ana@example.org", material_id=str(material.id)
            )
        )

        # Act
        result = await submit.execute(
            SubmitAnalysisRequest(
                user_id=ANA_ID,
                email="ana@example.org",
                material_id=str(material.id),
                comment="Frame 12 shows cloning artefacts",
                review_state_id=str(states["analyzed"].id),
                tag_ids=[str(tags[1].id)],
                session_id=started.session.session_id,
            )
        )

        # Assert
        assert result.material.review_state.name == "Analyzed"
        assert result.comment.author_email == "ana@example.org"
        assert result.comment.review_state_id == str(states["analyzed"].id)
        assert result.tag_ids == [str(tags[1].id)]
        assert await sessions.find_by_material(material.id) == []
        assert await coordinator.holder(material.id) is None

    @pytest.mark.asyncio
    async def test_submit_with_unknown_session_writes_nothing(self, unit_env):
        """A stale session is rejected before the analysis is written."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["in_progress"])
        submit = await unit_env.get(SubmitAnalysisUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await submit.execute(
                SubmitAnalysisRequest(
                    user_id=ANA_ID,
                    email="ana@example.org",
                    material_id=str(material.id),
                    comment="Late save",
                    review_state_id=str(states["analyzed"].id),
                    session_id=str(uuid4()),
                )
            )
        assert store.comments == {}
        assert store.materials[material.id].review_state_id == states["in_progress"].id

    @pytest.mark.asyncio
    async def test_submit_without_session(self, unit_env):
        """Submitting without a session still saves the analysis."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        submit = await unit_env.get(SubmitAnalysisUseCase)

        # Act
        result = await submit.execute(
            SubmitAnalysisRequest(
                user_id=ANA_ID,
                email="ana@example.org",
                material_id=str(material.id),
                review_state_id=str(states["incomplete"].id),
            )
        )

        # Assert
        assert result.comment is None
        assert result.material.review_state_id == str(states["incomplete"].id)
