"""Domain layer DI providers."""

from dishka import Scope, provide

from desk.config import AuthSettings, PresenceSettings
from desk.domain.repository import (
    CommentRepository,
    MaterialRepository,
    ProfileRepository,
    ReviewSessionRepository,
    ReviewStateRepository,
    TagRepository,
)
from desk.domain.service import (
    AnalysisService,
    CommentService,
    JWTService,
    MaterialService,
    ProfileService,
    ReviewStateService,
    ReviewWorkflowService,
    SoftLockCoordinator,
    TagService,
)
from desk.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    Presence and the session store live in the APP scope (see PresenceProvider).
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_material_service(
        self, material_repository: MaterialRepository
    ) -> MaterialService:
        """Provide material domain service."""
        return MaterialService(material_repository=material_repository)

    @provide
    def get_review_state_service(
        self, review_state_repository: ReviewStateRepository
    ) -> ReviewStateService:
        """Provide review state domain service."""
        return ReviewStateService(review_state_repository=review_state_repository)

    @provide
    def get_tag_service(self, tag_repository: TagRepository) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_workflow_service(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        lock_coordinator: SoftLockCoordinator,
        session_repository: ReviewSessionRepository,
        presence_settings: PresenceSettings,
    ) -> ReviewWorkflowService:
        """Provide review workflow domain service."""
        return ReviewWorkflowService(
            material_service=material_service,
            review_state_service=review_state_service,
            lock_coordinator=lock_coordinator,
            session_repository=session_repository,
            presence_settings=presence_settings,
        )

    @provide
    def get_analysis_service(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> AnalysisService:
        """Provide analysis submission domain service."""
        return AnalysisService(
            material_service=material_service,
            review_state_service=review_state_service,
            tag_service=tag_service,
            comment_service=comment_service,
        )
