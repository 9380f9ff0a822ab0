"""Application layer DI providers."""

from dishka import Scope, provide

from desk.application.usecase.auth import GetCurrentUserUseCase
from desk.application.usecase.comment import (
    CountCommentsUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
)
from desk.application.usecase.material import (
    CreateMaterialUseCase,
    DeleteMaterialUseCase,
    GetMaterialStatsUseCase,
    GetMaterialUseCase,
    ListMaterialsUseCase,
    UpdateMaterialUseCase,
)
from desk.application.usecase.review import (
    CancelReviewUseCase,
    GetAnalysisDataUseCase,
    HeartbeatReviewUseCase,
    ListLocksUseCase,
    RevertStateUseCase,
    StartReviewUseCase,
    SubmitAnalysisUseCase,
)
from desk.application.usecase.review_state import (
    CreateStateUseCase,
    DeleteStateUseCase,
    ListStatesUseCase,
    SetDefaultStateUseCase,
    UpdateStateUseCase,
)
from desk.application.usecase.tag import (
    CreateTagGroupUseCase,
    CreateTagUseCase,
    DeleteTagGroupUseCase,
    DeleteTagUseCase,
    ListTagGroupsUseCase,
    UpdateTagGroupUseCase,
    UpdateTagUseCase,
)
from desk.domain.service import (
    AnalysisService,
    CommentService,
    MaterialService,
    PresenceRegistry,
    ProfileService,
    ReviewStateService,
    ReviewWorkflowService,
    TagService,
)
from desk.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, profile_service: ProfileService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(profile_service=profile_service)

    # Material use cases
    @provide(scope=Scope.REQUEST)
    def get_create_material_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
    ) -> CreateMaterialUseCase:
        """Provide create material use case."""
        return CreateMaterialUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_material_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        comment_service: CommentService,
    ) -> GetMaterialUseCase:
        """Provide get material use case."""
        return GetMaterialUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_materials_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        comment_service: CommentService,
    ) -> ListMaterialsUseCase:
        """Provide list materials use case."""
        return ListMaterialsUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_material_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> UpdateMaterialUseCase:
        """Provide update material use case."""
        return UpdateMaterialUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_material_use_case(
        self, material_service: MaterialService, profile_service: ProfileService
    ) -> DeleteMaterialUseCase:
        """Provide delete material use case."""
        return DeleteMaterialUseCase(
            material_service=material_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_material_stats_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
    ) -> GetMaterialStatsUseCase:
        """Provide material stats use case."""
        return GetMaterialStatsUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        material_service: MaterialService,
        profile_service: ProfileService,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            material_service=material_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, material_service: MaterialService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, material_service=material_service
        )

    @provide(scope=Scope.REQUEST)
    def get_count_comments_use_case(
        self, comment_service: CommentService
    ) -> CountCommentsUseCase:
        """Provide count comments use case."""
        return CountCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, profile_service: ProfileService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, profile_service=profile_service
        )

    # Review workflow use cases
    @provide(scope=Scope.REQUEST)
    def get_start_review_use_case(
        self,
        workflow_service: ReviewWorkflowService,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
        presence_registry: PresenceRegistry,
    ) -> StartReviewUseCase:
        """Provide start review use case."""
        return StartReviewUseCase(
            workflow_service=workflow_service,
            material_service=material_service,
            review_state_service=review_state_service,
            tag_service=tag_service,
            comment_service=comment_service,
            presence_registry=presence_registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_review_use_case(
        self,
        workflow_service: ReviewWorkflowService,
        review_state_service: ReviewStateService,
    ) -> CancelReviewUseCase:
        """Provide cancel review use case."""
        return CancelReviewUseCase(
            workflow_service=workflow_service,
            review_state_service=review_state_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_heartbeat_review_use_case(
        self, workflow_service: ReviewWorkflowService
    ) -> HeartbeatReviewUseCase:
        """Provide heartbeat review use case."""
        return HeartbeatReviewUseCase(workflow_service=workflow_service)

    @provide(scope=Scope.REQUEST)
    def get_submit_analysis_use_case(
        self,
        analysis_service: AnalysisService,
        workflow_service: ReviewWorkflowService,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> SubmitAnalysisUseCase:
        """Provide submit analysis use case."""
        return SubmitAnalysisUseCase(
            analysis_service=analysis_service,
            workflow_service=workflow_service,
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_revert_state_use_case(
        self, workflow_service: ReviewWorkflowService
    ) -> RevertStateUseCase:
        """Provide revert state use case."""
        return RevertStateUseCase(workflow_service=workflow_service)

    @provide(scope=Scope.REQUEST)
    def get_analysis_data_use_case(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        tag_service: TagService,
        comment_service: CommentService,
    ) -> GetAnalysisDataUseCase:
        """Provide get analysis data use case."""
        return GetAnalysisDataUseCase(
            material_service=material_service,
            review_state_service=review_state_service,
            tag_service=tag_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_locks_use_case(
        self, presence_registry: PresenceRegistry
    ) -> ListLocksUseCase:
        """Provide list locks use case."""
        return ListLocksUseCase(presence_registry=presence_registry)

    # Review state use cases
    @provide(scope=Scope.REQUEST)
    def get_list_states_use_case(
        self, review_state_service: ReviewStateService
    ) -> ListStatesUseCase:
        """Provide list review states use case."""
        return ListStatesUseCase(review_state_service=review_state_service)

    @provide(scope=Scope.REQUEST)
    def get_create_state_use_case(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> CreateStateUseCase:
        """Provide create review state use case."""
        return CreateStateUseCase(
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_state_use_case(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> UpdateStateUseCase:
        """Provide update review state use case."""
        return UpdateStateUseCase(
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_state_use_case(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> DeleteStateUseCase:
        """Provide delete review state use case."""
        return DeleteStateUseCase(
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_set_default_state_use_case(
        self,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> SetDefaultStateUseCase:
        """Provide set default review state use case."""
        return SetDefaultStateUseCase(
            review_state_service=review_state_service,
            profile_service=profile_service,
        )

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tag_groups_use_case(
        self, tag_service: TagService
    ) -> ListTagGroupsUseCase:
        """Provide list tag groups use case."""
        return ListTagGroupsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_create_tag_group_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> CreateTagGroupUseCase:
        """Provide create tag group use case."""
        return CreateTagGroupUseCase(
            tag_service=tag_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_tag_group_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> DeleteTagGroupUseCase:
        """Provide delete tag group use case."""
        return DeleteTagGroupUseCase(
            tag_service=tag_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_create_tag_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(tag_service=tag_service, profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_tag_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(tag_service=tag_service, profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_update_tag_group_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> UpdateTagGroupUseCase:
        """Provide update tag group use case."""
        return UpdateTagGroupUseCase(
            tag_service=tag_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_tag_use_case(
        self, tag_service: TagService, profile_service: ProfileService
    ) -> UpdateTagUseCase:
        """Provide update tag use case."""
        return UpdateTagUseCase(tag_service=tag_service, profile_service=profile_service)
