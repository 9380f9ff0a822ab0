"""Domain services."""

from .analysis_service import AnalysisResult, AnalysisService
from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .lock_service import SoftLockCoordinator
from .material_service import MaterialService
from .presence_service import PresenceChannel, PresenceConnection, PresenceRegistry
from .profile_service import ProfileService
from .review_state_service import ReviewStateService
from .tag_service import TagService
from .workflow_service import ReviewWorkflowService

__all__ = [
    "AnalysisResult",
    "AnalysisService",
    "CommentService",
    "JWTService",
    "MaterialService",
    "PresenceChannel",
    "PresenceConnection",
    "PresenceRegistry",
    "ProfileService",
    "ReviewStateService",
    "ReviewWorkflowService",
    "Service",
    "SoftLockCoordinator",
    "TagService",
]
