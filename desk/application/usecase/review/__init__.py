"""Review workflow use cases."""

from .cancel_review import CancelReviewRequest, CancelReviewUseCase
from .get_analysis_data import (
    AnalysisDataResponse,
    GetAnalysisDataRequest,
    GetAnalysisDataUseCase,
)
from .heartbeat_review import HeartbeatReviewRequest, HeartbeatReviewUseCase
from .list_locks import ListLocksResponse, ListLocksUseCase
from .revert_state import RevertStateRequest, RevertStateResponse, RevertStateUseCase
from .start_review import StartReviewRequest, StartReviewResponse, StartReviewUseCase
from .submit_analysis import (
    SubmitAnalysisRequest,
    SubmitAnalysisResponse,
    SubmitAnalysisUseCase,
)

__all__ = [
    "AnalysisDataResponse",
    "CancelReviewRequest",
    "CancelReviewUseCase",
    "GetAnalysisDataRequest",
    "GetAnalysisDataUseCase",
    "HeartbeatReviewRequest",
    "HeartbeatReviewUseCase",
    "ListLocksResponse",
    "ListLocksUseCase",
    "RevertStateRequest",
    "RevertStateResponse",
    "RevertStateUseCase",
    "StartReviewRequest",
    "StartReviewResponse",
    "StartReviewUseCase",
    "SubmitAnalysisRequest",
    "SubmitAnalysisResponse",
    "SubmitAnalysisUseCase",
]
