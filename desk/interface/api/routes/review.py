"""Review workflow routes: sessions, analysis submission and teardown revert."""

import json
from typing import Optional
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from desk.application.usecase.dto import MaterialInfo, SessionInfo
from desk.application.usecase.review import (
    AnalysisDataResponse,
    CancelReviewRequest,
    CancelReviewUseCase,
    GetAnalysisDataRequest,
    GetAnalysisDataUseCase,
    HeartbeatReviewRequest,
    HeartbeatReviewUseCase,
    RevertStateRequest,
    RevertStateResponse,
    RevertStateUseCase,
    StartReviewRequest,
    StartReviewResponse,
    StartReviewUseCase,
    SubmitAnalysisRequest,
    SubmitAnalysisResponse,
    SubmitAnalysisUseCase,
)
from desk.domain.service import JWTService
from desk.interface.api.dependencies import require_user

router = APIRouter(prefix="/materials", tags=["review"], route_class=DishkaRoute)


class StartReviewAPIRequest(BaseModel):
    """API request for opening the analysis form."""

    presence_key: Optional[str] = None  # Key from the presence WebSocket hello


class SubmitAnalysisAPIRequest(BaseModel):
    """API request for saving an analysis."""

    # Length is checked after trimming by the domain
    comment: Optional[str] = None
    review_state_id: Optional[UUID] = None
    tag_ids: list[UUID] = Field(default_factory=list)
    session_id: Optional[UUID] = None


@router.post("/revert-state", status_code=status.HTTP_202_ACCEPTED)
async def revert_state(
    request: Request,
    revert_state_use_case: FromDishka[RevertStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> JSONResponse:
    """Restore a material whose editor closed the page without saving.

    Sent as a beacon while the page unloads, so the body arrives with any
    content type (usually text/plain). Same-origin beacons carry the
    session cookie; when it verifies, only the caller's own sessions can be
    ended. Without it, live sessions of any editor are left alone. The prior
    state recorded for the open session takes precedence over the one in
    the body.

    Body: {"materialId": ..., "previousStateId": ...}

    Returns:
        202 with {"success": bool}, or 400 when the material ID is missing
    """
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        body = {}
    if not isinstance(body, dict):
        body = {}

    material_id = body.get("materialId") or body.get("material_id")
    previous_state_id = body.get("previousStateId") or body.get("previous_state_id")
    if not material_id or not isinstance(material_id, str):
        logfire.warn("Revert request without material ID")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "materialId is required"},
        )

    # An invalid token counts as no caller rather than a rejection
    caller = jwt_service.get_payload_from_token(auth_token)
    result: RevertStateResponse = await revert_state_use_case.execute(
        RevertStateRequest(
            material_id=material_id,
            caller_email=caller.email if caller else None,
            previous_state_id=previous_state_id
            if isinstance(previous_state_id, str)
            else None,
        )
    )
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED, content=result.model_dump()
    )


@router.get("/{material_id}/analysis", response_model=AnalysisDataResponse)
async def get_analysis_data(
    material_id: UUID,
    get_analysis_data_use_case: FromDishka[GetAnalysisDataUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AnalysisDataResponse:
    """Load the analysis form data without opening a session."""
    require_user(jwt_service, auth_token)
    return await get_analysis_data_use_case.execute(
        GetAnalysisDataRequest(material_id=str(material_id))
    )


@router.post(
    "/{material_id}/sessions",
    response_model=StartReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_review(
    material_id: UUID,
    start_review_use_case: FromDishka[StartReviewUseCase],
    jwt_service: FromDishka[JWTService],
    request: Optional[StartReviewAPIRequest] = None,
    auth_token: str | None = Cookie(default=None),
) -> StartReviewResponse:
    """Open the analysis form on a material.

    Marks the material as in progress and publishes the soft lock.

    Args:
        material_id: Material UUID
        start_review_use_case: Start review use case from DI
        jwt_service: JWT service for token verification (injected)
        request: Optional presence key of the caller
        auth_token: JWT token from cookie

    Returns:
        The open session and the form data

    Raises:
        MaterialLockedError: Answered with 409 when another editor holds it
    """
    user = require_user(jwt_service, auth_token)
    return await start_review_use_case.execute(
        StartReviewRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            presence_key=request.presence_key if request else None,
        )
    )


@router.post("/{material_id}/sessions/{session_id}/cancel", response_model=MaterialInfo)
async def cancel_review(
    material_id: UUID,
    session_id: UUID,
    cancel_review_use_case: FromDishka[CancelReviewUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MaterialInfo:
    """Close the analysis form without saving and restore the prior state."""
    user = require_user(jwt_service, auth_token)
    return await cancel_review_use_case.execute(
        CancelReviewRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            session_id=str(session_id),
        )
    )


@router.post(
    "/{material_id}/sessions/{session_id}/heartbeat", response_model=SessionInfo
)
async def heartbeat_review(
    material_id: UUID,
    session_id: UUID,
    heartbeat_review_use_case: FromDishka[HeartbeatReviewUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SessionInfo:
    """Keep an open review session alive."""
    user = require_user(jwt_service, auth_token)
    return await heartbeat_review_use_case.execute(
        HeartbeatReviewRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            session_id=str(session_id),
        )
    )


@router.post("/{material_id}/analysis", response_model=SubmitAnalysisResponse)
async def submit_analysis(
    material_id: UUID,
    request: SubmitAnalysisAPIRequest,
    submit_analysis_use_case: FromDishka[SubmitAnalysisUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitAnalysisResponse:
    """Save the analysis: optional comment, final state and full tag set.

    Nothing is written unless every input is valid.

    Args:
        material_id: Material UUID
        request: Comment, chosen state, tags and optional session ID
        submit_analysis_use_case: Submit analysis use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Updated material, created comment and the saved tag set
    """
    user = require_user(jwt_service, auth_token)
    return await submit_analysis_use_case.execute(
        SubmitAnalysisRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            comment=request.comment,
            review_state_id=str(request.review_state_id)
            if request.review_state_id
            else None,
            tag_ids=[str(t) for t in request.tag_ids],
            session_id=str(request.session_id) if request.session_id else None,
        )
    )
