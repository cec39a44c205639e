"""
Wellness endpoints.

Pre/post submissions, window state and the unlock workflow.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from app.api.dependencies import get_wellness_service
from app.schemas.wellness import SessionWellnessStatus, WellnessSubmissionResponse
from app.schemas.window import UnlockDecisionCreate, UnlockRequestCreate, UnlockStatus, WindowKind, WindowState
from app.services.wellness_service import WellnessService

router = APIRouter()


@router.get("/{kind}/sessions/{session_id}/athletes/{athlete_id}/window",
            summary="Resolve the submission window for an athlete.", response_model=WindowState, )
def get_window(kind: WindowKind, session_id: int, athlete_id: int,
               service: WellnessService = Depends(get_wellness_service), ):
    return service.get_window(kind, session_id, athlete_id)


@router.post("/{kind}/sessions/{session_id}/athletes/{athlete_id}", summary="Submit wellness ratings.",
             response_model=WellnessSubmissionResponse, status_code=status.HTTP_201_CREATED, )
def submit_wellness(kind: WindowKind, session_id: int, athlete_id: int, values: dict[str, Any] = Body(...),
                    service: WellnessService = Depends(get_wellness_service), ):
    return service.submit(kind, session_id, athlete_id, values)


@router.put("/{kind}/sessions/{session_id}/athletes/{athlete_id}", summary="Edit wellness ratings.",
            response_model=WellnessSubmissionResponse, )
def update_wellness(kind: WindowKind, session_id: int, athlete_id: int, values: dict[str, Any] = Body(...),
                    service: WellnessService = Depends(get_wellness_service), ):
    return service.update(kind, session_id, athlete_id, values)


@router.post("/{kind}/sessions/{session_id}/athletes/{athlete_id}/unlock-request",
             summary="Ask staff to reopen an expired window.", response_model=UnlockStatus, )
def request_unlock(kind: WindowKind, session_id: int, athlete_id: int, data: UnlockRequestCreate = Body(...),
                   service: WellnessService = Depends(get_wellness_service), ):
    return service.request_unlock(kind, session_id, athlete_id, data.reason)


@router.post("/{kind}/sessions/{session_id}/athletes/{athlete_id}/unlock-decision",
             summary="Approve or deny a pending unlock request.", response_model=UnlockStatus, )
def resolve_unlock(kind: WindowKind, session_id: int, athlete_id: int, data: UnlockDecisionCreate,
                   service: WellnessService = Depends(get_wellness_service), ):
    return service.resolve_unlock(kind, session_id, athlete_id, data.decision, data.resolved_by)


@router.get("/sessions/{session_id}/status", summary="Wellness response status for a session.",
            response_model=SessionWellnessStatus, )
def get_session_status(session_id: int, service: WellnessService = Depends(get_wellness_service)):
    return service.session_status(session_id)
