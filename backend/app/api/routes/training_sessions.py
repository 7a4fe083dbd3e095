"""Training Session Routes — session CRUD plus participant registration.

Invariants:
    - Registration failures map through the global handler:
      unknown session -> 404, already registered / session full -> 400
    - Unregistering a user without an active seat returns success=false, never an error
    - The seat counter is only changed by the registration endpoints and recount
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_registration_manager, get_session_manager
from app.core.errors import ResourceNotFoundError
from app.schemas.training import (
    OperationResult, ParticipantResponse, ParticipantStatusUpdate,
    TrainingSessionCreate, TrainingSessionResponse, TrainingSessionUpdate,
)
from app.services.lifecycle_manager import SessionLifecycleManager
from app.services.registration_manager import RegistrationManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sessions", tags=["training-sessions"])


# ─── Sessions ────────────────────────────────────────────────────

@router.get("", response_model=list[TrainingSessionResponse])
async def list_sessions(
    manager: SessionLifecycleManager = Depends(get_session_manager),
):
    """All sessions ordered by start date."""
    return await manager.list_all()


@router.post(
    "", response_model=TrainingSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: TrainingSessionCreate,
    manager: SessionLifecycleManager = Depends(get_session_manager),
):
    return await manager.create(**body.model_dump())


@router.get("/request/{request_id}", response_model=list[TrainingSessionResponse])
async def list_sessions_by_request(
    request_id: int, manager: SessionLifecycleManager = Depends(get_session_manager),
):
    return await manager.list_by_request(request_id)


@router.get("/registered/{user_id}", response_model=list[TrainingSessionResponse])
async def list_registered_sessions(
    user_id: int, registration: RegistrationManager = Depends(get_registration_manager),
):
    """Sessions the user currently holds a seat in."""
    return await registration.list_registered_sessions(user_id)


@router.get("/{session_id}", response_model=TrainingSessionResponse)
async def get_session(
    session_id: int, manager: SessionLifecycleManager = Depends(get_session_manager),
):
    return await manager.get(session_id)


@router.put("/{session_id}", response_model=TrainingSessionResponse)
async def update_session(
    session_id: int,
    body: TrainingSessionUpdate,
    manager: SessionLifecycleManager = Depends(get_session_manager),
):
    return await manager.update(session_id, **body.model_dump())


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: int, manager: SessionLifecycleManager = Depends(get_session_manager),
):
    if not await manager.delete(session_id):
        raise ResourceNotFoundError("TrainingSession", session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Participants ────────────────────────────────────────────────

@router.get("/{session_id}/participants", response_model=list[ParticipantResponse])
async def list_participants(
    session_id: int, registration: RegistrationManager = Depends(get_registration_manager),
):
    return await registration.list_participants(session_id)


@router.post(
    "/{session_id}/register/{user_id}", response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_session(
    session_id: int,
    user_id: int,
    registration: RegistrationManager = Depends(get_registration_manager),
):
    return await registration.register(user_id, session_id)


@router.delete("/{session_id}/unregister/{user_id}", response_model=OperationResult)
async def unregister_from_session(
    session_id: int,
    user_id: int,
    registration: RegistrationManager = Depends(get_registration_manager),
):
    if await registration.unregister(user_id, session_id):
        return OperationResult(success=True, message="Unregistered from session")
    return OperationResult(success=False, message="No active registration found")


@router.put(
    "/{session_id}/participants/{user_id}/status",
    response_model=ParticipantResponse,
)
async def update_participant_status(
    session_id: int,
    user_id: int,
    body: ParticipantStatusUpdate,
    registration: RegistrationManager = Depends(get_registration_manager),
):
    return await registration.update_participant_status(
        user_id, session_id, body.status,
    )


@router.post("/{session_id}/recount", response_model=TrainingSessionResponse)
async def recount_participants(
    session_id: int,
    registration: RegistrationManager = Depends(get_registration_manager),
):
    """Rebuild the seat counter from participant rows."""
    return await registration.recount(session_id)
