"""Training Request Routes — CRUD, status changes and session links for requests.

Invariants:
    - Input validated by Pydantic before reaching the handler (400 on failure)
    - Missing ids surface as ResourceNotFoundError -> 404 via the global handler
    - DELETE reports a missing request as 404, success as 204
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_request_manager
from app.core.errors import ResourceNotFoundError
from app.schemas.training import (
    TrainingRequestCreate, TrainingRequestResponse,
    TrainingRequestSessionLink, TrainingRequestStatusUpdate,
)
from app.services.lifecycle_manager import RequestLifecycleManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/requests", tags=["training-requests"])


@router.get("", response_model=list[TrainingRequestResponse])
async def list_requests(
    manager: RequestLifecycleManager = Depends(get_request_manager),
):
    """All training requests, newest first."""
    return await manager.list_all()


@router.post(
    "", response_model=TrainingRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    body: TrainingRequestCreate,
    manager: RequestLifecycleManager = Depends(get_request_manager),
):
    return await manager.create(
        body.title, body.department, body.training_type, body.requester_id,
    )


@router.get("/user/{user_id}", response_model=list[TrainingRequestResponse])
async def list_requests_by_user(
    user_id: int, manager: RequestLifecycleManager = Depends(get_request_manager),
):
    return await manager.list_by_user(user_id)


@router.get("/status/{request_status}", response_model=list[TrainingRequestResponse])
async def list_requests_by_status(
    request_status: str,
    manager: RequestLifecycleManager = Depends(get_request_manager),
):
    return await manager.list_by_status(request_status)


@router.get("/{request_id}", response_model=TrainingRequestResponse)
async def get_request(
    request_id: int, manager: RequestLifecycleManager = Depends(get_request_manager),
):
    return await manager.get(request_id)


@router.put("/{request_id}/status", response_model=TrainingRequestResponse)
async def update_request_status(
    request_id: int,
    body: TrainingRequestStatusUpdate,
    manager: RequestLifecycleManager = Depends(get_request_manager),
):
    return await manager.update_status(request_id, body.status)


@router.put("/{request_id}/session", response_model=TrainingRequestResponse)
async def link_request_session(
    request_id: int,
    body: TrainingRequestSessionLink,
    manager: RequestLifecycleManager = Depends(get_request_manager),
):
    """Assign (or reassign) the session that fulfils this request."""
    return await manager.link_session(request_id, body.training_session_id)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: int, manager: RequestLifecycleManager = Depends(get_request_manager),
):
    if not await manager.delete(request_id):
        raise ResourceNotFoundError("TrainingRequest", request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
