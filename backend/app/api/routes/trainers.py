"""Trainer Routes — trainer directory listing and registration."""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_trainer_directory
from app.schemas.trainer import TrainerCreate, TrainerResponse
from app.services.trainer_directory import TrainerDirectory

router = APIRouter(prefix="/api/v1/trainers", tags=["trainers"])


@router.get("", response_model=list[TrainerResponse])
async def list_trainers(directory: TrainerDirectory = Depends(get_trainer_directory)):
    return await directory.list_all()


@router.post("", response_model=TrainerResponse, status_code=status.HTTP_201_CREATED)
async def create_trainer(
    body: TrainerCreate, directory: TrainerDirectory = Depends(get_trainer_directory),
):
    return await directory.create(body.name, body.email, body.expertise)


@router.get("/{trainer_id}", response_model=TrainerResponse)
async def get_trainer(
    trainer_id: int, directory: TrainerDirectory = Depends(get_trainer_directory),
):
    return await directory.get(trainer_id)
