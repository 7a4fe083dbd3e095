"""API Dependencies — request-scoped wiring of stores, clock and services.

Invariants:
    - One TrainingStores per HTTP request; on SQL it wraps exactly one AsyncSession
    - storage_backend is read from settings, never hard-coded by a route
    - Services are constructed per request; shared state (locks) lives at module level

Design Decisions:
    - FastAPI Depends over a DI container: tests swap get_stores/get_clock through
      app.dependency_overrides
"""

from typing import AsyncGenerator

from fastapi import Depends

import app.infrastructure.database as database
from app.config import Settings, get_settings
from app.core.repository_protocols import Clock, CredentialLookup
from app.infrastructure.clock import SystemClock
from app.infrastructure.credentials import StaticCredentialLookup
from app.services.dashboard_service import DashboardService
from app.services.lifecycle_manager import (
    RequestLifecycleManager, SessionLifecycleManager,
)
from app.services.registration_manager import RegistrationManager
from app.services.report_service import ReportService
from app.services.stores import TrainingStores, build_json_stores, build_sql_stores
from app.services.trainer_directory import TrainerDirectory
from app.services.user_directory import UserDirectory


async def get_stores(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[TrainingStores, None]:
    if settings.storage_backend == "json":
        yield build_json_stores(settings.json_data_dir)
        return
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as db:
        yield build_sql_stores(db)


def get_clock() -> Clock:
    return SystemClock()


def get_credentials(settings: Settings = Depends(get_settings)) -> CredentialLookup:
    if not settings.demo_auth_enabled:
        return StaticCredentialLookup(accounts=())
    return StaticCredentialLookup()


def get_registration_manager(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> RegistrationManager:
    return RegistrationManager(stores, clock)


def get_request_manager(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> RequestLifecycleManager:
    return RequestLifecycleManager(stores, clock)


def get_session_manager(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> SessionLifecycleManager:
    return SessionLifecycleManager(stores, clock)


def get_report_service(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> ReportService:
    return ReportService(stores, clock)


def get_dashboard_service(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> DashboardService:
    return DashboardService(stores, clock)


def get_user_directory(
    stores: TrainingStores = Depends(get_stores), clock: Clock = Depends(get_clock),
) -> UserDirectory:
    return UserDirectory(stores, clock)


def get_trainer_directory(
    stores: TrainingStores = Depends(get_stores),
) -> TrainerDirectory:
    return TrainerDirectory(stores)
