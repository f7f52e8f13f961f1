from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from hr_access.api.deps import require_permission
from hr_access.core.config import settings
from hr_access.core.rbac import Action, Resource
from hr_access.models.audit import RetentionCleanupResponse
from hr_access.services.container import event_logger


router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("/events")
async def get_recent_events(
    limit: int = Query(default=100, ge=1, le=1000),
    current_user: dict = Depends(require_permission(Resource.AUDIT, Action.READ)),
) -> list[dict]:
    _ = current_user
    return await run_in_threadpool(event_logger.recent_events, limit)


@router.post("/retention/cleanup", response_model=RetentionCleanupResponse)
async def run_retention_cleanup(
    retention_days: int = Query(default=settings.audit_retention_days, ge=1, le=3650),
    current_user: dict = Depends(require_permission(Resource.ADMIN, Action.MANAGE)),
) -> RetentionCleanupResponse:
    removed = await run_in_threadpool(event_logger.cleanup_older_than, retention_days)
    await event_logger.alog_event(
        event_type="audit_retention",
        actor_id=current_user["user_id"],
        actor_role=current_user["role"],
        details={"retention_days": retention_days, "removed_events": removed},
    )
    return RetentionCleanupResponse(retention_days=retention_days, removed_events=removed)
