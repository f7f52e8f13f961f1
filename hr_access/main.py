import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hr_access.api.routers.access import router as access_router
from hr_access.api.routers.approvals import router as approvals_router
from hr_access.api.routers.audit import router as audit_router
from hr_access.api.routers.auth import router as auth_router
from hr_access.api.routers.employees import router as employees_router
from hr_access.core.logging import configure_logging
from hr_access.repositories.directory import DirectoryUnavailableError

configure_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="HR Portal Access Control",
    version="1.0.0",
    description=(
        "Role-based access control for an HR portal: permission table, route guards, "
        "and manager-scoped approval of leave requests and timesheets."
    ),
)


@app.exception_handler(DirectoryUnavailableError)
async def directory_unavailable_handler(request: Request, exc: DirectoryUnavailableError) -> JSONResponse:
    logger.warning("Authorization lookup failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Authorization data temporarily unavailable"},
    )


@app.get("/")
def health() -> dict[str, str]:
    return {"status": "ok", "service": "HR Portal Access Control"}


app.include_router(auth_router)
app.include_router(access_router)
app.include_router(employees_router)
app.include_router(approvals_router)
app.include_router(audit_router)
