from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from bugsnacks.api.endpoints import bug_reports, campuses, projects, test_requests, users
from bugsnacks.core.config import settings

api_router = APIRouter()

api_router.include_router(bug_reports.router)
api_router.include_router(projects.router)
api_router.include_router(test_requests.router)
api_router.include_router(users.router)
api_router.include_router(campuses.router)


# Liveness endpoints, plain text
@api_router.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root_liveness():
    return settings.APP_NAME


@api_router.get("/api/", response_class=PlainTextResponse, tags=["Health"])
async def api_liveness():
    return settings.APP_NAME
