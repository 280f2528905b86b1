# Pydantic request shapes
from bugsnacks.schemas.common import IdParams, CampusParams
from bugsnacks.schemas.users import UserCreate, UserUpdate
from bugsnacks.schemas.projects import ProjectCreate, ProjectUpdate
from bugsnacks.schemas.test_requests import TestRequestCreate, TestRequestUpdate
from bugsnacks.schemas.bug_reports import BugReportCreate, BugReportUpdate

__all__ = [
    "IdParams",
    "CampusParams",
    "UserCreate",
    "UserUpdate",
    "ProjectCreate",
    "ProjectUpdate",
    "TestRequestCreate",
    "TestRequestUpdate",
    "BugReportCreate",
    "BugReportUpdate",
]
