# API endpoints
from . import bug_reports, campuses, projects, test_requests, users

__all__ = ["bug_reports", "campuses", "projects", "test_requests", "users"]
