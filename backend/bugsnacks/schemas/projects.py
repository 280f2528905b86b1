"""
Project Schemas - request shapes for /api/projects
"""
from typing import Optional

from bugsnacks.models.enums import Platform
from bugsnacks.schemas.common import RequestShape, PatchShape


class ProjectCreate(RequestShape):
    """Create a project; ``userId`` becomes the project's developerId"""
    name: str
    user_id: str
    description: str
    campus_id: str
    platform: Optional[Platform] = None


class ProjectUpdate(PatchShape):
    """Update project; projectId, developerId and createdAt are fixed"""
    campus_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    platform: Optional[Platform] = None
