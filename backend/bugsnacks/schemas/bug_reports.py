"""
Bug Report Schemas - request shapes for /api/bug-reports
"""
from typing import List, Optional

from bugsnacks.models.enums import BugReportSeverity, BugReportStatus
from bugsnacks.models.records import Reward
from bugsnacks.schemas.common import RequestShape, PatchShape


class BugReportCreate(RequestShape):
    """Submit a bug report; status always starts as SUBMITTED"""
    request_id: str
    tester_id: str
    title: str
    description: str
    severity: BugReportSeverity
    proposed_reward: Optional[Reward] = None
    video: Optional[str] = None
    attachments: Optional[List[str]] = None


class BugReportUpdate(PatchShape):
    """Update bug report; reportId, testerId and createdAt are fixed"""
    request_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[BugReportSeverity] = None
    proposed_reward: Optional[Reward] = None
    status: Optional[BugReportStatus] = None
    video: Optional[str] = None
    attachments: Optional[List[str]] = None
