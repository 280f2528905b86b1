# Re-export all records and enums for convenient imports
from bugsnacks.models.enums import (
    TestRequestStatus,
    BugReportSeverity,
    BugReportStatus,
    RewardType,
    Platform,
)
from bugsnacks.models.records import (
    Record,
    Reward,
    User,
    Campus,
    Project,
    TestRequest,
    BugReport,
)

__all__ = [
    # Enums
    "TestRequestStatus",
    "BugReportSeverity",
    "BugReportStatus",
    "RewardType",
    "Platform",
    # Records
    "Record",
    "Reward",
    "User",
    "Campus",
    "Project",
    "TestRequest",
    "BugReport",
]
