"""
Domain records, one per stored entity.

Attributes are snake_case in Python and camelCase on the wire and in the
document store. Records are frozen; updates go through partial patches.
The identifier field of each record is the document key and is never
written as a document field (see ``bugsnacks.core.converter``).
"""
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bugsnacks.models.enums import (
    BugReportSeverity,
    BugReportStatus,
    Platform,
    RewardType,
    TestRequestStatus,
)


class Record(BaseModel):
    """Base for all domain records"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
    )


class Reward(Record):
    """Embedded value: a dining perk at a campus location"""
    name: Optional[str] = None
    description: Optional[str] = None
    location: str
    type: RewardType
    time: Optional[str] = None


class User(Record):
    user_id: str
    email: str
    campus_id: str
    name: Optional[str] = None
    created_at: datetime


class Campus(Record):
    campus_id: str
    name: str
    reward_locations: List[Reward] = []


class Project(Record):
    project_id: str
    developer_id: str
    campus_id: str
    name: str
    description: str
    platform: Optional[Platform] = None
    created_at: datetime


class TestRequest(Record):
    __test__ = False  # not a pytest test class

    request_id: str
    project_id: str
    developer_id: str
    title: str
    description: str
    demo_url: str
    reward: Union[Reward, List[Reward]]
    status: TestRequestStatus
    created_at: datetime


class BugReport(Record):
    report_id: str
    request_id: str
    tester_id: str
    title: str
    description: str  # includes steps to reproduce
    severity: BugReportSeverity
    proposed_reward: Optional[Reward] = None
    status: BugReportStatus
    video: Optional[str] = None  # blob storage key
    attachments: Optional[List[str]] = None  # blob storage keys
    created_at: datetime
