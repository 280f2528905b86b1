"""
Closed enumerations used by the domain records.

Values are stored and sent over the wire as their upper-case names.
"""
import enum


class TestRequestStatus(str, enum.Enum):
    """Whether a test request still accepts bug reports"""
    __test__ = False  # not a pytest test class

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class BugReportSeverity(str, enum.Enum):
    """How badly a reported bug affects the project"""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class BugReportStatus(str, enum.Enum):
    """Review workflow of a bug report, moved only by client PATCH"""
    SUBMITTED = "SUBMITTED"
    VALIDATED = "VALIDATED"
    REJECTED = "REJECTED"
    REWARDED = "REWARDED"


class RewardType(str, enum.Enum):
    """Dining perk a developer pays out"""
    GUEST_SWIPE = "GUEST_SWIPE"
    MEAL_EXCHANGE = "MEAL_EXCHANGE"


class Platform(str, enum.Enum):
    """Platform a project targets"""
    IOS = "IOS"
    ANDROID = "ANDROID"
    WEB = "WEB"
