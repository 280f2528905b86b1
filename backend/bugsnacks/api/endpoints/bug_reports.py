"""
Bug Reports API - testers file bug reports against a test request

Video and attachment fields are keys into external blob storage; uploads
happen client-side before the report is submitted.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from bugsnacks.core.exceptions import (
    BugReportNotFoundError,
    OperationFailedError,
    ResourceNotFoundError,
)
from bugsnacks.core.logging_config import logger
from bugsnacks.core.store import DocumentStore, get_store
from bugsnacks.core.validation import ValidatedRequest, shape, validate_request
from bugsnacks.models.enums import BugReportStatus
from bugsnacks.models.records import BugReport
from bugsnacks.schemas.bug_reports import BugReportCreate, BugReportUpdate
from bugsnacks.schemas.common import IdParams
from bugsnacks.services.repository import bugs_repo, utc_now

router = APIRouter(prefix="/api/bug-reports", tags=["Bug Reports"])


@router.get("/", response_class=PlainTextResponse)
async def hello_bug_reporter():
    return "Hello BugReporter!"


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_bug_report(
    validated: ValidatedRequest = Depends(validate_request(body=shape(BugReportCreate))),
    store: DocumentStore = Depends(get_store),
):
    body: BugReportCreate = validated.body
    repo = bugs_repo(store)
    try:
        report = BugReport(
            report_id=repo.new_id(),
            request_id=body.request_id,
            tester_id=body.tester_id,
            title=body.title,
            description=body.description,
            severity=body.severity,
            proposed_reward=body.proposed_reward,
            status=BugReportStatus.SUBMITTED,
            video=body.video,
            attachments=body.attachments,
            created_at=utc_now(),
        )
        report_id = await repo.create(report)
        logger.info(f"Bug report created: {report_id} for test request {body.request_id}")
        return {"message": "Bug report created successfully", "reportId": report_id}
    except Exception as e:
        logger.log_error_with_context(e, "create_bug_report")
        raise OperationFailedError("Error creating bug report", cause=e)


@router.get("/{id}", response_model=BugReport, response_model_exclude_none=True)
async def get_bug_report(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    report_id = validated.params.id
    try:
        report = await bugs_repo(store).get(report_id)
        if report is None:
            raise BugReportNotFoundError(report_id)
        return report
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "get_bug_report", report_id=report_id)
        raise OperationFailedError("Error fetching bug report", cause=e)


@router.patch("/{id}")
async def update_bug_report(
    validated: ValidatedRequest = Depends(validate_request(
        params=shape(IdParams),
        body=shape(BugReportUpdate),
    )),
    store: DocumentStore = Depends(get_store),
):
    """
    Partial update. Review outcomes (VALIDATED / REJECTED / REWARDED) are plain
    status patches; the order of transitions is up to the client.
    """
    report_id = validated.params.id
    patch = validated.body.model_dump(by_alias=True, exclude_unset=True)
    repo = bugs_repo(store)
    try:
        if not await repo.exists(report_id):
            raise BugReportNotFoundError(report_id)
        await repo.update(report_id, patch)
        return {"message": "Bug report updated successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "update_bug_report", report_id=report_id)
        raise OperationFailedError("Error updating bug report", cause=e)


@router.delete("/{id}")
async def delete_bug_report(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    report_id = validated.params.id
    repo = bugs_repo(store)
    try:
        if not await repo.exists(report_id):
            raise BugReportNotFoundError(report_id)
        await repo.delete(report_id)
        return {"message": "Bug report deleted successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "delete_bug_report", report_id=report_id)
        raise OperationFailedError("Error deleting bug report", cause=e)
