"""
Projects API - create, read, update and delete projects, list projects of a
campus and the test requests posted for a project
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from typing import Any, Dict, List

from bugsnacks.core.exceptions import (
    EmptyRelationshipError,
    OperationFailedError,
    ProjectNotFoundError,
    ResourceNotFoundError,
)
from bugsnacks.core.logging_config import logger
from bugsnacks.core.store import DocumentStore, get_store
from bugsnacks.core.validation import ValidatedRequest, shape, validate_request
from bugsnacks.models.records import Project
from bugsnacks.schemas.common import CampusParams, IdParams
from bugsnacks.schemas.projects import ProjectCreate, ProjectUpdate
from bugsnacks.services.repository import projects_repo, requests_repo, utc_now, with_id

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("/", response_class=PlainTextResponse)
async def hello_project():
    return "Hello Project!"


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_project(
    validated: ValidatedRequest = Depends(validate_request(body=shape(ProjectCreate))),
    store: DocumentStore = Depends(get_store),
):
    """Create a project owned by the requesting user (``userId`` -> developerId)"""
    body: ProjectCreate = validated.body
    repo = projects_repo(store)
    try:
        project = Project(
            project_id=repo.new_id(),
            developer_id=body.user_id,
            campus_id=body.campus_id,
            name=body.name,
            description=body.description,
            platform=body.platform,
            created_at=utc_now(),
        )
        project_id = await repo.create(project)
        logger.info(f"Project created: {project_id} by {body.user_id}")
        return {"message": "Project created successfully", "projectId": project_id}
    except Exception as e:
        logger.log_error_with_context(e, "create_project")
        raise OperationFailedError("Error creating project", cause=e)


@router.get("/campus/{campusId}")
async def list_campus_projects(
    validated: ValidatedRequest = Depends(validate_request(params=shape(CampusParams))),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """Projects on a campus, newest first"""
    campus_id = validated.params.campus_id
    try:
        matches = await projects_repo(store).find_by(
            "campusId", campus_id, order_by="createdAt", descending=True
        )
        if not matches:
            raise EmptyRelationshipError("Projects not found in this campus", "campus", campus_id)
        return [with_id(key, project) for key, project in matches]
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "list_campus_projects", campus_id=campus_id)
        raise OperationFailedError("Error fetching project", cause=e)


@router.get("/{id}", response_model=Project, response_model_exclude_none=True)
async def get_project(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    project_id = validated.params.id
    try:
        project = await projects_repo(store).get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "get_project", project_id=project_id)
        raise OperationFailedError("Error fetching project", cause=e)


@router.patch("/{id}")
async def update_project(
    validated: ValidatedRequest = Depends(validate_request(
        body=shape(ProjectUpdate),
        params=shape(IdParams),
    )),
    store: DocumentStore = Depends(get_store),
):
    project_id = validated.params.id
    patch = validated.body.model_dump(by_alias=True, exclude_unset=True)
    repo = projects_repo(store)
    try:
        if not await repo.exists(project_id):
            raise ProjectNotFoundError(project_id)
        await repo.update(project_id, patch)
        return {"message": "Project updated successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "update_project", project_id=project_id)
        raise OperationFailedError("Error updating project", cause=e)


@router.delete("/{id}")
async def delete_project(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
):
    """Delete a project; its test requests are left in place"""
    project_id = validated.params.id
    repo = projects_repo(store)
    try:
        if not await repo.exists(project_id):
            raise ProjectNotFoundError(project_id)
        await repo.delete(project_id)
        logger.info(f"Project deleted: {project_id}")
        return {"message": "Project deleted successfully"}
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "delete_project", project_id=project_id)
        raise OperationFailedError("Error deleting project", cause=e)


@router.get("/{id}/requests")
async def list_project_test_requests(
    validated: ValidatedRequest = Depends(validate_request(params=shape(IdParams))),
    store: DocumentStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    project_id = validated.params.id
    try:
        matches = await requests_repo(store).find_by("projectId", project_id)
        if not matches:
            raise EmptyRelationshipError(
                "No test requests found for this project", "project", project_id
            )
        return [with_id(key, test_request) for key, test_request in matches]
    except ResourceNotFoundError:
        raise
    except Exception as e:
        logger.log_error_with_context(e, "list_project_test_requests", project_id=project_id)
        raise OperationFailedError("Error fetching test requests", cause=e)
