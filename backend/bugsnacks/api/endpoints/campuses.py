"""
Campuses API - static campus reference data: supported campuses, their dining
venues and the rewards a developer can offer there
"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List

from bugsnacks.core.campuses import campus_ids, get_campus, dining_options
from bugsnacks.core.exceptions import CampusNotFoundError
from bugsnacks.core.validation import ValidatedRequest, shape, validate_request
from bugsnacks.schemas.common import CampusParams

router = APIRouter(prefix="/api/campuses", tags=["Campuses"])


@router.get("/")
async def list_campuses() -> List[str]:
    """Ids of supported campuses"""
    return campus_ids()


@router.get("/{campusId}")
async def get_dining_options(
    validated: ValidatedRequest = Depends(validate_request(params=shape(CampusParams))),
) -> List[str]:
    """Dining venues of a campus"""
    campus_id = validated.params.campus_id
    venues = dining_options(campus_id)
    if venues is None:
        raise CampusNotFoundError(campus_id)
    return venues


@router.get("/{campusId}/rewards")
async def list_campus_rewards(
    validated: ValidatedRequest = Depends(validate_request(params=shape(CampusParams))),
) -> List[Dict[str, Any]]:
    """Every reward a developer can offer on a campus, two per dining venue"""
    campus_id = validated.params.campus_id
    campus = get_campus(campus_id)
    if campus is None:
        raise CampusNotFoundError(campus_id)
    return [
        reward.model_dump(mode="json", by_alias=True, exclude_none=True)
        for reward in campus.reward_locations
    ]
