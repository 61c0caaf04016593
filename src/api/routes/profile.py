"""Profile routes — the logged-in user's activity list.

Endpoints:
- GET /profile: List activities (HTML page, or JSON with Accept: application/json)
- POST /profile: Add an activity
- GET /profile/{id}: Show one activity
- PUT /profile/{id}: Rename an activity
- DELETE /profile/{id}: Delete an activity

Every route requires a session and only ever touches the caller's own
activities.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from api.dependencies import get_activity_repo
from api.models import ActivityCreate, ActivityRename, ActivityResponse, MessageResponse
from api.security import get_current_user_required, set_flash, wants_json
from api.templating import render
from domain.model.errors import DomainError, NotFoundError, PermissionDeniedError, StoreError
from domain.model.session import AuthContext
from port.activity_repository import ActivityRepository
from services import activity_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])

_ACTIVITY_ERRORS = {
    403: {"description": "Activity belongs to another user"},
    404: {"description": "Activity not found"},
}


def _http_error(e: DomainError, store_detail: str) -> HTTPException:
    """Map a service error to the HTTP status the client sees."""
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=store_detail)


@router.get(
    "",
    response_model=None,
    summary="List the user's activities",
    responses={200: {"model": list[ActivityResponse], "description": "Activities in insertion order"}},
)
def list_profile_activities(
    request: Request,
    current_user: AuthContext = Depends(get_current_user_required),
    repo: ActivityRepository = Depends(get_activity_repo),
):
    """Render the profile page, or return the list as JSON."""
    try:
        activities = activity_service.list_activities(repo, current_user.user_id)
    except (NotFoundError, StoreError) as e:
        logger.error("Error getting activities", extra={"userId": current_user.user_id, "error": str(e)})
        if wants_json(request):
            raise _http_error(e, "Error getting activities")
        response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
        set_flash(response, "Error getting activities")
        return response

    if wants_json(request):
        return [ActivityResponse.from_domain(a) for a in activities]
    return render(request, "profile.html", {
        "username": current_user.username,
        "activities": activities,
    })


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a new activity",
    responses={
        400: {"description": "Missing name or unparseable date"},
        404: {"description": "User not found"},
        500: {"description": "Error adding activity"},
    },
)
def create_activity(
    payload: ActivityCreate,
    current_user: AuthContext = Depends(get_current_user_required),
    repo: ActivityRepository = Depends(get_activity_repo),
):
    try:
        activity = activity_service.add_activity(repo, current_user.user_id, payload.name, payload.date)
    except (NotFoundError, StoreError) as e:
        logger.error("Error adding activity", extra={"userId": current_user.user_id, "error": str(e)})
        raise _http_error(e, "Error adding activity")

    return ActivityResponse.from_domain(activity)


@router.get(
    "/{activity_id}",
    response_model=None,
    summary="Show one activity",
    responses={200: {"model": ActivityResponse, "description": "The activity"}, **_ACTIVITY_ERRORS},
)
def get_profile_activity(
    activity_id: str,
    request: Request,
    current_user: AuthContext = Depends(get_current_user_required),
    repo: ActivityRepository = Depends(get_activity_repo),
):
    try:
        activity = activity_service.get_activity(repo, current_user.user_id, activity_id)
    except DomainError as e:
        raise _http_error(e, "Error getting activity")

    if wants_json(request):
        return ActivityResponse.from_domain(activity)
    return render(request, "activity.html", {"activity": activity})


@router.put(
    "/{activity_id}",
    response_model=ActivityResponse,
    summary="Rename an activity",
    description="Only the name changes; the id and date stay as they are.",
    responses={
        400: {"description": "Missing name"},
        **_ACTIVITY_ERRORS,
        500: {"description": "Error updating activity"},
    },
)
def rename_profile_activity(
    activity_id: str,
    payload: ActivityRename,
    current_user: AuthContext = Depends(get_current_user_required),
    repo: ActivityRepository = Depends(get_activity_repo),
):
    try:
        activity = activity_service.rename_activity(repo, current_user.user_id, activity_id, payload.name)
    except DomainError as e:
        raise _http_error(e, "Error updating activity")

    logger.info("Activity updated", extra={"userId": current_user.user_id, "activityId": activity_id})
    return ActivityResponse.from_domain(activity)


@router.delete(
    "/{activity_id}",
    response_model=MessageResponse,
    summary="Delete an activity",
    responses={**_ACTIVITY_ERRORS, 500: {"description": "Error deleting activity"}},
)
def delete_profile_activity(
    activity_id: str,
    current_user: AuthContext = Depends(get_current_user_required),
    repo: ActivityRepository = Depends(get_activity_repo),
):
    try:
        activity_service.delete_activity(repo, current_user.user_id, activity_id)
    except DomainError as e:
        raise _http_error(e, "Error deleting activity")

    return MessageResponse(message="Activity deleted")
